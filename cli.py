from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

import uvicorn

from codestruct.analyzer import VIEWS, AnalyzeOptions, analyze, select_view
from codestruct.errors import AnalysisError
from codestruct.summarize import render_text


def cmd_analyze(args: argparse.Namespace) -> int:
	options = AnalyzeOptions(
		encoding=args.encoding,
		is_raw_text=args.raw,
		view=args.view,
		output_format=args.format,
		allow_unknown=args.allow_unknown,
	)
	source = sys.stdin.read() if args.raw and args.source == "-" else args.source
	try:
		record = analyze(source, options)
	except AnalysisError as exc:
		print(f"error: {exc}", file=sys.stderr)
		return 1
	if options.output_format == "text":
		print(render_text(record, options.view))
	else:
		print(json.dumps(select_view(record, options.view), indent=2, ensure_ascii=False))
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return 0


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="codestruct")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser("analyze", help="Analyze one source file and print its structure")
	pa.add_argument("source", help="Path to a source file, or source text with --raw ('-' reads stdin)")
	pa.add_argument("--raw", action="store_true", help="Treat SOURCE as source text, not a path")
	pa.add_argument("--view", choices=VIEWS, default="all")
	pa.add_argument("--format", choices=("json", "text"), default="json")
	pa.add_argument("--encoding", default="utf-8")
	pa.add_argument("--allow-unknown", action="store_true", help="Do not reject unknown file types")
	pa.set_defaults(func=cmd_analyze)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
	)
	return args.func(args)


if __name__ == "__main__":
	sys.exit(main())
