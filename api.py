from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI, HTTPException

from codestruct.analyzer import AnalyzeOptions, analyze, select_view
from codestruct.errors import AnalysisError, ParseError, UnsupportedLanguageError
from codestruct.summarize import render_text


app = FastAPI(title="Code Structure Analyzer")


class AnalyzeRequest(AnalyzeOptions):
	source: str


def _status_for(exc: AnalysisError) -> int:
	if isinstance(exc, ParseError):
		return 422
	if isinstance(exc, UnsupportedLanguageError):
		return 400
	if exc.stage == "read" and isinstance(exc.__cause__, FileNotFoundError):
		return 404
	if exc.stage == "read":
		return 400
	return 500


@app.post("/analyze")
def analyze_source(req: AnalyzeRequest) -> Dict[str, Any]:
	options = AnalyzeOptions(**req.model_dump(exclude={"source"}))
	try:
		record = analyze(req.source, options)
	except AnalysisError as exc:
		raise HTTPException(
			status_code=_status_for(exc),
			detail={"stage": exc.stage, "language": exc.language, "message": exc.message},
		) from exc
	if options.output_format == "text":
		return {"text": render_text(record, options.view)}
	return select_view(record, options.view)


def create_app() -> FastAPI:
	return app
