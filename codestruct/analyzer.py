from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel

from .ast_extract import extract_declarations
from .errors import AnalysisError, ParseError, UnsupportedLanguageError
from .fallback import NOT_IMPLEMENTED_NOTE, extract_with_patterns
from .grammar import ParsedSource, parse_source
from .languages import (
	UNKNOWN,
	default_extension,
	detect_language,
	detect_language_by_content,
	grammar_dialects,
	is_grammar_family,
)
from .model import AnalysisRecord


logger = logging.getLogger(__name__)

View = Literal["all", "functions", "classes", "variables", "dependencies"]
OutputFormat = Literal["json", "text"]

VIEWS = ("all", "functions", "classes", "variables", "dependencies")

_VIEW_FIELDS: Dict[str, tuple] = {
	"all": ("functions", "classes", "variables", "imports", "exports", "dependencies"),
	"functions": ("functions",),
	"classes": ("classes",),
	"variables": ("variables",),
	"dependencies": ("imports", "exports", "dependencies"),
}
_HEADER_FIELDS = ("file", "language", "complete", "note")


class AnalyzeOptions(BaseModel):
	encoding: str = "utf-8"
	is_raw_text: bool = False
	view: View = "all"
	output_format: OutputFormat = "json"
	allow_unknown: bool = False


def snippet_name(language: str) -> str:
	return f"snippet.{default_extension(language)}"


def _parse(text: str, language: str, file: str) -> ParsedSource:
	first_error: Optional[ParseError] = None
	for dialect in grammar_dialects(file, language):
		try:
			return parse_source(text, dialect, path=file)
		except ParseError as exc:
			logger.debug("%s does not parse as %s: %s", file, dialect, exc.message)
			if first_error is None:
				first_error = exc
	raise first_error


def analyze_text(text: str, language: str, file: str) -> AnalysisRecord:
	"""Analyze already-decoded source text of a known language. No I/O."""
	if not is_grammar_family(language):
		logger.info("No grammar for %s, using pattern extraction for %s", language, file)
		return extract_with_patterns(text, language, file)

	parsed = _parse(text, language, file)
	try:
		found = extract_declarations(parsed)
	except Exception as exc:
		raise AnalysisError(str(exc), stage="extract", language=language, path=file) from exc
	return AnalysisRecord(
		file=file,
		language=language,
		functions=found.functions,
		classes=found.classes,
		variables=found.variables,
		imports=found.imports,
		exports=found.exports,
		dependencies=found.dependency_view(),
	)


def _read(path: str, encoding: str) -> str:
	try:
		return Path(path).read_text(encoding=encoding)
	except (UnicodeDecodeError, LookupError) as exc:
		raise AnalysisError(
			f"Cannot decode file with encoding {encoding!r}: {exc}", stage="read", path=path
		) from exc
	except OSError as exc:
		raise AnalysisError(str(exc), stage="read", path=path) from exc


def analyze(source: str, options: Optional[AnalyzeOptions] = None, **overrides: Any) -> AnalysisRecord:
	"""Analyze a file path, or raw text when ``is_raw_text`` is set.

	``view`` and ``output_format`` never change what is computed; use
	:func:`select_view` and :func:`codestruct.summarize.render_text` on the
	returned record.
	"""
	opts = options or AnalyzeOptions()
	if overrides:
		opts = opts.model_copy(update=overrides)

	if opts.is_raw_text:
		language = detect_language_by_content(source)
		file = snippet_name(language)
		text = source
	else:
		file = source
		language = detect_language(source)
		if language == UNKNOWN and not opts.allow_unknown:
			raise UnsupportedLanguageError(source)
		text = _read(source, opts.encoding)
	logger.debug("Analyzing %s as %s", file, language)

	if language == UNKNOWN:
		return AnalysisRecord(file=file, language=language, complete=False, note=NOT_IMPLEMENTED_NOTE)
	return analyze_text(text, language, file)


def select_view(record: AnalysisRecord, view: str = "all") -> Dict[str, Any]:
	"""Structured projection of ``record`` onto one view."""
	if view not in _VIEW_FIELDS:
		raise ValueError(f"Unknown view: {view!r} (expected one of {', '.join(VIEWS)})")
	data = record.model_dump()
	selected = {key: data[key] for key in _HEADER_FIELDS}
	selected["view"] = view
	for key in _VIEW_FIELDS[view]:
		selected[key] = data[key]
	return selected
