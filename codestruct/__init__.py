"""Single-file code structure analysis.

Modules:
- languages.py: Language tags by file extension or by content.
- grammar.py: tree-sitter syntax trees for JavaScript / TypeScript.
- node_kinds.py: Node kinds the extractor handles, per grammar.
- naming.py: Display renderings of parameters, bindings, literals and names.
- ast_extract.py: One-pass declaration extraction from a syntax tree.
- fallback.py: Regex based extraction for the other languages.
- analyzer.py: The analyze() entry point and view selection.
- model.py: Pydantic records for the analysis result.
- summarize.py: Plain-text rendering of a record.
"""

from .analyzer import AnalyzeOptions, analyze, analyze_text, select_view
from .errors import AnalysisError, ParseError, UnsupportedLanguageError
from .model import AnalysisRecord
from .summarize import render_text

__all__ = [
	"AnalysisError",
	"AnalysisRecord",
	"AnalyzeOptions",
	"ParseError",
	"UnsupportedLanguageError",
	"analyze",
	"analyze_text",
	"render_text",
	"select_view",
]
