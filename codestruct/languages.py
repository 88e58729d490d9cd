from __future__ import annotations

import os
from typing import Dict, List, Tuple


UNKNOWN = "unknown"

GRAMMAR_FAMILY = frozenset({"javascript", "typescript"})

EXTENSION_LANGUAGE: Dict[str, str] = {
	".js": "javascript",
	".jsx": "javascript",
	".mjs": "javascript",
	".cjs": "javascript",
	".ts": "typescript",
	".tsx": "typescript",
	".py": "python",
	".pyw": "python",
	".java": "java",
	".cpp": "cpp",
	".cxx": "cpp",
	".cc": "cpp",
	".hpp": "cpp",
	".c": "c",
	".h": "c",
	".go": "go",
	".rs": "rust",
	".php": "php",
	".rb": "ruby",
	".swift": "swift",
	".kt": "kotlin",
	".scala": "scala",
	".cs": "csharp",
	".vb": "vb",
}

DEFAULT_EXTENSION: Dict[str, str] = {
	"javascript": "js",
	"typescript": "ts",
	"python": "py",
	"java": "java",
	"cpp": "cpp",
	"c": "c",
	"go": "go",
	"rust": "rs",
	"php": "php",
	"ruby": "rb",
	"swift": "swift",
	"kotlin": "kt",
	"scala": "scala",
	"csharp": "cs",
	"vb": "vb",
}

# First match wins. Each rule is (language, all-of, any-of); an empty
# any-of group always passes.
CONTENT_RULES: List[Tuple[str, Tuple[str, ...], Tuple[str, ...]]] = [
	("go", ("package ", "func "), ()),
	("java", ("public class ",), ()),
	("java", ("import java.", "public "), ()),
	("python", ("def ",), ("import ", "from ")),
	("cpp", ("#include",), ("int main", "std::")),
	("c", ("#include",), ()),
	("javascript", (), ("import ", "export ", "function ", "const ")),
]


def detect_language(filename: str) -> str:
	_, ext = os.path.splitext(filename)
	return EXTENSION_LANGUAGE.get(ext.lower(), UNKNOWN)


def detect_language_by_content(text: str) -> str:
	"""Guess a language tag for a snippet with no file name.

	This is a deliberately lossy heuristic. It never answers ``unknown``:
	anything unrecognised is treated as javascript.
	"""
	for language, required, alternatives in CONTENT_RULES:
		if not all(token in text for token in required):
			continue
		if alternatives and not any(token in text for token in alternatives):
			continue
		return language
	return "javascript"


def default_extension(language: str) -> str:
	return DEFAULT_EXTENSION.get(language, "txt")


def is_grammar_family(language: str) -> bool:
	return language in GRAMMAR_FAMILY


def grammar_dialect(filename: str, language: str) -> str:
	"""Pick the tree-sitter grammar for a grammar-family file."""
	if language == "typescript":
		_, ext = os.path.splitext(filename)
		return "tsx" if ext.lower() == ".tsx" else "typescript"
	return "javascript"


def grammar_dialects(filename: str, language: str) -> Tuple[str, ...]:
	"""Dialects to try in order; javascript input may also carry type annotations."""
	first = grammar_dialect(filename, language)
	if first == "javascript":
		return ("javascript", "typescript", "tsx")
	return (first,)
