"""Syntax tree construction for the JavaScript / TypeScript family.

The tree-sitter grammars already accept modules, JSX, decorators, class
fields, object spread, async generators, dynamic import, optional chaining
and nullish coalescing, so there is nothing to configure per file.
tree-sitter never refuses input; it inserts ``ERROR`` and missing nodes
instead. Any such node turns into a :class:`ParseError` here so callers
never see a partially recovered tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from .errors import ParseError


GRAMMARS: Dict[str, Callable[[], object]] = {
	"javascript": tree_sitter_javascript.language,
	"typescript": tree_sitter_typescript.language_typescript,
	"tsx": tree_sitter_typescript.language_tsx,
}

_SNIPPET_LIMIT = 30


@dataclass
class ParsedSource:
	tree: Tree
	source: bytes
	dialect: str
	path: str = ""

	@property
	def root_node(self) -> Node:
		return self.tree.root_node


def load_grammar(dialect: str) -> Language:
	try:
		loader = GRAMMARS[dialect]
	except KeyError:
		raise ValueError(f"No grammar for dialect: {dialect}") from None
	return Language(loader())


def find_first_error(root: Node) -> Optional[Node]:
	"""Return the first ERROR or missing node in source order, if any."""
	if not root.has_error:
		return None
	stack = [root]
	while stack:
		node = stack.pop()
		if node.type == "ERROR" or node.is_missing:
			return node
		suspects = [c for c in node.children if c.has_error or c.is_missing]
		stack.extend(reversed(suspects))
	return root


def _describe(node: Node, source: bytes) -> str:
	line = node.start_point[0] + 1
	column = node.start_point[1]
	if node.is_missing:
		return f"Missing {node.type!r} (line {line}, column {column})"
	snippet = source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
	snippet = " ".join(snippet.split())
	if len(snippet) > _SNIPPET_LIMIT:
		snippet = snippet[:_SNIPPET_LIMIT] + "..."
	if not snippet:
		return f"Unexpected end of input (line {line}, column {column})"
	return f"Unexpected token {snippet!r} (line {line}, column {column})"


def parse_source(text: str, dialect: str = "javascript", path: str = "") -> ParsedSource:
	source = text.encode("utf-8")
	parser = Parser(load_grammar(dialect))
	tree = parser.parse(source)
	error = find_first_error(tree.root_node)
	if error is not None:
		raise ParseError(
			_describe(error, source),
			line=error.start_point[0] + 1,
			column=error.start_point[1],
			language="typescript" if dialect != "javascript" else "javascript",
			path=path or None,
		)
	return ParsedSource(tree=tree, source=source, dialect=dialect, path=path)
