"""Closed set of syntax node kinds the declaration extractor acts on.

Every named kind a grammar can produce is entered in the dispatch table:
either with the :class:`NodeKind` whose handler processes it, or with
``None`` meaning the walker only descends into its children.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Optional

from tree_sitter import Language


class NodeKind(str, Enum):
	FUNCTION_DECLARATION = "function_declaration"
	GENERATOR_FUNCTION_DECLARATION = "generator_function_declaration"
	FUNCTION_EXPRESSION = "function_expression"
	GENERATOR_FUNCTION = "generator_function"
	ARROW_FUNCTION = "arrow_function"
	METHOD_DEFINITION = "method_definition"
	CLASS_DECLARATION = "class_declaration"
	ABSTRACT_CLASS_DECLARATION = "abstract_class_declaration"
	CLASS = "class"
	LEXICAL_DECLARATION = "lexical_declaration"
	VARIABLE_DECLARATION = "variable_declaration"
	FOR_IN_STATEMENT = "for_in_statement"
	IMPORT_STATEMENT = "import_statement"
	EXPORT_STATEMENT = "export_statement"
	CALL_EXPRESSION = "call_expression"
	MEMBER_EXPRESSION = "member_expression"
	SUBSCRIPT_EXPRESSION = "subscript_expression"


FUNCTION_KINDS: FrozenSet[NodeKind] = frozenset(
	{
		NodeKind.FUNCTION_DECLARATION,
		NodeKind.GENERATOR_FUNCTION_DECLARATION,
		NodeKind.FUNCTION_EXPRESSION,
		NodeKind.GENERATOR_FUNCTION,
		NodeKind.ARROW_FUNCTION,
		NodeKind.METHOD_DEFINITION,
	}
)

CLASS_KINDS: FrozenSet[NodeKind] = frozenset(
	{
		NodeKind.CLASS_DECLARATION,
		NodeKind.ABSTRACT_CLASS_DECLARATION,
		NodeKind.CLASS,
	}
)

_BY_NAME: Dict[str, NodeKind] = {kind.value: kind for kind in NodeKind}


def grammar_kinds(language: Language) -> FrozenSet[str]:
	"""All named node kinds of a grammar."""
	kinds = set()
	for kind_id in range(language.node_kind_count):
		if not language.node_kind_is_named(kind_id):
			continue
		name = language.node_kind_for_id(kind_id)
		if name:
			kinds.add(name)
	return frozenset(kinds)


def dispatch_table(language: Language) -> Dict[str, Optional[NodeKind]]:
	return {name: _BY_NAME.get(name) for name in grammar_kinds(language)}
