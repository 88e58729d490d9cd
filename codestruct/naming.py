"""Display renderings of syntax nodes.

All functions here are pure: they read a node and the source bytes it was
parsed from and return a string (or a shallow literal value). They never
look at a node's parent.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from tree_sitter import Node

from .model import RenderedValue


UNKNOWN = "unknown"

_NOISE = frozenset({"comment", "decorator"})

_NAME_NODES = frozenset(
	{
		"identifier",
		"property_identifier",
		"private_property_identifier",
		"shorthand_property_identifier",
		"shorthand_property_identifier_pattern",
		"type_identifier",
		"statement_identifier",
		"this",
		"super",
	}
)


def node_text(node: Optional[Node], source: bytes) -> str:
	if node is None:
		return ""
	return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def named_children(node: Node) -> List[Node]:
	return [c for c in node.named_children if c.type not in _NOISE]


def first_named_child(node: Node) -> Optional[Node]:
	children = named_children(node)
	return children[0] if children else None


def unquote(text: str) -> str:
	if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
		return text[1:-1]
	return text


def property_key_name(node: Optional[Node], source: bytes) -> str:
	"""Name of an object key, class member key or pattern key."""
	if node is None:
		return UNKNOWN
	if node.type == "string":
		return unquote(node_text(node, source))
	return node_text(node, source)


def _array_slots(node: Node, render: Callable[[Node, bytes], str], source: bytes) -> List[str]:
	# Holes have no node of their own; only the commas around them show.
	slots: List[str] = []
	current: Optional[str] = None
	for child in node.children:
		if child.type == ",":
			slots.append(current or "")
			current = None
		elif child.type == "]":
			if current is not None:
				slots.append(current)
		elif child.is_named and child.type not in _NOISE:
			current = render(child, source)
	return slots


def render_parameter(node: Optional[Node], source: bytes) -> str:
	"""Render one formal parameter (or a nested pattern inside one)."""
	if node is None:
		return UNKNOWN
	kind = node.type
	if kind in _NAME_NODES:
		return node_text(node, source)
	if kind in ("assignment_pattern", "object_assignment_pattern"):
		return render_parameter(node.child_by_field_name("left"), source)
	if kind == "rest_pattern":
		return "..." + render_parameter(first_named_child(node), source)
	if kind == "object_pattern":
		parts = [render_parameter(child, source) for child in named_children(node)]
		return "{" + ", ".join(parts) + "}"
	if kind == "pair_pattern":
		key = property_key_name(node.child_by_field_name("key"), source)
		return f"{key}: {render_parameter(node.child_by_field_name('value'), source)}"
	if kind == "array_pattern":
		return "[" + ", ".join(_array_slots(node, render_parameter, source)) + "]"
	if kind in ("required_parameter", "optional_parameter"):
		return render_parameter(node.child_by_field_name("pattern"), source)
	return UNKNOWN


def render_parameters(params: Optional[Node], source: bytes) -> List[str]:
	if params is None:
		return []
	if params.type != "formal_parameters":
		# Bare arrow parameter: `x => x`
		return [render_parameter(params, source)]
	return [render_parameter(p, source) for p in named_children(params)]


def _binding_key(node: Node, source: bytes) -> str:
	if node.type == "pair_pattern":
		return property_key_name(node.child_by_field_name("key"), source)
	return render_binding(node, source)


def render_binding(node: Optional[Node], source: bytes) -> str:
	"""Render the left-hand side of a variable declarator."""
	if node is None:
		return UNKNOWN
	kind = node.type
	if kind in ("identifier", "shorthand_property_identifier_pattern"):
		return node_text(node, source)
	if kind == "object_pattern":
		return "{" + ", ".join(_binding_key(c, source) for c in named_children(node)) + "}"
	if kind == "array_pattern":
		return "[" + ", ".join(_array_slots(node, render_binding, source)) + "]"
	if kind == "rest_pattern":
		return "..." + render_binding(first_named_child(node), source)
	if kind in ("assignment_pattern", "object_assignment_pattern"):
		return render_binding(node.child_by_field_name("left"), source)
	return UNKNOWN


def _number_value(text: str) -> RenderedValue:
	cleaned = text.replace("_", "")
	try:
		if cleaned[:2].lower() in ("0x", "0o", "0b"):
			return int(cleaned, 0)
		if len(cleaned) > 1 and cleaned[0] == "0" and cleaned.isdigit():
			# legacy octal unless a digit rules it out (`089` is decimal)
			return int(cleaned, 8) if set(cleaned) <= set("01234567") else int(cleaned, 10)
		return int(cleaned, 10)
	except ValueError:
		pass
	try:
		value = float(cleaned)
	except ValueError:
		return text
	if "e" in cleaned.lower() and value.is_integer():
		return int(value)
	return value


def render_literal(node: Optional[Node], source: bytes) -> RenderedValue:
	"""Shallow display value of an initializer; never a deep serialization."""
	if node is None:
		return None
	kind = node.type
	if kind == "string":
		return unquote(node_text(node, source))
	if kind == "number":
		return _number_value(node_text(node, source))
	if kind == "true":
		return True
	if kind == "false":
		return False
	if kind == "null":
		return None
	if kind in ("identifier", "undefined"):
		return node_text(node, source)
	if kind == "array":
		return "[Array]"
	if kind == "object":
		return "{Object}"
	return UNKNOWN


def node_name(node: Optional[Node], source: bytes) -> str:
	"""Resolve a callee, assignment target or member chain to a dotted name."""
	if node is None:
		return UNKNOWN
	kind = node.type
	if kind in _NAME_NODES or kind == "number":
		return node_text(node, source)
	if kind == "string":
		return unquote(node_text(node, source))
	if kind == "member_expression":
		obj = node_name(node.child_by_field_name("object"), source)
		return f"{obj}.{node_name(node.child_by_field_name('property'), source)}"
	if kind == "subscript_expression":
		obj = node_name(node.child_by_field_name("object"), source)
		return f"{obj}.{node_name(node.child_by_field_name('index'), source)}"
	if kind == "call_expression":
		return node_name(node.child_by_field_name("function"), source) + "()"
	if kind in ("parenthesized_expression", "non_null_expression"):
		return node_name(first_named_child(node), source)
	return UNKNOWN
