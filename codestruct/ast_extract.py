"""Declaration extraction from a JavaScript / TypeScript syntax tree.

A single pre-order walk fills every listing at once. The walk keeps an
explicit stack instead of recursing, so deeply nested sources do not hit the
interpreter recursion limit. Two pieces of context travel with it:

- a *binding hint*: the display name an anonymous function or class gets
  from the place it is bound (variable declarator, assignment target,
  object key, class field key);
- the stack of enclosing class names, pushed when a class node is entered
  and popped when its subtree is done.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from tree_sitter import Node

from .grammar import ParsedSource, load_grammar
from .model import (
	CallReference,
	ClassEntry,
	DependencyView,
	ExportBinding,
	ExportEntry,
	FieldEntry,
	FunctionEntry,
	ImportBinding,
	ImportEntry,
	MethodSummary,
	ModuleReference,
	Position,
	PropertyReference,
	VariableEntry,
)
from .naming import (
	UNKNOWN,
	first_named_child,
	named_children,
	node_name,
	node_text,
	property_key_name,
	render_binding,
	render_literal,
	render_parameters,
	unquote,
)
from .node_kinds import CLASS_KINDS, NodeKind, dispatch_table


ANONYMOUS_FUNCTION = "(anonymous)"
ANONYMOUS_ARROW = "(anonymous arrow)"
ANONYMOUS_CLASS = "(anonymous class)"
UNKNOWN_CLASS = "(unknown class)"

MODULE_LOADER = "require"

_DECLARATIONS = frozenset({"function_declaration", "generator_function_declaration"})
_GENERATORS = frozenset({"generator_function_declaration", "generator_function"})
_FIELD_KINDS = frozenset({"field_definition", "public_field_definition"})
_NAMED_DEFAULTS = frozenset(
	{
		"function_declaration",
		"generator_function_declaration",
		"function_expression",
		"generator_function",
		"class_declaration",
		"abstract_class_declaration",
		"class",
	}
)
# Wrappers that keep the binding name of the expression they contain.
_TRANSPARENT = frozenset(
	{"parenthesized_expression", "as_expression", "satisfies_expression", "non_null_expression"}
)

_EXIT = object()


@dataclass
class ExtractedDeclarations:
	functions: List[FunctionEntry] = field(default_factory=list)
	classes: List[ClassEntry] = field(default_factory=list)
	variables: List[VariableEntry] = field(default_factory=list)
	imports: List[ImportEntry] = field(default_factory=list)
	exports: List[ExportEntry] = field(default_factory=list)
	module_references: List[ModuleReference] = field(default_factory=list)
	call_references: List[CallReference] = field(default_factory=list)
	property_references: List[PropertyReference] = field(default_factory=list)

	def dependency_view(self) -> DependencyView:
		return DependencyView(
			imports=list(self.imports),
			module_references=list(self.module_references),
			call_references=list(self.call_references),
			property_references=list(self.property_references),
		)


def _position(node: Optional[Node], end: bool = False) -> Optional[Position]:
	if node is None:
		return None
	point = node.end_point if end else node.start_point
	if point is None:
		return None
	return Position(line=point[0] + 1, column=point[1])


def _span(node: Optional[Node]) -> Dict[str, Optional[Position]]:
	return {"start": _position(node), "end": _position(node, end=True)}


def _tokens(node: Node) -> List[str]:
	"""Types of the anonymous (keyword / punctuation) children of a node."""
	return [c.type for c in node.children if not c.is_named]


def _same(a: Node, b: Optional[Node]) -> bool:
	return (
		b is not None
		and a.type == b.type
		and a.start_byte == b.start_byte
		and a.end_byte == b.end_byte
	)


def _child_of_type(node: Node, kind: str) -> Optional[Node]:
	for child in node.children:
		if child.type == kind:
			return child
	return None


def _sole_string_argument(call: Node) -> Optional[Node]:
	args = call.child_by_field_name("arguments")
	if args is None or args.type != "arguments":
		return None
	values = named_children(args)
	if len(values) == 1 and values[0].type == "string":
		return values[0]
	return None


class _Walker:
	def __init__(self, parsed: ParsedSource) -> None:
		self.source = parsed.source
		self.table = dispatch_table(load_grammar(parsed.dialect))
		self.out = ExtractedDeclarations()
		self.class_stack: List[str] = []
		self.handlers: Dict[NodeKind, Callable[[Node, Optional[str]], None]] = {
			NodeKind.FUNCTION_DECLARATION: self.on_function,
			NodeKind.GENERATOR_FUNCTION_DECLARATION: self.on_function,
			NodeKind.FUNCTION_EXPRESSION: self.on_function,
			NodeKind.GENERATOR_FUNCTION: self.on_function,
			NodeKind.ARROW_FUNCTION: self.on_function,
			NodeKind.METHOD_DEFINITION: self.on_method,
			NodeKind.CLASS_DECLARATION: self.on_class,
			NodeKind.ABSTRACT_CLASS_DECLARATION: self.on_class,
			NodeKind.CLASS: self.on_class,
			NodeKind.LEXICAL_DECLARATION: self.on_variables,
			NodeKind.VARIABLE_DECLARATION: self.on_variables,
			NodeKind.FOR_IN_STATEMENT: self.on_loop_binding,
			NodeKind.IMPORT_STATEMENT: self.on_import,
			NodeKind.EXPORT_STATEMENT: self.on_export,
			NodeKind.CALL_EXPRESSION: self.on_call,
			NodeKind.MEMBER_EXPRESSION: self.on_member,
			NodeKind.SUBSCRIPT_EXPRESSION: self.on_member,
		}

	def text(self, node: Optional[Node]) -> str:
		return node_text(node, self.source)

	# -- traversal -----------------------------------------------------

	def run(self, root: Node) -> ExtractedDeclarations:
		stack: List[Tuple[object, Optional[str]]] = [(root, None)]
		while stack:
			node, hint = stack.pop()
			if node is _EXIT:
				self.class_stack.pop()
				continue
			kind = self.table.get(node.type)
			if kind is not None:
				self.handlers[kind](node, hint)
				if kind in CLASS_KINDS:
					stack.append((_EXIT, None))
			target, target_hint = self.binding_site(node, hint)
			for child in reversed(node.named_children):
				stack.append((child, target_hint if target is not None and _same(child, target) else None))
		return self.out

	def binding_site(self, node: Node, inherited: Optional[str]) -> Tuple[Optional[Node], Optional[str]]:
		"""Which child of ``node`` is bound to a name, and what that name is."""
		kind = node.type
		if kind == "variable_declarator":
			return node.child_by_field_name("value"), render_binding(node.child_by_field_name("name"), self.source)
		if kind in ("assignment_expression", "augmented_assignment_expression"):
			return node.child_by_field_name("right"), node_name(node.child_by_field_name("left"), self.source)
		if kind == "pair":
			return node.child_by_field_name("value"), property_key_name(node.child_by_field_name("key"), self.source)
		if kind in _FIELD_KINDS:
			key = node.child_by_field_name("property") or node.child_by_field_name("name")
			return node.child_by_field_name("value"), property_key_name(key, self.source)
		if kind in _TRANSPARENT and inherited is not None:
			return first_named_child(node), inherited
		return None, None

	# -- functions and classes -------------------------------------------

	def on_function(self, node: Node, hint: Optional[str]) -> None:
		kind = node.type
		name_node = node.child_by_field_name("name")
		if kind in _DECLARATIONS:
			entry_kind = "declaration"
			name = self.text(name_node) if name_node is not None else ANONYMOUS_FUNCTION
		elif kind == "arrow_function":
			entry_kind = "arrow"
			name = hint or ANONYMOUS_ARROW
		else:
			entry_kind = "expression"
			if name_node is not None:
				name = self.text(name_node)
			else:
				name = hint or ANONYMOUS_FUNCTION
		params = node.child_by_field_name("parameters") or node.child_by_field_name("parameter")
		self.out.functions.append(
			FunctionEntry(
				kind=entry_kind,
				name=name,
				parameters=render_parameters(params, self.source),
				is_async="async" in _tokens(node),
				is_generator=kind in _GENERATORS,
				body_anchor=self.body_anchor(node),
				**_span(node),
			)
		)

	def method_info(self, node: Node) -> MethodSummary:
		tokens = _tokens(node)
		is_static = "static" in tokens or "static get" in tokens
		name = property_key_name(node.child_by_field_name("name"), self.source)
		if name == "constructor" and not is_static:
			method_kind = "constructor"
		elif "get" in tokens or "static get" in tokens:
			method_kind = "get"
		elif "set" in tokens:
			method_kind = "set"
		else:
			method_kind = "method"
		return MethodSummary(
			name=name,
			method_kind=method_kind,
			is_static=is_static,
			parameters=render_parameters(node.child_by_field_name("parameters"), self.source),
			is_async="async" in tokens,
			is_generator="*" in tokens,
		)

	def on_method(self, node: Node, hint: Optional[str]) -> None:
		info = self.method_info(node)
		parent = node.parent
		if parent is not None and parent.type == "class_body":
			self.out.functions.append(
				FunctionEntry(
					kind="method",
					name=info.name,
					parameters=info.parameters,
					is_async=info.is_async,
					is_generator=info.is_generator,
					declaring_class=self.class_stack[-1] if self.class_stack else UNKNOWN_CLASS,
					method_kind=info.method_kind,
					is_static=info.is_static,
					body_anchor=self.body_anchor(node),
					**_span(node),
				)
			)
			return
		# Object literal shorthand method, named by its key.
		self.out.functions.append(
			FunctionEntry(
				kind="expression",
				name=info.name,
				parameters=info.parameters,
				is_async=info.is_async,
				is_generator=info.is_generator,
				body_anchor=self.body_anchor(node),
				**_span(node),
			)
		)

	def body_anchor(self, node: Node) -> Optional[int]:
		body = node.child_by_field_name("body")
		if body is None:
			return None
		if body.type == "statement_block":
			return body.start_byte
		return node.start_byte

	def heritage(self, node: Node) -> Tuple[Optional[str], List[str]]:
		clause = _child_of_type(node, "class_heritage")
		if clause is None:
			return None, []
		superclass: Optional[str] = None
		interfaces: List[str] = []
		for part in named_children(clause):
			if part.type == "extends_clause":
				value = part.child_by_field_name("value") or first_named_child(part)
				superclass = node_name(value, self.source)
			elif part.type == "implements_clause":
				interfaces.extend(self.text(t) for t in named_children(part))
			elif superclass is None:
				superclass = node_name(part, self.source)
		return superclass, interfaces

	def on_class(self, node: Node, hint: Optional[str]) -> None:
		name_node = node.child_by_field_name("name")
		if name_node is not None:
			name = self.text(name_node)
		else:
			name = hint or ANONYMOUS_CLASS
		superclass, interfaces = self.heritage(node)
		methods: List[MethodSummary] = []
		fields: List[FieldEntry] = []
		body = node.child_by_field_name("body")
		for member in named_children(body) if body is not None else []:
			if member.type == "method_definition":
				methods.append(self.method_info(member))
			elif member.type in _FIELD_KINDS:
				key = member.child_by_field_name("property") or member.child_by_field_name("name")
				fields.append(
					FieldEntry(
						name=property_key_name(key, self.source),
						is_static="static" in _tokens(member),
						value=render_literal(member.child_by_field_name("value"), self.source),
					)
				)
		self.out.classes.append(
			ClassEntry(
				kind="expression" if node.type == "class" else "declaration",
				name=name,
				superclass=superclass,
				interfaces=interfaces,
				methods=methods,
				fields=fields,
				**_span(node),
			)
		)
		self.class_stack.append(name)

	# -- variables -------------------------------------------------------

	def on_variables(self, node: Node, hint: Optional[str]) -> None:
		if node.type == "variable_declaration":
			form = "var"
		else:
			kind_node = node.child_by_field_name("kind")
			form = self.text(kind_node) if kind_node is not None else self.text(node.children[0])
		for declarator in named_children(node):
			if declarator.type != "variable_declarator":
				continue
			value = declarator.child_by_field_name("value")
			self.out.variables.append(
				VariableEntry(
					declaration_form=form,
					name=render_binding(declarator.child_by_field_name("name"), self.source),
					value=render_literal(value, self.source) if value is not None else None,
					**_span(declarator),
				)
			)

	def on_loop_binding(self, node: Node, hint: Optional[str]) -> None:
		# `for (const x of xs)` declares x in the loop header, not in a declaration node
		kind_node = node.child_by_field_name("kind")
		if kind_node is None:
			return
		left = node.child_by_field_name("left")
		self.out.variables.append(
			VariableEntry(
				declaration_form=self.text(kind_node),
				name=render_binding(left, self.source),
				**_span(left),
			)
		)

	# -- modules ---------------------------------------------------------

	def on_import(self, node: Node, hint: Optional[str]) -> None:
		source_node = node.child_by_field_name("source")
		bindings: List[ImportBinding] = []
		require_clause = _child_of_type(node, "import_require_clause")
		if source_node is None and require_clause is not None:
			# TypeScript: import x = require("y")
			source_node = require_clause.child_by_field_name("source")
			local = first_named_child(require_clause)
			if local is not None:
				bindings.append(ImportBinding(form="default", local=self.text(local)))
		if source_node is None:
			return
		clause = _child_of_type(node, "import_clause")
		for part in named_children(clause) if clause is not None else []:
			if part.type == "identifier":
				bindings.append(ImportBinding(form="default", local=self.text(part)))
			elif part.type == "namespace_import":
				bindings.append(
					ImportBinding(form="namespace", local=self.text(first_named_child(part)))
				)
			elif part.type == "named_imports":
				for specifier in named_children(part):
					if specifier.type != "import_specifier":
						continue
					imported = property_key_name(specifier.child_by_field_name("name"), self.source)
					alias = specifier.child_by_field_name("alias")
					bindings.append(
						ImportBinding(
							form="named",
							imported=imported,
							local=self.text(alias) if alias is not None else imported,
						)
					)
		self.out.imports.append(
			ImportEntry(
				source=unquote(self.text(source_node)),
				bindings=bindings,
				kind="import",
				**_span(node),
			)
		)

	def declared_names(self, declaration: Node) -> List[str]:
		if declaration.type in ("lexical_declaration", "variable_declaration"):
			return [
				render_binding(d.child_by_field_name("name"), self.source)
				for d in named_children(declaration)
				if d.type == "variable_declarator"
			]
		name_node = declaration.child_by_field_name("name")
		return [self.text(name_node)] if name_node is not None else []

	def default_export_name(self, target: Optional[Node]) -> str:
		if target is None:
			return UNKNOWN
		if target.type == "identifier":
			return self.text(target)
		if target.type in _NAMED_DEFAULTS:
			name_node = target.child_by_field_name("name")
			return self.text(name_node) if name_node is not None else ANONYMOUS_FUNCTION
		if target.type == "assignment_expression":
			return node_name(target.child_by_field_name("left"), self.source)
		return UNKNOWN

	def on_export(self, node: Node, hint: Optional[str]) -> None:
		tokens = _tokens(node)
		source_node = node.child_by_field_name("source")
		source = unquote(self.text(source_node)) if source_node is not None else None
		declaration = node.child_by_field_name("declaration")
		span = _span(node)

		if "default" in tokens:
			target = declaration or node.child_by_field_name("value")
			self.out.exports.append(
				ExportEntry(form="default", name=self.default_export_name(target), **span)
			)
			return

		namespace = _child_of_type(node, "namespace_export")
		if namespace is not None:
			alias = first_named_child(namespace)
			self.out.exports.append(
				ExportEntry(
					form="named",
					bindings=[ExportBinding(local="*", exported=property_key_name(alias, self.source))],
					source=source,
					**span,
				)
			)
			return
		if "*" in tokens:
			self.out.exports.append(ExportEntry(form="reexport_all", source=source, **span))
			return

		clause = _child_of_type(node, "export_clause")
		if clause is not None:
			bindings: List[ExportBinding] = []
			for specifier in named_children(clause):
				if specifier.type != "export_specifier":
					continue
				local = property_key_name(specifier.child_by_field_name("name"), self.source)
				alias = specifier.child_by_field_name("alias")
				exported = property_key_name(alias, self.source) if alias is not None else local
				bindings.append(ExportBinding(local=local, exported=exported))
			self.out.exports.append(ExportEntry(form="named", bindings=bindings, source=source, **span))
		elif declaration is not None:
			bindings = [ExportBinding(local=n, exported=n) for n in self.declared_names(declaration)]
			self.out.exports.append(ExportEntry(form="named", bindings=bindings, **span))

	# -- dependencies ----------------------------------------------------

	def on_call(self, node: Node, hint: Optional[str]) -> None:
		callee = node.child_by_field_name("function")
		if callee is None:
			return
		if callee.type == "identifier" and self.text(callee) == MODULE_LOADER:
			argument = _sole_string_argument(node)
			if argument is not None:
				self.out.module_references.append(
					ModuleReference(module=unquote(self.text(argument)), kind="require", **_span(node))
				)
			return
		if callee.type == "import":
			argument = _sole_string_argument(node)
			if argument is not None:
				self.out.module_references.append(
					ModuleReference(module=unquote(self.text(argument)), kind="import", **_span(node))
				)
			return
		if callee.type in ("member_expression", "subscript_expression"):
			return
		self.out.call_references.append(
			CallReference(name=node_name(callee, self.source), **_span(node))
		)

	def on_member(self, node: Node, hint: Optional[str]) -> None:
		computed = node.type == "subscript_expression"
		prop = node.child_by_field_name("index" if computed else "property")
		self.out.property_references.append(
			PropertyReference(
				object=node_name(node.child_by_field_name("object"), self.source),
				property=node_name(prop, self.source),
				computed=computed,
				**_span(node),
			)
		)


def extract_declarations(parsed: ParsedSource) -> ExtractedDeclarations:
	"""Walk a parsed source once and collect every listing.

	Each call works on freshly allocated accumulators; nothing is shared
	between calls.
	"""
	return _Walker(parsed).run(parsed.root_node)
