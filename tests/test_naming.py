from codestruct.grammar import parse_source
from codestruct.naming import (
	node_name,
	property_key_name,
	render_binding,
	render_literal,
	render_parameters,
	unquote,
)


def _find(root, kind):
	stack = [root]
	while stack:
		node = stack.pop()
		if node.type == kind:
			return node
		stack.extend(reversed(node.children))
	raise AssertionError(f"no {kind} node")


def _parse(code):
	parsed = parse_source(code)
	return parsed.root_node, parsed.source


def test_render_parameters():
	root, source = _parse("function f({a, b}, x = 5, [p, , q], [, last], ...rest) {}")
	params = _find(root, "formal_parameters")
	assert render_parameters(params, source) == ["{a, b}", "x", "[p, , q]", "[, last]", "...rest"]


def test_render_parameters_is_pure():
	root, source = _parse("function f({a: {b}, c = 1}) {}")
	params = _find(root, "formal_parameters")
	first = render_parameters(params, source)
	assert first == render_parameters(params, source)
	assert first == ["{a: {b}, c}"]


def test_render_binding_patterns():
	root, source = _parse("const {a, b: c, ...rest} = o;")
	assert render_binding(_find(root, "object_pattern"), source) == "{a, b, ...rest}"
	root, source = _parse("const [x, , y,] = arr;")
	assert render_binding(_find(root, "array_pattern"), source) == "[x, , y]"
	assert render_binding(None, source) == "unknown"


def test_render_literal():
	root, source = _parse("x = 'single';")
	assert render_literal(_find(root, "string"), source) == "single"
	root, source = _parse("x = 1_000;")
	assert render_literal(_find(root, "number"), source) == 1000
	root, source = _parse("x = false;")
	assert render_literal(_find(root, "false"), source) is False
	root, source = _parse("x = `tpl`;")
	assert render_literal(_find(root, "template_string"), source) == "unknown"
	assert render_literal(None, source) is None


def test_node_name():
	root, source = _parse("a.b.c();")
	assert node_name(_find(root, "call_expression").child_by_field_name("function"), source) == "a.b.c"
	root, source = _parse('obj["k"].run;')
	assert node_name(_find(root, "member_expression"), source) == "obj.k.run"
	root, source = _parse("f()();")
	outer = _find(root, "call_expression")
	assert node_name(outer.child_by_field_name("function"), source) == "f()"
	root, source = _parse("(a).b;")
	assert node_name(_find(root, "member_expression"), source) == "a.b"


def test_property_key_and_unquote():
	root, source = _parse("o = {'quoted key': 1};")
	pair = _find(root, "pair")
	assert property_key_name(pair.child_by_field_name("key"), source) == "quoted key"
	assert unquote('"x"') == "x"
	assert unquote("'") == "'"
	assert unquote("plain") == "plain"


def test_render_number_forms():
	for code, expected in [("x = 1e3;", 1000), ("x = 0777;", 511), ("x = 089;", 89), ("x = 2.5e-1;", 0.25)]:
		root, source = _parse(code)
		value = render_literal(_find(root, "number"), source)
		assert value == expected
		assert type(value) is type(expected)
