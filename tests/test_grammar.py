import pytest

from codestruct.ast_extract import _Walker
from codestruct.errors import ParseError
from codestruct.grammar import GRAMMARS, load_grammar, parse_source
from codestruct.node_kinds import CLASS_KINDS, FUNCTION_KINDS, NodeKind, dispatch_table, grammar_kinds


def test_parse_accepts_modern_syntax():
	parsed = parse_source(
		"const x = a?.b ?? c;\n"
		"const y = { ...rest, [key]: 1 };\n"
		"class K { #secret = 1; static { init(); } }\n"
		"async function* gen() { yield* other(); }\n"
		"const el = <div>{x}</div>;\n"
	)
	assert parsed.root_node.type == "program"
	assert parsed.dialect == "javascript"


def test_parse_error_reports_location():
	with pytest.raises(ParseError) as info:
		parse_source("function (", path="broken.js")
	err = info.value
	assert err.stage == "parse"
	assert err.language == "javascript"
	assert err.path == "broken.js"
	assert err.line == 1
	assert err.message
	assert "broken.js" in str(err)


def test_parse_error_in_typescript_dialect():
	with pytest.raises(ParseError) as info:
		parse_source("let x: = 1;\n", dialect="typescript")
	assert info.value.language == "typescript"


def test_unknown_dialect():
	with pytest.raises(ValueError):
		load_grammar("cobol")


@pytest.mark.parametrize("dialect", sorted(GRAMMARS))
def test_dispatch_table_covers_every_grammar_kind(dialect):
	language = load_grammar(dialect)
	table = dispatch_table(language)
	kinds = grammar_kinds(language)
	assert set(table) == set(kinds)
	assert "program" in kinds
	assert table["program"] is None
	assert table["call_expression"] is NodeKind.CALL_EXPRESSION


def test_every_node_kind_exists_in_a_grammar():
	known = set()
	for dialect in GRAMMARS:
		known |= grammar_kinds(load_grammar(dialect))
	assert {kind.value for kind in NodeKind} <= known


def test_every_node_kind_has_a_handler():
	walker = _Walker(parse_source(""))
	assert set(walker.handlers) == set(NodeKind)
	assert FUNCTION_KINDS | CLASS_KINDS < set(NodeKind)
