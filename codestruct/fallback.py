"""Best-effort, regex based extraction for languages without a grammar tree.

Each language has one independent rule function ``(text) -> _Partial``.
Results are approximate: a rule that matches nothing simply yields an empty
listing, and every record produced here is marked incomplete.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .model import (
	AnalysisRecord,
	ClassEntry,
	DependencyView,
	FunctionEntry,
	ImportBinding,
	ImportEntry,
	Position,
)


NOT_IMPLEMENTED_NOTE = (
	"Analysis for this language is not fully implemented; only basic information is provided"
)

UNKNOWN_CLASS = "(unknown class)"

# Names a typed-signature pattern can pick up from control flow or calls.
_NOT_A_FUNCTION = frozenset(
	{
		"if", "for", "while", "switch", "catch", "return", "new", "else", "do",
		"sizeof", "throw", "case", "using", "lock", "foreach", "synchronized", "typeof",
		"delete", "await",
	}
)
_NOT_A_RETURN_TYPE = frozenset({"return", "new", "throw", "else", "case", "await", "goto", "delete"})


@dataclass
class _Partial:
	functions: List[FunctionEntry] = field(default_factory=list)
	classes: List[ClassEntry] = field(default_factory=list)
	imports: List[ImportEntry] = field(default_factory=list)


def get_line_number(text: str, offset: int) -> int:
	"""1-based line number of ``offset`` in ``text``."""
	return text.count("\n", 0, offset) + 1


def _at(text: str, offset: int) -> Position:
	line_start = text.rfind("\n", 0, offset) + 1
	return Position(line=get_line_number(text, offset), column=offset - line_start)


def split_parameters(raw: str, angle_brackets: bool = True) -> List[str]:
	"""Split a raw parameter list on commas that are not nested in brackets."""
	opening = "([{<" if angle_brackets else "([{"
	closing = ")]}>" if angle_brackets else ")]}"
	parts: List[str] = []
	current: List[str] = []
	depth = 0
	for ch in raw:
		if ch in opening:
			depth += 1
		elif ch in closing:
			depth = max(depth - 1, 0)
		if ch == "," and depth == 0:
			parts.append("".join(current))
			current = []
		else:
			current.append(ch)
	parts.append("".join(current))
	return [p.strip() for p in parts if p.strip()]


def _last_token(param: str) -> str:
	tokens = param.split("=")[0].split()
	if not tokens:
		return param
	return tokens[-1].lstrip("*&").rstrip("[]") or tokens[-1]


def _first_token(param: str) -> str:
	return param.split()[0]


def _before_colon(param: str) -> str:
	"""Bound name of a `name: Type` parameter (Rust, Swift, Kotlin, Scala)."""
	head = param.split("=")[0].split(":")[0].split()
	return head[-1] if head else param


_WORD_NAME = re.compile(r"\s*([*&]{0,2}\$?[A-Za-z_]\w*|\*|/)")


def _leading_name(param: str) -> str:
	match = _WORD_NAME.match(param)
	return match.group(1) if match else param


def _names(raw: Optional[str], pick: Callable[[str], str], angle_brackets: bool = True) -> List[str]:
	if not raw:
		return []
	names = [pick(p) for p in split_parameters(raw, angle_brackets)]
	if names == ["void"]:
		return []
	return [n for n in names if n]


def _superclass_and_interfaces(raw: Optional[str]) -> Tuple[Optional[str], List[str]]:
	if not raw:
		return None, []
	parents = [p.strip() for p in split_parameters(raw.strip())]
	parents = [re.sub(r"\(.*\)$", "", p).strip() for p in parents]
	parents = [p for p in parents if p]
	if not parents:
		return None, []
	return parents[0], parents[1:]


# -- python --------------------------------------------------------------

_PY_DEF = re.compile(r"(?m)^[ \t]*(async[ \t]+)?def[ \t]+([A-Za-z_]\w*)[ \t]*\(((?:[^()]|\([^()]*\))*)\)[ \t]*(?:->[^:\n]+)?:")
_PY_CLASS = re.compile(r"(?m)^[ \t]*class[ \t]+([A-Za-z_]\w*)[ \t]*(?:\(([^)]*)\))?[ \t]*:")
_PY_IMPORT = re.compile(r"(?m)^[ \t]*import[ \t]+([\w.]+(?:[ \t]+as[ \t]+\w+)?(?:[ \t]*,[ \t]*[\w.]+(?:[ \t]+as[ \t]+\w+)?)*)")
_PY_FROM = re.compile(r"(?m)^[ \t]*from[ \t]+([\w.]+)[ \t]+import[ \t]+(\([^)]*\)|[^\n#]+)")


def _python(text: str) -> _Partial:
	out = _Partial()
	for m in _PY_DEF.finditer(text):
		out.functions.append(
			FunctionEntry(
				kind="declaration",
				name=m.group(2),
				parameters=_names(m.group(3), _leading_name, angle_brackets=False),
				is_async=bool(m.group(1)),
				start=_at(text, m.start()),
			)
		)
	for m in _PY_CLASS.finditer(text):
		superclass, interfaces = _superclass_and_interfaces(m.group(2))
		out.classes.append(
			ClassEntry(
				kind="declaration",
				name=m.group(1),
				superclass=superclass,
				interfaces=interfaces,
				start=_at(text, m.start()),
			)
		)
	for m in _PY_IMPORT.finditer(text):
		for item in m.group(1).split(","):
			parts = item.split()
			if not parts:
				continue
			bindings = []
			if len(parts) == 3 and parts[1] == "as":
				bindings.append(ImportBinding(form="namespace", local=parts[2]))
			out.imports.append(
				ImportEntry(source=parts[0], bindings=bindings, kind="import", start=_at(text, m.start()))
			)
	for m in _PY_FROM.finditer(text):
		names = m.group(2).strip().strip("()")
		bindings = []
		for item in names.split(","):
			parts = item.split()
			if not parts:
				continue
			if parts[0] == "*":
				bindings.append(ImportBinding(form="namespace", local="*"))
			elif len(parts) == 3 and parts[1] == "as":
				bindings.append(ImportBinding(form="named", imported=parts[0], local=parts[2]))
			else:
				bindings.append(ImportBinding(form="named", imported=parts[0], local=parts[0]))
		out.imports.append(
			ImportEntry(source=m.group(1), bindings=bindings, kind="from_import", start=_at(text, m.start()))
		)
	return out


# -- typed signatures shared by java and c# ------------------------------

_TYPED_METHOD = re.compile(
	r"(?m)^[ \t]*((?:[\w<>\[\],.?@]+[ \t]+)+)([A-Za-z_]\w*)[ \t]*(?:<[^>(]*>)?\(([^)]*)\)"
	r"\s*(?:(?:throws|where)\s[^{;]*)?(?:[{;]|=>)"
)


def _typed_methods(text: str, out: _Partial) -> None:
	for m in _TYPED_METHOD.finditer(text):
		prefix = m.group(1).split()
		name = m.group(2)
		if name in _NOT_A_FUNCTION or prefix[0] in _NOT_A_RETURN_TYPE:
			continue
		out.functions.append(
			FunctionEntry(
				kind="method",
				name=name,
				parameters=_names(m.group(3), _last_token),
				is_async="async" in prefix,
				declaring_class=UNKNOWN_CLASS,
				method_kind="method",
				is_static="static" in prefix,
				start=_at(text, m.start()),
			)
		)


# -- java ----------------------------------------------------------------

_JAVA_CLASS = re.compile(
	r"(?m)^[ \t]*(?:(?:public|private|protected|abstract|final|static|sealed)\s+)*"
	r"(?:class|interface|enum|record)\s+([A-Za-z_]\w*)(?:<[^>{]*>)?"
	r"(?:\s+extends\s+([\w.]+(?:<[^>{]*>)?))?(?:\s+implements\s+([^{]+))?"
)
_JAVA_IMPORT = re.compile(r"(?m)^[ \t]*import\s+(?:static\s+)?([\w.*]+)\s*;")


def _java(text: str) -> _Partial:
	out = _Partial()
	_typed_methods(text, out)
	for m in _JAVA_CLASS.finditer(text):
		interfaces = [i.strip() for i in split_parameters(m.group(3) or "")]
		out.classes.append(
			ClassEntry(
				kind="declaration",
				name=m.group(1),
				superclass=m.group(2),
				interfaces=interfaces,
				start=_at(text, m.start()),
			)
		)
	for m in _JAVA_IMPORT.finditer(text):
		out.imports.append(ImportEntry(source=m.group(1), kind="import", start=_at(text, m.start())))
	return out


# -- c / c++ -------------------------------------------------------------

_C_FUNCTION = re.compile(
	r"(?m)^[ \t]*((?:[\w:*&<>,]+[ \t*&]+)+)([A-Za-z_~][\w:~]*)[ \t]*\(([^)]*)\)\s*(?:const\s*)?(?:noexcept\s*)?(?:override\s*)?[{;]"
)
_C_CLASS = re.compile(
	r"(?m)^[ \t]*(class|struct)\s+([A-Za-z_]\w*)(?:\s+final)?"
	r"(?:\s*:\s*(?:(?:public|private|protected|virtual)\s+)*([\w:<>]+))?\s*\{"
)
_C_INCLUDE = re.compile(r"#include\s*[<\"]([^>\"]+)[>\"]")


def _c_family(text: str) -> _Partial:
	out = _Partial()
	for m in _C_FUNCTION.finditer(text):
		prefix = m.group(1).split()
		qualified = m.group(2)
		if qualified in _NOT_A_FUNCTION or prefix[0] in _NOT_A_RETURN_TYPE or "<<" in m.group(1):
			continue
		owner, _, name = qualified.rpartition("::")
		entry = dict(
			name=name,
			parameters=_names(m.group(3), _last_token),
			start=_at(text, m.start()),
		)
		if owner:
			out.functions.append(
				FunctionEntry(kind="method", declaring_class=owner, method_kind="method", **entry)
			)
		else:
			out.functions.append(FunctionEntry(kind="declaration", **entry))
	for m in _C_CLASS.finditer(text):
		out.classes.append(
			ClassEntry(
				kind="struct" if m.group(1) == "struct" else "declaration",
				name=m.group(2),
				superclass=m.group(3),
				start=_at(text, m.start()),
			)
		)
	for m in _C_INCLUDE.finditer(text):
		out.imports.append(ImportEntry(source=m.group(1), kind="include", start=_at(text, m.start())))
	return out


# -- go ------------------------------------------------------------------

_GO_FUNC = re.compile(
	r"(?m)^func\s+(?:\(\s*(?:\w+\s+)?\*?\s*([\w.]+)(?:\[[^\]]*\])?\s*\)\s*)?"
	r"([A-Za-z_]\w*)\s*(?:\[[^\]]*\])?\(([^)]*)\)[^{\n]*\{"
)
_GO_TYPE = re.compile(r"(?m)^[ \t]*type\s+([A-Za-z_]\w*)(?:\[[^\]]*\])?\s+(struct|interface)\s*\{")
_GO_IMPORT = re.compile(r"(?m)^import\s+(?:([\w.]+)\s+)?\"([^\"]+)\"")
_GO_IMPORT_GROUP = re.compile(r"(?ms)^import\s*\((.*?)\)")
_GO_IMPORT_SPEC = re.compile(r"(?m)^[ \t]*(?:([\w.]+)[ \t]+)?\"([^\"]+)\"")


def _go_import(alias: Optional[str], path: str, start: Position) -> ImportEntry:
	bindings = [ImportBinding(form="namespace", local=alias)] if alias else []
	return ImportEntry(source=path, bindings=bindings, kind="import", start=start)


def _go(text: str) -> _Partial:
	out = _Partial()
	for m in _GO_FUNC.finditer(text):
		receiver = m.group(1)
		entry = dict(
			name=m.group(2),
			parameters=_names(m.group(3), _first_token, angle_brackets=False),
			start=_at(text, m.start()),
		)
		if receiver:
			out.functions.append(
				FunctionEntry(kind="method", declaring_class=receiver, method_kind="method", **entry)
			)
		else:
			out.functions.append(FunctionEntry(kind="declaration", **entry))
	for m in _GO_TYPE.finditer(text):
		out.classes.append(
			ClassEntry(
				kind="struct" if m.group(2) == "struct" else "declaration",
				name=m.group(1),
				start=_at(text, m.start()),
			)
		)
	for m in _GO_IMPORT.finditer(text):
		out.imports.append(_go_import(m.group(1), m.group(2), _at(text, m.start())))
	for group in _GO_IMPORT_GROUP.finditer(text):
		base = group.start(1)
		for m in _GO_IMPORT_SPEC.finditer(group.group(1)):
			out.imports.append(_go_import(m.group(1), m.group(2), _at(text, base + m.start(2))))
	return out


# -- rust ----------------------------------------------------------------

_RUST_FN = re.compile(
	r"(?m)^[ \t]*(?:pub(?:\([^)]*\))?\s+)?(?:const\s+)?(async\s+)?(?:unsafe\s+)?"
	r"(?:extern\s+\"[^\"]*\"\s+)?fn\s+([A-Za-z_]\w*)\s*(?:<[^>]*>)?\s*\(([^)]*)\)"
)
_RUST_TYPE = re.compile(
	r"(?m)^[ \t]*(?:pub(?:\([^)]*\))?\s+)?(struct|enum|trait)\s+([A-Za-z_]\w*)(?:<[^>]*>)?(?:\s*:\s*([\w:+ ]+?))?\s*[{;(]"
)
_RUST_USE = re.compile(r"(?m)^[ \t]*(?:pub(?:\([^)]*\))?\s+)?use\s+([^;]+);")


def _rust_param(param: str) -> str:
	if ":" not in param:
		return param.replace("&", "").replace("mut ", "").strip()
	return _before_colon(param)


def _rust(text: str) -> _Partial:
	out = _Partial()
	for m in _RUST_FN.finditer(text):
		out.functions.append(
			FunctionEntry(
				kind="declaration",
				name=m.group(2),
				parameters=_names(m.group(3), _rust_param),
				is_async=bool(m.group(1)),
				start=_at(text, m.start()),
			)
		)
	for m in _RUST_TYPE.finditer(text):
		bounds = [b.strip() for b in (m.group(3) or "").split("+") if b.strip()]
		out.classes.append(
			ClassEntry(
				kind="struct" if m.group(1) == "struct" else "declaration",
				name=m.group(2),
				superclass=bounds[0] if bounds else None,
				interfaces=bounds[1:],
				start=_at(text, m.start()),
			)
		)
	for m in _RUST_USE.finditer(text):
		out.imports.append(ImportEntry(source=" ".join(m.group(1).split()), kind="use", start=_at(text, m.start())))
	return out


# -- php -----------------------------------------------------------------

_PHP_FUNCTION = re.compile(
	r"(?m)^[ \t]*((?:(?:public|private|protected|static|abstract|final)\s+)*)function\s+&?([A-Za-z_]\w*)\s*\(([^)]*)\)"
)
_PHP_CLASS = re.compile(
	r"(?m)^[ \t]*(?:(?:abstract|final|readonly)\s+)*(?:class|interface|trait)\s+([A-Za-z_]\w*)"
	r"(?:\s+extends\s+([\w\\]+))?(?:\s+implements\s+([^{]+))?"
)
_PHP_USE = re.compile(r"(?m)^[ \t]*use\s+([\w\\]+)(?:\s+as\s+(\w+))?\s*;")
_PHP_REQUIRE = re.compile(r"(?m)\b(require|include)(?:_once)?\s*\(?\s*['\"]([^'\"]+)['\"]")
_PHP_VARIABLE = re.compile(r"\$\w+")


def _php_param(param: str) -> str:
	match = _PHP_VARIABLE.search(param)
	return match.group(0) if match else param


def _php(text: str) -> _Partial:
	out = _Partial()
	for m in _PHP_FUNCTION.finditer(text):
		modifiers = m.group(1).split()
		out.functions.append(
			FunctionEntry(
				kind="method" if modifiers else "declaration",
				name=m.group(2),
				parameters=_names(m.group(3), _php_param),
				declaring_class=UNKNOWN_CLASS if modifiers else None,
				method_kind="method" if modifiers else None,
				is_static=("static" in modifiers) if modifiers else None,
				start=_at(text, m.start()),
			)
		)
	for m in _PHP_CLASS.finditer(text):
		interfaces = [i.strip() for i in split_parameters(m.group(3) or "")]
		out.classes.append(
			ClassEntry(
				kind="declaration",
				name=m.group(1),
				superclass=m.group(2),
				interfaces=interfaces,
				start=_at(text, m.start()),
			)
		)
	for m in _PHP_USE.finditer(text):
		bindings = [ImportBinding(form="namespace", local=m.group(2))] if m.group(2) else []
		out.imports.append(ImportEntry(source=m.group(1), bindings=bindings, kind="use", start=_at(text, m.start())))
	for m in _PHP_REQUIRE.finditer(text):
		out.imports.append(ImportEntry(source=m.group(2), kind=m.group(1), start=_at(text, m.start())))
	return out


# -- ruby ----------------------------------------------------------------

_RUBY_DEF = re.compile(r"(?m)^[ \t]*def\s+(self\.)?([A-Za-z_]\w*[?!=]?)[ \t]*(?:\(([^)]*)\)|([^\n;#]*))")
_RUBY_CLASS = re.compile(r"(?m)^[ \t]*class\s+([A-Z]\w*(?:::\w+)*)(?:\s*<\s*([\w:]+))?")
_RUBY_REQUIRE = re.compile(r"(?m)^[ \t]*(require|require_relative|load)\s*\(?\s*['\"]([^'\"]+)['\"]")


def _ruby_param(param: str) -> str:
	return _leading_name(param).rstrip(":")


def _ruby(text: str) -> _Partial:
	out = _Partial()
	for m in _RUBY_DEF.finditer(text):
		singleton = bool(m.group(1))
		raw = m.group(3) if m.group(3) is not None else m.group(4)
		out.functions.append(
			FunctionEntry(
				kind="method" if singleton else "declaration",
				name=m.group(2),
				parameters=_names(raw, _ruby_param, angle_brackets=False),
				declaring_class=UNKNOWN_CLASS if singleton else None,
				method_kind="method" if singleton else None,
				is_static=True if singleton else None,
				start=_at(text, m.start()),
			)
		)
	for m in _RUBY_CLASS.finditer(text):
		out.classes.append(
			ClassEntry(kind="declaration", name=m.group(1), superclass=m.group(2), start=_at(text, m.start()))
		)
	for m in _RUBY_REQUIRE.finditer(text):
		out.imports.append(ImportEntry(source=m.group(2), kind=m.group(1), start=_at(text, m.start())))
	return out


# -- swift ---------------------------------------------------------------

_SWIFT_FUNC = re.compile(
	r"(?m)^[ \t]*((?:(?:public|private|internal|fileprivate|open|static|class|override|final|mutating|@\w+)\s+)*)"
	r"func\s+([A-Za-z_]\w*)\s*(?:<[^>]*>)?\s*\(([^)]*)\)([^{\n]*)"
)
_SWIFT_TYPE = re.compile(
	r"(?m)^[ \t]*(?:(?:public|private|internal|fileprivate|open|final)\s+)*"
	r"(class|struct|protocol|enum|actor)\s+([A-Za-z_]\w*)(?:<[^>]*>)?(?:\s*:\s*([^{\n]+))?\s*\{"
)
_SWIFT_IMPORT = re.compile(
	r"(?m)^[ \t]*import\s+(?:(?:class|struct|func|enum|protocol|typealias|var|let)\s+)?([\w.]+)"
)


def _swift(text: str) -> _Partial:
	out = _Partial()
	for m in _SWIFT_FUNC.finditer(text):
		modifiers = m.group(1).split()
		out.functions.append(
			FunctionEntry(
				kind="declaration",
				name=m.group(2),
				parameters=_names(m.group(3), _before_colon),
				is_async="async" in m.group(4).split(),
				is_static=True if ("static" in modifiers or "class" in modifiers) else None,
				start=_at(text, m.start()),
			)
		)
	for m in _SWIFT_TYPE.finditer(text):
		superclass, interfaces = _superclass_and_interfaces(m.group(3))
		out.classes.append(
			ClassEntry(
				kind="struct" if m.group(1) == "struct" else "declaration",
				name=m.group(2),
				superclass=superclass,
				interfaces=interfaces,
				start=_at(text, m.start()),
			)
		)
	for m in _SWIFT_IMPORT.finditer(text):
		out.imports.append(ImportEntry(source=m.group(1), kind="import", start=_at(text, m.start())))
	return out


# -- kotlin --------------------------------------------------------------

_KOTLIN_FUN = re.compile(
	r"(?m)^[ \t]*((?:(?:public|private|internal|protected|override|open|abstract|suspend|inline|"
	r"operator|infix|tailrec|external)\s+)*)fun\s+(?:<[^>]*>\s*)?(?:[\w.]+\.)?([A-Za-z_]\w*)\s*\(([^)]*)\)"
)
_KOTLIN_CLASS = re.compile(
	r"(?m)^[ \t]*(?:(?:public|private|internal|protected|open|abstract|sealed|data|enum|inner|annotation)\s+)*"
	r"(?:class|interface|object)\s+([A-Za-z_]\w*)(?:<[^>]*>)?(?:\s*(?:\w+\s*)?\([^)]*\))?(?:\s*:\s*([^{\n]+))?"
)
_KOTLIN_IMPORT = re.compile(r"(?m)^[ \t]*import\s+([\w.*]+)(?:\s+as\s+(\w+))?")


def _kotlin(text: str) -> _Partial:
	out = _Partial()
	for m in _KOTLIN_FUN.finditer(text):
		out.functions.append(
			FunctionEntry(
				kind="declaration",
				name=m.group(2),
				parameters=_names(m.group(3), _before_colon),
				is_async="suspend" in m.group(1).split(),
				start=_at(text, m.start()),
			)
		)
	for m in _KOTLIN_CLASS.finditer(text):
		superclass, interfaces = _superclass_and_interfaces(m.group(2))
		out.classes.append(
			ClassEntry(
				kind="declaration",
				name=m.group(1),
				superclass=superclass,
				interfaces=interfaces,
				start=_at(text, m.start()),
			)
		)
	for m in _KOTLIN_IMPORT.finditer(text):
		bindings = [ImportBinding(form="namespace", local=m.group(2))] if m.group(2) else []
		out.imports.append(ImportEntry(source=m.group(1), bindings=bindings, kind="import", start=_at(text, m.start())))
	return out


# -- scala ---------------------------------------------------------------

_SCALA_DEF = re.compile(
	r"(?m)^[ \t]*(?:(?:override|private|protected|final|implicit|lazy)\s+)*def\s+([A-Za-z_]\w*)\s*(?:\[[^\]]*\])?\s*(?:\(([^)]*)\))?"
)
_SCALA_CLASS = re.compile(
	r"(?m)^[ \t]*(?:(?:abstract|final|sealed|case|implicit|private|protected)\s+)*"
	r"(class|object|trait)\s+([A-Za-z_]\w*)(?:\[[^\]]*\])?(?:\s*\([^)]*\))?"
	r"(?:\s+extends\s+([\w.]+))?((?:\s+with\s+[\w.]+)*)"
)
_SCALA_IMPORT = re.compile(r"(?m)^[ \t]*import\s+(\w+(?:\.\w+)*(?:\.\{[^}]*\}|\._|\.\*)?)")


def _scala(text: str) -> _Partial:
	out = _Partial()
	for m in _SCALA_DEF.finditer(text):
		out.functions.append(
			FunctionEntry(
				kind="declaration",
				name=m.group(1),
				parameters=_names(m.group(2), _before_colon),
				start=_at(text, m.start()),
			)
		)
	for m in _SCALA_CLASS.finditer(text):
		mixins = re.findall(r"with\s+([\w.]+)", m.group(4) or "")
		out.classes.append(
			ClassEntry(
				kind="declaration",
				name=m.group(2),
				superclass=m.group(3),
				interfaces=mixins,
				start=_at(text, m.start()),
			)
		)
	for m in _SCALA_IMPORT.finditer(text):
		out.imports.append(ImportEntry(source=m.group(1), kind="import", start=_at(text, m.start())))
	return out


# -- c# ------------------------------------------------------------------

_CSHARP_TYPE = re.compile(
	r"(?m)^[ \t]*(?:(?:public|private|protected|internal|abstract|sealed|static|partial)\s+)*"
	r"(class|interface|struct|record|enum)\s+([A-Za-z_]\w*)(?:<[^>]*>)?(?:\s*:\s*([^{\n]+))?"
)
_CSHARP_USING = re.compile(r"(?m)^[ \t]*using\s+(?:static\s+)?(?:(\w+)\s*=\s*)?([\w.]+)\s*;")


def _csharp(text: str) -> _Partial:
	out = _Partial()
	_typed_methods(text, out)
	for m in _CSHARP_TYPE.finditer(text):
		superclass, interfaces = _superclass_and_interfaces(m.group(3))
		out.classes.append(
			ClassEntry(
				kind="struct" if m.group(1) == "struct" else "declaration",
				name=m.group(2),
				superclass=superclass,
				interfaces=interfaces,
				start=_at(text, m.start()),
			)
		)
	for m in _CSHARP_USING.finditer(text):
		bindings = [ImportBinding(form="namespace", local=m.group(1))] if m.group(1) else []
		out.imports.append(ImportEntry(source=m.group(2), bindings=bindings, kind="using", start=_at(text, m.start())))
	return out


# -- visual basic --------------------------------------------------------

_VB_PROCEDURE = re.compile(
	r"(?im)^[ \t]*((?:(?:Public|Private|Protected|Friend|Shared|Overrides|Overridable|MustOverride|"
	r"Async|Overloads|Static)\s+)*)(?:Sub|Function)\s+([A-Za-z_]\w*)\s*\(([^)]*)\)"
)
_VB_TYPE = re.compile(
	r"(?im)^[ \t]*(?:(?:Public|Private|Friend|MustInherit|NotInheritable|Partial)\s+)*"
	r"(Class|Structure|Interface|Module)\s+([A-Za-z_]\w*)"
)
_VB_INHERITS = re.compile(r"(?im)^[ \t]*Inherits\s+([\w.]+)")
_VB_IMPORTS = re.compile(r"(?im)^[ \t]*Imports\s+(?:(\w+)\s*=\s*)?([\w.]+)")


def _vb_param(param: str) -> str:
	head = re.split(r"(?i)\s+As\s+", param.split("=")[0])[0].split()
	return head[-1] if head else param


def _vb(text: str) -> _Partial:
	out = _Partial()
	for m in _VB_PROCEDURE.finditer(text):
		modifiers = [w.lower() for w in m.group(1).split()]
		out.functions.append(
			FunctionEntry(
				kind="declaration",
				name=m.group(2),
				parameters=_names(m.group(3), _vb_param, angle_brackets=False),
				is_async="async" in modifiers,
				start=_at(text, m.start()),
			)
		)
	for m in _VB_TYPE.finditer(text):
		end = re.compile(r"(?im)^[ \t]*End\s+" + m.group(1)).search(text, m.end())
		inherits = _VB_INHERITS.search(text, m.end(), end.start() if end else len(text))
		out.classes.append(
			ClassEntry(
				kind="struct" if m.group(1).lower() == "structure" else "declaration",
				name=m.group(2),
				superclass=inherits.group(1) if inherits else None,
				start=_at(text, m.start()),
			)
		)
	for m in _VB_IMPORTS.finditer(text):
		bindings = [ImportBinding(form="namespace", local=m.group(1))] if m.group(1) else []
		out.imports.append(ImportEntry(source=m.group(2), bindings=bindings, kind="import", start=_at(text, m.start())))
	return out


RULES: Dict[str, Callable[[str], _Partial]] = {
	"python": _python,
	"java": _java,
	"cpp": _c_family,
	"c": _c_family,
	"go": _go,
	"rust": _rust,
	"php": _php,
	"ruby": _ruby,
	"swift": _swift,
	"kotlin": _kotlin,
	"scala": _scala,
	"csharp": _csharp,
	"vb": _vb,
}


def extract_with_patterns(text: str, language: str, file: str) -> AnalysisRecord:
	"""Approximate analysis record for a language outside the grammar family."""
	rules = RULES.get(language)
	partial = rules(text) if rules is not None else _Partial()
	# rule sets scan per construct; listings are reported in source order
	imports = sorted(partial.imports, key=lambda entry: (entry.start.line, entry.start.column))
	return AnalysisRecord(
		file=file,
		language=language,
		functions=partial.functions,
		classes=partial.classes,
		imports=imports,
		dependencies=DependencyView(imports=list(imports)),
		complete=False,
		note=NOT_IMPLEMENTED_NOTE,
	)
