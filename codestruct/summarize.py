from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from .model import (
	AnalysisRecord,
	ClassEntry,
	ExportEntry,
	FunctionEntry,
	ImportEntry,
	Position,
	VariableEntry,
)


def _lines(start: Optional[Position], end: Optional[Position]) -> str:
	if start is None:
		return ""
	if end is None or end.line == start.line:
		return f" (line {start.line})"
	return f" (lines {start.line}-{end.line})"


def _flags(*pairs: Tuple[bool, str]) -> str:
	labels = [label for on, label in pairs if on]
	return f" [{', '.join(labels)}]" if labels else ""


def summarize_function(f: FunctionEntry) -> str:
	owner = f"{f.declaring_class}." if f.declaring_class else ""
	flags = _flags(
		(f.method_kind not in (None, "method"), f.method_kind or ""),
		(bool(f.is_static), "static"),
		(f.is_async, "async"),
		(f.is_generator, "generator"),
	)
	return f"{owner}{f.name}({', '.join(f.parameters)}) <{f.kind}>{flags}{_lines(f.start, f.end)}"


def summarize_class(c: ClassEntry) -> str:
	parts = [f"{c.name} <{c.kind}>"]
	if c.superclass:
		parts.append(f" extends {c.superclass}")
	if c.interfaces:
		parts.append(f" implements {', '.join(c.interfaces)}")
	parts.append(_lines(c.start, c.end))
	if c.methods:
		parts.append(f"\n      methods: {', '.join(m.name for m in c.methods)}")
	if c.fields:
		parts.append(f"\n      fields: {', '.join(fld.name for fld in c.fields)}")
	return "".join(parts)


def summarize_variable(v: VariableEntry) -> str:
	value = "" if v.value is None else f" = {v.value!r}"
	return f"{v.declaration_form} {v.name}{value}{_lines(v.start, v.end)}"


def summarize_import(i: ImportEntry) -> str:
	names: List[str] = []
	for b in i.bindings:
		if b.form == "default":
			names.append(b.local)
		elif b.form == "namespace":
			names.append(f"* as {b.local}")
		elif b.imported and b.imported != b.local:
			names.append(f"{b.imported} as {b.local}")
		else:
			names.append(b.local)
	target = f" ({', '.join(names)})" if names else ""
	return f"{i.source}{target} <{i.kind}>{_lines(i.start, i.end)}"


def summarize_export(e: ExportEntry) -> str:
	if e.form == "default":
		text = f"default {e.name}"
	elif e.form == "reexport_all":
		text = "*"
	else:
		pairs = [b.local if b.local == b.exported else f"{b.local} as {b.exported}" for b in e.bindings]
		text = "{" + ", ".join(pairs) + "}"
	source = f" from {e.source}" if e.source else ""
	return f"{text}{source}{_lines(e.start, e.end)}"


def _section(out: List[str], number: int, title: str, items: Sequence, render: Callable) -> int:
	if not items:
		return number
	out.append("")
	out.append(f"{number}. {title} ({len(items)})")
	for item in items:
		out.append(f"   - {render(item)}")
	return number + 1


def render_text(record: AnalysisRecord, view: str = "all") -> str:
	"""Human readable summary of a record. Display only, not parseable."""
	out: List[str] = [
		"Code structure analysis",
		f"File: {record.file}",
		f"Language: {record.language}",
		f"Analysis type: {view}",
	]
	if record.note:
		out.append(f"Note: {record.note}")

	deps = record.dependencies
	number = 1
	if view in ("all", "functions"):
		number = _section(out, number, "Functions", record.functions, summarize_function)
	if view in ("all", "classes"):
		number = _section(out, number, "Classes", record.classes, summarize_class)
	if view in ("all", "variables"):
		number = _section(out, number, "Variables", record.variables, summarize_variable)
	if view in ("all", "dependencies"):
		number = _section(out, number, "Imports", record.imports, summarize_import)
		number = _section(out, number, "Exports", record.exports, summarize_export)
		number = _section(
			out, number, "Module references", deps.module_references,
			lambda r: f"{r.module} <{r.kind}>{_lines(r.start, r.end)}",
		)
		number = _section(
			out, number, "Function calls", deps.call_references,
			lambda r: f"{r.name}(){_lines(r.start, r.end)}",
		)
		number = _section(
			out, number, "Property accesses", deps.property_references,
			lambda r: f"{r.object}{'[' + r.property + ']' if r.computed else '.' + r.property}{_lines(r.start, r.end)}",
		)
	if number == 1:
		out.append("")
		out.append("No declarations found.")
	return "\n".join(out)
