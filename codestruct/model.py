from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict


RenderedValue = Optional[Union[bool, int, float, str]]


class _Record(BaseModel):
	model_config = ConfigDict(frozen=True)


class Position(_Record):
	line: int
	column: int = 0


class FunctionEntry(_Record):
	kind: Literal["declaration", "arrow", "expression", "method"]
	name: str
	parameters: List[str] = []
	is_async: bool = False
	is_generator: bool = False
	declaring_class: Optional[str] = None
	method_kind: Optional[Literal["constructor", "get", "set", "method"]] = None
	is_static: Optional[bool] = None
	start: Optional[Position] = None
	end: Optional[Position] = None
	body_anchor: Optional[int] = None


class MethodSummary(_Record):
	name: str
	method_kind: Literal["constructor", "get", "set", "method"] = "method"
	is_static: bool = False
	parameters: List[str] = []
	is_async: bool = False
	is_generator: bool = False


class FieldEntry(_Record):
	name: str
	is_static: bool = False
	value: RenderedValue = None


class ClassEntry(_Record):
	kind: Literal["declaration", "expression", "struct"]
	name: str
	superclass: Optional[str] = None
	interfaces: List[str] = []
	methods: List[MethodSummary] = []
	fields: List[FieldEntry] = []
	start: Optional[Position] = None
	end: Optional[Position] = None


class VariableEntry(_Record):
	declaration_form: str
	name: str
	value: RenderedValue = None
	start: Optional[Position] = None
	end: Optional[Position] = None


class ImportBinding(_Record):
	form: Literal["default", "named", "namespace"]
	imported: Optional[str] = None
	local: str


class ImportEntry(_Record):
	source: str
	bindings: List[ImportBinding] = []
	kind: str = "import"
	start: Optional[Position] = None
	end: Optional[Position] = None


class ExportBinding(_Record):
	local: str
	exported: str


class ExportEntry(_Record):
	form: Literal["named", "default", "reexport_all"]
	bindings: List[ExportBinding] = []
	source: Optional[str] = None
	name: Optional[str] = None
	start: Optional[Position] = None
	end: Optional[Position] = None


class ModuleReference(_Record):
	module: str
	kind: Literal["require", "import"] = "require"
	start: Optional[Position] = None
	end: Optional[Position] = None


class CallReference(_Record):
	name: str
	start: Optional[Position] = None
	end: Optional[Position] = None


class PropertyReference(_Record):
	object: str
	property: str
	computed: bool = False
	start: Optional[Position] = None
	end: Optional[Position] = None


class DependencyView(_Record):
	imports: List[ImportEntry] = []
	module_references: List[ModuleReference] = []
	call_references: List[CallReference] = []
	property_references: List[PropertyReference] = []


class AnalysisRecord(_Record):
	file: str
	language: str
	functions: List[FunctionEntry] = []
	classes: List[ClassEntry] = []
	variables: List[VariableEntry] = []
	imports: List[ImportEntry] = []
	exports: List[ExportEntry] = []
	dependencies: DependencyView = DependencyView()
	complete: bool = True
	note: Optional[str] = None
