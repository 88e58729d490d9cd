from codestruct import analyze, render_text
from codestruct.model import AnalysisRecord


CODE = (
	'import React from "react";\n'
	"const LIMIT = 10;\n"
	"class Panel extends Base {\n"
	"  static create() { return 1; }\n"
	"}\n"
	"export default function render(a, b) {\n"
	"  log(a);\n"
	"}\n"
)


def test_render_all_sections():
	text = render_text(analyze(CODE, is_raw_text=True))
	lines = text.splitlines()
	assert lines[:4] == [
		"Code structure analysis",
		"File: snippet.js",
		"Language: javascript",
		"Analysis type: all",
	]
	assert "1. Functions (2)" in text
	assert "   - Panel.create() <method> [static] (line 4)" in lines
	assert "   - render(a, b) <declaration> (lines 6-8)" in lines
	assert "2. Classes (1)" in text
	assert "Panel <declaration> extends Base (lines 3-5)" in text
	assert "3. Variables (1)" in text
	assert "const LIMIT = 10 (line 2)" in text
	assert "4. Imports (1)" in text
	assert "react (React) <import> (line 1)" in text
	assert "default render" in text
	assert "log() (line 7)" in text


def test_render_single_view_numbers_from_one():
	record = analyze(CODE, is_raw_text=True)
	text = render_text(record, "classes")
	assert "Analysis type: classes" in text
	assert "1. Classes (1)" in text
	assert "Functions" not in text


def test_render_note_and_empty_record():
	record = AnalysisRecord(file="x.xyz", language="unknown", complete=False, note="partial")
	text = render_text(record)
	assert "Note: partial" in text
	assert text.endswith("No declarations found.")
