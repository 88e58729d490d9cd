from fastapi.testclient import TestClient

from api import app


client = TestClient(app)


def test_analyze_raw_text():
	resp = client.post("/analyze", json={"source": "const a = 1;", "is_raw_text": True})
	assert resp.status_code == 200
	data = resp.json()
	assert data["file"] == "snippet.js"
	assert data["variables"][0]["name"] == "a"


def test_analyze_file_with_view(tmp_path):
	p = tmp_path / "lib.ts"
	p.write_text("export function add(a: number, b: number) { return a + b; }\n")
	resp = client.post("/analyze", json={"source": str(p), "view": "functions"})
	assert resp.status_code == 200
	data = resp.json()
	assert data["view"] == "functions"
	assert data["functions"][0]["parameters"] == ["a", "b"]
	assert "classes" not in data


def test_text_output():
	resp = client.post(
		"/analyze", json={"source": "function f() {}", "is_raw_text": True, "output_format": "text"}
	)
	assert resp.status_code == 200
	assert resp.json()["text"].startswith("Code structure analysis")


def test_parse_error_is_422():
	resp = client.post("/analyze", json={"source": "function (", "is_raw_text": True})
	assert resp.status_code == 422
	assert resp.json()["detail"]["stage"] == "parse"


def test_unsupported_file_is_400(tmp_path):
	p = tmp_path / "notes.xyz"
	p.write_text("text")
	resp = client.post("/analyze", json={"source": str(p)})
	assert resp.status_code == 400
	assert resp.json()["detail"]["stage"] == "classify"


def test_missing_file_is_404():
	resp = client.post("/analyze", json={"source": "/nonexistent/app.js"})
	assert resp.status_code == 404


def test_invalid_view_is_rejected():
	resp = client.post("/analyze", json={"source": "x", "is_raw_text": True, "view": "everything"})
	assert resp.status_code == 422
