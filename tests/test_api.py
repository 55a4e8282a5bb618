from fastapi.testclient import TestClient

from api import app


client = TestClient(app)


def test_diagram_endpoint():
	payload = {
		"rel_paths": ["src/api/routes.ts"],
		"file_contents": {"src/api/routes.ts": 'router.get("/users")\n'},
		"imports": [{"file": "src/api/routes.ts", "raw": "express"}],
		"external_counts": {"express": 1},
	}
	resp = client.post("/diagram", json=payload)
	assert resp.status_code == 200
	body = resp.json()
	kinds = sorted(n["kind"] for n in body["diagram"]["nodes"])
	assert kinds == ["endpoint", "external", "module"]
	assert "(GET /users) --> [src/api]" in body["ascii"]
	assert body["plantuml"].startswith("@startuml")


def test_diagram_endpoint_format_selection():
	resp = client.post("/diagram", params={"formats": "plantuml"}, json={})
	assert resp.status_code == 200
	body = resp.json()
	assert body["ascii"] is None
	assert body["diagram"]["nodes"] == []
	assert "Legend:" in body["plantuml"]


def test_diagram_endpoint_normalizes_null_options():
	payload = {
		"rel_paths": ["src/api/routes.ts"],
		"file_contents": {"src/api/routes.ts": 'router.get("/users")\n'},
		"imports": None,
		"options": None,
	}
	resp = client.post("/diagram", json=payload)
	assert resp.status_code == 200
	assert "(GET /users) --> [src/api]" in resp.json()["ascii"]

	payload["options"] = {"include_io": None, "include_endpoints": None, "max_nodes": None}
	resp = client.post("/diagram", json=payload)
	assert resp.status_code == 200
	assert "(GET /users) --> [src/api]" in resp.json()["ascii"]


def test_analyze_endpoint(tmp_path):
	(tmp_path / "app").mkdir()
	(tmp_path / "app" / "main.py").write_text('@app.get("/health")\ndef health():\n    return {}\n')
	resp = client.post("/analyze", json={"root_path": str(tmp_path), "formats": "ascii"})
	assert resp.status_code == 200
	body = resp.json()
	assert "(GET /health) --> [app/main.py]" in body["uml_ascii"]
	assert body["uml_plantuml"] == ""


def test_analyze_invalid_root(tmp_path):
	resp = client.post("/analyze", json={"root_path": str(tmp_path / "missing")})
	assert resp.status_code == 400
	assert "Invalid root_path" in resp.json()["detail"]
