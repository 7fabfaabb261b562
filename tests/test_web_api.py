"""Tests for the HTTP API."""

import pytest

# Only run if fastapi/httpx are installed
try:
    from fastapi.testclient import TestClient
    from deadwood.web import create_app
    HAS_WEB = True
except ImportError:
    HAS_WEB = False

pytestmark = pytest.mark.skipif(not HAS_WEB, reason="web dependencies not installed")


@pytest.fixture
def client(sample_app):
    return TestClient(create_app(sample_app))


def test_target_directory(client, sample_app):
    res = client.get("/api/target-directory")
    assert res.status_code == 200
    assert res.json()["target_dir"] == str(sample_app.resolve())


def test_set_target_directory(client, tmp_path):
    res = client.post("/api/target-directory", json={"target_dir": str(tmp_path)})
    assert res.status_code == 200
    assert res.json()["target_dir"] == str(tmp_path.resolve())


def test_set_missing_target_directory(client, tmp_path):
    res = client.post("/api/target-directory", json={"target_dir": str(tmp_path / "nope")})
    assert res.status_code == 404


def test_get_analysis_before_run(client):
    assert client.get("/api/analysis").status_code == 404


def test_run_then_get_analysis(client, sample_app):
    res = client.post("/api/analysis", json={})
    assert res.status_code == 200
    data = res.json()
    assert data["success"] is True
    assert data["summary"]["orphaned"] == 3
    assert (sample_app / "deadwood-report.json").exists()

    saved = client.get("/api/analysis").json()
    assert "src/components/Legacy" in saved["unreachable"]


def test_latest_analysis_served_from_memory(client, sample_app):
    client.post("/api/analysis", json={})
    (sample_app / "deadwood-report.json").unlink()

    res = client.get("/api/analysis")
    assert res.status_code == 200
    assert res.json()["summary"]["orphaned"] == 3
    assert client.get("/api/target-directory").json()["last_run"] is not None


def test_changing_target_forgets_last_report(client, sample_app, tmp_path):
    client.post("/api/analysis", json={})
    client.post("/api/target-directory", json={"target_dir": str(tmp_path)})
    assert client.get("/api/analysis").status_code == 404
    assert client.get("/api/target-directory").json()["last_run"] is None


def test_saved_report_loaded_from_disk(sample_app):
    TestClient(create_app(sample_app)).post("/api/analysis", json={})
    fresh = TestClient(create_app(sample_app))
    res = fresh.get("/api/analysis")
    assert res.status_code == 200
    assert "src/lazy" in res.json()["unreachable"]


def test_run_analysis_on_missing_dir(client, tmp_path):
    res = client.post("/api/analysis", json={"target_dir": str(tmp_path / "nope")})
    assert res.status_code == 404


def test_delete_file(client, sample_app):
    res = client.request("DELETE", "/api/delete-file", json={"file_path": "src/utils/old"})
    assert res.status_code == 200
    assert not (sample_app / "src" / "utils" / "old.js").exists()

    again = client.request("DELETE", "/api/delete-file", json={"file_path": "src/utils/old"})
    assert again.status_code == 404


def test_delete_file_outside_target(client):
    res = client.request("DELETE", "/api/delete-file", json={"file_path": "../../etc/passwd"})
    assert res.status_code == 403


def test_delete_files(client, sample_app):
    res = client.request(
        "DELETE", "/api/delete-files",
        json={"file_paths": ["src/lazy", "src/components/Legacy", "src/ghost"]},
    )
    assert res.status_code == 200
    results = {r["file"]: r["success"] for r in res.json()["results"]}
    assert results == {"src/lazy": True, "src/components/Legacy": True, "src/ghost": False}
    assert not (sample_app / "src" / "lazy.js").exists()


def test_generate_script(client):
    res = client.post("/api/generate-script", json={"file_paths": ["src/utils/old"]})
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    assert res.text.startswith("#!/bin/bash")
    assert "old.js" in res.text
