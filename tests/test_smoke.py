import pytest
from fastapi.testclient import TestClient

from app.main import app

@pytest.fixture(scope="module")
def client():
    return TestClient(app)

def test_health_endpoint(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"

def test_openapi_json(client):
    resp = client.get("/openapi.json")
    assert resp.status_code == 200
    data = resp.json()
    assert "/api/upload" in data["paths"]
    assert "/uploads/{path}" in data["paths"]

def test_docs_page(client):
    resp = client.get("/docs")
    assert resp.status_code == 200
    assert "text/html" in resp.headers.get("content-type", "")

def test_security_headers(client):
    resp = client.get("/health")
    assert resp.headers["x-content-type-options"] == "nosniff"
    assert resp.headers["x-frame-options"] == "DENY"
    assert "x-request-id" in resp.headers

def test_metrics_endpoint(client):
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "text" in resp.headers.get("content-type", "").lower()

def test_unmatched_paths_share_one_metrics_label(client):
    for i in range(3):
        assert client.get(f"/no-such-page-{i}").status_code == 404
    body = client.get("/metrics").text
    assert 'path="<unmatched>"' in body
    assert "no-such-page" not in body

def test_route_label_uses_template():
    from starlette.requests import Request
    from app.services.metrics import route_label, UNMATCHED_PATH

    route = next(r for r in app.routes if getattr(r, "path", None) == "/api/posters/{poster_id}")
    matched = Request({"type": "http", "method": "GET", "path": "/api/posters/abc", "headers": [], "route": route})
    assert route_label(matched) == "/api/posters/{poster_id}"
    bare = Request({"type": "http", "method": "GET", "path": "/abc", "headers": []})
    assert route_label(bare) == UNMATCHED_PATH
