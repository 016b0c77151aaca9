from __future__ import annotations

from fastapi.testclient import TestClient


def test_app_smoke_routes(app):
    client = TestClient(app)

    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}

    r = client.get("/api/shared-data")
    assert r.status_code == 200
    assert set(r.json()) == {"config", "contactRequests", "lastModified"}


def test_unknown_path_keeps_default_404(app):
    client = TestClient(app)

    r = client.get("/nope")
    assert r.status_code == 404
    assert r.json() == {"detail": "Not Found"}
