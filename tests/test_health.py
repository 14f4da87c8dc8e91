"""
Tests de l'endpoint santé
"""

from datetime import datetime, timezone


def test_health_structure(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"status", "timestamp", "uptime", "memory", "version", "environment"}
    assert data["status"] == "healthy"
    assert isinstance(data["uptime"], int)
    assert data["uptime"] >= 0
    assert set(data["memory"]) == {"used", "total", "usage"}
    assert data["memory"]["used"] > 0
    assert data["memory"]["total"] > data["memory"]["used"]
    assert 0 <= data["memory"]["usage"] <= 100
    assert isinstance(data["version"], str)
    assert isinstance(data["environment"], str)


def test_health_headers(client):
    response = client.get("/health")
    assert response.headers["content-type"] == "application/json"
    assert response.headers["cache-control"] == "no-cache, no-store, must-revalidate"


def test_health_timestamp_is_recent_iso(client):
    timestamp = client.get("/health").json()["timestamp"]
    assert timestamp.endswith("Z")
    parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    age = (datetime.now(timezone.utc) - parsed).total_seconds()
    assert 0 <= age < 5


def test_health_uptime_does_not_decrease(client):
    first = client.get("/health").json()
    second = client.get("/health").json()
    assert second["uptime"] >= first["uptime"]
    assert set(first) == set(second)


def test_health_unhealthy_when_probe_fails(client, monkeypatch):
    import kanban.routers.health as health_router

    def broken():
        raise OSError("no memory info")

    monkeypatch.setattr(health_router, "build_health_report", broken)
    response = client.get("/health")
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["memory"] == {"used": 0, "total": 0, "usage": 0}


def test_healthz(client):
    response = client.get("/health/z")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
