"""Health checks — liveness always up, readiness follows the database."""

from artist_crm.config import get_settings
from artist_crm.infrastructure import database


async def test_liveness(client):
    res = await client.get("/api/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    assert res.json() == {
        "status": "ready",
        "checks": {"database": "healthy", "outlook": "not_configured"},
    }


async def test_not_ready_without_database(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)

    res = await client.get("/api/health/ready")

    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_reports_static_token(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "outlook_access_token", "token")

    res = await client.get("/api/health/ready")

    assert res.json()["checks"]["outlook"] == "static_token"


async def test_readiness_needs_connector_identity(client, monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "outlook_access_token", None)
    monkeypatch.setattr(settings, "outlook_connector_hostname", "connectors.example.org")
    monkeypatch.setattr(settings, "outlook_connector_identity", None)

    hostname_only = await client.get("/api/health/ready")
    monkeypatch.setattr(settings, "outlook_connector_identity", "repl abc")
    both = await client.get("/api/health/ready")

    assert hostname_only.json()["checks"]["outlook"] == "not_configured"
    assert both.json()["checks"]["outlook"] == "connector"
