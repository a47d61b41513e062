"""Health probes — liveness and readiness against the test engine."""

from sefask.main import app


async def test_liveness(client):
    response = await client.get("/api/health/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    response = await client.get("/api/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"] == {"database": "healthy"}


async def test_readiness_without_database(client, monkeypatch):
    monkeypatch.setattr(app.state, "db", None)
    response = await client.get("/api/health/ready")
    assert response.status_code == 503


async def test_database_manager_comes_from_app_state(client, test_engine):
    assert app.state.db.engine is test_engine
    assert (await client.get("/api/health/ready")).status_code == 200
