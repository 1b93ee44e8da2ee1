"""Health endpoint tests."""

from sqlalchemy.exc import OperationalError

from civic_reporter.db.session import get_db
from civic_reporter.main import app


def test_health_returns_ok(client):
    """GET /health reports the service and database as ok."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


class _UnreachableSession:
    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("unable to open database file"))


def test_health_returns_503_when_database_unreachable(client):
    """GET /health answers 503 so probes can tell the database is down."""
    app.dependency_overrides[get_db] = lambda: _UnreachableSession()
    try:
        response = client.get("/health")
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 503
    assert response.json() == {"status": "degraded", "database": "unreachable"}
