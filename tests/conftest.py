"""Pytest fixtures."""

import os
import shutil
import tempfile
from pathlib import Path

# Point settings at a throwaway database and upload dir before the app is imported
UPLOAD_DIR = tempfile.mkdtemp(prefix="civic-uploads-")
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["UPLOAD_DIR"] = UPLOAD_DIR

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import delete  # noqa: E402

from civic_reporter.db.base import Base  # noqa: E402
from civic_reporter.db.session import SessionLocal, engine  # noqa: E402
from civic_reporter.main import app  # noqa: E402
from civic_reporter.models import Issue  # noqa: E402


@pytest.fixture(scope="session")
def setup_db():
    """Create tables once for test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    shutil.rmtree(UPLOAD_DIR, ignore_errors=True)


@pytest.fixture(autouse=True)
def clean_state(setup_db):
    """Each test starts with no issues and no stored uploads."""
    with SessionLocal() as s:
        s.execute(delete(Issue))
        s.commit()
    for path in Path(UPLOAD_DIR).glob("*"):
        path.unlink()
    yield


@pytest.fixture
def db(setup_db):
    """Session for calling the issue store directly."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def upload_dir():
    return Path(UPLOAD_DIR)


@pytest.fixture
def client(setup_db):
    """Test client running the app lifespan."""
    with TestClient(app) as c:
        yield c
