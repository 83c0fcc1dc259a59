"""Pytest fixtures for the API test suite.

The application reads its configuration from the environment at import time,
so the test environment is pinned here before anything from
``campus_connect`` is imported. Tests run against a throwaway SQLite file
whose tables are recreated for every test case.
"""

from __future__ import annotations

import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="campus-connect-tests-")

os.environ["DB_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["ENVIRONMENT"] = "testing"
os.environ["DEBUG"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SOCKETIO_ASYNC_MODE"] = "threading"
os.environ["PASSWORD_ITERATIONS"] = "1000"
os.environ["JWT_SECRET"] = "test-access-secret-with-enough-length-0001"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret-with-enough-length-0002"
os.environ["INSTITUTION_DOMAIN"] = "rishihood.edu.in"
os.environ["ROTATE_REFRESH_ON_USE"] = "false"

import pytest  # noqa: E402

from campus_connect.infrastructure.database.session import _SessionLocal, create_tables, drop_tables  # noqa: E402
from campus_connect.main import create_app  # noqa: E402


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    app = create_app()
    app.config.update(TESTING=True)
    return app


@pytest.fixture(autouse=True)
def _fresh_tables():
    """Start every test from empty tables."""
    drop_tables()
    create_tables()
    yield


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session():
    """Session used to arrange data; factories commit through it."""
    s = _SessionLocal()
    try:
        yield s
    finally:
        s.close()


# -- Hook up Factory Boy to the pytest SQLAlchemy session ----------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
    SQLAlchemySession.set(None)
