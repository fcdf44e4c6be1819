"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and points the
application at an in-memory SQLite database before any module reads settings.
"""

import os
import sys
from pathlib import Path

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

os.environ.setdefault("MEALGRID_ENVIRONMENT", "testing")
os.environ.setdefault("MEALGRID_DATABASE_URL", "sqlite://")
os.environ.setdefault("MEALGRID_JWT_SECRET", "test-secret-for-mealgrid")
os.environ.setdefault("MEALGRID_JWT_AUDIENCE", "authenticated")

# Application modules read settings at import time, so they come after the
# environment above.
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from adapters.storage_adapter import LocalObjectStorage
from api.dependencies import get_db, get_storage
from app.config import settings
from domain.models import Base, SessionLocal, engine
from main import app
from services.session import Identity
from test_fixtures import auth_headers, client, make_identity


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Create a database session for integration tests.

    The schema is created before and dropped after each test, so every test
    starts from empty tables.

    Yields:
        Session: SQLAlchemy database session
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def storage(tmp_path) -> LocalObjectStorage:
    """Private recipe-image bucket in a temporary directory"""
    return LocalObjectStorage(
        root=str(tmp_path / "objects"),
        bucket=settings.storage_bucket,
        base_url="http://testserver",
        secret=settings.jwt_secret,
        public=False,
    )


@pytest.fixture(scope="function")
def api_client(db_session, storage) -> Generator[TestClient, None, None]:
    """TestClient wired to the test database session and storage"""

    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def identity() -> Identity:
    return make_identity()


@pytest.fixture(scope="function")
def headers(identity) -> dict:
    return auth_headers(identity)
