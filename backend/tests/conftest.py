"""
Shared fixtures: an in-memory SQLite database and a TestClient wired to it.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from benefit_survey.database import Base, get_db
from benefit_survey.main import app
from benefit_survey.models import db_models  # noqa: F401  (registers tables)


@pytest.fixture
def db_engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db(db_session_factory):
    """Session for inspecting what the API persisted."""
    session = db_session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def override_db(db_session_factory):
    """Point the app's get_db dependency at the test database."""
    def _get_test_db():
        session = db_session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_db):
    """TestClient without lifespan, so the default database is never touched."""
    return TestClient(app)
