"""Shared fixtures: in-memory SQLite engine, session, repository, app client."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from api.main import create_app
from core import database
from core.config import AppConfig
from core.models.base import Base
from verticals.book.models.db_models import Book  # noqa: F401
from verticals.book.repository import BookRepository


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return database.make_session_factory(engine)


@pytest.fixture
def session(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def repo(session):
    return BookRepository(session)


@pytest.fixture
def app(session_factory):
    app = create_app(AppConfig())

    def override_session():
        with session_factory() as session:
            yield session

    app.dependency_overrides[database.get_session] = override_session
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client
