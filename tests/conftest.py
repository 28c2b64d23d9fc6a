import os

# Avant tout import de app.* : base en mémoire, pas d'echo SQL
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.api.dependencies import get_today
from app.core.config import jwt_settings, settings
from app.db.repositories.users import UserRepository
from app.db.session import get_session
from app.main import app
from app.security.password import hash_password
from app.security.tokens import create_session_token

TODAY = date(2024, 1, 15)


@pytest.fixture
def engine():
    """Base SQLite en mémoire partagée entre toutes les connexions du test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_today] = lambda: TODAY
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user(session, username, password, admin):
    return UserRepository(session).create(
        username=username,
        hashed_password=hash_password(password),
        admin=admin,
    )


@pytest.fixture
def admin_user(session):
    return _make_user(session, "admin", "admin-password", admin=True)


@pytest.fixture
def regular_user(session):
    return _make_user(session, "teacher", "teacher-password", admin=False)


def session_token_for(user):
    return create_session_token(user_id=user.id, username=user.username, settings=jwt_settings)


@pytest.fixture
def admin_client(client, admin_user):
    client.cookies.set(settings.SESSION_COOKIE_NAME, session_token_for(admin_user))
    return client


@pytest.fixture
def regular_client(client, regular_user):
    client.cookies.set(settings.SESSION_COOKIE_NAME, session_token_for(regular_user))
    return client
