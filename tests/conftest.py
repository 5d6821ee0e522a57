"""
Shared fixtures.

Settings are read from the environment at import time, so the variables
below are set before any application module is imported.  Every test gets
its own in-memory SQLite database (``StaticPool`` keeps the single
connection alive) wired into the app by overriding ``get_db``.
"""

import os
import tempfile
from types import SimpleNamespace

_STORAGE_DIR = tempfile.mkdtemp(prefix="kuchi-test-storage-")

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-0123456789abcdef0123456789abcdef"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ["STORAGE_DIR"] = _STORAGE_DIR
os.environ["PUBLIC_BASE_URL"] = "http://testserver"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="kuchi-test-log-")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from main import app  # noqa: E402
from core.security import create_access_token, hash_password  # noqa: E402
from database import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from models.user import User  # noqa: E402


def auth_headers(user_id: str, role: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(eng)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(session_factory):
    """Insert a user directly and return its id."""

    def _make(
        email="user@example.com",
        password="secret1",
        role="sales",
        name="Test User",
        is_active=True,
    ) -> str:
        with session_factory() as session:
            user = User(
                name=name,
                email=email,
                password_hash=hash_password(password),
                role=role,
                is_active=is_active,
            )
            session.add(user)
            session.commit()
            return user.id

    return _make


@pytest.fixture()
def admin(make_user):
    user_id = make_user(email="admin@example.com", role="admin", name="Admin User", password="adminpass")
    return SimpleNamespace(id=user_id, headers=auth_headers(user_id, "admin"))


@pytest.fixture()
def sales(make_user):
    user_id = make_user(email="sales@example.com", role="sales", name="Sales User", password="salespass")
    return SimpleNamespace(id=user_id, headers=auth_headers(user_id, "sales"))


@pytest.fixture()
def storage_dir():
    return _STORAGE_DIR
