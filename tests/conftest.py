"""Shared fixtures: a throwaway SQLite database and a fresh application."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "dems_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ["CHECKIN_COOLDOWN_MINUTES"] = "10"

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from fastapi.testclient import TestClient  # noqa: E402

from app.domain.entities import ROLE_ADMIN, ROLE_ORGANIZER, ROLE_PARTICIPANT, User  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.repositories import UserRepository  # noqa: E402
from app.infrastructure.security import create_user_token, get_password_hash  # noqa: E402

PASSWORD = "Secret123"


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure every test starts from an empty schema."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session():
    with SessionLocal() as session:
        yield session


@pytest.fixture()
def app():
    from main import create_app

    return create_app()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def create_account(name: str, *, role: str = ROLE_PARTICIPANT, email: str | None = None) -> User:
    """Insert a user directly and return it."""

    with SessionLocal() as session:
        return UserRepository(session).create(
            User(
                id=None,
                name=name,
                email=email or f"{name.lower().replace(' ', '.')}@example.com",
                password=get_password_hash(PASSWORD),
                role=role,
            )
        )


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_user_token(user.id)}"}


@pytest.fixture()
def participant() -> User:
    return create_account("Pat Participant")


@pytest.fixture()
def other_participant() -> User:
    return create_account("Quinn Participant")


@pytest.fixture()
def organizer() -> User:
    return create_account("Olive Organizer", role=ROLE_ORGANIZER)


@pytest.fixture()
def admin() -> User:
    return create_account("Ada Admin", role=ROLE_ADMIN)
