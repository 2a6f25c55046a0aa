"""Shared fixtures for the test suite."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "user_accounts_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
# Keeps the modern hash fast; production uses the configured default.
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"

from user_accounts.config import get_settings  # noqa: E402

get_settings.cache_clear()

from user_accounts.domain.entities import RoleName, User  # noqa: E402
from user_accounts.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from user_accounts.infrastructure.repositories import UserRepository  # noqa: E402
from user_accounts.infrastructure.security import (  # noqa: E402
    get_password_hash,
    hash_legacy_password,
)


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure every test starts from an empty schema with the system roles."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


@pytest.fixture()
def client():
    """Return a test client bound to a fresh application instance."""

    pytest.importorskip("fastapi")
    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def make_user(session):
    """Insert users directly through the repository."""

    repository = UserRepository(session)

    def _make_user(
        user_id: str,
        *,
        username: str | None = None,
        password: str = "Secret@123",
        role: RoleName = RoleName.USER,
        legacy: bool = False,
        is_active: bool = True,
    ) -> User:
        if legacy:
            digest = hash_legacy_password(password)
            user = User(
                user_id=user_id,
                username=username or user_id.split("@")[0],
                password_hash=digest,
                legacy_password_hash=digest,
                password_migrated=False,
                role=role,
            )
        else:
            user = User(
                user_id=user_id,
                username=username or user_id.split("@")[0],
                password_hash=get_password_hash(password),
                role=role,
            )
        created = repository.create(user)
        if not is_active:
            created = repository.set_active(user_id, False)
        return created

    return _make_user
