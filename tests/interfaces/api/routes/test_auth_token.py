"""Tests for the authentication token endpoint."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from user_accounts.infrastructure.database import SessionLocal
from user_accounts.infrastructure.models import UserModel
from user_accounts.infrastructure.security import (
    decode_access_token,
    get_password_hash,
    hash_legacy_password,
    verify_password,
)
from user_accounts.utils import now_utc_naive


def _create_user(
    *,
    email: str,
    password: str,
    legacy: bool = False,
    role: str = "User",
    is_active: bool = True,
    username: str = "Test User",
) -> None:
    """Insert a user record the way older deployments stored it."""

    now = now_utc_naive()
    digest = hash_legacy_password(password) if legacy else get_password_hash(password)
    with SessionLocal() as session:
        session.add(
            UserModel(
                user_id=email,
                username=username,
                password_hash=digest,
                legacy_password_hash=digest if legacy else None,
                password_migrated=not legacy,
                role=role,
                is_active=is_active,
                is_deleted=False,
                created_at=now,
                updated_at=now,
            )
        )
        session.commit()


def _request_token(client: TestClient, email: str, password: str):
    return client.post(
        "/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )


def test_token_endpoint_seeds_admin_on_fresh_database(client: TestClient) -> None:
    response = _request_token(client, "admin@demo.com", "Admin@123")

    assert response.status_code == 200
    payload = response.json()
    assert payload["token_type"] == "bearer"
    assert payload["user_id"] == "admin@demo.com"
    assert payload["role"] == "Admin"

    claims = decode_access_token(payload["access_token"])
    assert claims["sub"] == "admin@demo.com"
    assert claims["role"] == "Admin"
    assert claims["pwd_sig"]

    again = _request_token(client, "admin@demo.com", "Admin@123")
    assert again.status_code == 200
    with SessionLocal() as session:
        assert session.query(UserModel).filter_by(role="Admin").count() == 1


def test_legacy_password_is_migrated_on_login(client: TestClient) -> None:
    _create_user(email="old@acme.com", password="Legacy@123", legacy=True)

    response = _request_token(client, "old@acme.com", "Legacy@123")

    assert response.status_code == 200
    with SessionLocal() as session:
        stored = session.get(UserModel, "old@acme.com")
        assert stored.password_migrated is True
        assert stored.legacy_password_hash is None
        assert verify_password("Legacy@123", stored.password_hash)
        assert stored.last_login_at is not None

    # The token is signed with the upgraded hash.
    headers = {"Authorization": f"Bearer {response.json()['access_token']}"}
    assert client.get("/auth/me", headers=headers).status_code == 200


def test_legacy_login_with_wrong_password_keeps_digest(client: TestClient) -> None:
    _create_user(email="old@acme.com", password="Legacy@123", legacy=True)

    response = _request_token(client, "old@acme.com", "legacy@123")

    assert response.status_code == 401
    with SessionLocal() as session:
        stored = session.get(UserModel, "old@acme.com")
        assert stored.password_migrated is False
        assert stored.password_hash == hash_legacy_password("Legacy@123")


@pytest.mark.parametrize("legacy", [True, False])
def test_inactive_user_is_forbidden(client: TestClient, legacy: bool) -> None:
    _create_user(email="off@acme.com", password="Secret@123", legacy=legacy, is_active=False)

    right = _request_token(client, "off@acme.com", "Secret@123")
    wrong = _request_token(client, "off@acme.com", "Wrong@123")

    assert right.status_code == 403
    assert wrong.status_code == 401


def test_reset_password_invalidates_existing_token(client: TestClient) -> None:
    _create_user(email="user@acme.com", password="Secret@123")

    admin_token = _request_token(client, "admin@demo.com", "Admin@123").json()["access_token"]
    user_token = _request_token(client, "user@acme.com", "Secret@123").json()["access_token"]

    reset_response = client.post(
        "/users/user@acme.com/reset-password",
        json={"new_password": "Changed@123", "confirm_password": "Changed@123"},
        headers={"Authorization": f"Bearer {admin_token}"},
    )
    assert reset_response.status_code == 200

    me_response = client.get(
        "/auth/me",
        headers={"Authorization": f"Bearer {user_token}"},
    )
    assert me_response.status_code == 401
    assert me_response.json()["detail"] == "Invalid credentials"
