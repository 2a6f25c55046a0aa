"""Tests for registration, login and credential management use cases."""

from __future__ import annotations

import importlib

import pytest

from user_accounts.application.use_cases.users import (
    UserErrorKind,
    authenticate_user,
    change_password,
    delete_user,
    register_user,
    reset_password,
    restore_user,
    set_user_active,
    update_user,
)
from user_accounts.domain.entities import RoleName
from user_accounts.domain.errors import StoreUnavailableError
from user_accounts.infrastructure.database import SessionLocal
from user_accounts.infrastructure.repositories import UserRepository
from user_accounts.infrastructure.security import verify_password

authenticate_module = importlib.import_module(
    "user_accounts.application.use_cases.users.authenticate_user"
)


def _register(session, email="Ana@Acme.com", password="Secret@123", **overrides):
    payload = {
        "user_id": email,
        "username": "Ana",
        "password": password,
        "confirm_password": password,
    }
    payload.update(overrides)
    return register_user(session, **payload)


def test_register_then_login_returns_principal(session) -> None:
    registered = _register(session)

    assert registered.ok
    assert registered.value.user_id == "ana@acme.com"
    assert registered.value.role is RoleName.USER
    assert registered.value.password_migrated is True

    result = authenticate_user(session, "  ANA@acme.com ", "Secret@123")

    assert result.ok
    principal = result.value.principal
    assert principal.user_id == "ana@acme.com"
    assert principal.username == "Ana"
    assert principal.role is RoleName.USER
    assert UserRepository(session).get("ana@acme.com").last_login_at is not None


def test_unknown_user_and_wrong_password_are_indistinguishable(session) -> None:
    _register(session)

    wrong_password = authenticate_user(session, "ana@acme.com", "Wrong@123")
    unknown_user = authenticate_user(session, "nobody@acme.com", "Secret@123")

    assert wrong_password.error is UserErrorKind.INVALID_CREDENTIALS
    assert unknown_user.error is UserErrorKind.INVALID_CREDENTIALS
    assert wrong_password.message == unknown_user.message


@pytest.mark.parametrize(
    "overrides",
    [
        {"user_id": "not-an-email"},
        {"user_id": "ana@mailinator.com"},
        {"user_id": "ana..b@acme.com"},
        {"username": "ab"},
        {"password": "weakpass", "confirm_password": "weakpass"},
        {"confirm_password": "Secret@124"},
    ],
)
def test_register_rejects_invalid_input(session, overrides) -> None:
    result = _register(session, **overrides)

    assert result.error is UserErrorKind.VALIDATION_ERROR
    assert result.message
    assert UserRepository(session).count() == 0


def test_register_rejects_existing_email_regardless_of_case(session) -> None:
    assert _register(session).ok

    duplicate = _register(session, email="ANA@ACME.COM")

    assert duplicate.error is UserErrorKind.ALREADY_EXISTS


def test_register_rejects_email_of_soft_deleted_account(session) -> None:
    _register(session)
    assert delete_user(session, "ana@acme.com").ok

    again = _register(session)

    assert again.error is UserErrorKind.ALREADY_EXISTS


def test_login_migrates_legacy_password(session, make_user) -> None:
    make_user("old@acme.com", password="Legacy@123", legacy=True)

    result = authenticate_user(session, "old@acme.com", "Legacy@123")

    assert result.ok
    stored = UserRepository(session).get("old@acme.com")
    assert stored.password_migrated is True
    assert stored.legacy_password_hash is None
    assert verify_password("Legacy@123", stored.password_hash)
    assert stored.last_login_at is not None

    second = authenticate_user(session, "old@acme.com", "Legacy@123")
    assert second.ok


def test_wrong_password_does_not_migrate_legacy_account(session, make_user) -> None:
    make_user("old@acme.com", password="Legacy@123", legacy=True)

    result = authenticate_user(session, "old@acme.com", "Legacy@124")

    assert result.error is UserErrorKind.INVALID_CREDENTIALS
    stored = UserRepository(session).get("old@acme.com")
    assert stored.password_migrated is False
    assert stored.last_login_at is None


@pytest.mark.parametrize("legacy", [True, False])
def test_inactive_account_is_reported_only_after_correct_password(
    session, make_user, legacy
) -> None:
    make_user("off@acme.com", password="Secret@123", legacy=legacy, is_active=False)

    wrong = authenticate_user(session, "off@acme.com", "Wrong@123")
    right = authenticate_user(session, "off@acme.com", "Secret@123")

    assert wrong.error is UserErrorKind.INVALID_CREDENTIALS
    assert right.error is UserErrorKind.ACCOUNT_INACTIVE
    assert UserRepository(session).get("off@acme.com").password_migrated is not legacy


def test_soft_deleted_user_cannot_login(session) -> None:
    _register(session)
    delete_user(session, "ana@acme.com")

    result = authenticate_user(session, "ana@acme.com", "Secret@123")

    assert result.error is UserErrorKind.INVALID_CREDENTIALS


def test_login_reports_store_outage(session, monkeypatch) -> None:
    def unavailable(self, user_id):
        raise StoreUnavailableError("down")

    monkeypatch.setattr(UserRepository, "get", unavailable)

    result = authenticate_user(session, "ana@acme.com", "Secret@123")

    assert result.error is UserErrorKind.STORE_UNAVAILABLE


def test_change_password_requires_current_password(session) -> None:
    _register(session)

    rejected = change_password(
        session,
        user_id="ana@acme.com",
        current_password="Wrong@123",
        new_password="Newer@123",
        confirm_password="Newer@123",
    )
    changed = change_password(
        session,
        user_id="ana@acme.com",
        current_password="Secret@123",
        new_password="Newer@123",
        confirm_password="Newer@123",
    )

    assert rejected.error is UserErrorKind.INVALID_CREDENTIALS
    assert changed.ok
    assert authenticate_user(session, "ana@acme.com", "Secret@123").error is (
        UserErrorKind.INVALID_CREDENTIALS
    )
    assert authenticate_user(session, "ana@acme.com", "Newer@123").ok


def test_change_password_of_legacy_account_stores_modern_hash(session, make_user) -> None:
    make_user("old@acme.com", password="Legacy@123", legacy=True)

    result = change_password(
        session,
        user_id="old@acme.com",
        current_password="Legacy@123",
        new_password="Newer@123",
        confirm_password="Newer@123",
    )

    assert result.ok
    assert result.value.password_migrated is True
    assert result.value.legacy_password_hash is None


def test_change_password_validates_new_password(session) -> None:
    _register(session)

    result = change_password(
        session,
        user_id="ana@acme.com",
        current_password="Secret@123",
        new_password="short",
        confirm_password="short",
    )

    assert result.error is UserErrorKind.VALIDATION_ERROR


def test_reset_password(session, make_user) -> None:
    make_user("old@acme.com", password="Legacy@123", legacy=True)

    weak = reset_password(
        session, user_id="old@acme.com", new_password="weak", confirm_password="weak"
    )
    missing = reset_password(
        session, user_id="ghost@acme.com", new_password="Newer@123", confirm_password="Newer@123"
    )
    done = reset_password(
        session, user_id="old@acme.com", new_password="Newer@123", confirm_password="Newer@123"
    )

    assert weak.error is UserErrorKind.VALIDATION_ERROR
    assert missing.error is UserErrorKind.NOT_FOUND
    assert done.ok
    assert authenticate_user(session, "old@acme.com", "Newer@123").ok


def test_admin_accounts_are_protected(session, make_user) -> None:
    make_user("boss@acme.com", role=RoleName.ADMIN)

    assert delete_user(session, "boss@acme.com").error is UserErrorKind.FORBIDDEN
    assert delete_user(session, "boss@acme.com", hard=True).error is UserErrorKind.FORBIDDEN
    deactivated = set_user_active(session, "boss@acme.com", is_active=False)
    assert deactivated.error is UserErrorKind.FORBIDDEN


def test_delete_restore_lifecycle(session, make_user) -> None:
    make_user("ana@acme.com")

    assert restore_user(session, "ana@acme.com").error is UserErrorKind.NOT_FOUND
    assert delete_user(session, "ANA@acme.com").ok
    assert delete_user(session, "ana@acme.com").error is UserErrorKind.NOT_FOUND

    restored = restore_user(session, "ana@acme.com")
    assert restored.ok
    assert restored.value.is_deleted is False

    assert delete_user(session, "ana@acme.com", hard=True).ok
    assert UserRepository(session).get_including_deleted("ana@acme.com") is None
    assert delete_user(session, "ana@acme.com", hard=True).error is UserErrorKind.NOT_FOUND


def test_set_user_active_is_idempotent(session, make_user) -> None:
    make_user("ana@acme.com")

    first = set_user_active(session, "ana@acme.com", is_active=False)
    second = set_user_active(session, "ana@acme.com", is_active=False)
    missing = set_user_active(session, "ghost@acme.com", is_active=True)

    assert first.ok and first.value.is_active is False
    assert second.ok and second.value.is_active is False
    assert missing.error is UserErrorKind.NOT_FOUND
    assert set_user_active(session, "ana@acme.com", is_active=True).value.is_active is True


def test_update_user_changes_username_only(session, make_user) -> None:
    original = make_user("ana@acme.com", username="Ana")

    updated = update_user(session, user_id="ana@acme.com", username="  Ana Torres ")
    invalid = update_user(session, user_id="ana@acme.com", username="x")

    assert updated.ok
    assert updated.value.username == "Ana Torres"
    assert updated.value.password_hash == original.password_hash
    assert invalid.error is UserErrorKind.VALIDATION_ERROR


def test_register_login_delete_restore_scenario(session) -> None:
    assert _register(session).ok
    assert authenticate_user(session, "ana@acme.com", "Secret@123").ok

    assert delete_user(session, "ana@acme.com").ok
    assert authenticate_user(session, "ana@acme.com", "Secret@123").error is (
        UserErrorKind.INVALID_CREDENTIALS
    )

    assert restore_user(session, "ana@acme.com").ok
    restored_login = authenticate_user(session, "ana@acme.com", "Secret@123")
    assert restored_login.ok
    assert restored_login.value.principal.role is RoleName.USER


def _run_first(monkeypatch, method_name, action):
    """Make ``action`` commit from another session right before ``method_name`` writes."""

    original = getattr(UserRepository, method_name)

    def interleaved(self, *args, **kwargs):
        with SessionLocal() as other:
            action(other)
        return original(self, *args, **kwargs)

    monkeypatch.setattr(UserRepository, method_name, interleaved)


def test_login_migration_keeps_a_concurrent_deactivation(session, make_user, monkeypatch) -> None:
    make_user("old@acme.com", password="Legacy@123", legacy=True)
    _run_first(
        monkeypatch,
        "replace_password_hash",
        lambda other: set_user_active(other, "old@acme.com", is_active=False),
    )

    result = authenticate_user(session, "old@acme.com", "Legacy@123")

    assert result.error is UserErrorKind.ACCOUNT_INACTIVE
    with SessionLocal() as check:
        stored = UserRepository(check).get("old@acme.com")
    assert stored.is_active is False
    assert stored.password_migrated is True
    assert verify_password("Legacy@123", stored.password_hash)
    assert stored.last_login_at is None


def test_login_migration_keeps_a_concurrent_password_reset(session, make_user, monkeypatch) -> None:
    make_user("old@acme.com", password="Legacy@123", legacy=True)
    _run_first(
        monkeypatch,
        "replace_password_hash",
        lambda other: reset_password(
            other, user_id="old@acme.com", new_password="Newer@123", confirm_password="Newer@123"
        ),
    )

    result = authenticate_user(session, "old@acme.com", "Legacy@123")

    assert result.error is UserErrorKind.INVALID_CREDENTIALS
    with SessionLocal() as check:
        stored = UserRepository(check).get("old@acme.com")
    assert verify_password("Newer@123", stored.password_hash)
    assert not verify_password("Legacy@123", stored.password_hash)


def test_username_update_keeps_a_concurrent_password_reset(session, make_user, monkeypatch) -> None:
    make_user("ana@acme.com", username="Ana")
    _run_first(
        monkeypatch,
        "update_username",
        lambda other: reset_password(
            other, user_id="ana@acme.com", new_password="Newer@123", confirm_password="Newer@123"
        ),
    )

    updated = update_user(session, user_id="ana@acme.com", username="Ana B")

    assert updated.ok
    assert updated.value.username == "Ana B"
    monkeypatch.undo()
    assert authenticate_user(session, "ana@acme.com", "Newer@123").ok
    assert authenticate_user(session, "ana@acme.com", "Secret@123").error is (
        UserErrorKind.INVALID_CREDENTIALS
    )


def test_change_password_conflicts_with_a_concurrent_reset(session, make_user, monkeypatch) -> None:
    make_user("ana@acme.com")
    _run_first(
        monkeypatch,
        "replace_password_hash",
        lambda other: reset_password(
            other, user_id="ana@acme.com", new_password="Reset@1234", confirm_password="Reset@1234"
        ),
    )

    result = change_password(
        session,
        user_id="ana@acme.com",
        current_password="Secret@123",
        new_password="Newer@123",
        confirm_password="Newer@123",
    )

    assert result.error is UserErrorKind.CONFLICT
    monkeypatch.undo()
    assert authenticate_user(session, "ana@acme.com", "Reset@1234").ok


def test_unknown_user_login_still_verifies_a_password(session, make_user, monkeypatch) -> None:
    make_user("ana@acme.com")
    calls = []

    def counting_verify(password):
        calls.append(password)
        return False

    monkeypatch.setattr(authenticate_module, "verify_dummy_password", counting_verify)

    unknown = authenticate_user(session, "nobody@acme.com", "Secret@123")
    known_wrong = authenticate_user(session, "ana@acme.com", "Wrong@123")

    assert unknown.error is UserErrorKind.INVALID_CREDENTIALS
    assert known_wrong.error is UserErrorKind.INVALID_CREDENTIALS
    assert calls == ["Secret@123"]
