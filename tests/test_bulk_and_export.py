"""Tests for the bulk, export and availability use cases."""

from __future__ import annotations

import importlib

from user_accounts.application.use_cases.users import (
    UserErrorKind,
    bulk_delete_users,
    bulk_set_user_active,
    export_users,
    is_email_available,
    is_username_available,
)
from user_accounts.domain.entities import RoleName
from user_accounts.domain.errors import StoreUnavailableError
from user_accounts.infrastructure.repositories import UserRepository
from user_accounts.infrastructure.user_export import EXPORT_COLUMNS

export_module = importlib.import_module("user_accounts.application.use_cases.users.export_users")


def test_bulk_operations_need_a_selection(session) -> None:
    assert bulk_set_user_active(session, [], is_active=False).error is (
        UserErrorKind.VALIDATION_ERROR
    )
    assert bulk_delete_users(session, ["", "  "]).error is UserErrorKind.VALIDATION_ERROR


def test_bulk_deactivate_reports_each_user(session, make_user) -> None:
    make_user("boss@acme.com", role=RoleName.ADMIN)
    make_user("ana@acme.com")

    result = bulk_set_user_active(
        session, ["ana@acme.com", "boss@acme.com", "ghost@acme.com"], is_active=False
    )

    assert result.ok
    outcomes = {outcome.user_id: outcome.error for outcome in result.value}
    assert outcomes == {
        "ana@acme.com": None,
        "boss@acme.com": UserErrorKind.FORBIDDEN,
        "ghost@acme.com": UserErrorKind.NOT_FOUND,
    }
    repository = UserRepository(session)
    assert repository.get("ana@acme.com").is_active is False
    assert repository.get("boss@acme.com").is_active is True


def test_bulk_delete_stops_on_store_outage(session, make_user, monkeypatch) -> None:
    make_user("ana@acme.com")

    def unavailable(self, user_id):
        raise StoreUnavailableError("down")

    monkeypatch.setattr(UserRepository, "get", unavailable)

    result = bulk_delete_users(session, ["ana@acme.com", "bob@acme.com"])

    assert result.error is UserErrorKind.STORE_UNAVAILABLE


def test_export_collects_every_page(session, make_user, monkeypatch) -> None:
    for name in ("ana", "bob", "carla", "dan", "eve"):
        make_user(f"{name}@acme.com")
    make_user("gone@acme.com")
    UserRepository(session).soft_delete("gone@acme.com")
    monkeypatch.setattr(export_module, "MAX_PAGE_SIZE", 2)

    result = export_users(session, file_format="CSV")

    assert result.ok
    assert result.value.row_count == 5
    lines = result.value.content.decode("utf-8").strip().splitlines()
    assert lines[0] == ",".join(EXPORT_COLUMNS)
    assert sorted(line.split(",")[0] for line in lines[1:]) == [
        "ana@acme.com",
        "bob@acme.com",
        "carla@acme.com",
        "dan@acme.com",
        "eve@acme.com",
    ]


def test_export_filters_by_role(session, make_user) -> None:
    make_user("boss@acme.com", role=RoleName.ADMIN)
    make_user("ana@acme.com")

    result = export_users(session, file_format="xlsx", role=RoleName.ADMIN)

    assert result.ok
    assert result.value.row_count == 1
    assert result.value.filename.endswith(".xlsx")


def test_availability_counts_deleted_emails_but_not_deleted_usernames(session, make_user) -> None:
    make_user("ana@acme.com", username="Ana")
    UserRepository(session).soft_delete("ana@acme.com")

    assert is_email_available(session, " ANA@acme.com ").value is False
    assert is_email_available(session, "").value is False
    assert is_username_available(session, "ana").value is True

    make_user("bob@acme.com", username="Bob")
    assert is_username_available(session, "BOB").value is False
    assert is_username_available(session, "bob", exclude_user_id="Bob@acme.com").value is True
