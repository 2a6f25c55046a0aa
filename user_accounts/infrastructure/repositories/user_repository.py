"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence
import logging

from sqlalchemy import case, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from user_accounts.domain.entities import RoleName, User
from user_accounts.domain.errors import UserConflictError, UserNotFoundError
from user_accounts.infrastructure.database import translate_store_errors
from user_accounts.infrastructure.models import UserModel
from user_accounts.utils import ensure_utc, now_utc_naive

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100

_SORT_COLUMNS = {
    "createdat": UserModel.created_at,
    "updatedat": UserModel.updated_at,
    "username": UserModel.username,
    "userid": UserModel.user_id,
    "email": UserModel.user_id,
    "role": UserModel.role,
    "lastloginat": UserModel.last_login_at,
}
_NULLABLE_SORT_COLUMNS = {"lastloginat"}
DEFAULT_SORT = "createdat"


def normalize_sort_key(sort_by: str | None) -> str:
    """Map ``created_at``, ``CreatedAt`` or ``createdat`` to the same sort key."""

    key = (sort_by or "").replace("_", "").strip().lower()
    return key if key in _SORT_COLUMNS else DEFAULT_SORT


class UserRepository:
    """Provide persistence operations for user entities.

    Reads and writes skip soft-deleted rows unless the method name says
    otherwise.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # ---- reads ----

    def get(self, user_id: str) -> User | None:
        with self._translate_errors("load user"):
            model = self._get_model(user_id)
        return self._to_entity(model) if model else None

    def get_including_deleted(self, user_id: str) -> User | None:
        with self._translate_errors("load user"):
            model = self._get_model(user_id, include_deleted=True)
        return self._to_entity(model) if model else None

    def exists(self, user_id: str) -> bool:
        with self._translate_errors("check user existence"):
            found = (
                self.session.query(UserModel.user_id)
                .filter(UserModel.user_id == user_id)
                .filter(UserModel.is_deleted.is_(False))
                .first()
            )
        return found is not None

    def username_taken(self, username: str, *, exclude_user_id: str | None = None) -> bool:
        """Return whether a live user other than ``exclude_user_id`` has ``username``.

        The comparison ignores case and surrounding whitespace.
        """

        with self._translate_errors("check username"):
            query = (
                self._live_query()
                .with_entities(UserModel.user_id)
                .filter(func.lower(UserModel.username) == username.strip().lower())
            )
            if exclude_user_id is not None:
                query = query.filter(UserModel.user_id != exclude_user_id)
            return query.first() is not None

    def authenticate(self, user_id: str, candidate_hash: str) -> User | None:
        """Return the live, active user whose stored hash equals ``candidate_hash``."""

        with self._translate_errors("authenticate user"):
            model = (
                self.session.query(UserModel)
                .filter(UserModel.user_id == user_id)
                .filter(UserModel.password_hash == candidate_hash)
                .filter(UserModel.is_active.is_(True))
                .filter(UserModel.is_deleted.is_(False))
                .first()
            )
        return self._to_entity(model) if model else None

    def count(self) -> int:
        with self._translate_errors("count users"):
            return self._live_query().count()

    def count_active(self) -> int:
        with self._translate_errors("count users"):
            return self._live_query().filter(UserModel.is_active.is_(True)).count()

    def search(self, term: str) -> Sequence[User]:
        with self._translate_errors("search users"):
            query = self._apply_search(self._live_query(), term)
            models = query.order_by(UserModel.created_at.desc(), UserModel.user_id).all()
        return [self._to_entity(model) for model in models]

    def list_recent(self, limit: int = 10) -> Sequence[User]:
        with self._translate_errors("list users"):
            models = (
                self._live_query()
                .order_by(UserModel.created_at.desc(), UserModel.user_id)
                .limit(max(limit, 0))
                .all()
            )
        return [self._to_entity(model) for model in models]

    def list_filtered(
        self,
        *,
        search_term: str | None = None,
        is_active: bool | None = None,
        role: RoleName | None = None,
        include_deleted: bool = False,
        page: int = 1,
        page_size: int = 10,
        sort_by: str | None = None,
        sort_order: str = "desc",
    ) -> tuple[list[User], int]:
        """Return one page of users matching every given filter and the total count."""

        page = max(page, 1)
        page_size = min(max(page_size, 1), MAX_PAGE_SIZE)

        sort_key = normalize_sort_key(sort_by)
        column = _SORT_COLUMNS[sort_key]
        descending = (sort_order or "").strip().lower() != "asc"
        ordering = []
        if sort_key in _NULLABLE_SORT_COLUMNS:
            ordering.append(case((column.is_(None), 1), else_=0))
        ordering.append(column.desc() if descending else column.asc())
        if sort_key not in ("userid", "email"):
            ordering.append(UserModel.user_id.asc())

        with self._translate_errors("list users"):
            query = self.session.query(UserModel)
            if not include_deleted:
                query = query.filter(UserModel.is_deleted.is_(False))
            if search_term and search_term.strip():
                query = self._apply_search(query, search_term)
            if is_active is not None:
                query = query.filter(UserModel.is_active.is_(is_active))
            if role is not None:
                query = query.filter(UserModel.role == role.value)

            total_count = query.count()
            models = (
                query.order_by(*ordering)
                .offset((page - 1) * page_size)
                .limit(page_size)
                .all()
            )
        return [self._to_entity(model) for model in models], total_count

    def statistics(self) -> dict[str, int]:
        with self._translate_errors("compute user statistics"):
            live = self._live_query()
            total = live.count()
            active = live.filter(UserModel.is_active.is_(True)).count()
            admins = live.filter(UserModel.role == RoleName.ADMIN.value).count()
            migrated = live.filter(UserModel.password_migrated.is_(True)).count()
            deleted = (
                self.session.query(UserModel)
                .filter(UserModel.is_deleted.is_(True))
                .count()
            )
        return {
            "total_users": total,
            "active_users": active,
            "inactive_users": total - active,
            "admin_users": admins,
            "regular_users": total - admins,
            "migrated_passwords": migrated,
            "legacy_passwords": total - migrated,
            "deleted_users": deleted,
        }

    # ---- writes ----

    def create(self, user: User) -> User:
        with self._translate_errors("create user"):
            if self._get_model(user.user_id, include_deleted=True) is not None:
                raise UserConflictError(user.user_id)

            now = now_utc_naive()
            model = UserModel(user_id=user.user_id)
            self._apply_entity_to_model(model, user)
            model.created_at = now
            model.updated_at = now
            model.is_active = True
            model.is_deleted = False
            model.deleted_at = None
            model.last_login_at = None
            self.session.add(model)
            try:
                self.session.commit()
            except IntegrityError as exc:
                self.session.rollback()
                raise UserConflictError(user.user_id) from exc
            self.session.refresh(model)
        logger.info("User created: %s", user.user_id)
        return self._to_entity(model)

    def update_username(self, user_id: str, username: str) -> User:
        return self._update_fields(user_id, "update user", username=username)

    def set_active(self, user_id: str, is_active: bool) -> User:
        return self._update_fields(user_id, "update user", is_active=is_active)

    def set_password_hash(self, user_id: str, password_hash: str) -> User:
        """Store a modern digest and drop any legacy one."""

        return self._update_fields(
            user_id,
            "update password",
            password_hash=password_hash,
            legacy_password_hash=None,
            password_migrated=True,
        )

    def replace_password_hash(self, user_id: str, *, current_hash: str, new_hash: str) -> bool:
        """Replace ``current_hash`` by the modern ``new_hash``.

        Nothing is written when the stored digest is no longer ``current_hash``,
        so a password changed meanwhile is never overwritten.
        """

        with self._translate_errors("replace password hash"):
            return self._conditional_update(
                user_id,
                deleted=False,
                values={
                    "password_hash": new_hash,
                    "legacy_password_hash": None,
                    "password_migrated": True,
                    "updated_at": now_utc_naive(),
                },
                criteria=(UserModel.password_hash == current_hash,),
            )

    def soft_delete(self, user_id: str) -> bool:
        now = now_utc_naive()
        with self._translate_errors("delete user"):
            matched = self._conditional_update(
                user_id,
                deleted=False,
                values={"is_deleted": True, "deleted_at": now, "updated_at": now},
            )
        if matched:
            logger.info("User soft deleted: %s", user_id)
        return matched

    def restore(self, user_id: str) -> bool:
        with self._translate_errors("restore user"):
            matched = self._conditional_update(
                user_id,
                deleted=True,
                values={
                    "is_deleted": False,
                    "deleted_at": None,
                    "updated_at": now_utc_naive(),
                },
            )
        if matched:
            logger.info("User restored: %s", user_id)
        return matched

    def hard_delete(self, user_id: str) -> bool:
        with self._translate_errors("hard delete user"):
            model = self._get_model(user_id, include_deleted=True)
            if model is None:
                return False
            self.session.delete(model)
            self.session.commit()
        logger.warning("User permanently deleted: %s", user_id)
        return True

    def update_last_login(self, user_id: str) -> None:
        now = now_utc_naive()
        with self._translate_errors("record login"):
            self._conditional_update(
                user_id,
                deleted=False,
                values={"last_login_at": now, "updated_at": now},
            )

    # ---- helpers ----

    def _translate_errors(self, action: str):
        return translate_store_errors(self.session, action)

    def _update_fields(self, user_id: str, action: str, **values) -> User:
        """Write only ``values`` on the live record and return it."""

        values["updated_at"] = now_utc_naive()
        with self._translate_errors(action):
            if not self._conditional_update(user_id, deleted=False, values=values):
                raise UserNotFoundError(user_id)
            model = self._get_model(user_id)
        if model is None:
            raise UserNotFoundError(user_id)
        return self._to_entity(model)

    def _conditional_update(
        self, user_id: str, *, deleted: bool, values: dict, criteria: tuple = ()
    ) -> bool:
        """Apply ``values`` only when the row is in the expected state."""

        rowcount = (
            self.session.query(UserModel)
            .filter(UserModel.user_id == user_id)
            .filter(UserModel.is_deleted.is_(deleted))
            .filter(*criteria)
            .update(values, synchronize_session="fetch")
        )
        self.session.commit()
        return rowcount > 0

    def _live_query(self) -> Query:
        return self.session.query(UserModel).filter(UserModel.is_deleted.is_(False))

    @staticmethod
    def _apply_search(query: Query, term: str) -> Query:
        needle = term.strip().lower()
        return query.filter(
            or_(
                func.lower(UserModel.username).contains(needle, autoescape=True),
                func.lower(UserModel.user_id).contains(needle, autoescape=True),
            )
        )

    def _get_model(self, user_id: str, include_deleted: bool = False) -> UserModel | None:
        query = self.session.query(UserModel).filter(UserModel.user_id == user_id)
        if not include_deleted:
            query = query.filter(UserModel.is_deleted.is_(False))
        return query.first()

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.username = user.username
        model.password_hash = user.password_hash
        model.legacy_password_hash = user.legacy_password_hash
        model.password_migrated = user.password_migrated
        model.role = user.role.value

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            user_id=model.user_id,
            username=model.username,
            password_hash=model.password_hash,
            role=RoleName(model.role),
            password_migrated=model.password_migrated,
            legacy_password_hash=model.legacy_password_hash,
            is_active=model.is_active,
            is_deleted=model.is_deleted,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
            deleted_at=ensure_utc(model.deleted_at),
            last_login_at=ensure_utc(model.last_login_at),
        )
