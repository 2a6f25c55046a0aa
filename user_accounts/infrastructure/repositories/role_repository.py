"""Persistence layer for roles data."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from user_accounts.domain.entities import SYSTEM_ROLE_DESCRIPTIONS, Role, RoleName
from user_accounts.infrastructure.database import translate_store_errors
from user_accounts.infrastructure.models import RoleModel
from user_accounts.utils import ensure_utc, now_utc_naive

logger = logging.getLogger(__name__)


class RoleRepository:
    """Provide access to roles stored in the database."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, role_name: RoleName) -> Role | None:
        with translate_store_errors(self.session, "load role"):
            model = self.session.query(RoleModel).filter_by(role_name=role_name.value).first()
        return self._to_entity(model) if model else None

    def list(self) -> list[Role]:
        with translate_store_errors(self.session, "list roles"):
            models = self.session.query(RoleModel).order_by(RoleModel.role_name).all()
        return [self._to_entity(model) for model in models]

    def ensure_system_roles(self) -> list[RoleName]:
        """Insert the missing system roles and return the ones created."""

        with translate_store_errors(self.session, "seed system roles"):
            return self._insert_missing_roles()

    def _insert_missing_roles(self) -> list[RoleName]:
        existing = {name for (name,) in self.session.query(RoleModel.role_name).all()}
        missing = [role for role in SYSTEM_ROLE_DESCRIPTIONS if role.value not in existing]
        if not missing:
            return []

        now = now_utc_naive()
        for role in missing:
            self.session.add(
                RoleModel(
                    role_name=role.value,
                    description=SYSTEM_ROLE_DESCRIPTIONS[role],
                    is_system_role=True,
                    created_at=now,
                    updated_at=now,
                )
            )
        try:
            self.session.commit()
        except IntegrityError:
            # Another process seeded the roles between the read and the insert.
            self.session.rollback()
            logger.info("System roles were seeded concurrently")
            return []
        return missing

    @staticmethod
    def _to_entity(model: RoleModel) -> Role:
        return Role(
            name=RoleName(model.role_name),
            description=model.description,
            is_system_role=model.is_system_role,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["RoleRepository"]
