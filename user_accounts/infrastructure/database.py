"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator, Iterator
from contextlib import contextmanager

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from user_accounts.config import get_settings
from user_accounts.domain.errors import StoreUnavailableError, UserStoreError


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for ``database_url``."""

    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        # Request handlers and the session dependency may run on different threads.
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database(bind: Engine | None = None) -> None:
    """Ensure all ORM models have tables and the system roles are seeded."""

    from user_accounts.infrastructure import models  # noqa: F401  # ensure models are imported
    from user_accounts.infrastructure.repositories import RoleRepository

    target = bind or engine
    Base.metadata.create_all(bind=target, checkfirst=True)

    with Session(bind=target) as session:
        created = RoleRepository(session).ensure_system_roles()
    if created:
        logger.info("Seeded system roles: %s", ", ".join(role.value for role in created))


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def translate_store_errors(session: Session, action: str) -> Iterator[None]:
    """Roll back and raise ``StoreUnavailableError`` when the database fails."""

    try:
        yield
    except UserStoreError:
        raise
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Store failed to %s", action)
        raise StoreUnavailableError(f"Could not {action}") from exc
