"""
Database layer for the reference SQL adapter.

Exports the declarative `Base` and `create_session_factory`, which builds a
synchronous session factory from `Config.DATABASE_URL`.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from skillpoints.core.config import Config
from skillpoints.database.base import Base, IdMixin, TimestampMixin


def create_session_factory(
    database_url: Optional[str] = None,
    create_schema: bool = False,
) -> sessionmaker[Session]:
    """
    Build a session factory for `database_url` (defaults to Config.DATABASE_URL).

    Args:
        database_url: SQLAlchemy URL
        create_schema: Create missing tables (tests and local development)
    """
    engine = create_engine(database_url or Config.DATABASE_URL, echo=Config.DATABASE_ECHO)
    if create_schema:
        # Importing the models registers their tables on Base.metadata
        import skillpoints.database.models  # noqa: F401

        Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)


__all__ = [
    "Base",
    "IdMixin",
    "TimestampMixin",
    "create_session_factory",
]
