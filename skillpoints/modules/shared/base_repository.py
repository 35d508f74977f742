"""
Base Repository Pattern

Purpose
-------
Provides a type-safe, generic repository abstraction for database operations
following SQLAlchemy 2.0 conventions. Repositories encapsulate data access
logic and provide a consistent interface for the query collaborators.

Design Notes
------------
- Synchronous `Session`: the engine is invoked synchronously and never
  suspends, so its collaborators do not either.
- Structured debug logging for every operation.
- No transaction management; the caller owns the session and its
  transaction (and therefore per-user serialization).

Usage
-----
    class PerformedSkillRepository(BaseRepository[UserPerformedSkill]):
        def count_for_user(self, session: Session, user_id: str) -> int:
            return self.count(session, UserPerformedSkill.user_id == user_id)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select

if TYPE_CHECKING:
    from logging import Logger

    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import Session

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Generic base repository for type-safe database operations.

    Type Parameters:
        T: The SQLAlchemy model class this repository manages
    """

    def __init__(self, model_class: Type[T], logger: Logger) -> None:
        self.model_class = model_class
        self.log = logger

    def find_many_where(
        self,
        session: Session,
        *conditions: ColumnElement[bool],
        order_by: Optional[Sequence[ColumnElement]] = None,
        limit: Optional[int] = None,
    ) -> List[T]:
        """
        Find multiple records matching conditions.

        Args:
            session: Database session
            *conditions: SQLAlchemy filter conditions
            order_by: Optional ordering clauses
            limit: Optional maximum number of results

        Returns:
            List of model instances
        """
        stmt = select(self.model_class).where(*conditions)

        if order_by:
            stmt = stmt.order_by(*order_by)

        if limit is not None:
            stmt = stmt.limit(limit)

        instances = list(session.execute(stmt).scalars().all())

        self.log.debug(
            f"Repository.find_many_where: {self.model_class.__name__}",
            extra={
                "model": self.model_class.__name__,
                "found_count": len(instances),
                "limit": limit,
            },
        )

        return instances

    def count(self, session: Session, *conditions: ColumnElement[bool]) -> int:
        """
        Count records matching conditions.

        Args:
            session: Database session
            *conditions: SQLAlchemy filter conditions

        Returns:
            Number of matching records
        """
        stmt = select(func.count()).select_from(self.model_class).where(*conditions)
        count = session.execute(stmt).scalar_one()

        self.log.debug(
            f"Repository.count: {self.model_class.__name__}",
            extra={
                "model": self.model_class.__name__,
                "count": count,
            },
        )

        return count

    def add(self, session: Session, instance: T) -> T:
        """Add a new instance to the session."""
        session.add(instance)

        self.log.debug(
            f"Repository.add: {self.model_class.__name__}",
            extra={"model": self.model_class.__name__},
        )

        return instance

    def add_many(self, session: Session, instances: Sequence[T]) -> List[T]:
        """Add multiple instances to the session."""
        session.add_all(instances)

        self.log.debug(
            f"Repository.add_many: {self.model_class.__name__}",
            extra={
                "model": self.model_class.__name__,
                "count": len(instances),
            },
        )

        return list(instances)

    def flush(self, session: Session) -> None:
        """Flush pending changes to the database."""
        session.flush()

        self.log.debug(
            f"Repository.flush: {self.model_class.__name__}",
            extra={"model": self.model_class.__name__},
        )
