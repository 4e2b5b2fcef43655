"""
Shared transaction handling for the cached CRUD stores.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.stores.errors import StoreError, StoreNotFoundError
from db.repositories.errors import RecordNotFoundError

logger = logging.getLogger(__name__)

RepoT = TypeVar("RepoT")
T = TypeVar("T")

SessionFactory = Callable[[], Session]


class BaseStore(Generic[RepoT]):
    """
    Runs each store operation in its own session and transaction.

    Subclasses update their cache only after ``_execute`` returns, so a
    failed write never changes what the caller sees.
    """

    def __init__(
        self,
        *,
        session_factory: SessionFactory,
        repository_factory: Callable[[Session], RepoT],
    ) -> None:
        self._session_factory = session_factory
        self._repository_factory = repository_factory

    def _execute(self, action: str, operation: Callable[[RepoT], T]) -> T:
        with self._session_factory() as db:
            repository = self._repository_factory(db)
            try:
                value = operation(repository)
                db.commit()
            except RecordNotFoundError as exc:
                db.rollback()
                raise StoreNotFoundError(str(exc)) from exc
            except SQLAlchemyError as exc:
                db.rollback()
                logger.error("Error %s: %s", action, exc)
                raise StoreError(f"Error {action}: {exc}") from exc
        return value
