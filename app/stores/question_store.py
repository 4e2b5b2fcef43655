"""
Cached question list backed by the `questions` table.
"""

from __future__ import annotations

import uuid

from app.stores.base import BaseStore, SessionFactory
from app.stores.errors import StoreValidationError
from db.models.question import Question
from db.repositories.question_repository import QuestionRepository


class QuestionStore(BaseStore[QuestionRepository]):
    def __init__(
        self,
        *,
        session_factory: SessionFactory,
        repository_factory=QuestionRepository,
    ) -> None:
        super().__init__(session_factory=session_factory, repository_factory=repository_factory)
        self._items: list[Question] = []

    def list(self) -> list[Question]:
        return list(self._items)

    def tags(self) -> list[str]:
        return sorted({question.tag for question in self._items})

    def refresh(self) -> list[Question]:
        self._items = self._execute("fetching questions", lambda repo: repo.list_questions())
        return self.list()

    def create(self, content: str, tag: str | None = None) -> Question:
        if not content or not content.strip():
            raise StoreValidationError("Question content is required.")

        question = self._execute(
            "adding question",
            lambda repo: repo.create(content=content, tag=tag),
        )
        self._items = [*self._items, question]
        return question

    def update(
        self,
        question_id: uuid.UUID,
        *,
        content: str | None = None,
        tag: str | None = None,
    ) -> Question:
        if content is not None and not content.strip():
            raise StoreValidationError("Question content is required.")

        updated = self._execute(
            "updating question",
            lambda repo: repo.update(question_id, content=content, tag=tag),
        )
        self._items = [updated if item.id == question_id else item for item in self._items]
        return updated

    def delete(self, question_id: uuid.UUID) -> None:
        self._execute("deleting question", lambda repo: repo.delete(question_id))
        self._items = [item for item in self._items if item.id != question_id]

    def contents_for(self, question_ids: list[uuid.UUID]) -> list[str]:
        """
        Question texts for the selected ids, in list order.
        """

        selected = set(question_ids)
        return [item.content for item in self._items if item.id in selected]
