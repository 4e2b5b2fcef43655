"""
Question repository: ordered listing and by-id writes on `questions`.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.question import DEFAULT_QUESTION_TAG, Question
from db.repositories.errors import RecordNotFoundError


def normalize_tag(tag: str | None) -> str:
    """
    Return the stripped tag, or the default tag when blank.
    """

    stripped = (tag or "").strip()
    return stripped if stripped else DEFAULT_QUESTION_TAG


class QuestionRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def list_questions(self) -> list[Question]:
        stmt = select(Question).order_by(Question.created_at.asc(), Question.id.asc())
        return list(self._session.scalars(stmt).all())

    def create(self, *, content: str, tag: str | None = None) -> Question:
        question = Question(content=content.strip(), tag=normalize_tag(tag))
        self._session.add(question)
        self._session.flush()
        self._session.refresh(question)
        return question

    def update(
        self,
        question_id: uuid.UUID,
        *,
        content: str | None = None,
        tag: str | None = None,
    ) -> Question:
        question = self._session.get(Question, question_id)
        if question is None:
            raise RecordNotFoundError(f"Question not found: {question_id}")
        if content is not None:
            question.content = content.strip()
        if tag is not None:
            question.tag = normalize_tag(tag)
        self._session.flush()
        return question

    def delete(self, question_id: uuid.UUID) -> None:
        question = self._session.get(Question, question_id)
        if question is None:
            raise RecordNotFoundError(f"Question not found: {question_id}")
        self._session.delete(question)
        self._session.flush()
