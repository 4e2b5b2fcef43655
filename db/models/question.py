"""
db/models/question.py

Question model: one reusable ICP question applied to every analysed domain.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Index, String, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin

DEFAULT_QUESTION_TAG = "untagged"


class Question(Base, CreatedAtMixin):
    """
    A question curated by the user.

    Questions are listed in creation order; tag groups questions in the UI
    and falls back to ``DEFAULT_QUESTION_TAG`` whenever left blank.
    """

    __tablename__ = "questions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    tag: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default=DEFAULT_QUESTION_TAG,
        server_default=text(f"'{DEFAULT_QUESTION_TAG}'"),
    )

    __table_args__ = (
        Index("ix_questions_created_at", "created_at"),
        Index("ix_questions_tag", "tag"),
    )

    def __repr__(self) -> str:
        return f"<Question id={self.id} tag={self.tag!r}>"
