"""
db/models/prompt_template.py

Named system prompt texts sent as the system instruction of every completion.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, UpdatedAtMixin


class PromptTemplate(Base, UpdatedAtMixin):
    __tablename__ = "system_prompt"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Human-readable template name",
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (Index("ix_system_prompt_updated_at", "updated_at"),)

    def __repr__(self) -> str:
        return f"<PromptTemplate id={self.id} name={self.name!r}>"
