"""
db/models/prompt_result.py

One persisted completion outcome for one domain.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import Index, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin


class PromptResult(Base, CreatedAtMixin):
    """
    Immutable record of (domain, request snapshot, response text).

    Rows are only ever inserted by a run and removed by an explicit delete.
    """

    __tablename__ = "prompt_results"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    domain_url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
    )
    prompt_input: Mapped[dict[str, Any]] = mapped_column(
        JSONB,
        nullable=False,
        comment="Snapshot of the request payload sent for this domain",
    )
    response: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        Index("ix_prompt_results_domain_url", "domain_url"),
        Index("ix_prompt_results_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<PromptResult id={self.id} domain_url={self.domain_url!r}>"
