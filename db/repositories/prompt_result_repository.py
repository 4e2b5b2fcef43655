"""
Prompt result repository: insert-returning, newest-first listing, delete.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from db.models.prompt_result import PromptResult
from db.repositories.errors import RecordNotFoundError


class PromptResultRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create(
        self,
        *,
        domain_url: str,
        prompt_input: dict[str, Any],
        response: str,
    ) -> PromptResult:
        result = PromptResult(
            domain_url=domain_url,
            prompt_input=prompt_input,
            response=response,
        )
        self._session.add(result)
        self._session.flush()
        self._session.refresh(result)
        return result

    def list_results(
        self,
        *,
        domain_url: str | None = None,
        limit: int | None = None,
    ) -> list[PromptResult]:
        stmt: Select[tuple[PromptResult]] = select(PromptResult)
        if domain_url:
            stmt = stmt.where(PromptResult.domain_url == domain_url)
        stmt = stmt.order_by(PromptResult.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(max(1, limit))
        return list(self._session.scalars(stmt).all())

    def list_domains(self) -> list[str]:
        stmt = select(PromptResult.domain_url).distinct().order_by(PromptResult.domain_url.asc())
        return list(self._session.scalars(stmt).all())

    def delete(self, result_id: uuid.UUID) -> None:
        result = self._session.get(PromptResult, result_id)
        if result is None:
            raise RecordNotFoundError(f"Prompt result not found: {result_id}")
        self._session.delete(result)
        self._session.flush()
