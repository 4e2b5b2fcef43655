"""
Cached prompt results, newest first.

Also serves as the result writer of the run orchestrator.
"""

from __future__ import annotations

import uuid
from typing import Any

from app.stores.base import BaseStore, SessionFactory
from db.models.prompt_result import PromptResult
from db.repositories.prompt_result_repository import PromptResultRepository


class PromptResultStore(BaseStore[PromptResultRepository]):
    def __init__(
        self,
        *,
        session_factory: SessionFactory,
        repository_factory=PromptResultRepository,
    ) -> None:
        super().__init__(session_factory=session_factory, repository_factory=repository_factory)
        self._items: list[PromptResult] = []

    def list(self) -> list[PromptResult]:
        return list(self._items)

    def refresh(self) -> list[PromptResult]:
        self._items = self._execute("fetching results", lambda repo: repo.list_results())
        return self.list()

    def create(
        self,
        *,
        domain_url: str,
        prompt_input: dict[str, Any],
        response: str,
    ) -> PromptResult:
        result = self._execute(
            "saving result",
            lambda repo: repo.create(
                domain_url=domain_url,
                prompt_input=prompt_input,
                response=response,
            ),
        )
        self._items = [result, *self._items]
        return result

    def delete(self, result_id: uuid.UUID) -> None:
        self._execute("deleting result", lambda repo: repo.delete(result_id))
        self._items = [item for item in self._items if item.id != result_id]

    def domains(self) -> list[str]:
        seen: dict[str, None] = {}
        for item in self._items:
            seen.setdefault(item.domain_url, None)
        return list(seen)

    def latest_for_domain(self, domain_url: str) -> PromptResult | None:
        return next((item for item in self._items if item.domain_url == domain_url), None)
