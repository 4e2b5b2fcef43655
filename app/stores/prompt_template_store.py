"""
Cached prompt templates with a single selected template.

At least one template must always exist: ``ensure_default`` seeds one when
the table is empty and deleting the last template is refused.
"""

from __future__ import annotations

import logging
import uuid

from app.stores.base import BaseStore, SessionFactory
from app.stores.errors import LastTemplateError, StoreValidationError
from db.models.prompt_template import PromptTemplate
from db.repositories.prompt_template_repository import PromptTemplateRepository

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_NAME = "Default"
DEFAULT_SYSTEM_PROMPT = (
    "You are an ICP (Ideal Customer Profile) analyst. Analyze the provided "
    "website/company data thoroughly. Be detailed, specific, and provide "
    "actionable insights based on the data provided."
)


class PromptTemplateStore(BaseStore[PromptTemplateRepository]):
    def __init__(
        self,
        *,
        session_factory: SessionFactory,
        repository_factory=PromptTemplateRepository,
    ) -> None:
        super().__init__(session_factory=session_factory, repository_factory=repository_factory)
        self._items: list[PromptTemplate] = []
        self._selected_id: uuid.UUID | None = None

    @property
    def selected_id(self) -> uuid.UUID | None:
        return self._selected_id

    def list(self) -> list[PromptTemplate]:
        return list(self._items)

    def refresh(self) -> list[PromptTemplate]:
        self._items = self._execute("fetching prompt templates", lambda repo: repo.list_templates())
        self._reconcile_selection()
        return self.list()

    def ensure_default(self) -> list[PromptTemplate]:
        self.refresh()
        if not self._items:
            logger.info("No prompt templates found; seeding %r", DEFAULT_TEMPLATE_NAME)
            self.create(DEFAULT_TEMPLATE_NAME, DEFAULT_SYSTEM_PROMPT)
        return self.list()

    def get(self, template_id: uuid.UUID) -> PromptTemplate | None:
        return next((item for item in self._items if item.id == template_id), None)

    def select(self, template_id: uuid.UUID) -> PromptTemplate:
        template = self.get(template_id)
        if template is None:
            raise StoreValidationError(f"Unknown prompt template: {template_id}")
        self._selected_id = template_id
        return template

    def selected(self) -> PromptTemplate | None:
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    def selected_content(self) -> str:
        template = self.selected()
        return template.content if template is not None else DEFAULT_SYSTEM_PROMPT

    def create(self, name: str, content: str) -> PromptTemplate:
        self._validate(name=name, content=content)
        template = self._execute(
            "saving prompt template",
            lambda repo: repo.create(name=name, content=content),
        )
        self._items = [template, *self._items]
        self._reconcile_selection()
        return template

    def update(
        self,
        template_id: uuid.UUID,
        *,
        name: str | None = None,
        content: str | None = None,
    ) -> PromptTemplate:
        self._validate(name=name, content=content)
        updated = self._execute(
            "saving prompt template",
            lambda repo: repo.update(template_id, name=name, content=content),
        )
        # Most recently edited first, matching the repository ordering.
        self._items = [updated, *(item for item in self._items if item.id != template_id)]
        return updated

    def delete(self, template_id: uuid.UUID) -> None:
        if len(self._items) <= 1:
            raise LastTemplateError("Cannot delete the last remaining prompt template.")

        self._execute("deleting prompt template", lambda repo: repo.delete(template_id))
        self._items = [item for item in self._items if item.id != template_id]
        self._reconcile_selection()

    def _reconcile_selection(self) -> None:
        if self._selected_id is not None and self.get(self._selected_id) is not None:
            return
        self._selected_id = self._items[0].id if self._items else None

    @staticmethod
    def _validate(*, name: str | None, content: str | None) -> None:
        if name is not None and not name.strip():
            raise StoreValidationError("Template name is required.")
        if content is not None and not content.strip():
            raise StoreValidationError("Template content is required.")
