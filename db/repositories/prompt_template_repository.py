"""
Prompt template repository backed by the `system_prompt` table.
"""

from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from db.models.prompt_template import PromptTemplate
from db.repositories.errors import RecordNotFoundError


class PromptTemplateRepository:
    """
    Repository for CRUD operations on named system prompts.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_templates(self) -> list[PromptTemplate]:
        """
        Most recently edited templates first.
        """

        stmt = select(PromptTemplate).order_by(
            PromptTemplate.updated_at.desc(),
            PromptTemplate.name.asc(),
        )
        return list(self._session.scalars(stmt).all())

    def get(self, template_id: uuid.UUID) -> PromptTemplate | None:
        return self._session.get(PromptTemplate, template_id)

    def count(self) -> int:
        stmt = select(func.count()).select_from(PromptTemplate)
        return int(self._session.execute(stmt).scalar_one())

    def create(self, *, name: str, content: str) -> PromptTemplate:
        template = PromptTemplate(name=name.strip(), content=content)
        self._session.add(template)
        self._session.flush()
        self._session.refresh(template)
        return template

    def update(
        self,
        template_id: uuid.UUID,
        *,
        name: str | None = None,
        content: str | None = None,
    ) -> PromptTemplate:
        template = self._session.get(PromptTemplate, template_id)
        if template is None:
            raise RecordNotFoundError(f"Prompt template not found: {template_id}")
        if name is not None:
            template.name = name.strip()
        if content is not None:
            template.content = content
        self._session.flush()
        self._session.refresh(template)
        return template

    def delete(self, template_id: uuid.UUID) -> None:
        template = self._session.get(PromptTemplate, template_id)
        if template is None:
            raise RecordNotFoundError(f"Prompt template not found: {template_id}")
        self._session.delete(template)
        self._session.flush()
