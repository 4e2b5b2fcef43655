"""
app/api/routers/prompt_templates_router.py

Prompt template (system prompt) endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.schemas.prompt_templates import (
    PromptTemplateCreateRequest,
    PromptTemplateResponse,
    PromptTemplateUpdateRequest,
)
from db.repositories.errors import RecordNotFoundError
from db.repositories.prompt_template_repository import PromptTemplateRepository
from db.session import get_db

router = APIRouter(prefix="/prompt-templates", tags=["prompt-templates"])


def _reject_blank(*, name: str | None, content: str | None) -> None:
    if name is not None and not name.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Template name is required.")
    if content is not None and not content.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Template content is required.",
        )


@router.get("", response_model=list[PromptTemplateResponse])
def list_templates(db: Session = Depends(get_db)) -> list[PromptTemplateResponse]:
    templates = PromptTemplateRepository(db).list_templates()
    return [PromptTemplateResponse.model_validate(t) for t in templates]


@router.post("", response_model=PromptTemplateResponse, status_code=status.HTTP_201_CREATED)
def create_template(
    body: PromptTemplateCreateRequest,
    db: Session = Depends(get_db),
) -> PromptTemplateResponse:
    _reject_blank(name=body.name, content=body.content)
    try:
        template = PromptTemplateRepository(db).create(name=body.name, content=body.content)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to save prompt template.",
        ) from exc
    return PromptTemplateResponse.model_validate(template)


@router.patch("/{template_id}", response_model=PromptTemplateResponse)
def update_template(
    template_id: uuid.UUID,
    body: PromptTemplateUpdateRequest,
    db: Session = Depends(get_db),
) -> PromptTemplateResponse:
    _reject_blank(name=body.name, content=body.content)
    try:
        template = PromptTemplateRepository(db).update(
            template_id,
            name=body.name,
            content=body.content,
        )
        db.commit()
    except RecordNotFoundError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to update prompt template.",
        ) from exc
    return PromptTemplateResponse.model_validate(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(template_id: uuid.UUID, db: Session = Depends(get_db)) -> Response:
    """
    Delete a template. Raises HTTP 404 for an unknown id and HTTP 409 when it
    is the last one left.
    """
    repository = PromptTemplateRepository(db)
    if repository.get(template_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Prompt template not found: {template_id}",
        )
    if repository.count() <= 1:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot delete the last remaining prompt template.",
        )
    try:
        repository.delete(template_id)
        db.commit()
    except RecordNotFoundError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to delete prompt template.",
        ) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
