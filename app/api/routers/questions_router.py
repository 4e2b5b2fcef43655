"""
app/api/routers/questions_router.py

Question management endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.schemas.questions import QuestionCreateRequest, QuestionResponse, QuestionUpdateRequest
from db.repositories.errors import RecordNotFoundError
from db.repositories.question_repository import QuestionRepository
from db.session import get_db

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("", response_model=list[QuestionResponse])
def list_questions(db: Session = Depends(get_db)) -> list[QuestionResponse]:
    return [QuestionResponse.model_validate(q) for q in QuestionRepository(db).list_questions()]


@router.post("", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
def create_question(
    body: QuestionCreateRequest,
    db: Session = Depends(get_db),
) -> QuestionResponse:
    """
    Create a question. A blank tag is stored as "untagged".
    """
    if not body.content.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Question content is required.")
    try:
        question = QuestionRepository(db).create(content=body.content, tag=body.tag)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to save question.",
        ) from exc
    return QuestionResponse.model_validate(question)


@router.patch("/{question_id}", response_model=QuestionResponse)
def update_question(
    question_id: uuid.UUID,
    body: QuestionUpdateRequest,
    db: Session = Depends(get_db),
) -> QuestionResponse:
    if body.content is not None and not body.content.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Question content is required.")
    try:
        question = QuestionRepository(db).update(question_id, content=body.content, tag=body.tag)
        db.commit()
    except RecordNotFoundError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to update question.",
        ) from exc
    return QuestionResponse.model_validate(question)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_question(question_id: uuid.UUID, db: Session = Depends(get_db)) -> Response:
    try:
        QuestionRepository(db).delete(question_id)
        db.commit()
    except RecordNotFoundError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to delete question.",
        ) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
