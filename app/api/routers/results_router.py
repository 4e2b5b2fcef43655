"""
app/api/routers/results_router.py

Browse and delete persisted prompt results.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.schemas.results import PromptResultResponse
from db.repositories.errors import RecordNotFoundError
from db.repositories.prompt_result_repository import PromptResultRepository
from db.session import get_db

router = APIRouter(prefix="/results", tags=["results"])


@router.get("", response_model=list[PromptResultResponse])
def list_results(
    domain: str | None = Query(default=None, description="Only results for this domain"),
    limit: int | None = Query(default=None, ge=1, le=1000),
    db: Session = Depends(get_db),
) -> list[PromptResultResponse]:
    results = PromptResultRepository(db).list_results(domain_url=domain, limit=limit)
    return [PromptResultResponse.model_validate(r) for r in results]


@router.get("/domains", response_model=list[str])
def list_result_domains(db: Session = Depends(get_db)) -> list[str]:
    return PromptResultRepository(db).list_domains()


@router.delete("/{result_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_result(result_id: uuid.UUID, db: Session = Depends(get_db)) -> Response:
    try:
        PromptResultRepository(db).delete(result_id)
        db.commit()
    except RecordNotFoundError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to delete result.",
        ) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
