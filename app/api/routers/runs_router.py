"""
app/api/routers/runs_router.py

Prompt run and model catalog endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_prompt_run_orchestrator
from app.schemas.results import PromptResultResponse
from app.schemas.runs import (
    DomainRunErrorResponse,
    ModelOptionResponse,
    PromptRunRequest,
    PromptRunResponse,
)
from app.services.prompt_run_orchestrator import PromptRunOrchestrator
from llm_completion.catalog import AVAILABLE_MODELS, DEFAULT_MODEL

router = APIRouter(tags=["runs"])


@router.post("/runs", response_model=PromptRunResponse)
def run_prompts(
    body: PromptRunRequest,
    orchestrator: PromptRunOrchestrator = Depends(get_prompt_run_orchestrator),
) -> PromptRunResponse:
    """
    Run the questions against every unique domain in ``records``, sequentially.

    Raises HTTP 400 when no question is given or no domain resolves. Per-domain
    failures are reported in ``errors`` with HTTP 200.
    """

    outcome = orchestrator.run(
        body.system_prompt,
        body.questions,
        body.model,
        body.records,
        body.user_context,
    )
    if outcome.validation_error is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=outcome.validation_error,
        )

    return PromptRunResponse(
        total_domains=outcome.total_domains,
        results=[PromptResultResponse.model_validate(result) for result in outcome.results],
        errors=[
            DomainRunErrorResponse(domain_url=error.domain_url, message=error.message)
            for error in outcome.errors
        ],
        error_message=outcome.error_message,
    )


@router.get("/models", response_model=list[ModelOptionResponse])
def list_models() -> list[ModelOptionResponse]:
    return [
        ModelOptionResponse(
            id=option.id,
            name=option.name,
            description=option.description,
            family=option.family,
            is_default=option.id == DEFAULT_MODEL,
        )
        for option in AVAILABLE_MODELS
    ]
