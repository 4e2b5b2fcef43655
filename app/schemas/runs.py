"""
app/schemas/runs.py

Request/response schemas for prompt runs.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from app.schemas.results import PromptResultResponse
from llm_completion.catalog import DEFAULT_MODEL


class PromptRunRequest(BaseModel):
    """
    Everything one run needs; nothing is read from server-side UI state.
    """

    system_prompt: str = Field(..., min_length=1)
    questions: list[str] = Field(default_factory=list)
    model: str = Field(default=DEFAULT_MODEL, min_length=1)
    records: list[dict[str, Any]] = Field(default_factory=list)
    user_context: dict[str, Any] | None = None


class DomainRunErrorResponse(BaseModel):
    domain_url: str
    message: str


class PromptRunResponse(BaseModel):
    total_domains: int = Field(..., ge=0)
    results: list[PromptResultResponse] = Field(default_factory=list)
    errors: list[DomainRunErrorResponse] = Field(default_factory=list)
    error_message: str | None = None


class ModelOptionResponse(BaseModel):
    id: str
    name: str
    description: str
    family: str
    is_default: bool = False
