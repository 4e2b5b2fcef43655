"""
app/schemas/prompt_templates.py

Request/response schemas for prompt template endpoints.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class PromptTemplateCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)


class PromptTemplateUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=1)


class PromptTemplateResponse(BaseModel):
    id: uuid.UUID
    name: str
    content: str
    updated_at: datetime

    model_config = {"from_attributes": True}
