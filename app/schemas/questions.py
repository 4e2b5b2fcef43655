"""
app/schemas/questions.py

Request/response schemas for question endpoints.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class QuestionCreateRequest(BaseModel):
    content: str = Field(..., min_length=1)
    tag: str | None = None


class QuestionUpdateRequest(BaseModel):
    content: str | None = Field(default=None, min_length=1)
    tag: str | None = None


class QuestionResponse(BaseModel):
    id: uuid.UUID
    content: str
    tag: str
    created_at: datetime

    model_config = {"from_attributes": True}
