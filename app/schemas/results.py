"""
app/schemas/results.py

Response schemas for persisted prompt results.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel


class PromptResultResponse(BaseModel):
    id: uuid.UUID
    domain_url: str
    prompt_input: dict[str, Any]
    response: str
    created_at: datetime

    model_config = {"from_attributes": True}
