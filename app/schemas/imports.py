"""
app/schemas/imports.py

Response schema for JSON import endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class JsonImportResponse(BaseModel):
    """
    API response model for one normalized import.
    """

    records: list[dict[str, Any]] = Field(default_factory=list)
    user_context: dict[str, Any] | None = None
    entry_count: int = Field(..., ge=0)
    unique_domains: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
