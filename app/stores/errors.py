"""
Store-layer exceptions surfaced inline by the API and the UI.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for store failures. The local cache is left unchanged."""


class StoreValidationError(StoreError):
    """Raised when input is rejected before reaching the database."""


class StoreNotFoundError(StoreError):
    """Raised when the targeted row does not exist."""


class LastTemplateError(StoreValidationError):
    """Raised when deleting the only remaining prompt template."""
