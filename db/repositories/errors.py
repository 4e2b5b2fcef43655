"""
Repository-layer exceptions.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base exception for repository failures."""


class RecordNotFoundError(RepositoryError):
    """Raised when an update or delete targets a row that does not exist."""
