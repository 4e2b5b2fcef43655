"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.prompt_result import PromptResult
from db.models.prompt_template import PromptTemplate
from db.models.question import DEFAULT_QUESTION_TAG, Question

__all__ = [
    "DEFAULT_QUESTION_TAG",
    "PromptResult",
    "PromptTemplate",
    "Question",
]
