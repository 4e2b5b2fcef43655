"""
Repository layer exports.
"""

from db.repositories.errors import RecordNotFoundError, RepositoryError
from db.repositories.prompt_result_repository import PromptResultRepository
from db.repositories.prompt_template_repository import PromptTemplateRepository
from db.repositories.question_repository import QuestionRepository, normalize_tag

__all__ = [
    "PromptResultRepository",
    "PromptTemplateRepository",
    "QuestionRepository",
    "RecordNotFoundError",
    "RepositoryError",
    "normalize_tag",
]
