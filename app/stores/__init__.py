"""
Cached CRUD stores over the persistence layer.
"""

from app.stores.errors import LastTemplateError, StoreError, StoreNotFoundError, StoreValidationError
from app.stores.prompt_result_store import PromptResultStore
from app.stores.prompt_template_store import (
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_TEMPLATE_NAME,
    PromptTemplateStore,
)
from app.stores.question_store import QuestionStore

__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "DEFAULT_TEMPLATE_NAME",
    "LastTemplateError",
    "PromptResultStore",
    "PromptTemplateStore",
    "QuestionStore",
    "StoreError",
    "StoreNotFoundError",
    "StoreValidationError",
]
