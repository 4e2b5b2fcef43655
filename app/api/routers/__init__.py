"""
app/api/routers package marker.
"""

from app.api.routers.imports_router import router as imports_router
from app.api.routers.prompt_templates_router import router as prompt_templates_router
from app.api.routers.questions_router import router as questions_router
from app.api.routers.results_router import router as results_router
from app.api.routers.runs_router import router as runs_router

__all__ = [
    "imports_router",
    "prompt_templates_router",
    "questions_router",
    "results_router",
    "runs_router",
]
