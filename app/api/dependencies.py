"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation and service wiring.
"""

from __future__ import annotations

from fastapi import File, HTTPException, UploadFile, status

from app.services.json_import_service import ALLOWED_EXTENSIONS
from app.services.prompt_run_orchestrator import PromptRunOrchestrator, build_completion_adapter
from app.stores.prompt_result_store import PromptResultStore
from db.session import SessionLocal

JSON_CONTENT_TYPES = {
    "application/json",
    "text/json",
    "text/plain",
}


def get_json_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is JSON or plain text by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_json_filename = filename.endswith(ALLOWED_EXTENSIONS)
    is_json_content_type = content_type in JSON_CONTENT_TYPES

    if not is_json_filename and not is_json_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only .json and .txt files are allowed.",
        )

    return file


def get_prompt_run_orchestrator() -> PromptRunOrchestrator:
    """
    One orchestrator per request; results are committed one domain at a time.
    """

    return PromptRunOrchestrator(
        adapter=build_completion_adapter(),
        result_writer=PromptResultStore(session_factory=SessionLocal),
    )
