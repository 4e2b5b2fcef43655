"""
app/api/routers/imports_router.py

JSON import endpoints: normalize uploaded or pasted domain data.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, status

from app.api.dependencies import get_json_upload
from app.schemas.imports import JsonImportResponse
from app.services.json_import_service import (
    ImportSummary,
    JsonImportError,
    JsonImportService,
    get_json_import_service,
)

router = APIRouter(prefix="/imports", tags=["imports"])


def _to_response(summary: ImportSummary) -> JsonImportResponse:
    return JsonImportResponse(
        records=summary.records,
        user_context=summary.user_context,
        entry_count=summary.entry_count,
        unique_domains=summary.unique_domains,
        warnings=summary.warnings,
    )


@router.post("/json", response_model=JsonImportResponse)
def import_json_file(
    file: UploadFile = Depends(get_json_upload),
    import_service: JsonImportService = Depends(get_json_import_service),
) -> JsonImportResponse:
    """
    Normalize one uploaded `.json` / `.txt` file.
    """

    try:
        summary = import_service.import_bytes(file.file.read(), filename=file.filename)
    except JsonImportError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    finally:
        file.file.close()
    return _to_response(summary)


@router.post("/json-text", response_model=JsonImportResponse)
async def import_json_text(
    request: Request,
    import_service: JsonImportService = Depends(get_json_import_service),
) -> JsonImportResponse:
    """
    Normalize pasted JSON text sent as a plain-text body.
    """

    text = (await request.body()).decode("utf-8-sig", errors="replace")
    try:
        summary = import_service.import_text(text)
    except JsonImportError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_response(summary)
