"""
app/services/json_import_service.py

Turn uploaded or pasted JSON into a normalized import with user-facing
errors and warnings.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache

from app.config import get_import_settings
from app.domain.domain_records import DOMAIN_URL_KEY, DomainRecord, UserContext
from app.logging_utils import LogEvent, log_event
from app.normalization.json_normalizer import normalize_json, unique_domains

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".json", ".txt")

UNRECOGNIZED_SHAPE_MESSAGE = (
    "Could not extract domain data from JSON. "
    "Expected array of objects or Tembi WEBSHOP format."
)
NO_DOMAIN_WARNING = "Warning: No domainURL fields found in data"


class JsonImportError(ValueError):
    """
    Raised when imported text cannot become a record list.
    """


@dataclass(frozen=True)
class ImportSummary:
    """
    Normalized import ready for a run, plus what to tell the user about it.
    """

    records: list[DomainRecord] = field(default_factory=list)
    user_context: UserContext | None = None
    warnings: list[str] = field(default_factory=list)
    preview_count: int = 5

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def entry_count(self) -> int:
        return len(self.records)

    @property
    def unique_domains(self) -> list[str]:
        return unique_domains(self.records)

    @property
    def domain_preview(self) -> list[str]:
        return self.unique_domains[: self.preview_count]

    @property
    def hidden_domain_count(self) -> int:
        return max(0, len(self.unique_domains) - self.preview_count)


class JsonImportService:
    """
    Parses JSON text, normalizes it and validates the outcome.
    """

    def __init__(self, *, max_upload_bytes: int, preview_count: int = 5) -> None:
        self._max_upload_bytes = max_upload_bytes
        self._preview_count = max(1, preview_count)

    def import_text(self, text: str) -> ImportSummary:
        """
        Import pasted text. Blank text clears the import.
        """

        if not text or not text.strip():
            return ImportSummary(preview_count=self._preview_count)

        try:
            parsed = json.loads(text)
        except (ValueError, RecursionError) as exc:
            raise JsonImportError(f"Invalid JSON: {exc}") from exc

        normalized = normalize_json(parsed)
        if normalized is None or not normalized.records:
            raise JsonImportError(UNRECOGNIZED_SHAPE_MESSAGE)

        warnings: list[str] = []
        if not any(record.get(DOMAIN_URL_KEY) for record in normalized.records):
            warnings.append(NO_DOMAIN_WARNING)

        summary = ImportSummary(
            records=normalized.records,
            user_context=normalized.user_context,
            warnings=warnings,
            preview_count=self._preview_count,
        )
        log_event(
            logger,
            logging.INFO,
            LogEvent.IMPORT_NORMALIZED,
            entries=summary.entry_count,
            domains=len(summary.unique_domains),
            has_user_context=summary.user_context is not None,
            warnings=len(warnings),
        )
        return summary

    def import_bytes(self, data: bytes, *, filename: str | None = None) -> ImportSummary:
        """
        Import an uploaded `.json` or `.txt` file.
        """

        name = (filename or "").strip().lower()
        if name and not name.endswith(ALLOWED_EXTENSIONS):
            raise JsonImportError("Only .json and .txt files are allowed.")
        if len(data) > self._max_upload_bytes:
            raise JsonImportError(
                f"File is too large ({len(data)} bytes, limit {self._max_upload_bytes})."
            )

        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise JsonImportError(f"File is not valid UTF-8 text: {exc}") from exc

        if not text.strip():
            raise JsonImportError("Uploaded file is empty.")
        return self.import_text(text)


@lru_cache(maxsize=1)
def get_json_import_service() -> JsonImportService:
    """
    Build and cache the import service with env-driven settings.
    """

    settings = get_import_settings()
    return JsonImportService(
        max_upload_bytes=settings.max_upload_bytes,
        preview_count=settings.domain_preview_count,
    )
