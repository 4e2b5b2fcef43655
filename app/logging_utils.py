"""
Structured JSON log lines for imports and prompt runs.
"""

from __future__ import annotations

import json
import logging
from typing import Any


class LogEvent:
    IMPORT_NORMALIZED = "json_import_normalized"
    RUN_REJECTED = "prompt_run_rejected"
    RUN_STARTED = "prompt_run_started"
    RUN_DOMAIN_COMPLETED = "prompt_run_domain_completed"
    RUN_DOMAIN_FAILED = "prompt_run_domain_failed"
    RUN_FINISHED = "prompt_run_finished"


def format_event(event: str, **fields: Any) -> str:
    """
    Render ``event`` and its fields as one compact, key-sorted JSON object.
    """

    payload = {"event": event, **fields}
    return json.dumps(payload, default=str, sort_keys=True, separators=(",", ":"))


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    *,
    exc_info: bool = False,
    **fields: Any,
) -> None:
    if not logger.isEnabledFor(level):
        return
    logger.log(level, format_event(event, **fields), exc_info=exc_info)
