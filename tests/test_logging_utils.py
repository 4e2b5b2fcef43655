"""
tests/test_logging_utils.py

Structured log line formatting and the run failure event.
"""

from __future__ import annotations

import json
import logging
import uuid

import pytest

from app.logging_utils import LogEvent, format_event, log_event
from app.services.prompt_run_orchestrator import PromptRunOrchestrator
from llm_completion.adapter import BaseLLMAdapter


class FailingAdapter(BaseLLMAdapter):
    def complete(self, system_prompt, questions, payload, model):  # type: ignore[override]
        raise RuntimeError("rate limited")


class NullWriter:
    def create(self, *, domain_url, prompt_input, response):  # type: ignore[no-untyped-def]
        return None


def test_format_event_is_compact_sorted_json() -> None:
    line = format_event(LogEvent.RUN_STARTED, model="gpt-4o", domains=2)
    assert line == '{"domains":2,"event":"prompt_run_started","model":"gpt-4o"}'


def test_format_event_stringifies_unknown_types() -> None:
    run_id = uuid.UUID("00000000-0000-0000-0000-000000000001")
    payload = json.loads(format_event("custom", run_id=run_id))
    assert payload == {"event": "custom", "run_id": str(run_id)}


def test_log_event_skips_disabled_levels(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.logging_utils.disabled")
    with caplog.at_level(logging.WARNING, logger=logger.name):
        log_event(logger, logging.INFO, LogEvent.RUN_FINISHED, domains=1)
    assert caplog.records == []


def test_domain_failure_is_logged_with_traceback(caplog: pytest.LogCaptureFixture) -> None:
    orchestrator = PromptRunOrchestrator(adapter=FailingAdapter(), result_writer=NullWriter())
    with caplog.at_level(logging.INFO, logger="app.services.prompt_run_orchestrator"):
        orchestrator.run("system", ["Q"], "gpt-4o-mini", [{"domainURL": "a.com"}])

    failures = [
        record
        for record in caplog.records
        if record.name == "app.services.prompt_run_orchestrator"
        and json.loads(record.getMessage())["event"] == LogEvent.RUN_DOMAIN_FAILED
    ]
    assert len(failures) == 1
    assert failures[0].levelno == logging.ERROR
    assert failures[0].exc_info is not None
    assert json.loads(failures[0].getMessage())["domain"] == "a.com"
