"""
app/services/prompt_run_orchestrator.py

Sequential per-domain prompt run.

One run plans an ordered list of domain tasks (one per unique
``domainURL``) and consumes it with a single loop:

    1. publish progress (index, total, domain)
    2. call the completion adapter for the domain's records
    3. persist a prompt result through the result writer

Calls are strictly one at a time. A failing domain is recorded and the
loop moves on; nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from pydantic import ValidationError

from app.config import CompletionSettings, get_completion_settings
from app.domain.domain_records import DomainRecord, UserContext
from app.domain.prompt_run import IDLE_PROGRESS, DomainRunError, DomainTask, RunOutcome, RunProgress
from app.logging_utils import LogEvent, log_event
from app.normalization.json_normalizer import records_for_domain, unique_domains
from llm_completion.adapter import BaseLLMAdapter, MockLLMAdapter, OpenAILLMAdapter
from llm_completion.schema import DomainPayload

logger = logging.getLogger(__name__)

NO_QUESTIONS_MESSAGE = "Please select at least one question"
NO_DOMAINS_MESSAGE = "No domains found in JSON data"

ProgressCallback = Callable[[RunProgress], None]


class ResultWriter(Protocol):
    def create(
        self,
        *,
        domain_url: str,
        prompt_input: dict[str, Any],
        response: str,
    ) -> Any: ...


def plan_domain_tasks(records: Sequence[DomainRecord]) -> list[DomainTask]:
    """
    One task per unique domain, each carrying only its own records.
    """

    return [
        DomainTask(index=index, domain_url=domain, entries=records_for_domain(records, domain))
        for index, domain in enumerate(unique_domains(records), start=1)
    ]


def build_prompt_input(
    *,
    task: DomainTask,
    questions: Sequence[str],
    user_context: UserContext | None,
    model: str,
) -> dict[str, Any]:
    """
    Snapshot of the request stored alongside each result.
    """

    return {
        "domainURL": task.domain_url,
        "data": task.entries,
        "system_icp": list(questions),
        "user_context": user_context,
        "model": model,
    }


def validate_run_inputs(questions: Sequence[str], records: Sequence[DomainRecord]) -> str | None:
    """
    Return the user-visible reason a run cannot start, or None.
    """

    if not [question for question in questions if question and question.strip()]:
        return NO_QUESTIONS_MESSAGE
    if not unique_domains(records):
        return NO_DOMAINS_MESSAGE
    return None


class PromptRunOrchestrator:
    """
    Drives one completion call per unique domain and persists each outcome.

    All run inputs are parameters of ``run``; the only state kept between
    calls is the latest progress snapshot.
    """

    def __init__(self, *, adapter: BaseLLMAdapter, result_writer: ResultWriter) -> None:
        self._adapter = adapter
        self._result_writer = result_writer
        self._progress = IDLE_PROGRESS
        self._running = False

    @property
    def progress(self) -> RunProgress:
        return self._progress

    @property
    def is_running(self) -> bool:
        return self._running

    def run(
        self,
        system_prompt: str,
        selected_questions: Sequence[str],
        model: str,
        domain_records: Sequence[DomainRecord],
        user_context: UserContext | None = None,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> RunOutcome:
        """
        Run every unique domain through the completion adapter, in order.

        Precondition failures are returned as ``validation_error`` before any
        completion call. Per-domain failures land in ``errors`` and never stop
        the remaining domains.
        """

        validation_error = validate_run_inputs(selected_questions, domain_records)
        if validation_error is not None:
            log_event(logger, logging.INFO, LogEvent.RUN_REJECTED, reason=validation_error)
            return RunOutcome(validation_error=validation_error)
        if self._running:
            return RunOutcome(validation_error="A run is already in progress")

        tasks = plan_domain_tasks(domain_records)
        questions = [question for question in selected_questions if question and question.strip()]
        results: list[Any] = []
        errors: list[DomainRunError] = []

        self._running = True
        log_event(
            logger,
            logging.INFO,
            LogEvent.RUN_STARTED,
            domains=len(tasks),
            questions=len(questions),
            model=model,
        )
        try:
            for task in tasks:
                self._publish(
                    RunProgress(current=task.index, total=len(tasks), current_domain=task.domain_url),
                    on_progress,
                )
                try:
                    results.append(
                        self._run_task(
                            task=task,
                            system_prompt=system_prompt,
                            questions=questions,
                            model=model,
                            user_context=user_context,
                        )
                    )
                except Exception as exc:  # noqa: BLE001
                    message = f"Error processing {task.domain_url}: {exc}"
                    log_event(
                        logger,
                        logging.ERROR,
                        LogEvent.RUN_DOMAIN_FAILED,
                        exc_info=True,
                        domain=task.domain_url,
                        error=str(exc),
                    )
                    errors.append(DomainRunError(domain_url=task.domain_url, message=message))
        finally:
            self._running = False
            self._publish(IDLE_PROGRESS, on_progress)

        log_event(
            logger,
            logging.INFO,
            LogEvent.RUN_FINISHED,
            domains=len(tasks),
            succeeded=len(results),
            failed=[error.domain_url for error in errors],
        )
        return RunOutcome(results=results, errors=errors, total_domains=len(tasks))

    def _run_task(
        self,
        *,
        task: DomainTask,
        system_prompt: str,
        questions: list[str],
        model: str,
        user_context: UserContext | None,
    ) -> Any:
        prompt_input = build_prompt_input(
            task=task,
            questions=questions,
            user_context=user_context,
            model=model,
        )
        try:
            payload = DomainPayload(
                domainURL=task.domain_url,
                entries=task.entries,
                userContext=user_context,
            )
        except ValidationError as exc:
            raise ValueError(f"invalid domain payload: {exc.errors()[0]['msg']}") from exc

        response = self._adapter.complete(system_prompt, questions, payload, model)
        result = self._result_writer.create(
            domain_url=task.domain_url,
            prompt_input=prompt_input,
            response=response,
        )
        log_event(logger, logging.INFO, LogEvent.RUN_DOMAIN_COMPLETED, domain=task.domain_url)
        return result

    def _publish(self, progress: RunProgress, on_progress: ProgressCallback | None) -> None:
        self._progress = progress
        if on_progress is not None:
            on_progress(progress)


def build_completion_adapter(settings: CompletionSettings | None = None) -> BaseLLMAdapter:
    """Instantiate the adapter selected by the LLM_ADAPTER env var.

    LLM_ADAPTER=mock   -> MockLLMAdapter  (testing, no API key required)
    LLM_ADAPTER=openai -> OpenAILLMAdapter (default)
    """
    settings = settings or get_completion_settings()
    if settings.adapter == "mock":
        return MockLLMAdapter()

    return OpenAILLMAdapter(
        api_key=settings.api_key,
        base_url=settings.base_url,
        temperature=settings.temperature,
        max_output_tokens=settings.max_output_tokens,
        timeout_seconds=settings.timeout_seconds,
    )
