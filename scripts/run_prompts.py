"""
Run the ICP questions over an exported JSON file from the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from app.services.json_import_service import JsonImportError, get_json_import_service
from app.services.prompt_run_orchestrator import PromptRunOrchestrator, build_completion_adapter
from app.stores import PromptResultStore, PromptTemplateStore, QuestionStore
from db.session import SessionLocal
from llm_completion.catalog import DEFAULT_MODEL


def main() -> int:
    parser = argparse.ArgumentParser(description="Run ICP questions against every domain in a JSON file.")
    parser.add_argument("path", type=Path, help="Exported .json or .txt file.")
    parser.add_argument(
        "--model",
        dest="model",
        default=DEFAULT_MODEL,
        help="Completion model id.",
    )
    parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=None,
        help="Only use stored questions with this tag. Repeatable.",
    )
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    try:
        summary = get_json_import_service().import_bytes(args.path.read_bytes(), filename=args.path.name)
    except JsonImportError as exc:
        print(json.dumps({"error": str(exc)}, indent=2))
        return 2

    questions = QuestionStore(session_factory=SessionLocal).refresh()
    if args.tags:
        questions = [question for question in questions if question.tag in set(args.tags)]

    templates = PromptTemplateStore(session_factory=SessionLocal)
    templates.ensure_default()

    orchestrator = PromptRunOrchestrator(
        adapter=build_completion_adapter(),
        result_writer=PromptResultStore(session_factory=SessionLocal),
    )
    outcome = orchestrator.run(
        templates.selected_content(),
        [question.content for question in questions],
        args.model,
        summary.records,
        summary.user_context,
    )

    payload = {
        "domains": outcome.total_domains,
        "succeeded": [str(result.domain_url) for result in outcome.results],
        "errors": [error.message for error in outcome.errors],
        "warnings": summary.warnings,
        "validation_error": outcome.validation_error,
    }
    print(json.dumps(payload, indent=2))
    return 0 if outcome.succeeded else 1


if __name__ == "__main__":
    raise SystemExit(main())
