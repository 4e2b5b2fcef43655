"""
tests/test_api_routers.py

Router tests with FastAPI's TestClient against a minimal app. Services and
sessions are replaced through dependency overrides; no database or network.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.dependencies import get_prompt_run_orchestrator
from app.api.routers import (
    imports_router,
    prompt_templates_router,
    questions_router,
    results_router,
    runs_router,
)
from app.services.json_import_service import JsonImportService, get_json_import_service
from app.services.prompt_run_orchestrator import PromptRunOrchestrator
from db.session import get_db
from llm_completion.adapter import MockLLMAdapter
from llm_completion.catalog import AVAILABLE_MODELS, DEFAULT_MODEL


class InMemoryResultWriter:
    def __init__(self) -> None:
        self.rows: list[SimpleNamespace] = []

    def create(self, *, domain_url: str, prompt_input: dict[str, Any], response: str) -> SimpleNamespace:
        if domain_url == "broken.com":
            raise RuntimeError("insert failed")
        row = SimpleNamespace(
            id=uuid.uuid4(),
            domain_url=domain_url,
            prompt_input=prompt_input,
            response=response,
            created_at=datetime.now(timezone.utc),
        )
        self.rows.append(row)
        return row


class FakeDb:
    """Just enough of a Session for count/get/delete on one table."""

    def __init__(self, count: int = 1, existing: object | None = None) -> None:
        self._count = count
        self._existing = existing
        self.deleted: list[object] = []
        self.commits = 0
        self.rollbacks = 0

    def execute(self, stmt: object) -> SimpleNamespace:
        return SimpleNamespace(scalar_one=lambda: self._count)

    def get(self, model: object, key: object) -> object | None:
        return self._existing

    def delete(self, obj: object) -> None:
        self.deleted.append(obj)

    def flush(self) -> None:
        pass

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


@pytest.fixture()
def writer() -> InMemoryResultWriter:
    return InMemoryResultWriter()


@pytest.fixture()
def app(writer: InMemoryResultWriter) -> FastAPI:
    application = FastAPI()
    for router in (imports_router, prompt_templates_router, questions_router, results_router, runs_router):
        application.include_router(router)

    application.dependency_overrides[get_json_import_service] = lambda: JsonImportService(
        max_upload_bytes=1024,
        preview_count=5,
    )
    application.dependency_overrides[get_prompt_run_orchestrator] = lambda: PromptRunOrchestrator(
        adapter=MockLLMAdapter(),
        result_writer=writer,
    )
    return application


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def _override_db(app: FastAPI, db: FakeDb) -> None:
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db


# ---------------------------------------------------------------------------
# Imports
# ---------------------------------------------------------------------------


def test_import_json_text_returns_summary(client: TestClient) -> None:
    body = json.dumps([{"domainURL": "a.com"}, {"domain": "b.com"}])
    response = client.post("/imports/json-text", content=body, headers={"Content-Type": "text/plain"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["entry_count"] == 2
    assert payload["unique_domains"] == ["a.com", "b.com"]
    assert payload["warnings"] == []


def test_import_json_text_invalid_json_is_400(client: TestClient) -> None:
    response = client.post("/imports/json-text", content="{nope", headers={"Content-Type": "text/plain"})
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Invalid JSON: ")


def test_import_json_file_upload(client: TestClient) -> None:
    files = {"file": ("export.json", b'[{"domain": "a.com"}]', "application/json")}
    response = client.post("/imports/json", files=files)
    assert response.status_code == 200
    assert response.json()["records"] == [{"domain": "a.com", "domainURL": "a.com"}]


def test_import_json_file_rejects_other_types(client: TestClient) -> None:
    files = {"file": ("export.csv", b"domain\na.com", "text/csv")}
    response = client.post("/imports/json", files=files)
    assert response.status_code == 400


def test_import_json_file_too_large(client: TestClient) -> None:
    files = {"file": ("big.json", b"[" + b" " * 2048 + b"]", "application/json")}
    response = client.post("/imports/json", files=files)
    assert response.status_code == 400
    assert "too large" in response.json()["detail"]


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------


def test_run_persists_one_result_per_domain(client: TestClient, writer: InMemoryResultWriter) -> None:
    response = client.post(
        "/runs",
        json={
            "system_prompt": "Be an analyst.",
            "questions": ["Who buys?"],
            "model": "gpt-4o",
            "records": [{"domainURL": "a.com"}, {"domainURL": "a.com"}, {"domainURL": "b.com"}],
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["total_domains"] == 2
    assert [r["domain_url"] for r in payload["results"]] == ["a.com", "b.com"]
    assert payload["errors"] == []
    assert payload["error_message"] is None
    assert len(writer.rows) == 2


def test_run_reports_per_domain_errors(client: TestClient) -> None:
    response = client.post(
        "/runs",
        json={
            "system_prompt": "Be an analyst.",
            "questions": ["Q"],
            "records": [{"domainURL": "a.com"}, {"domainURL": "broken.com"}],
        },
    )

    assert response.status_code == 200
    payload = response.json()
    assert [r["domain_url"] for r in payload["results"]] == ["a.com"]
    assert payload["errors"][0]["domain_url"] == "broken.com"
    assert payload["error_message"] == "Error processing broken.com: insert failed"


@pytest.mark.parametrize(
    "body, detail",
    [
        ({"questions": [], "records": [{"domainURL": "a.com"}]}, "Please select at least one question"),
        ({"questions": ["Q"], "records": [{"company": "x"}]}, "No domains found in JSON data"),
    ],
)
def test_run_precondition_failures_are_400(client: TestClient, body: dict, detail: str) -> None:
    response = client.post("/runs", json={"system_prompt": "sys", **body})
    assert response.status_code == 400
    assert response.json()["detail"] == detail


def test_list_models(client: TestClient) -> None:
    response = client.get("/models")
    assert response.status_code == 200
    payload = response.json()
    assert len(payload) == len(AVAILABLE_MODELS)
    assert [m["id"] for m in payload if m["is_default"]] == [DEFAULT_MODEL]


# ---------------------------------------------------------------------------
# Persistence endpoints with a fake session
# ---------------------------------------------------------------------------


def test_delete_last_template_is_409(app: FastAPI, client: TestClient) -> None:
    db = FakeDb(count=1, existing=object())
    _override_db(app, db)

    response = client.delete(f"/prompt-templates/{uuid.uuid4()}")

    assert response.status_code == 409
    assert db.deleted == []


def test_delete_template_when_others_remain(app: FastAPI, client: TestClient) -> None:
    template = object()
    db = FakeDb(count=2, existing=template)
    _override_db(app, db)

    response = client.delete(f"/prompt-templates/{uuid.uuid4()}")

    assert response.status_code == 204
    assert db.deleted == [template]
    assert db.commits == 1


def test_delete_missing_result_is_404(app: FastAPI, client: TestClient) -> None:
    db = FakeDb(existing=None)
    _override_db(app, db)

    response = client.delete(f"/results/{uuid.uuid4()}")

    assert response.status_code == 404
    assert db.rollbacks == 1


def test_blank_question_content_is_400(app: FastAPI, client: TestClient) -> None:
    db = FakeDb()
    _override_db(app, db)

    response = client.post("/questions", json={"content": "   ", "tag": "fit"})

    assert response.status_code == 400
    assert db.commits == 0


@pytest.mark.parametrize(
    "body",
    [
        {"name": "   ", "content": "Be brief."},
        {"name": "Default", "content": " \n "},
    ],
)
def test_blank_template_fields_are_400_on_create(app: FastAPI, client: TestClient, body: dict) -> None:
    db = FakeDb()
    _override_db(app, db)

    response = client.post("/prompt-templates", json=body)

    assert response.status_code == 400
    assert db.commits == 0


def test_blank_template_name_is_400_on_update(app: FastAPI, client: TestClient) -> None:
    db = FakeDb(existing=object())
    _override_db(app, db)

    response = client.patch(f"/prompt-templates/{uuid.uuid4()}", json={"name": "  "})

    assert response.status_code == 400
    assert db.commits == 0


def test_delete_unknown_template_is_404_even_when_one_remains(app: FastAPI, client: TestClient) -> None:
    db = FakeDb(count=1, existing=None)
    _override_db(app, db)

    response = client.delete(f"/prompt-templates/{uuid.uuid4()}")

    assert response.status_code == 404
    assert db.deleted == []
