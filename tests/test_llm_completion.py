"""
tests/test_llm_completion.py

Tests for the completion collaborator: prompt building, request
parameters per model family and the model catalog.
"""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any

import pytest
from pydantic import ValidationError

from llm_completion.adapter import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_TEMPERATURE,
    MockLLMAdapter,
    OpenAILLMAdapter,
)
from llm_completion.catalog import (
    AVAILABLE_MODELS,
    DEFAULT_MODEL,
    find_model,
    is_reasoning_model,
)
from llm_completion.prompt_builder import IcpPromptBuilder
from llm_completion.schema import DomainPayload


class FakeCompletions:
    def __init__(self, content: str | None = "analysis") -> None:
        self.requests: list[dict[str, Any]] = []
        self._content = content

    def create(self, **kwargs: Any) -> SimpleNamespace:
        self.requests.append(kwargs)
        message = SimpleNamespace(content=self._content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _fake_client(content: str | None = "analysis") -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(content)))


@pytest.fixture()
def payload() -> DomainPayload:
    return DomainPayload(
        domainURL="shop.example",
        entries=[{"domainURL": "shop.example", "revenue": 1200}],
        userContext={"currency": "EUR"},
    )


# ---------------------------------------------------------------------------
# DomainPayload
# ---------------------------------------------------------------------------


def test_payload_requires_domain() -> None:
    with pytest.raises(ValidationError):
        DomainPayload(domainURL="", entries=[])


def test_payload_accepts_field_names() -> None:
    payload = DomainPayload(domain_url="a.com")
    assert payload.data_section() == {"domainURL": "a.com", "entries": []}
    assert payload.user_context is None


# ---------------------------------------------------------------------------
# Prompt builder
# ---------------------------------------------------------------------------


class TestIcpPromptBuilder:
    def test_messages_are_system_then_user(self, payload: DomainPayload) -> None:
        messages = IcpPromptBuilder().build_messages("Be an analyst.", ["Q1"], payload)
        assert [m["role"] for m in messages] == ["system", "user"]
        assert messages[0]["content"] == "Be an analyst."

    def test_user_message_sections_in_order(self, payload: DomainPayload) -> None:
        text = IcpPromptBuilder().build_user_message(["Who buys?", "Why?"], payload)
        positions = [
            text.index("# PROVIDED DATA"),
            text.index("## User Context"),
            text.index("## Domain Data"),
            text.index("# QUESTIONS"),
            text.index("# TASK"),
        ]
        assert positions == sorted(positions)
        assert "1. Who buys?\n2. Why?" in text
        assert json.dumps({"currency": "EUR"}, indent=2) in text

    def test_user_context_section_omitted_when_absent(self) -> None:
        text = IcpPromptBuilder().build_user_message(["Q"], DomainPayload(domainURL="a.com"))
        assert "## User Context" not in text
        assert '"domainURL": "a.com"' in text

    def test_format_questions_numbers_from_one(self) -> None:
        assert IcpPromptBuilder.format_questions(["a", "b", "c"]) == "1. a\n2. b\n3. c"


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------


class TestOpenAILLMAdapter:
    def test_classic_model_parameters(self, payload: DomainPayload) -> None:
        client = _fake_client("the answer")
        adapter = OpenAILLMAdapter(client=client)

        assert adapter.complete("sys", ["Q1"], payload, "gpt-4o-mini") == "the answer"

        request = client.chat.completions.requests[0]
        assert request["model"] == "gpt-4o-mini"
        assert request["temperature"] == DEFAULT_TEMPERATURE
        assert request["max_tokens"] == DEFAULT_MAX_OUTPUT_TOKENS
        assert "max_completion_tokens" not in request
        assert request["messages"][0] == {"role": "system", "content": "sys"}

    @pytest.mark.parametrize("model", ["o1", "o3-mini", "o4-mini", "gpt-5", "gpt-5.2"])
    def test_reasoning_model_parameters(self, payload: DomainPayload, model: str) -> None:
        client = _fake_client()
        OpenAILLMAdapter(client=client, max_output_tokens=1500).complete("sys", ["Q"], payload, model)

        request = client.chat.completions.requests[0]
        assert request["max_completion_tokens"] == 1500
        assert "temperature" not in request
        assert "max_tokens" not in request

    def test_empty_model_uses_default(self, payload: DomainPayload) -> None:
        client = _fake_client()
        OpenAILLMAdapter(client=client).complete("sys", ["Q"], payload, "")
        assert client.chat.completions.requests[0]["model"] == DEFAULT_MODEL

    def test_missing_content_returns_empty_string(self, payload: DomainPayload) -> None:
        adapter = OpenAILLMAdapter(client=_fake_client(None))
        assert adapter.complete("sys", ["Q"], payload, "gpt-4o") == ""


def test_mock_adapter_is_deterministic(payload: DomainPayload) -> None:
    adapter = MockLLMAdapter()
    first = adapter.complete("sys", ["Q1", "Q2"], payload, "gpt-4o")
    assert first == adapter.complete("sys", ["Q1", "Q2"], payload, "gpt-4o")
    assert first.startswith("Mock analysis for shop.example (1 entries, model gpt-4o).")
    assert "2. Q2" in first


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def test_default_model_is_in_catalog() -> None:
    assert DEFAULT_MODEL in {option.id for option in AVAILABLE_MODELS}


def test_catalog_ids_are_unique() -> None:
    ids = [option.id for option in AVAILABLE_MODELS]
    assert len(ids) == len(set(ids))


def test_find_model_falls_back_to_first_entry() -> None:
    assert find_model("gpt-4o").name == "GPT-4o"
    assert find_model("does-not-exist") == AVAILABLE_MODELS[0]


@pytest.mark.parametrize(
    "model, expected",
    [("o3-pro", True), ("gpt-5.1", True), ("gpt-4.1", False), ("gpt-4o-mini", False)],
)
def test_is_reasoning_model(model: str, expected: bool) -> None:
    assert is_reasoning_model(model) is expected
