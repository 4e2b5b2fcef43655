"""LLM adapters for per-domain ICP completions.

Provides a base interface and concrete adapters for OpenAI-compatible
APIs and a deterministic mock for testing.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from openai import OpenAI

from llm_completion.catalog import DEFAULT_MODEL, is_reasoning_model
from llm_completion.prompt_builder import IcpPromptBuilder
from llm_completion.schema import DomainPayload

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_OUTPUT_TOKENS = 2000


class BaseLLMAdapter(ABC):
    """Abstract base for all completion adapters."""

    @abstractmethod
    def complete(
        self,
        system_prompt: str,
        questions: Sequence[str],
        payload: DomainPayload,
        model: str,
    ) -> str:
        """Answer ``questions`` about one domain and return the free-text analysis.

        Args:
            system_prompt: System instruction text.
            questions: Selected question texts.
            payload: One domain's entries plus optional user context.
            model: Model identifier.

        Returns:
            The model's answer as plain text.
        """


class OpenAILLMAdapter(BaseLLMAdapter):
    """Adapter for OpenAI-compatible chat completion APIs.

    Sends the system prompt as a ``system`` message and the structured
    domain prompt as a single ``user`` message. Non-streaming; no retries.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
        timeout_seconds: Optional[float] = None,
        prompt_builder: Optional[IcpPromptBuilder] = None,
        client: Optional[OpenAI] = None,
    ) -> None:
        """Initialise the OpenAI adapter.

        Args:
            api_key: OpenAI API key. The SDK falls back to OPENAI_API_KEY.
            base_url: Optional base URL for OpenAI-compatible endpoints.
            temperature: Sampling temperature for classic chat models.
            max_output_tokens: Upper bound on generated tokens.
            timeout_seconds: Per-request timeout applied by the SDK client.
            prompt_builder: Message builder, mainly for tests.
            client: Preconfigured SDK client, mainly for tests.
        """
        if client is None:
            client_kwargs: dict = {"max_retries": 0}
            if api_key:
                client_kwargs["api_key"] = api_key
            if base_url:
                client_kwargs["base_url"] = base_url
            if timeout_seconds is not None:
                client_kwargs["timeout"] = timeout_seconds
            client = OpenAI(**client_kwargs)

        self._client = client
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        self._prompt_builder = prompt_builder or IcpPromptBuilder()

    def complete(
        self,
        system_prompt: str,
        questions: Sequence[str],
        payload: DomainPayload,
        model: str,
    ) -> str:
        """Call the OpenAI chat completion API for one domain."""
        model = model or DEFAULT_MODEL
        request: dict = {
            "model": model,
            "messages": self._prompt_builder.build_messages(system_prompt, questions, payload),
            "stream": False,
        }
        if is_reasoning_model(model):
            request["max_completion_tokens"] = self._max_output_tokens
        else:
            request["temperature"] = self._temperature
            request["max_tokens"] = self._max_output_tokens

        logger.debug("Requesting completion for %s with model %s", payload.domain_url, model)
        response = self._client.chat.completions.create(**request)
        return response.choices[0].message.content or ""


class MockLLMAdapter(BaseLLMAdapter):
    """Deterministic adapter that echoes the domain and numbered questions.

    Used for local runs and CI pipelines where no LLM API is available.
    """

    def complete(
        self,
        system_prompt: str,
        questions: Sequence[str],
        payload: DomainPayload,
        model: str,
    ) -> str:
        lines = [
            f"Mock analysis for {payload.domain_url} ({len(payload.entries)} entries, model {model}).",
        ]
        for index, question in enumerate(questions, start=1):
            lines.append(f"{index}. {question}\n   No live model configured; answer unavailable.")
        return "\n".join(lines)
