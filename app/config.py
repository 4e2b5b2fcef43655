"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import get_int_env, load_env_files
from llm_completion.adapter import DEFAULT_MAX_OUTPUT_TOKENS, DEFAULT_TEMPERATURE
from llm_completion.catalog import DEFAULT_MODEL

_ALLOWED_ADAPTERS = {"openai", "mock"}


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    load_env_files()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    load_env_files()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    load_env_files()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class CompletionSettings:
    """
    Settings for the completion collaborator.
    """

    adapter: str = "openai"
    default_model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    timeout_seconds: float = 120.0
    api_key: str | None = None
    base_url: str | None = None


@dataclass(frozen=True)
class ImportSettings:
    """
    Limits for JSON imports.
    """

    max_upload_bytes: int = 10 * 1024 * 1024
    domain_preview_count: int = 5


@lru_cache(maxsize=1)
def get_completion_settings() -> CompletionSettings:
    """
    Return cached completion settings from environment variables.
    """

    adapter = _get_str_env("LLM_ADAPTER", "openai").lower()
    if adapter not in _ALLOWED_ADAPTERS:
        raise RuntimeError(
            f"LLM_ADAPTER '{adapter}' is not valid. Allowed values: {sorted(_ALLOWED_ADAPTERS)}."
        )

    return CompletionSettings(
        adapter=adapter,
        default_model=_get_str_env("LLM_MODEL", DEFAULT_MODEL),
        temperature=min(2.0, max(0.0, _get_float_env("LLM_TEMPERATURE", DEFAULT_TEMPERATURE))),
        max_output_tokens=max(1, get_int_env("LLM_MAX_TOKENS", DEFAULT_MAX_OUTPUT_TOKENS)),
        timeout_seconds=max(1.0, _get_float_env("LLM_TIMEOUT_SECONDS", 120.0)),
        api_key=_get_optional_str_env("LLM_API_KEY") or _get_optional_str_env("OPENAI_API_KEY"),
        base_url=_get_optional_str_env("LLM_BASE_URL"),
    )


@lru_cache(maxsize=1)
def get_import_settings() -> ImportSettings:
    """
    Return cached JSON import settings from environment variables.
    """

    return ImportSettings(
        max_upload_bytes=max(1024, get_int_env("IMPORT_MAX_UPLOAD_BYTES", 10 * 1024 * 1024)),
        domain_preview_count=max(1, get_int_env("IMPORT_DOMAIN_PREVIEW_COUNT", 5)),
    )

