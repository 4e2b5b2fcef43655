"""
app/domain/prompt_run.py

Domain models for the sequential per-domain prompt run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.domain.domain_records import DomainRecord


@dataclass(frozen=True)
class RunProgress:
    """
    Progress snapshot published before each domain's completion call.
    """

    current: int = 0
    total: int = 0
    current_domain: str = ""

    @property
    def is_idle(self) -> bool:
        return self.total == 0

    @property
    def fraction(self) -> float:
        if self.total <= 0:
            return 0.0
        return min(1.0, self.current / self.total)


IDLE_PROGRESS = RunProgress()


@dataclass(frozen=True)
class DomainTask:
    """
    One unit of work: a unique domain and the records that belong to it.
    """

    index: int
    domain_url: str
    entries: list[DomainRecord]


@dataclass(frozen=True)
class DomainRunError:
    """
    A failed domain and the user-visible message describing it.
    """

    domain_url: str
    message: str


@dataclass(frozen=True)
class RunOutcome:
    """
    End-of-run summary.

    ``results`` holds the persisted prompt results in processing order.
    """

    results: list[Any] = field(default_factory=list)
    errors: list[DomainRunError] = field(default_factory=list)
    validation_error: str | None = None
    total_domains: int = 0

    @property
    def error_message(self) -> str | None:
        """
        Last user-visible error, mirroring a single inline error slot.
        """

        if self.validation_error:
            return self.validation_error
        if self.errors:
            return self.errors[-1].message
        return None

    @property
    def succeeded(self) -> bool:
        return self.validation_error is None and not self.errors
