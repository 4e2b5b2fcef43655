"""
app/domain/domain_records.py

Transient records produced by JSON normalization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DomainRecord = dict[str, Any]
UserContext = dict[str, Any]

DOMAIN_URL_KEY = "domainURL"
SOURCE_KEY = "_source"


class RecordSource:
    OVERVIEW = "overview"
    SIMILAR_WEBSHOP = "similar_webshop"


@dataclass(frozen=True)
class NormalizedImport:
    """
    Canonical record list plus the optional user context of an import.
    """

    records: list[DomainRecord] = field(default_factory=list)
    user_context: UserContext | None = None
