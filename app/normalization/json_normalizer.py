"""
app/normalization/json_normalizer.py

Reduce imported JSON of several ad-hoc shapes to a canonical record list.

Recognized shapes, tried in order against the same input:

    1. ARRAY            a list of record objects
    2. WRAPPED_CONTENT  an object whose string ``content`` holds JSON
    3. WEBSHOP          an object with ``data.WEBSHOP`` (overview + similar webshops)
    4. SINGLE_RECORD    one object carrying its own domain field

Every output record keeps its input fields and gains a canonical
``domainURL`` (``None`` when no domain field resolves). The input is never
mutated.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from app.domain.domain_records import (
    DOMAIN_URL_KEY,
    SOURCE_KEY,
    DomainRecord,
    NormalizedImport,
    RecordSource,
)

logger = logging.getLogger(__name__)

MAX_CONTENT_DEPTH = 8

_RECORD_DOMAIN_KEYS = ("domainURL", "domainUrl", "domain")
_WEBSHOP_DOMAIN_KEYS = ("domainUrl", "domain")
_USER_CONTEXT_KEY = "user_context"


class ImportShape:
    ARRAY = "array"
    WRAPPED_CONTENT = "wrapped_content"
    WEBSHOP = "webshop"
    SINGLE_RECORD = "single_record"


class _NoMatch:
    """Sentinel returned by a shape handler that does not apply."""


_NO_MATCH = _NoMatch()

_HandlerResult = NormalizedImport | None | _NoMatch


def _first_present(item: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = item.get(key)
        if value is not None:
            return value
    return None


def _with_domain(
    item: Mapping[str, Any],
    keys: Iterable[str],
    source: str | None = None,
) -> DomainRecord:
    record: DomainRecord = dict(item)
    record[DOMAIN_URL_KEY] = _first_present(item, keys)
    if source is not None:
        record[SOURCE_KEY] = source
    return record


def _as_user_context(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def _normalize_array(parsed: Any, depth: int) -> _HandlerResult:
    if not isinstance(parsed, list):
        return _NO_MATCH

    records: list[DomainRecord] = []
    for position, item in enumerate(parsed):
        if not isinstance(item, Mapping):
            logger.warning("Skipping non-object array element at index %d", position)
            continue
        records.append(_with_domain(item, _RECORD_DOMAIN_KEYS))
    return NormalizedImport(records=records, user_context=None)


def _normalize_wrapped_content(parsed: Any, depth: int) -> _HandlerResult:
    if not isinstance(parsed, Mapping):
        return _NO_MATCH
    content = parsed.get("content")
    if not isinstance(content, str) or not content:
        return _NO_MATCH
    if depth >= MAX_CONTENT_DEPTH:
        logger.warning("Wrapped content nested deeper than %d levels; not unwrapping", MAX_CONTENT_DEPTH)
        return _NO_MATCH

    try:
        inner = json.loads(content)
    except (ValueError, RecursionError):
        return _NO_MATCH
    if inner is None:
        # JSON null holds nothing to unwrap; the outer object is tried instead.
        return _NO_MATCH

    result = _dispatch(inner, depth + 1)
    if result is not None and result.user_context is None:
        outer_context = _as_user_context(parsed.get(_USER_CONTEXT_KEY))
        if outer_context is not None:
            return NormalizedImport(records=result.records, user_context=outer_context)
    return result


def _normalize_webshop(parsed: Any, depth: int) -> _HandlerResult:
    if not isinstance(parsed, Mapping):
        return _NO_MATCH
    data = parsed.get("data")
    if not isinstance(data, Mapping) or data.get("WEBSHOP") is None:
        return _NO_MATCH

    webshop = data["WEBSHOP"]
    records: list[DomainRecord] = []
    if isinstance(webshop, Mapping):
        overview = webshop.get("overview")
        if isinstance(overview, Mapping):
            records.append(_with_domain(overview, _WEBSHOP_DOMAIN_KEYS, RecordSource.OVERVIEW))

        similar = webshop.get("similar_webshop")
        if isinstance(similar, list):
            for shop in similar:
                if isinstance(shop, Mapping):
                    records.append(
                        _with_domain(shop, _WEBSHOP_DOMAIN_KEYS, RecordSource.SIMILAR_WEBSHOP)
                    )

    user_context = _as_user_context(parsed.get(_USER_CONTEXT_KEY))
    if user_context is None:
        user_context = _as_user_context(data.get(_USER_CONTEXT_KEY))
    return NormalizedImport(records=records, user_context=user_context)


def _normalize_single_record(parsed: Any, depth: int) -> _HandlerResult:
    if not isinstance(parsed, Mapping):
        return _NO_MATCH
    if _first_present(parsed, _RECORD_DOMAIN_KEYS) is None:
        return _NO_MATCH

    return NormalizedImport(
        records=[_with_domain(parsed, _RECORD_DOMAIN_KEYS)],
        user_context=_as_user_context(parsed.get(_USER_CONTEXT_KEY)),
    )


_SHAPE_HANDLERS: tuple[tuple[str, Callable[[Any, int], _HandlerResult]], ...] = (
    (ImportShape.ARRAY, _normalize_array),
    (ImportShape.WRAPPED_CONTENT, _normalize_wrapped_content),
    (ImportShape.WEBSHOP, _normalize_webshop),
    (ImportShape.SINGLE_RECORD, _normalize_single_record),
)


def _dispatch(parsed: Any, depth: int) -> NormalizedImport | None:
    for shape, handler in _SHAPE_HANDLERS:
        result = handler(parsed, depth)
        if result is _NO_MATCH:
            continue
        logger.debug("Import matched shape %s at depth %d", shape, depth)
        return result  # type: ignore[return-value]
    return None


def normalize_json(parsed: Any) -> NormalizedImport | None:
    """
    Normalize an already-parsed JSON value.

    Returns ``None`` when the value matches none of the recognized shapes;
    callers report that as "could not extract domain data".
    """

    return _dispatch(parsed, 0)


def unique_domains(records: Iterable[Mapping[str, Any]]) -> list[str]:
    """
    Distinct truthy ``domainURL`` values in first-seen order.
    """

    seen: dict[str, None] = {}
    for record in records:
        domain = record.get(DOMAIN_URL_KEY)
        if domain:
            seen.setdefault(str(domain), None)
    return list(seen)


def records_for_domain(records: Iterable[Mapping[str, Any]], domain: str) -> list[DomainRecord]:
    return [
        dict(record)
        for record in records
        if record.get(DOMAIN_URL_KEY) and str(record.get(DOMAIN_URL_KEY)) == domain
    ]
