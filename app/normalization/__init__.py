"""
Normalization of imported domain JSON.
"""

from app.normalization.json_normalizer import (
    MAX_CONTENT_DEPTH,
    ImportShape,
    normalize_json,
    records_for_domain,
    unique_domains,
)

__all__ = [
    "MAX_CONTENT_DEPTH",
    "ImportShape",
    "normalize_json",
    "records_for_domain",
    "unique_domains",
]
