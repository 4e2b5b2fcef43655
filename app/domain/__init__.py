"""
app/domain package marker.
"""

from app.domain.domain_records import DomainRecord, NormalizedImport, UserContext
from app.domain.prompt_run import DomainRunError, DomainTask, RunOutcome, RunProgress

__all__ = [
    "DomainRecord",
    "DomainRunError",
    "DomainTask",
    "NormalizedImport",
    "RunOutcome",
    "RunProgress",
    "UserContext",
]
