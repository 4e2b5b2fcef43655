"""Payload contracts exchanged with the completion collaborator."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class DomainPayload(BaseModel):
    """Data for one domain as handed to the completion call.

    Field names mirror the JSON keys the prompt shows to the model.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    domain_url: str = Field(alias="domainURL", min_length=1)
    entries: list[dict[str, Any]] = Field(default_factory=list)
    user_context: Optional[dict[str, Any]] = Field(default=None, alias="userContext")

    def data_section(self) -> dict[str, Any]:
        """Domain data as shown to the model, without the user context."""
        return {"domainURL": self.domain_url, "entries": self.entries}
