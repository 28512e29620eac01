"""Change messages published when a tenant is mutated."""
from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field, field_validator

from tenant_api.core.enums import EventAction


URN_PREFIX = "urn:"


class ChangeMessage(BaseModel):
    """Payload delivered to subscribers of the `tenants` channel."""
    actor: str
    resource_urn: str = Field(alias="resourceURN")
    additional_urns: List[str] = Field(default_factory=list, alias="additionalURNs")
    event_type: EventAction = Field(alias="eventType")
    source: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        populate_by_name = True

    @field_validator("resource_urn")
    @classmethod
    def check_resource_urn(cls, v: str) -> str:
        if not v.startswith(URN_PREFIX):
            raise ValueError(f"not a URN: {v!r}")
        return v

    @field_validator("additional_urns")
    @classmethod
    def check_additional_urns(cls, v: List[str]) -> List[str]:
        for urn in v:
            if not urn.startswith(URN_PREFIX):
                raise ValueError(f"not a URN: {urn!r}")
        return v

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
