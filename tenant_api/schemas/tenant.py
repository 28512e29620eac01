"""Tenant schemas."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from tenant_api.schemas.pagination import PaginationResponse


class TenantCreateRequest(BaseModel):
    """Body of a create request."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class TenantUpdateRequest(BaseModel):
    """Body of an update request. Only the name is mutable."""
    name: str = Field(..., min_length=1, max_length=255)


class TenantResponse(BaseModel):
    """Outward representation of a tenant."""
    id: str
    name: str
    description: Optional[str] = None
    parent_tenant_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class TenantListResponse(BaseModel):
    """A page of tenants."""
    tenants: List[TenantResponse]
    pagination: PaginationResponse
