"""Pydantic schemas."""
from tenant_api.schemas.pagination import PaginationParams, PaginationResponse
from tenant_api.schemas.tenant import (
    TenantCreateRequest, TenantUpdateRequest, TenantResponse, TenantListResponse
)

__all__ = [
    "PaginationParams", "PaginationResponse",
    "TenantCreateRequest", "TenantUpdateRequest", "TenantResponse", "TenantListResponse",
]
