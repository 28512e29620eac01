"""Tenant API endpoints."""
from fastapi import APIRouter, Depends, Query, Response, status

from tenant_api.core.dependencies import Actor, TenantServiceDep
from tenant_api.schemas.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PaginationParams
from tenant_api.schemas.tenant import (
    TenantCreateRequest, TenantListResponse, TenantResponse, TenantUpdateRequest
)


router = APIRouter()


def get_pagination(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> PaginationParams:
    return PaginationParams(page=page, page_size=page_size)


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_root_tenant(
    request: TenantCreateRequest,
    actor: Actor,
    service: TenantServiceDep,
):
    """Create a root tenant."""
    return await service.create(actor, request.name, description=request.description)


@router.post("/{parent_id}/tenants", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_child_tenant(
    parent_id: str,
    request: TenantCreateRequest,
    actor: Actor,
    service: TenantServiceDep,
):
    """Create a tenant under `parent_id`."""
    return await service.create(
        actor, request.name, description=request.description, parent_id=parent_id
    )


@router.get("", response_model=TenantListResponse)
async def list_root_tenants(
    service: TenantServiceDep,
    pagination: PaginationParams = Depends(get_pagination),
):
    """List tenants without a parent."""
    return await service.list(pagination=pagination)


@router.get("/{parent_id}/tenants", response_model=TenantListResponse)
async def list_child_tenants(
    parent_id: str,
    service: TenantServiceDep,
    pagination: PaginationParams = Depends(get_pagination),
):
    """List the direct children of `parent_id`."""
    return await service.list(parent_id=parent_id, pagination=pagination)


@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant(
    tenant_id: str,
    service: TenantServiceDep,
    include_deleted: bool = False,
):
    """Get a specific tenant by ID."""
    return await service.get(tenant_id, include_deleted=include_deleted)


@router.patch("/{tenant_id}", response_model=TenantResponse)
async def update_tenant(
    tenant_id: str,
    request: TenantUpdateRequest,
    actor: Actor,
    service: TenantServiceDep,
):
    """Rename a tenant."""
    return await service.update(actor, tenant_id, request.name)


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tenant(
    tenant_id: str,
    actor: Actor,
    service: TenantServiceDep,
):
    """Soft-delete a tenant."""
    await service.delete(actor, tenant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
