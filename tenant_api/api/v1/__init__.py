"""API v1 router."""
from fastapi import APIRouter

from tenant_api.api.v1.tenants import router as tenants_router


router = APIRouter(prefix="/v1")

router.include_router(tenants_router, prefix="/tenants", tags=["Tenants"])
