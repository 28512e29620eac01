"""Business services."""
from tenant_api.services.tenant import TenantService

__all__ = ["TenantService"]
