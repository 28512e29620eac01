"""Tenant persistence."""
from tenant_api.repositories.tenant import TenantRepository

__all__ = ["TenantRepository"]
