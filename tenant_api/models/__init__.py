"""SQLAlchemy models."""
from tenant_api.models.tenant import Tenant

__all__ = ["Tenant"]
