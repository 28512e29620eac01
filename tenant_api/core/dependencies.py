"""Application dependencies for dependency injection."""
from typing import Annotated, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_api.core.config import settings
from tenant_api.core.database import get_db
from tenant_api.core.exceptions import AuthenticationError
from tenant_api.core.security import decode_token
from tenant_api.events.publisher import EventPublisher
from tenant_api.repositories.tenant import TenantRepository
from tenant_api.services.tenant import TenantService


security = HTTPBearer(auto_error=False)


async def get_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Resolve the acting identity from an optional bearer token."""
    if credentials is None:
        return settings.DEFAULT_ACTOR

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Invalid or expired token")

    return payload.sub


def get_publisher(request: Request) -> EventPublisher:
    """Process-wide publisher created in the application lifespan."""
    return request.app.state.event_publisher


DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_tenant_repository(db: DbSession) -> TenantRepository:
    return TenantRepository(db)


async def get_tenant_service(
    repository: TenantRepository = Depends(get_tenant_repository),
    publisher: EventPublisher = Depends(get_publisher),
) -> TenantService:
    return TenantService(repository, publisher, source=settings.EVENTS_SOURCE)


# Type aliases for cleaner dependency injection
Actor = Annotated[str, Depends(get_actor)]
TenantServiceDep = Annotated[TenantService, Depends(get_tenant_service)]
