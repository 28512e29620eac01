"""Tenant lifecycle: validation, persistence and change events."""
from typing import Iterable, Optional

from tenant_api.core.enums import EventAction
from tenant_api.core.exceptions import ValidationError
from tenant_api.core.ids import parse_tenant_id, tenant_urn
from tenant_api.core.logging import get_logger
from tenant_api.events.messages import ChangeMessage
from tenant_api.events.publisher import EventPublisher
from tenant_api.models.tenant import Tenant
from tenant_api.predicates import TenantWhere
from tenant_api.repositories.tenant import TenantRepository
from tenant_api.schemas.pagination import PaginationParams, PaginationResponse
from tenant_api.schemas.tenant import TenantListResponse, TenantResponse


TOPIC = "tenants"
SCOPE = "global"


class TenantService:
    """The only code path that mutates tenants.

    Each mutation runs validate -> persist -> publish -> respond. Repository
    errors stop the pipeline before anything is published. Publishing is
    best effort: failures are logged and the caller still gets the
    persisted tenant back.
    """

    def __init__(
        self,
        repository: TenantRepository,
        publisher: EventPublisher,
        source: str = "tenant-api",
        logger=None,
    ):
        self.repository = repository
        self.publisher = publisher
        self.source = source
        self.logger = logger or get_logger(__name__)

    async def create(
        self,
        actor: str,
        name: str,
        description: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> TenantResponse:
        name = _clean_name(name)
        additional_urns = []

        tenant = Tenant(name=name, description=description)
        if parent_id is not None:
            tenant.parent_tenant_id = parse_tenant_id(parent_id)
            additional_urns.append(tenant_urn(tenant.parent_tenant_id))

        tenant = await self.repository.insert(tenant)
        self.logger.info(
            f"Tenant created: {tenant.id}",
            extra={"tenant_id": tenant.id, "parent_tenant_id": tenant.parent_tenant_id, "actor": actor},
        )

        await self._emit(EventAction.CREATE, actor, tenant.id, additional_urns)
        return TenantResponse.model_validate(tenant)

    async def list(
        self,
        parent_id: Optional[str] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> TenantListResponse:
        """List the children of `parent_id`, or the root tenants when it is None."""
        pagination = pagination or PaginationParams()

        if parent_id is not None:
            predicate = TenantWhere.parent_tenant_id.eq(parse_tenant_id(parent_id))
        else:
            predicate = TenantWhere.parent_tenant_id.is_null()

        tenants, total = await self.repository.find([predicate], pagination)

        return TenantListResponse(
            tenants=[TenantResponse.model_validate(t) for t in tenants],
            pagination=PaginationResponse.build(pagination, total),
        )

    async def get(self, tenant_id: str, include_deleted: bool = False) -> TenantResponse:
        tenant = await self.repository.get_by_id(
            parse_tenant_id(tenant_id), include_deleted=include_deleted
        )
        return TenantResponse.model_validate(tenant)

    async def update(self, actor: str, tenant_id: str, name: str) -> TenantResponse:
        tenant_id = parse_tenant_id(tenant_id)
        name = _clean_name(name)

        tenant = await self.repository.update(tenant_id, name=name)
        self.logger.info(f"Tenant updated: {tenant.id}", extra={"tenant_id": tenant.id, "actor": actor})

        await self._emit(EventAction.UPDATE, actor, tenant.id)
        return TenantResponse.model_validate(tenant)

    async def delete(self, actor: str, tenant_id: str) -> TenantResponse:
        tenant_id = parse_tenant_id(tenant_id)

        tenant = await self.repository.soft_delete(tenant_id)
        self.logger.info(f"Tenant deleted: {tenant.id}", extra={"tenant_id": tenant.id, "actor": actor})

        await self._emit(EventAction.DELETE, actor, tenant.id)
        return TenantResponse.model_validate(tenant)

    async def _emit(
        self,
        action: EventAction,
        actor: str,
        tenant_id: str,
        additional_urns: Iterable[str] = (),
    ) -> None:
        # TODO: persist undelivered messages in an outbox table and retry them
        try:
            message = ChangeMessage(
                actor=actor,
                resource_urn=tenant_urn(tenant_id),
                additional_urns=list(additional_urns),
                event_type=action,
                source=self.source,
            )
            publish = {
                EventAction.CREATE: self.publisher.publish_create,
                EventAction.UPDATE: self.publisher.publish_update,
                EventAction.DELETE: self.publisher.publish_delete,
            }[action]
            await publish(TOPIC, SCOPE, message)
        except Exception:
            self.logger.exception(
                f"failed to publish {action.value} tenant message",
                extra={"tenant_id": tenant_id, "actor": actor},
            )


def _clean_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationError("name is required")
    return name.strip()
