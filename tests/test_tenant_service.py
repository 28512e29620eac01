"""Tenant lifecycle service tests."""
import pytest

from tenant_api.core.enums import EventAction
from tenant_api.core.exceptions import ConstraintViolationError, NotFoundError, ValidationError
from tenant_api.core.ids import new_tenant_id, tenant_urn
from tenant_api.events.publisher import EventPublisher
from tenant_api.repositories.tenant import TenantRepository
from tenant_api.schemas.pagination import PaginationParams
from tenant_api.services.tenant import TenantService


@pytest.mark.asyncio
async def test_create_root_tenant_publishes_event(service: TenantService, publisher):
    tenant = await service.create("user-1", "acme")

    assert tenant.name == "acme"
    assert tenant.parent_tenant_id is None

    assert len(publisher.published) == 1
    subject, message = publisher.published[0]
    assert subject == "com.infratographer.events.tenants.create.global"
    assert message.actor == "user-1"
    assert message.resource_urn == f"urn:infratographer:tenant:{tenant.id}"
    assert message.additional_urns == []
    assert message.event_type == EventAction.CREATE


@pytest.mark.asyncio
async def test_create_child_references_parent(service: TenantService, publisher):
    parent = await service.create("user-1", "acme")
    child = await service.create("user-1", "acme-east", parent_id=parent.id)

    assert child.parent_tenant_id == parent.id

    _, message = publisher.published[-1]
    assert message.resource_urn == tenant_urn(child.id)
    assert message.additional_urns == [tenant_urn(parent.id)]


@pytest.mark.asyncio
async def test_create_ids_are_distinct(service: TenantService):
    ids = {(await service.create("user-1", f"tenant-{i}")).id for i in range(10)}
    assert len(ids) == 10


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", None])
async def test_create_requires_name(service: TenantService, publisher, name):
    with pytest.raises(ValidationError):
        await service.create("user-1", name)
    assert publisher.published == []


@pytest.mark.asyncio
async def test_create_strips_name(service: TenantService):
    tenant = await service.create("user-1", "  acme  ")
    assert tenant.name == "acme"


@pytest.mark.asyncio
async def test_create_with_malformed_parent_id(service: TenantService, publisher):
    with pytest.raises(ValidationError):
        await service.create("user-1", "acme-east", parent_id="not-an-id")
    assert publisher.published == []


@pytest.mark.asyncio
async def test_create_with_unknown_parent(service: TenantService, publisher):
    with pytest.raises(ConstraintViolationError):
        await service.create("user-1", "acme-east", parent_id=new_tenant_id())

    assert publisher.published == []
    listing = await service.list()
    assert listing.pagination.total == 0


@pytest.mark.asyncio
async def test_publish_failure_does_not_fail_the_operation(repository: TenantRepository, failing_publisher):
    service = TenantService(repository, failing_publisher)

    tenant = await service.create("user-1", "acme")
    updated = await service.update("user-1", tenant.id, "acme inc")
    deleted = await service.delete("user-1", tenant.id)

    assert updated.name == "acme inc"
    assert deleted.deleted_at is not None
    assert failing_publisher.attempts == 3


@pytest.mark.asyncio
async def test_update_publishes_event(service: TenantService, publisher):
    tenant = await service.create("user-1", "acme")

    updated = await service.update("user-2", tenant.id, "acme inc")

    assert updated.id == tenant.id
    assert updated.name == "acme inc"
    assert updated.created_at == tenant.created_at
    assert updated.updated_at > tenant.updated_at

    subject, message = publisher.published[-1]
    assert subject.endswith(".tenants.update.global")
    assert message.actor == "user-2"
    assert message.resource_urn == tenant_urn(tenant.id)


@pytest.mark.asyncio
async def test_update_unknown_tenant_emits_nothing(service: TenantService, publisher):
    with pytest.raises(NotFoundError):
        await service.update("user-1", new_tenant_id(), "ghost")
    assert publisher.published == []


@pytest.mark.asyncio
async def test_delete_then_get(service: TenantService, publisher):
    tenant = await service.create("user-1", "acme")

    await service.delete("user-1", tenant.id)

    subject, message = publisher.published[-1]
    assert subject.endswith(".tenants.delete.global")
    assert message.event_type == EventAction.DELETE

    with pytest.raises(NotFoundError):
        await service.get(tenant.id)

    audit = await service.get(tenant.id, include_deleted=True)
    assert audit.deleted_at is not None

    with pytest.raises(NotFoundError):
        await service.delete("user-1", tenant.id)


@pytest.mark.asyncio
async def test_list_roots_and_children(service: TenantService):
    acme = await service.create("user-1", "acme")
    globex = await service.create("user-1", "globex")
    east = await service.create("user-1", "acme-east", parent_id=acme.id)
    west = await service.create("user-1", "acme-west", parent_id=acme.id)
    await service.create("user-1", "acme-east-1", parent_id=east.id)

    roots = await service.list()
    assert [t.id for t in roots.tenants] == [acme.id, globex.id]
    assert all(t.parent_tenant_id is None for t in roots.tenants)

    children = await service.list(parent_id=acme.id)
    assert [t.id for t in children.tenants] == [east.id, west.id]

    first = await service.list(parent_id=acme.id, pagination=PaginationParams(page=1, page_size=1))
    second = await service.list(parent_id=acme.id, pagination=PaginationParams(page=2, page_size=1))
    assert [t.id for t in first.tenants + second.tenants] == [east.id, west.id]
    assert first.pagination.total == 2
    assert first.pagination.total_pages == 2


@pytest.mark.asyncio
async def test_get_rejects_malformed_id(service: TenantService):
    with pytest.raises(ValidationError):
        await service.get("tnntten-short")


class HelperRecordingPublisher(EventPublisher):
    """Records which per-action helper delivered each message."""

    def __init__(self):
        super().__init__()
        self.calls = []

    async def publish_create(self, topic, scope, message):
        self.calls.append(("create", topic, scope))

    async def publish_update(self, topic, scope, message):
        self.calls.append(("update", topic, scope))

    async def publish_delete(self, topic, scope, message):
        self.calls.append(("delete", topic, scope))


@pytest.mark.asyncio
async def test_mutations_use_per_action_publish_helpers(repository: TenantRepository):
    publisher = HelperRecordingPublisher()
    service = TenantService(repository, publisher)

    tenant = await service.create("user-1", "acme")
    await service.update("user-1", tenant.id, "acme inc")
    await service.delete("user-1", tenant.id)

    assert publisher.calls == [
        ("create", "tenants", "global"),
        ("update", "tenants", "global"),
        ("delete", "tenants", "global"),
    ]
