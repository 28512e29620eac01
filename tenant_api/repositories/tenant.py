"""Tenant persistence."""
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_api.core.exceptions import ConstraintViolationError, NotFoundError, PersistenceError
from tenant_api.core.logging import get_logger
from tenant_api.models.tenant import Tenant
from tenant_api.predicates import Predicate, TenantWhere, and_
from tenant_api.repositories.filters import compile_predicate
from tenant_api.schemas.pagination import PaginationParams


logger = get_logger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "description"})


class TenantRepository:
    """Predicate-filtered reads and single-row writes against `tenants`.

    Every write commits on its own; a failed write is rolled back before the
    error propagates.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(
        self,
        predicates: Sequence[Predicate] = (),
        pagination: Optional[PaginationParams] = None,
        include_deleted: bool = False,
    ) -> Tuple[List[Tenant], int]:
        """Return one page of matching tenants and the total match count.

        Rows are ordered by `created_at` then `id` so repeated calls page
        deterministically.
        """
        pagination = pagination or PaginationParams()

        filters = list(predicates)
        if not include_deleted:
            filters.append(TenantWhere.deleted_at.is_null())
        clause = compile_predicate(and_(*filters))

        count_query = select(func.count(Tenant.id)).where(clause)
        query = (
            select(Tenant)
            .where(clause)
            .order_by(Tenant.created_at.asc(), Tenant.id.asc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )

        try:
            total_result = await self.session.execute(count_query)
            total = total_result.scalar() or 0

            result = await self.session.execute(query)
            tenants = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.exception("failed to query tenants")
            raise PersistenceError(f"failed to query tenants: {e}") from e

        return tenants, total

    async def get_by_id(self, tenant_id: str, include_deleted: bool = False) -> Tenant:
        query = select(Tenant).where(Tenant.id == tenant_id)
        if not include_deleted:
            query = query.where(Tenant.deleted_at.is_(None))

        try:
            result = await self.session.execute(query)
            tenant = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception("failed to query tenant", extra={"tenant_id": tenant_id})
            raise PersistenceError(f"failed to query tenant {tenant_id}: {e}") from e

        if tenant is None:
            raise NotFoundError(f"tenant {tenant_id} not found")

        return tenant

    async def insert(self, tenant: Tenant) -> Tenant:
        parent_tenant_id = tenant.parent_tenant_id
        self.session.add(tenant)
        try:
            await self.session.commit()
            await self.session.refresh(tenant)
        except IntegrityError as e:
            await self.session.rollback()
            logger.info(
                "tenant insert rejected by constraint",
                extra={"parent_tenant_id": parent_tenant_id},
            )
            raise ConstraintViolationError(
                f"parent tenant {parent_tenant_id} does not exist"
                if parent_tenant_id else "tenant violates a database constraint"
            ) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception("error inserting tenant")
            raise PersistenceError(f"error inserting tenant: {e}") from e

        return tenant

    async def update(self, tenant_id: str, **fields) -> Tenant:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"fields cannot be updated: {sorted(unknown)}")

        tenant = await self.get_by_id(tenant_id)

        for key, value in fields.items():
            setattr(tenant, key, value)
        tenant.updated_at = datetime.now(timezone.utc)

        await self._commit(tenant, "failed to update tenant")
        return tenant

    async def soft_delete(self, tenant_id: str) -> Tenant:
        """Mark a tenant deleted.

        Deleting an already-deleted tenant raises NotFoundError.
        """
        tenant = await self.get_by_id(tenant_id)

        now = datetime.now(timezone.utc)
        tenant.deleted_at = now
        tenant.updated_at = now

        await self._commit(tenant, "failed to delete tenant")
        return tenant

    async def _commit(self, tenant: Tenant, error_message: str) -> None:
        tenant_id = tenant.id
        try:
            await self.session.commit()
            await self.session.refresh(tenant)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(error_message, extra={"tenant_id": tenant_id})
            raise PersistenceError(f"{error_message}: {e}") from e
