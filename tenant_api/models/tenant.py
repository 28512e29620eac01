"""Tenant model."""
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tenant_api.core.database import Base
from tenant_api.core.ids import new_tenant_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Tenant(Base):
    """A node in the tenant forest."""

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(
        String(29),
        primary_key=True,
        default=new_tenant_id
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    parent_tenant_id: Mapped[Optional[str]] = mapped_column(
        String(29),
        ForeignKey("tenants.id", ondelete="RESTRICT"),
        nullable=True,
        index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True
    )

    # Relationships. Never loaded implicitly: filters go through
    # tenant_api.repositories.filters instead.
    parent = relationship(
        "Tenant",
        remote_side=[id],
        back_populates="children",
        lazy="raise",
    )
    children = relationship("Tenant", back_populates="parent", lazy="raise")

    __table_args__ = (
        Index("ix_tenant_created_id", "created_at", "id"),
        Index("ix_tenant_deleted_at", "deleted_at"),
    )

    def __repr__(self) -> str:
        return f"<Tenant {self.id} name={self.name!r} parent={self.parent_tenant_id}>"
