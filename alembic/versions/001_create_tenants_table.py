"""Create tenants table

Revision ID: 001_create_tenants_table
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


revision: str = '001_create_tenants_table'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'tenants',
        sa.Column('id', sa.String(29), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('parent_tenant_id', sa.String(29), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_tenants'),
        sa.ForeignKeyConstraint(
            ['parent_tenant_id'], ['tenants.id'],
            name='fk_tenants_parent_tenant_id_tenants',
            ondelete='RESTRICT',
        ),
    )
    op.create_index('ix_tenants_parent_tenant_id', 'tenants', ['parent_tenant_id'])
    op.create_index('ix_tenant_created_id', 'tenants', ['created_at', 'id'])
    op.create_index('ix_tenant_deleted_at', 'tenants', ['deleted_at'])


def downgrade() -> None:
    op.drop_index('ix_tenant_deleted_at', table_name='tenants')
    op.drop_index('ix_tenant_created_id', table_name='tenants')
    op.drop_index('ix_tenants_parent_tenant_id', table_name='tenants')
    op.drop_table('tenants')
