"""create_authorization_schema

Revision ID: 3f2b9c1d7e40
Revises:
Create Date: 2026-10-19 10:12:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2b9c1d7e40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """
    Create the tenant authorization schema.

    Creates:
    - tenants (self-referencing parent_id)
    - roles (permissions as JSON array)
    - resources, resource_ownerships
    - resource_accesses, tenant_accesses
    - accounts

    Untyped resources are stored with resource type '' so the type can be
    part of composite primary keys.
    """
    op.create_table(
        'tenants',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('parent_id', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['parent_id'], ['tenants.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tenants_parent_id'), 'tenants', ['parent_id'], unique=False)

    op.create_table(
        'roles',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('permissions', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'resources',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', 'type')
    )

    op.create_table(
        'resource_ownerships',
        sa.Column('resource_id', sa.String(length=255), nullable=False),
        sa.Column('resource_type', sa.String(length=100), nullable=False),
        sa.Column('tenant_id', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('resource_id', 'resource_type')
    )
    op.create_index(
        op.f('ix_resource_ownerships_tenant_id'), 'resource_ownerships', ['tenant_id'], unique=False
    )

    op.create_table(
        'resource_accesses',
        sa.Column('account_id', sa.String(length=255), nullable=False),
        sa.Column('resource_id', sa.String(length=255), nullable=False),
        sa.Column('resource_type', sa.String(length=100), nullable=False),
        sa.Column('role_id', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('account_id', 'resource_id', 'resource_type')
    )

    op.create_table(
        'tenant_accesses',
        sa.Column('account_id', sa.String(length=255), nullable=False),
        sa.Column('tenant_id', sa.String(length=255), nullable=False),
        sa.Column('role_id', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('account_id', 'tenant_id')
    )

    op.create_table(
        'accounts',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('organization', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_accounts_email'), 'accounts', ['email'], unique=False)


def downgrade() -> None:
    """Drop the tenant authorization schema."""
    op.drop_index(op.f('ix_accounts_email'), table_name='accounts')
    op.drop_table('accounts')
    op.drop_table('tenant_accesses')
    op.drop_table('resource_accesses')
    op.drop_index(op.f('ix_resource_ownerships_tenant_id'), table_name='resource_ownerships')
    op.drop_table('resource_ownerships')
    op.drop_table('resources')
    op.drop_table('roles')
    op.drop_index(op.f('ix_tenants_parent_id'), table_name='tenants')
    op.drop_table('tenants')
