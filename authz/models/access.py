"""Access grant models: resource-scoped and tenant-scoped."""

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from authz.models.base import Base, TimestampMixin
from authz.models.resource import NO_RESOURCE_TYPE


class ResourceAccessModel(Base, TimestampMixin):
    """
    Grant of a role to an account over a single resource.

    Constraints:
    - Primary key (account_id, resource_id, resource_type) - one grant per key
    - role_id is not a foreign key; a grant pointing at a missing role
      simply grants nothing
    """

    __tablename__ = "resource_accesses"

    account_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    resource_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    resource_type: Mapped[str] = mapped_column(
        String(100), primary_key=True, default=NO_RESOURCE_TYPE
    )
    role_id: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<ResourceAccessModel(account_id='{self.account_id}', resource_id='{self.resource_id}', "
            f"resource_type='{self.resource_type}', role_id='{self.role_id}')>"
        )


class TenantAccessModel(Base, TimestampMixin):
    """
    Grant of a role to an account over a whole tenant.

    Authorizes the account on every resource owned by the tenant or by
    any of its descendants, unless a nearer grant decides first.
    """

    __tablename__ = "tenant_accesses"

    account_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        primary_key=True,
    )
    role_id: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<TenantAccessModel(account_id='{self.account_id}', tenant_id='{self.tenant_id}', "
            f"role_id='{self.role_id}')>"
        )
