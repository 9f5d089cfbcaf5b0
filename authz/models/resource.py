"""Resource and resource ownership models."""

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from authz.models.base import Base, TimestampMixin

# Stored in place of a missing resource type so it can take part in keys
NO_RESOURCE_TYPE = ""


class ResourceModel(Base, TimestampMixin):
    """Governed object, unique per (id, type)"""

    __tablename__ = "resources"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    type: Mapped[str] = mapped_column(
        String(100), primary_key=True, default=NO_RESOURCE_TYPE
    )

    def __repr__(self) -> str:
        return f"<ResourceModel(id='{self.id}', type='{self.type}')>"


class ResourceOwnershipModel(Base, TimestampMixin):
    """
    Binds one resource to its owning tenant.

    Constraints:
    - Primary key (resource_id, resource_type) - at most one owner per resource
    - tenant_id must reference an existing tenant
    """

    __tablename__ = "resource_ownerships"

    resource_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    resource_type: Mapped[str] = mapped_column(
        String(100), primary_key=True, default=NO_RESOURCE_TYPE
    )
    tenant_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<ResourceOwnershipModel(resource_id='{self.resource_id}', "
            f"resource_type='{self.resource_type}', tenant_id='{self.tenant_id}')>"
        )
