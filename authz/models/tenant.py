"""Tenant model for the tenant forest."""

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from authz.models.base import Base, TimestampMixin


class TenantModel(Base, TimestampMixin):
    """
    Organizational unit in a forest of tenants.

    Only the parent id is stored. Children are found by querying on
    parent_id, so there is no back-reference to keep in sync when a
    tenant or a resource moves.

    Examples:
    - "saas" - platform root (parent_id NULL)
    - "chain" - restaurant chain under "saas"
    - "branch" - single branch under "chain"
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_id: Mapped[str | None] = mapped_column(
        String(255),
        ForeignKey("tenants.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,  # Child lookups during reporting
    )

    def __repr__(self) -> str:
        return f"<TenantModel(id='{self.id}', name='{self.name}', parent_id={self.parent_id!r})>"
