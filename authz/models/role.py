"""Role model: a named bundle of permission tokens."""

from sqlalchemy import String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from authz.models.base import Base, TimestampMixin


class RoleModel(Base, TimestampMixin):
    """
    Named set of permissions granted through resource or tenant access.

    Permissions are opaque, case-sensitive strings stored as a JSON array.
    NULL or an empty array means the role grants nothing.

    Example:
    - "server" -> ["take-orders", "serve-food"]
    - "platform-admin" -> ["platform-admin", "manage-all-tenants"]
    """

    __tablename__ = "roles"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    permissions: Mapped[list[str] | None] = mapped_column(JSON, nullable=True, default=list)

    def __repr__(self) -> str:
        return f"<RoleModel(id='{self.id}', permissions={self.permissions})>"
