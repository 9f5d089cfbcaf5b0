from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from authz.models.base import Base, TimestampMixin


class AccountModel(Base, TimestampMixin):
    """
    Identity that access grants are keyed on.

    Name, email and organization are informational; authorization only
    uses the id.
    """

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    organization: Mapped[str | None] = mapped_column(String(255), nullable=True)
