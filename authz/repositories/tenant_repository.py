"""Repository for TenantModel operations."""

from sqlalchemy.orm import Session
from authz.models.tenant import TenantModel


class TenantRepository:
    """Repository for TenantModel operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, tenant_id: str) -> TenantModel | None:
        """
        Get tenant by ID.

        Args:
            tenant_id: Tenant ID

        Returns:
            TenantModel object or None if not found
        """
        return self.db.query(TenantModel).filter(TenantModel.id == tenant_id).first()

    def get_all(self) -> list[TenantModel]:
        """
        Get all tenants.

        Returns:
            List of all TenantModel objects
        """
        return self.db.query(TenantModel).order_by(TenantModel.id).all()

    def create(self, tenant: TenantModel) -> TenantModel:
        """
        Create a new tenant.

        Args:
            tenant: TenantModel object to create

        Returns:
            Created TenantModel object

        Raises:
            IntegrityError: If the tenant id already exists
        """
        self.db.add(tenant)
        self.db.commit()
        self.db.refresh(tenant)
        return tenant
