"""Repositories for resource-scoped and tenant-scoped access grants."""

from sqlalchemy.orm import Session
from authz.models.access import ResourceAccessModel, TenantAccessModel


class ResourceAccessRepository:
    """Repository for ResourceAccessModel operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_key(
        self, account_id: str, resource_id: str, resource_type: str
    ) -> ResourceAccessModel | None:
        """
        Get the grant for one (account, resource, type) key.

        Returns None if the account holds no direct grant on the resource.
        """
        return (
            self.db.query(ResourceAccessModel)
            .filter(
                ResourceAccessModel.account_id == account_id,
                ResourceAccessModel.resource_id == resource_id,
                ResourceAccessModel.resource_type == resource_type,
            )
            .first()
        )

    def get_by_account(self, account_id: str, resource_type: str) -> list[ResourceAccessModel]:
        """Get an account's grants recorded with exactly resource_type"""
        return (
            self.db.query(ResourceAccessModel)
            .filter(
                ResourceAccessModel.account_id == account_id,
                ResourceAccessModel.resource_type == resource_type,
            )
            .order_by(ResourceAccessModel.created_at, ResourceAccessModel.resource_id)
            .all()
        )

    def get_all(self) -> list[ResourceAccessModel]:
        """Get all resource grants"""
        return self.db.query(ResourceAccessModel).all()

    def create(self, access: ResourceAccessModel) -> ResourceAccessModel:
        """
        Create a new resource grant.

        Raises:
            IntegrityError: If (account_id, resource_id, resource_type) already exists
        """
        self.db.add(access)
        self.db.commit()
        self.db.refresh(access)
        return access

    def delete(self, access: ResourceAccessModel) -> None:
        """Delete a resource grant"""
        self.db.delete(access)
        self.db.commit()


class TenantAccessRepository:
    """Repository for TenantAccessModel operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_key(self, account_id: str, tenant_id: str) -> TenantAccessModel | None:
        """Get the tenant grant of an account, or None"""
        return (
            self.db.query(TenantAccessModel)
            .filter(
                TenantAccessModel.account_id == account_id,
                TenantAccessModel.tenant_id == tenant_id,
            )
            .first()
        )

    def get_all(self) -> list[TenantAccessModel]:
        """Get all tenant grants"""
        return self.db.query(TenantAccessModel).all()

    def create(self, access: TenantAccessModel) -> TenantAccessModel:
        """
        Create a new tenant grant.

        Raises:
            IntegrityError: If (account_id, tenant_id) already exists
        """
        self.db.add(access)
        self.db.commit()
        self.db.refresh(access)
        return access
