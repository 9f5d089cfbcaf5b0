"""Repositories for resources and their ownership records."""

from sqlalchemy.orm import Session
from authz.models.resource import ResourceModel, ResourceOwnershipModel


class ResourceRepository:
    """Repository for ResourceModel operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_key(self, resource_id: str, resource_type: str) -> ResourceModel | None:
        """Get resource by (id, type); use NO_RESOURCE_TYPE for untyped resources"""
        return (
            self.db.query(ResourceModel)
            .filter(ResourceModel.id == resource_id, ResourceModel.type == resource_type)
            .first()
        )

    def get_all(self) -> list[ResourceModel]:
        """Get all resources"""
        return self.db.query(ResourceModel).order_by(ResourceModel.id, ResourceModel.type).all()

    def create(self, resource: ResourceModel) -> ResourceModel:
        """Create new resource"""
        self.db.add(resource)
        self.db.commit()
        self.db.refresh(resource)
        return resource


class ResourceOwnershipRepository:
    """Repository for ResourceOwnershipModel operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_resource(
        self, resource_id: str, resource_type: str
    ) -> ResourceOwnershipModel | None:
        """
        Get the ownership record of a resource.

        Args:
            resource_id: Resource ID
            resource_type: Stored resource type (NO_RESOURCE_TYPE when untyped)

        Returns:
            ResourceOwnershipModel or None if the resource is unowned
        """
        return (
            self.db.query(ResourceOwnershipModel)
            .filter(
                ResourceOwnershipModel.resource_id == resource_id,
                ResourceOwnershipModel.resource_type == resource_type,
            )
            .first()
        )

    def get_all(self) -> list[ResourceOwnershipModel]:
        """Get all ownership records"""
        return (
            self.db.query(ResourceOwnershipModel)
            .order_by(ResourceOwnershipModel.resource_id, ResourceOwnershipModel.resource_type)
            .all()
        )

    def create(self, ownership: ResourceOwnershipModel) -> ResourceOwnershipModel:
        """Create new ownership record"""
        self.db.add(ownership)
        self.db.commit()
        self.db.refresh(ownership)
        return ownership

    def update_owner(
        self, ownership: ResourceOwnershipModel, new_owner_id: str
    ) -> ResourceOwnershipModel:
        """
        Move a resource to another tenant.

        Args:
            ownership: Ownership record to update
            new_owner_id: ID of the new owning tenant

        Returns:
            Updated ResourceOwnershipModel
        """
        ownership.tenant_id = new_owner_id
        self.db.commit()
        self.db.refresh(ownership)
        return ownership
