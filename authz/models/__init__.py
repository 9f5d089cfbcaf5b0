from authz.models.base import Base
from authz.models.tenant import TenantModel
from authz.models.role import RoleModel
from authz.models.resource import ResourceModel, ResourceOwnershipModel
from authz.models.access import ResourceAccessModel, TenantAccessModel
from authz.models.account import AccountModel

__all__ = [
    "Base",
    "TenantModel",
    "RoleModel",
    "ResourceModel",
    "ResourceOwnershipModel",
    "ResourceAccessModel",
    "TenantAccessModel",
    "AccountModel",
]
