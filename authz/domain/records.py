"""Store-independent records exchanged across the tenant store contract."""

from dataclasses import dataclass, field

from authz.core.exceptions import ValidationException

TenantId = str
RoleId = str
AccountId = str
ResourceId = str
Permission = str
# None marks an untyped resource; the empty string is not a valid type
ResourceType = str | None


def check_resource_type(resource_type: ResourceType) -> ResourceType:
    """Reject the empty string, which storage cannot tell apart from an untyped resource"""
    if resource_type == "":
        raise ValidationException("Resource type must not be empty; omit it for untyped resources")
    return resource_type


@dataclass
class Tenant:
    """
    Node of the tenant forest.

    Only the parent id is kept; child lists are rebuilt on demand from the
    flat set of tenants so they never go stale after a hierarchy change.
    """

    id: TenantId
    name: str
    parent_id: TenantId | None = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


@dataclass
class TenantNode:
    """
    Nested tenant description consumed by the tree builder.

    Example:
        TenantNode("saas", "SaaS Platform", children=[
            TenantNode("chain", "Restaurant Chain HQ"),
        ])
    """

    id: TenantId
    name: str
    children: list["TenantNode"] = field(default_factory=list)

    def to_tenant(self, parent_id: TenantId | None) -> Tenant:
        return Tenant(id=self.id, name=self.name, parent_id=parent_id)


@dataclass
class Role:
    """Named bundle of opaque permission tokens"""

    id: RoleId
    name: str | None = None
    description: str | None = None
    permissions: list[Permission] | None = None

    def grants(self, permission: Permission) -> bool:
        """
        Check whether this role carries a permission.

        Matching is exact and case-sensitive. A role without permissions
        grants nothing, including the empty permission.
        """
        return permission in (self.permissions or [])


@dataclass
class Resource:
    id: ResourceId
    type: ResourceType = None


@dataclass
class ResourceOwnership:
    resource_id: ResourceId
    resource_type: ResourceType
    tenant_id: TenantId


@dataclass
class ResourceAccess:
    """Direct grant of a role to an account over one resource"""

    account_id: AccountId
    resource_id: ResourceId
    role_id: RoleId
    resource_type: ResourceType = None
    role: Role | None = None
    resource: Resource | None = None

    def grants(self, permission: Permission) -> bool:
        return self.role is not None and self.role.grants(permission)


@dataclass
class TenantAccess:
    """Grant of a role to an account over a whole tenant and its descendants"""

    account_id: AccountId
    tenant_id: TenantId
    role_id: RoleId
    role: Role | None = None

    def grants(self, permission: Permission) -> bool:
        return self.role is not None and self.role.grants(permission)


@dataclass
class Account:
    """Identity attributes, carried for reporting only"""

    id: AccountId
    name: str | None = None
    email: str | None = None
    organization: str | None = None
