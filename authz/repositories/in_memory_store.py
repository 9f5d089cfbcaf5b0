"""Dictionary-backed tenant store for tests and embedded use."""

from dataclasses import replace

from authz.domain.records import (
    Account,
    AccountId,
    Resource,
    ResourceAccess,
    ResourceId,
    ResourceOwnership,
    ResourceType,
    Role,
    RoleId,
    Tenant,
    TenantAccess,
    TenantId,
)
from authz.repositories.tenant_store import TenantStore


class InMemoryTenantStore(TenantStore):
    """
    Tenant store keeping every entity in process-local dicts.

    Records are copied on the way in and on the way out, so callers can
    never mutate stored state by holding on to a returned object.
    """

    def __init__(self):
        self.tenants: dict[TenantId, Tenant] = {}
        self.roles: dict[RoleId, Role] = {}
        self.resources: dict[tuple[ResourceId, ResourceType], Resource] = {}
        self.resource_ownerships: dict[tuple[ResourceId, ResourceType], ResourceOwnership] = {}
        self.resource_accesses: dict[tuple[AccountId, ResourceId, ResourceType], ResourceAccess] = {}
        self.tenant_accesses: dict[tuple[AccountId, TenantId], TenantAccess] = {}
        self.accounts: dict[AccountId, Account] = {}

    def _role_copy(self, role_id: RoleId) -> Role | None:
        role = self.roles.get(role_id)
        if role is None:
            return None
        return replace(role, permissions=list(role.permissions) if role.permissions else role.permissions)

    # Tenants

    async def create_tenant(self, tenant: Tenant) -> Tenant | None:
        if tenant.id in self.tenants:
            return None
        self.tenants[tenant.id] = replace(tenant)
        return replace(tenant)

    async def get_tenant(self, tenant_id: TenantId) -> Tenant | None:
        tenant = self.tenants.get(tenant_id)
        return replace(tenant) if tenant else None

    async def list_tenants(self) -> list[Tenant]:
        return [replace(tenant) for tenant in self.tenants.values()]

    # Roles

    async def create_role(self, role: Role) -> Role | None:
        if role.id in self.roles:
            return None
        self.roles[role.id] = replace(
            role, permissions=list(role.permissions) if role.permissions is not None else None
        )
        return self._role_copy(role.id)

    async def get_role(self, role_id: RoleId) -> Role | None:
        return self._role_copy(role_id)

    async def list_roles(self) -> list[Role]:
        return [self._role_copy(role_id) for role_id in self.roles]

    # Resources

    async def create_resource(self, resource: Resource) -> Resource | None:
        key = (resource.id, resource.type)
        if key in self.resources:
            return None
        self.resources[key] = replace(resource)
        return replace(resource)

    async def list_resources(self) -> list[Resource]:
        return [replace(resource) for resource in self.resources.values()]

    # Resource ownership

    async def create_resource_ownership(
        self, ownership: ResourceOwnership
    ) -> ResourceOwnership | None:
        key = (ownership.resource_id, ownership.resource_type)
        if key in self.resource_ownerships:
            return None
        self.resource_ownerships[key] = replace(ownership)
        return replace(ownership)

    async def get_resource_ownership(
        self, resource_id: ResourceId, resource_type: ResourceType
    ) -> ResourceOwnership | None:
        ownership = self.resource_ownerships.get((resource_id, resource_type))
        return replace(ownership) if ownership else None

    async def change_ownership(
        self, resource_id: ResourceId, resource_type: ResourceType, new_owner_id: TenantId
    ) -> ResourceOwnership | None:
        key = (resource_id, resource_type)
        ownership = self.resource_ownerships.get(key)
        if ownership is None or new_owner_id not in self.tenants:
            return None
        self.resource_ownerships[key] = replace(ownership, tenant_id=new_owner_id)
        return replace(self.resource_ownerships[key])

    async def list_resource_ownerships(self) -> list[ResourceOwnership]:
        return [replace(ownership) for ownership in self.resource_ownerships.values()]

    # Resource access

    def _populated_resource_access(self, access: ResourceAccess) -> ResourceAccess:
        resource = self.resources.get((access.resource_id, access.resource_type))
        return replace(
            access,
            role=self._role_copy(access.role_id),
            resource=replace(resource) if resource else Resource(access.resource_id, access.resource_type),
        )

    async def create_resource_access(
        self,
        account_id: AccountId,
        resource_id: ResourceId,
        role_id: RoleId,
        resource_type: ResourceType = None,
    ) -> ResourceAccess | None:
        key = (account_id, resource_id, resource_type)
        if key in self.resource_accesses:
            return None
        access = ResourceAccess(
            account_id=account_id,
            resource_id=resource_id,
            role_id=role_id,
            resource_type=resource_type,
        )
        self.resource_accesses[key] = access
        return self._populated_resource_access(access)

    async def get_resource_access(
        self, account_id: AccountId, resource_id: ResourceId, resource_type: ResourceType = None
    ) -> ResourceAccess | None:
        access = self.resource_accesses.get((account_id, resource_id, resource_type))
        return self._populated_resource_access(access) if access else None

    async def delete_resource_access(
        self, account_id: AccountId, resource_id: ResourceId, resource_type: ResourceType = None
    ) -> ResourceAccess | None:
        access = self.resource_accesses.pop((account_id, resource_id, resource_type), None)
        return self._populated_resource_access(access) if access else None

    async def list_resource_accesses(self) -> list[ResourceAccess]:
        return [self._populated_resource_access(access) for access in self.resource_accesses.values()]

    async def get_resources_of(
        self, account_id: AccountId, resource_type: ResourceType = None
    ) -> list[Resource]:
        return [
            self._populated_resource_access(access).resource
            for access in self.resource_accesses.values()
            if access.account_id == account_id and access.resource_type == resource_type
        ]

    # Tenant access

    async def create_tenant_access(
        self, account_id: AccountId, tenant_id: TenantId, role_id: RoleId
    ) -> TenantAccess | None:
        key = (account_id, tenant_id)
        if key in self.tenant_accesses:
            return None
        self.tenant_accesses[key] = TenantAccess(
            account_id=account_id, tenant_id=tenant_id, role_id=role_id
        )
        return replace(self.tenant_accesses[key], role=self._role_copy(role_id))

    async def get_tenant_access(
        self, account_id: AccountId, tenant_id: TenantId
    ) -> TenantAccess | None:
        access = self.tenant_accesses.get((account_id, tenant_id))
        if access is None:
            return None
        return replace(access, role=self._role_copy(access.role_id))

    async def list_tenant_accesses(self) -> list[TenantAccess]:
        return [
            replace(access, role=self._role_copy(access.role_id))
            for access in self.tenant_accesses.values()
        ]

    # Accounts

    async def create_account(self, account: Account) -> Account | None:
        if account.id in self.accounts:
            return None
        self.accounts[account.id] = replace(account)
        return replace(account)

    async def get_account(self, account_id: AccountId) -> Account | None:
        account = self.accounts.get(account_id)
        return replace(account) if account else None

    async def list_accounts(self) -> list[Account]:
        return [replace(account) for account in self.accounts.values()]
