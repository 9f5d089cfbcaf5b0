"""Storage contract the authorization core depends on."""

from abc import ABC, abstractmethod

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


class TenantStore(ABC):
    """
    Persistence capability required by the builder and the authorization service.

    Every getter returns None on a miss and every create returns None when
    the key is already taken; neither case raises. Creates do not check
    that referenced tenants or roles exist; callers that need a valid
    reference check it first. Anything raised by an implementation, such
    as a foreign key a database enforces, is a storage fault and
    propagates to the caller.
    """

    # Tenants

    @abstractmethod
    async def create_tenant(self, tenant: Tenant) -> Tenant | None:
        ...

    @abstractmethod
    async def get_tenant(self, tenant_id: TenantId) -> Tenant | None:
        ...

    @abstractmethod
    async def list_tenants(self) -> list[Tenant]:
        ...

    # Roles

    @abstractmethod
    async def create_role(self, role: Role) -> Role | None:
        ...

    @abstractmethod
    async def get_role(self, role_id: RoleId) -> Role | None:
        ...

    @abstractmethod
    async def list_roles(self) -> list[Role]:
        ...

    # Resources

    @abstractmethod
    async def create_resource(self, resource: Resource) -> Resource | None:
        ...

    @abstractmethod
    async def list_resources(self) -> list[Resource]:
        ...

    # Resource ownership

    @abstractmethod
    async def create_resource_ownership(
        self, ownership: ResourceOwnership
    ) -> ResourceOwnership | None:
        ...

    @abstractmethod
    async def get_resource_ownership(
        self, resource_id: ResourceId, resource_type: ResourceType
    ) -> ResourceOwnership | None:
        ...

    @abstractmethod
    async def change_ownership(
        self, resource_id: ResourceId, resource_type: ResourceType, new_owner_id: TenantId
    ) -> ResourceOwnership | None:
        """
        Point an existing ownership record at another tenant.

        Returns None when the ownership record or the new owner is missing.
        """

    @abstractmethod
    async def list_resource_ownerships(self) -> list[ResourceOwnership]:
        ...

    # Resource access

    @abstractmethod
    async def create_resource_access(
        self,
        account_id: AccountId,
        resource_id: ResourceId,
        role_id: RoleId,
        resource_type: ResourceType = None,
    ) -> ResourceAccess | None:
        ...

    @abstractmethod
    async def get_resource_access(
        self, account_id: AccountId, resource_id: ResourceId, resource_type: ResourceType = None
    ) -> ResourceAccess | None:
        """Get a resource grant with its role populated"""

    @abstractmethod
    async def delete_resource_access(
        self, account_id: AccountId, resource_id: ResourceId, resource_type: ResourceType = None
    ) -> ResourceAccess | None:
        """Delete a resource grant, returning the removed record or None if absent"""

    @abstractmethod
    async def list_resource_accesses(self) -> list[ResourceAccess]:
        ...

    @abstractmethod
    async def get_resources_of(
        self, account_id: AccountId, resource_type: ResourceType = None
    ) -> list[Resource]:
        """
        Resources the account holds a direct grant on.

        Only grants recorded with exactly resource_type match; None matches
        untyped grants only.
        """

    # Tenant access

    @abstractmethod
    async def create_tenant_access(
        self, account_id: AccountId, tenant_id: TenantId, role_id: RoleId
    ) -> TenantAccess | None:
        ...

    @abstractmethod
    async def get_tenant_access(
        self, account_id: AccountId, tenant_id: TenantId
    ) -> TenantAccess | None:
        """Get a tenant grant with its role populated"""

    @abstractmethod
    async def list_tenant_accesses(self) -> list[TenantAccess]:
        ...

    # Accounts

    @abstractmethod
    async def create_account(self, account: Account) -> Account | None:
        ...

    @abstractmethod
    async def get_account(self, account_id: AccountId) -> Account | None:
        ...

    @abstractmethod
    async def list_accounts(self) -> list[Account]:
        ...
