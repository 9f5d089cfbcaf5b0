import logging

from authz.core.exceptions import NotFoundException, TenantCycleException
from authz.domain.records import (
    AccountId,
    Permission,
    Resource,
    ResourceAccess,
    ResourceId,
    ResourceOwnership,
    ResourceType,
    RoleId,
    TenantAccess,
    TenantId,
    check_resource_type,
)
from authz.repositories.tenant_store import TenantStore

logger = logging.getLogger(__name__)


class AuthorizationService:
    """
    Decides access requests and administers access grants.

    Resolution order for authorize():
    1. A direct resource grant decides alone, even when it denies.
    2. Otherwise the resource's owning tenant and then each ancestor is
       checked for a tenant grant; the nearest one decides.
    3. An unowned resource, or a walk that reaches the root without a
       grant, is denied.

    Nothing is cached; every call reads the store afresh.
    """

    def __init__(self, store: TenantStore):
        self.store = store

    async def authorize(
        self,
        account_id: AccountId,
        resource_id: ResourceId,
        required_permission: Permission,
        resource_type: ResourceType = None,
    ) -> bool:
        """
        Check whether an account holds a permission on a resource.

        Args:
            account_id: Account requesting access
            resource_id: Resource being accessed
            required_permission: Exact permission token needed
            resource_type: Type of the resource; None is its own key, not a wildcard

        Returns:
            True if the deciding grant's role carries the permission

        Raises:
            TenantCycleException: If the owning tenant's parent chain loops
        """
        check_resource_type(resource_type)
        resource_access = await self.store.get_resource_access(
            account_id, resource_id, resource_type
        )
        if resource_access:
            allowed = resource_access.grants(required_permission)
            logger.debug(
                "authorize %s on %s (%s) for %r: %s by resource grant",
                account_id, resource_id, resource_type, required_permission, allowed,
            )
            return allowed

        ownership = await self.store.get_resource_ownership(resource_id, resource_type)
        if ownership is None:
            logger.debug("authorize %s on %s (%s): denied, resource is unowned",
                         account_id, resource_id, resource_type)
            return False

        visited: set[TenantId] = set()
        tenant_id: TenantId | None = ownership.tenant_id
        while tenant_id is not None:
            if tenant_id in visited:
                raise TenantCycleException(tenant_id)
            visited.add(tenant_id)

            tenant_access = await self.store.get_tenant_access(account_id, tenant_id)
            if tenant_access:
                allowed = tenant_access.grants(required_permission)
                logger.debug(
                    "authorize %s on %s (%s) for %r: %s by tenant grant on %s",
                    account_id, resource_id, resource_type, required_permission, allowed, tenant_id,
                )
                return allowed

            tenant = await self.store.get_tenant(tenant_id)
            tenant_id = tenant.parent_id if tenant else None

        logger.debug("authorize %s on %s (%s): denied, no grant up to the root",
                     account_id, resource_id, resource_type)
        return False

    async def grant_access(
        self,
        account_id: AccountId,
        resource_id: ResourceId,
        role_id: RoleId,
        resource_type: ResourceType = None,
    ) -> ResourceAccess | None:
        """
        Give an account a role on a single resource.

        Returns:
            The new grant, or None if the account already has one on this
            resource (revoke it first to change the role)
        """
        check_resource_type(resource_type)
        access = await self.store.create_resource_access(
            account_id, resource_id, role_id, resource_type
        )
        if access is None:
            logger.warning("Resource grant %s/%s (%s) already exists",
                           account_id, resource_id, resource_type)
        else:
            logger.info("Granted role %s to %s on resource %s (%s)",
                        role_id, account_id, resource_id, resource_type)
        return access

    async def grant_tenant_access(
        self, account_id: AccountId, tenant_id: TenantId, role_id: RoleId
    ) -> TenantAccess | None:
        """
        Give an account a role on a tenant and everything below it.

        Returns:
            The new grant, or None if the account already has one on this tenant

        Raises:
            NotFoundException: If the tenant does not exist
        """
        if await self.store.get_tenant(tenant_id) is None:
            raise NotFoundException(f"Tenant {tenant_id} not found")
        access = await self.store.create_tenant_access(account_id, tenant_id, role_id)
        if access is None:
            logger.warning("Tenant grant %s/%s already exists", account_id, tenant_id)
        else:
            logger.info("Granted role %s to %s on tenant %s", role_id, account_id, tenant_id)
        return access

    async def revoke_access(
        self,
        account_id: AccountId,
        resource_id: ResourceId,
        resource_type: ResourceType = None,
    ) -> ResourceAccess | None:
        """Remove a resource grant; returns the removed grant or None if there was none"""
        check_resource_type(resource_type)
        removed = await self.store.delete_resource_access(account_id, resource_id, resource_type)
        if removed:
            logger.info("Revoked resource grant %s/%s (%s)", account_id, resource_id, resource_type)
        return removed

    async def change_ownership(
        self, resource_id: ResourceId, resource_type: ResourceType, new_owner_id: TenantId
    ) -> ResourceOwnership | None:
        """
        Move a resource to another tenant.

        Existing grants are left as they are. Tenant grants that only
        reached the resource through its old owner stop applying at once.

        Returns:
            Updated ownership, or None if the resource has no owner yet or
            the new owner does not exist
        """
        check_resource_type(resource_type)
        ownership = await self.store.change_ownership(resource_id, resource_type, new_owner_id)
        if ownership is None:
            logger.warning("Could not move resource %s (%s) to tenant %s",
                           resource_id, resource_type, new_owner_id)
        else:
            logger.info("Moved resource %s (%s) to tenant %s", resource_id, resource_type, new_owner_id)
        return ownership

    async def get_resources_of(
        self, account_id: AccountId, resource_type: ResourceType = None
    ) -> list[Resource]:
        """
        List resources the account has a direct grant on.

        Tenant grants are not expanded, so this is not the set of resources
        authorize() would allow.
        """
        check_resource_type(resource_type)
        return await self.store.get_resources_of(account_id, resource_type)
