import logging

from authz.core.exceptions import (
    NotFoundException,
    TenantCycleException,
    TenantCycleOrDuplicateException,
)
from authz.domain.records import (
    Account,
    Resource,
    ResourceOwnership,
    Role,
    Tenant,
    TenantId,
    TenantNode,
    check_resource_type,
)
from authz.repositories.tenant_store import TenantStore

logger = logging.getLogger(__name__)


class TenantBuilder:
    """Populates a tenant store: tenant forest, roles, accounts and owned resources"""

    def __init__(self, store: TenantStore):
        self.store = store

    async def create_tenant_tree(self, root: TenantNode) -> None:
        """
        Insert a tenant and all of its declared descendants, depth first.

        Args:
            root: Top of the subtree; stored as a root tenant (no parent)

        Raises:
            TenantCycleOrDuplicateException: If any tenant id in the subtree
                is already stored. Tenants inserted before the failing node
                are kept; nothing below it is inserted.
        """
        await self._add_subtree(root, parent_id=None)

    async def _add_subtree(self, node: TenantNode, parent_id: TenantId | None) -> None:
        if await self.store.get_tenant(node.id):
            logger.warning("Tenant %s already stored, aborting subtree", node.id)
            raise TenantCycleOrDuplicateException(node.id)

        if await self.store.create_tenant(node.to_tenant(parent_id)) is None:
            # Lost a race against a concurrent insert of the same id
            raise TenantCycleOrDuplicateException(node.id)
        logger.info("Created tenant %s (parent=%s)", node.id, parent_id)

        for child in node.children:
            await self._add_subtree(child, parent_id=node.id)

    async def add_tenant(self, tenant: Tenant) -> Tenant | None:
        """
        Create a single tenant under an existing parent (or as a new root).

        Returns:
            The stored tenant, or None if the id is taken or the parent is missing
        """
        if tenant.parent_id is not None and await self.store.get_tenant(tenant.parent_id) is None:
            logger.warning("Parent %s of tenant %s does not exist", tenant.parent_id, tenant.id)
            return None
        created = await self.store.create_tenant(tenant)
        if created:
            logger.info("Created tenant %s (parent=%s)", tenant.id, tenant.parent_id)
        return created

    async def add_role(self, role: Role) -> Role | None:
        return await self.store.create_role(role)

    async def add_account(self, account: Account) -> Account | None:
        return await self.store.create_account(account)

    async def add_resource(self, resource: Resource, tenant_id: TenantId) -> bool:
        """
        Register a resource and make tenant_id its owner.

        Returns:
            False if the tenant does not exist or the resource already has
            an owner, True once both records are stored
        """
        check_resource_type(resource.type)
        if await self.store.get_tenant(tenant_id) is None:
            logger.warning("Cannot add resource %s: tenant %s not found", resource.id, tenant_id)
            return False

        await self.store.create_resource(resource)
        ownership = await self.store.create_resource_ownership(
            ResourceOwnership(
                resource_id=resource.id,
                resource_type=resource.type,
                tenant_id=tenant_id,
            )
        )
        if ownership is None:
            logger.warning("Resource %s (%s) already has an owner", resource.id, resource.type)
            return False

        logger.info("Added resource %s (%s) owned by %s", resource.id, resource.type, tenant_id)
        return True

    async def verify_hierarchy(self) -> None:
        """
        Check that every tenant's parent chain reaches a root.

        Each walk is bounded by the number of tenants, so a cycle
        introduced out of band is detected rather than looped on.

        Raises:
            TenantCycleException: If a parent chain loops
            NotFoundException: If a tenant names a parent that does not exist
        """
        tenants = {tenant.id: tenant for tenant in await self.store.list_tenants()}
        for tenant in tenants.values():
            current = tenant
            for _ in range(len(tenants)):
                if current.parent_id is None:
                    break
                parent = tenants.get(current.parent_id)
                if parent is None:
                    raise NotFoundException(
                        f"Tenant {current.id} references missing parent {current.parent_id}"
                    )
                current = parent
            else:
                raise TenantCycleException(tenant.id)
