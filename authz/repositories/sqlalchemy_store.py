"""Tenant store backed by the SQLAlchemy ORM repositories."""

import logging
from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

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
from authz.models.access import ResourceAccessModel, TenantAccessModel
from authz.models.account import AccountModel
from authz.models.resource import NO_RESOURCE_TYPE, ResourceModel, ResourceOwnershipModel
from authz.models.role import RoleModel
from authz.models.tenant import TenantModel
from authz.repositories.access_repository import ResourceAccessRepository, TenantAccessRepository
from authz.repositories.account_repository import AccountRepository
from authz.repositories.resource_repository import ResourceOwnershipRepository, ResourceRepository
from authz.repositories.role_repository import RoleRepository
from authz.repositories.tenant_repository import TenantRepository
from authz.repositories.tenant_store import TenantStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


def _stored_type(resource_type: ResourceType) -> str:
    return NO_RESOURCE_TYPE if resource_type is None else resource_type


def _domain_type(stored: str) -> ResourceType:
    return None if stored == NO_RESOURCE_TYPE else stored


def _to_tenant(model: TenantModel) -> Tenant:
    return Tenant(id=model.id, name=model.name, parent_id=model.parent_id)


def _to_role(model: RoleModel) -> Role:
    return Role(
        id=model.id,
        name=model.name,
        description=model.description,
        permissions=list(model.permissions) if model.permissions is not None else None,
    )


def _to_resource(model: ResourceModel) -> Resource:
    return Resource(id=model.id, type=_domain_type(model.type))


def _to_ownership(model: ResourceOwnershipModel) -> ResourceOwnership:
    return ResourceOwnership(
        resource_id=model.resource_id,
        resource_type=_domain_type(model.resource_type),
        tenant_id=model.tenant_id,
    )


def _to_account(model: AccountModel) -> Account:
    return Account(
        id=model.id, name=model.name, email=model.email, organization=model.organization
    )


class SqlAlchemyTenantStore(TenantStore):
    """
    Durable tenant store over a SQLAlchemy session.

    One store wraps one session, matching the session-per-request pattern
    of get_db. Missing resource types are persisted as NO_RESOURCE_TYPE so
    they can be part of composite primary keys.
    """

    def __init__(self, db: Session):
        self.db = db
        self.tenant_repo = TenantRepository(db)
        self.role_repo = RoleRepository(db)
        self.resource_repo = ResourceRepository(db)
        self.ownership_repo = ResourceOwnershipRepository(db)
        self.resource_access_repo = ResourceAccessRepository(db)
        self.tenant_access_repo = TenantAccessRepository(db)
        self.account_repo = AccountRepository(db)

    def _create_unique(
        self,
        create: Callable[[ModelT], ModelT],
        model: ModelT,
        exists: Callable[[], object],
    ) -> ModelT | None:
        """
        Insert a row, returning None instead of raising on a key collision.

        Callers check for an existing row first; this only covers a
        concurrent insert of the same key. An IntegrityError that is not
        explained by a now-existing key (a foreign key violation, for
        example) is re-raised.
        """
        try:
            return create(model)
        except IntegrityError:
            self.db.rollback()
            if not exists():
                raise
            logger.warning("Rejected duplicate %r", model)
            return None

    def _role(self, role_id: RoleId) -> Role | None:
        model = self.role_repo.get_by_id(role_id)
        return _to_role(model) if model else None

    def _to_resource_access(self, model: ResourceAccessModel) -> ResourceAccess:
        resource = self.resource_repo.get_by_key(model.resource_id, model.resource_type)
        resource_type = _domain_type(model.resource_type)
        return ResourceAccess(
            account_id=model.account_id,
            resource_id=model.resource_id,
            role_id=model.role_id,
            resource_type=resource_type,
            role=self._role(model.role_id),
            resource=_to_resource(resource) if resource else Resource(model.resource_id, resource_type),
        )

    def _to_tenant_access(self, model: TenantAccessModel) -> TenantAccess:
        return TenantAccess(
            account_id=model.account_id,
            tenant_id=model.tenant_id,
            role_id=model.role_id,
            role=self._role(model.role_id),
        )

    # Tenants

    async def create_tenant(self, tenant: Tenant) -> Tenant | None:
        if self.tenant_repo.get_by_id(tenant.id):
            return None
        model = self._create_unique(
            self.tenant_repo.create,
            TenantModel(id=tenant.id, name=tenant.name, parent_id=tenant.parent_id),
            lambda: self.tenant_repo.get_by_id(tenant.id),
        )
        return _to_tenant(model) if model else None

    async def get_tenant(self, tenant_id: TenantId) -> Tenant | None:
        model = self.tenant_repo.get_by_id(tenant_id)
        return _to_tenant(model) if model else None

    async def list_tenants(self) -> list[Tenant]:
        return [_to_tenant(model) for model in self.tenant_repo.get_all()]

    # Roles

    async def create_role(self, role: Role) -> Role | None:
        if self.role_repo.get_by_id(role.id):
            return None
        model = self._create_unique(
            self.role_repo.create,
            RoleModel(
                id=role.id,
                name=role.name,
                description=role.description,
                permissions=list(role.permissions) if role.permissions is not None else None,
            ),
            lambda: self.role_repo.get_by_id(role.id),
        )
        return _to_role(model) if model else None

    async def get_role(self, role_id: RoleId) -> Role | None:
        return self._role(role_id)

    async def list_roles(self) -> list[Role]:
        return [_to_role(model) for model in self.role_repo.get_all()]

    # Resources

    async def create_resource(self, resource: Resource) -> Resource | None:
        stored_type = _stored_type(resource.type)
        if self.resource_repo.get_by_key(resource.id, stored_type):
            return None
        model = self._create_unique(
            self.resource_repo.create,
            ResourceModel(id=resource.id, type=stored_type),
            lambda: self.resource_repo.get_by_key(resource.id, stored_type),
        )
        return _to_resource(model) if model else None

    async def list_resources(self) -> list[Resource]:
        return [_to_resource(model) for model in self.resource_repo.get_all()]

    # Resource ownership

    async def create_resource_ownership(
        self, ownership: ResourceOwnership
    ) -> ResourceOwnership | None:
        stored_type = _stored_type(ownership.resource_type)
        if self.ownership_repo.get_by_resource(ownership.resource_id, stored_type):
            return None
        model = self._create_unique(
            self.ownership_repo.create,
            ResourceOwnershipModel(
                resource_id=ownership.resource_id,
                resource_type=stored_type,
                tenant_id=ownership.tenant_id,
            ),
            lambda: self.ownership_repo.get_by_resource(ownership.resource_id, stored_type),
        )
        return _to_ownership(model) if model else None

    async def get_resource_ownership(
        self, resource_id: ResourceId, resource_type: ResourceType
    ) -> ResourceOwnership | None:
        model = self.ownership_repo.get_by_resource(resource_id, _stored_type(resource_type))
        return _to_ownership(model) if model else None

    async def change_ownership(
        self, resource_id: ResourceId, resource_type: ResourceType, new_owner_id: TenantId
    ) -> ResourceOwnership | None:
        model = self.ownership_repo.get_by_resource(resource_id, _stored_type(resource_type))
        if model is None or self.tenant_repo.get_by_id(new_owner_id) is None:
            return None
        return _to_ownership(self.ownership_repo.update_owner(model, new_owner_id))

    async def list_resource_ownerships(self) -> list[ResourceOwnership]:
        return [_to_ownership(model) for model in self.ownership_repo.get_all()]

    # Resource access

    async def create_resource_access(
        self,
        account_id: AccountId,
        resource_id: ResourceId,
        role_id: RoleId,
        resource_type: ResourceType = None,
    ) -> ResourceAccess | None:
        stored_type = _stored_type(resource_type)
        if self.resource_access_repo.get_by_key(account_id, resource_id, stored_type):
            return None
        model = self._create_unique(
            self.resource_access_repo.create,
            ResourceAccessModel(
                account_id=account_id,
                resource_id=resource_id,
                resource_type=stored_type,
                role_id=role_id,
            ),
            lambda: self.resource_access_repo.get_by_key(account_id, resource_id, stored_type),
        )
        return self._to_resource_access(model) if model else None

    async def get_resource_access(
        self, account_id: AccountId, resource_id: ResourceId, resource_type: ResourceType = None
    ) -> ResourceAccess | None:
        model = self.resource_access_repo.get_by_key(
            account_id, resource_id, _stored_type(resource_type)
        )
        return self._to_resource_access(model) if model else None

    async def delete_resource_access(
        self, account_id: AccountId, resource_id: ResourceId, resource_type: ResourceType = None
    ) -> ResourceAccess | None:
        model = self.resource_access_repo.get_by_key(
            account_id, resource_id, _stored_type(resource_type)
        )
        if model is None:
            return None
        removed = self._to_resource_access(model)
        self.resource_access_repo.delete(model)
        return removed

    async def list_resource_accesses(self) -> list[ResourceAccess]:
        return [self._to_resource_access(model) for model in self.resource_access_repo.get_all()]

    async def get_resources_of(
        self, account_id: AccountId, resource_type: ResourceType = None
    ) -> list[Resource]:
        models = self.resource_access_repo.get_by_account(account_id, _stored_type(resource_type))
        return [self._to_resource_access(model).resource for model in models]

    # Tenant access

    async def create_tenant_access(
        self, account_id: AccountId, tenant_id: TenantId, role_id: RoleId
    ) -> TenantAccess | None:
        if self.tenant_access_repo.get_by_key(account_id, tenant_id):
            return None
        model = self._create_unique(
            self.tenant_access_repo.create,
            TenantAccessModel(account_id=account_id, tenant_id=tenant_id, role_id=role_id),
            lambda: self.tenant_access_repo.get_by_key(account_id, tenant_id),
        )
        return self._to_tenant_access(model) if model else None

    async def get_tenant_access(
        self, account_id: AccountId, tenant_id: TenantId
    ) -> TenantAccess | None:
        model = self.tenant_access_repo.get_by_key(account_id, tenant_id)
        return self._to_tenant_access(model) if model else None

    async def list_tenant_accesses(self) -> list[TenantAccess]:
        return [self._to_tenant_access(model) for model in self.tenant_access_repo.get_all()]

    # Accounts

    async def create_account(self, account: Account) -> Account | None:
        if self.account_repo.get_by_id(account.id):
            return None
        model = self._create_unique(
            self.account_repo.create,
            AccountModel(
                id=account.id,
                name=account.name,
                email=account.email,
                organization=account.organization,
            ),
            lambda: self.account_repo.get_by_id(account.id),
        )
        return _to_account(model) if model else None

    async def get_account(self, account_id: AccountId) -> Account | None:
        model = self.account_repo.get_by_id(account_id)
        return _to_account(model) if model else None

    async def list_accounts(self) -> list[Account]:
        return [_to_account(model) for model in self.account_repo.get_all()]
