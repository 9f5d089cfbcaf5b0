from fastapi import APIRouter, Depends, status

from authz.core.exceptions import NotFoundException
from authz.dependencies import (
    get_authorization_service,
    get_current_caller,
    get_store,
    get_tenant_builder,
)
from authz.domain.records import Resource
from authz.repositories.tenant_store import TenantStore
from authz.schemas.resource_schemas import (
    OwnershipChange,
    OwnershipResponse,
    ResourceCreate,
    ResourceResponse,
)
from authz.services.authorization_service import AuthorizationService
from authz.services.tenant_builder import TenantBuilder

router = APIRouter(dependencies=[Depends(get_current_caller)])


@router.post("", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED)
async def create_resource(data: ResourceCreate, builder: TenantBuilder = Depends(get_tenant_builder)):
    """
    Register a resource and its owning tenant.

    - **404** if the owning tenant does not exist or the resource is already owned
    """
    resource = Resource(id=data.id, type=data.type)
    if not await builder.add_resource(resource, data.tenant_id):
        raise NotFoundException(
            f"Cannot assign resource {data.id} to tenant {data.tenant_id}"
        )
    return resource


@router.get("", response_model=list[ResourceResponse])
async def list_resources(store: TenantStore = Depends(get_store)):
    """List all resources"""
    return await store.list_resources()


@router.put("/{resource_id}/owner", response_model=OwnershipResponse)
async def change_owner(
    resource_id: str,
    data: OwnershipChange,
    service: AuthorizationService = Depends(get_authorization_service),
):
    """
    Move a resource to another tenant.

    Existing grants are untouched; tenant grants reaching the resource only
    through its old owner stop applying immediately.
    """
    ownership = await service.change_ownership(resource_id, data.resource_type, data.new_owner_id)
    if ownership is None:
        raise NotFoundException("Resource ownership or new owner tenant not found")
    return ownership
