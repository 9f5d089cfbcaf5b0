from fastapi import APIRouter, Depends, status

from authz.core.exceptions import ConflictException
from authz.dependencies import get_authorization_service, get_current_caller
from authz.schemas.access_schemas import (
    AuthorizeRequest,
    AuthorizeResponse,
    ResourceGrantRequest,
    ResourceGrantResponse,
    ResourceRevokeRequest,
    RevokeResponse,
    TenantGrantRequest,
    TenantGrantResponse,
)
from authz.schemas.resource_schemas import ResourceResponse
from authz.services.authorization_service import AuthorizationService

router = APIRouter(dependencies=[Depends(get_current_caller)])


@router.post("/check", response_model=AuthorizeResponse)
async def check_access(
    data: AuthorizeRequest,
    service: AuthorizationService = Depends(get_authorization_service),
):
    """
    Decide whether an account holds a permission on a resource.

    Always 200; a denial is `{"allowed": false}`, never an error.
    """
    allowed = await service.authorize(
        data.account_id, data.resource_id, data.permission, data.resource_type
    )
    return AuthorizeResponse(allowed=allowed)


@router.post(
    "/resources",
    response_model=ResourceGrantResponse,
    status_code=status.HTTP_201_CREATED,
)
async def grant_resource_access(
    data: ResourceGrantRequest,
    service: AuthorizationService = Depends(get_authorization_service),
):
    """
    Grant a role on a single resource.

    - **409** if the account already has a grant on this resource; revoke it first
    """
    access = await service.grant_access(
        data.account_id, data.resource_id, data.role_id, data.resource_type
    )
    if access is None:
        raise ConflictException("Resource grant already exists")
    return access


@router.delete("/resources", response_model=RevokeResponse)
async def revoke_resource_access(
    data: ResourceRevokeRequest,
    service: AuthorizationService = Depends(get_authorization_service),
):
    """Revoke a resource grant; revoking a missing grant reports `revoked: false`"""
    removed = await service.revoke_access(data.account_id, data.resource_id, data.resource_type)
    return RevokeResponse(revoked=removed is not None)


@router.post(
    "/tenants",
    response_model=TenantGrantResponse,
    status_code=status.HTTP_201_CREATED,
)
async def grant_tenant_access(
    data: TenantGrantRequest,
    service: AuthorizationService = Depends(get_authorization_service),
):
    """
    Grant a role on a tenant and everything below it.

    - **409** if the account already has a grant on this tenant
    - **404** if the tenant does not exist
    """
    access = await service.grant_tenant_access(data.account_id, data.tenant_id, data.role_id)
    if access is None:
        raise ConflictException("Tenant grant already exists")
    return access


@router.get("/accounts/{account_id}/resources", response_model=list[ResourceResponse])
async def list_account_resources(
    account_id: str,
    resource_type: str | None = None,
    service: AuthorizationService = Depends(get_authorization_service),
):
    """
    List resources the account has a direct grant on.

    Resources reachable only through tenant grants are not included.
    """
    return await service.get_resources_of(account_id, resource_type)
