from fastapi import APIRouter, Depends, status

from authz.core.exceptions import ConflictException, NotFoundException
from authz.dependencies import get_current_caller, get_store, get_tenant_builder
from authz.domain.records import Role
from authz.repositories.tenant_store import TenantStore
from authz.schemas.role_schemas import RoleCreate, RoleResponse
from authz.services.tenant_builder import TenantBuilder

router = APIRouter(dependencies=[Depends(get_current_caller)])


@router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(data: RoleCreate, builder: TenantBuilder = Depends(get_tenant_builder)):
    """Create a role; roles cannot be redefined once created"""
    role = await builder.add_role(Role(**data.model_dump()))
    if role is None:
        raise ConflictException(f"Role {data.id} already exists")
    return role


@router.get("", response_model=list[RoleResponse])
async def list_roles(store: TenantStore = Depends(get_store)):
    """List all roles"""
    return await store.list_roles()


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(role_id: str, store: TenantStore = Depends(get_store)):
    """Get role details"""
    role = await store.get_role(role_id)
    if role is None:
        raise NotFoundException("Role not found")
    return role
