from fastapi import APIRouter, Depends, status

from authz.core.exceptions import ConflictException, NotFoundException
from authz.dependencies import get_current_caller, get_store, get_tenant_builder
from authz.domain.records import Tenant, TenantNode
from authz.repositories.tenant_store import TenantStore
from authz.schemas.tenant_schemas import (
    TenantCreate,
    TenantNodeRequest,
    TenantResponse,
    TenantTreeResponse,
)
from authz.services.tenant_builder import TenantBuilder

router = APIRouter(dependencies=[Depends(get_current_caller)])


def _to_node(request: TenantNodeRequest) -> TenantNode:
    return TenantNode(
        id=request.id,
        name=request.name,
        children=[_to_node(child) for child in request.children],
    )


def _count_nodes(node: TenantNode) -> int:
    return 1 + sum(_count_nodes(child) for child in node.children)


@router.post("/tree", response_model=TenantTreeResponse, status_code=status.HTTP_201_CREATED)
async def import_tenant_tree(
    tree: TenantNodeRequest,
    builder: TenantBuilder = Depends(get_tenant_builder),
):
    """
    Import a nested tenant tree.

    - The top node becomes a root tenant
    - **409** if any tenant id is already stored (duplicate or cycle);
      tenants created before the clash are kept
    """
    root = _to_node(tree)
    await builder.create_tenant_tree(root)
    return TenantTreeResponse(root_id=root.id, created=_count_nodes(root))


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    data: TenantCreate,
    builder: TenantBuilder = Depends(get_tenant_builder),
):
    """Create a single tenant under an existing parent, or a new root"""
    tenant = await builder.add_tenant(Tenant(id=data.id, name=data.name, parent_id=data.parent_id))
    if tenant is None:
        raise ConflictException(
            f"Tenant {data.id} already exists or parent {data.parent_id} does not exist"
        )
    return tenant


@router.get("", response_model=list[TenantResponse])
async def list_tenants(store: TenantStore = Depends(get_store)):
    """List all tenants"""
    return await store.list_tenants()


@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant(tenant_id: str, store: TenantStore = Depends(get_store)):
    """Get tenant details"""
    tenant = await store.get_tenant(tenant_id)
    if tenant is None:
        raise NotFoundException("Tenant not found")
    return tenant
