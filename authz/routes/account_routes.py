from fastapi import APIRouter, Depends, status

from authz.core.exceptions import ConflictException, NotFoundException
from authz.dependencies import get_current_caller, get_store, get_tenant_builder
from authz.domain.records import Account
from authz.repositories.tenant_store import TenantStore
from authz.schemas.account_schemas import AccountCreate, AccountResponse
from authz.services.tenant_builder import TenantBuilder

router = APIRouter(dependencies=[Depends(get_current_caller)])


@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def create_account(data: AccountCreate, builder: TenantBuilder = Depends(get_tenant_builder)):
    """Register an account"""
    account = await builder.add_account(Account(**data.model_dump()))
    if account is None:
        raise ConflictException(f"Account {data.id} already exists")
    return account


@router.get("", response_model=list[AccountResponse])
async def list_accounts(store: TenantStore = Depends(get_store)):
    """List all accounts"""
    return await store.list_accounts()


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(account_id: str, store: TenantStore = Depends(get_store)):
    """Get account details"""
    account = await store.get_account(account_id)
    if account is None:
        raise NotFoundException("Account not found")
    return account
