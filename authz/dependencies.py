from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from authz.core.security import extract_caller_id
from authz.core.exceptions import UnauthorizedException
from authz.database import get_db
from authz.repositories.sqlalchemy_store import SqlAlchemyTenantStore
from authz.repositories.tenant_store import TenantStore
from authz.services.authorization_service import AuthorizationService
from authz.services.tenant_builder import TenantBuilder

security = HTTPBearer(auto_error=False)


async def get_current_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """
    FastAPI dependency to validate the caller's JWT.

    Flow:
    1. Extract token from Authorization: Bearer <token>
    2. Validate JWT using shared SECRET_KEY
    3. Return the 'sub' claim identifying the calling service or operator

    Raises:
        HTTPException 401: If token missing, invalid or expired
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return extract_caller_id(credentials.credentials)

    except UnauthorizedException as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_store(db: Session = Depends(get_db)) -> TenantStore:
    """Tenant store bound to the request's database session"""
    return SqlAlchemyTenantStore(db)


def get_authorization_service(store: TenantStore = Depends(get_store)) -> AuthorizationService:
    return AuthorizationService(store)


def get_tenant_builder(store: TenantStore = Depends(get_store)) -> TenantBuilder:
    return TenantBuilder(store)
