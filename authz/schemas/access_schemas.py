from pydantic import BaseModel, Field

from authz.schemas.role_schemas import RoleResponse


class ResourceGrantRequest(BaseModel):
    """Grant a role to an account on one resource"""

    account_id: str = Field(..., min_length=1)
    resource_id: str = Field(..., min_length=1)
    role_id: str = Field(..., min_length=1)
    resource_type: str | None = Field(None, min_length=1, max_length=100)


class ResourceRevokeRequest(BaseModel):
    """Remove an account's grant on one resource"""

    account_id: str = Field(..., min_length=1)
    resource_id: str = Field(..., min_length=1)
    resource_type: str | None = Field(None, min_length=1, max_length=100)


class TenantGrantRequest(BaseModel):
    """Grant a role to an account on a whole tenant"""

    account_id: str = Field(..., min_length=1)
    tenant_id: str = Field(..., min_length=1)
    role_id: str = Field(..., min_length=1)


class ResourceGrantResponse(BaseModel):
    account_id: str
    resource_id: str
    resource_type: str | None
    role_id: str
    role: RoleResponse | None = None

    model_config = {"from_attributes": True}


class TenantGrantResponse(BaseModel):
    account_id: str
    tenant_id: str
    role_id: str
    role: RoleResponse | None = None

    model_config = {"from_attributes": True}


class RevokeResponse(BaseModel):
    """Response after revoking a resource grant"""

    revoked: bool


class AuthorizeRequest(BaseModel):
    """Access check request"""

    account_id: str = Field(..., min_length=1)
    resource_id: str = Field(..., min_length=1)
    permission: str = Field(..., description="Exact permission token required")
    resource_type: str | None = Field(None, min_length=1, max_length=100)


class AuthorizeResponse(BaseModel):
    """Access check decision"""

    allowed: bool
