from pydantic import BaseModel

from authz.schemas.access_schemas import ResourceGrantResponse, TenantGrantResponse
from authz.schemas.resource_schemas import ResourceResponse


class GrantLineResponse(BaseModel):
    account_id: str
    role_id: str
    role_name: str | None

    model_config = {"from_attributes": True}


class TenantReportResponse(BaseModel):
    id: str
    name: str
    owned_resources: list[ResourceResponse]
    grants: list[GrantLineResponse]
    children: list["TenantReportResponse"]

    model_config = {"from_attributes": True}


class AccountReportResponse(BaseModel):
    id: str
    name: str | None
    email: str | None
    organization: str | None
    resource_grants: list[ResourceGrantResponse]
    tenant_grants: list[TenantGrantResponse]

    model_config = {"from_attributes": True}


class RoleReportResponse(BaseModel):
    id: str
    name: str | None
    permissions: list[str]
    resource_grant_count: int
    tenant_grant_count: int

    model_config = {"from_attributes": True}


class ResourceReportResponse(BaseModel):
    id: str
    type: str | None
    owner_tenant_id: str | None
    grants: list[GrantLineResponse]

    model_config = {"from_attributes": True}


class GraphReportResponse(BaseModel):
    """Full read-only snapshot of the tenant graph"""

    tenants: list[TenantReportResponse]
    accounts: list[AccountReportResponse]
    roles: list[RoleReportResponse]
    resources: list[ResourceReportResponse]

    model_config = {"from_attributes": True}
