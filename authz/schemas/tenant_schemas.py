from pydantic import BaseModel, Field


class TenantNodeRequest(BaseModel):
    """Nested tenant description for tree import"""

    id: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    children: list["TenantNodeRequest"] = Field(default_factory=list)


class TenantCreate(BaseModel):
    """Create a single tenant under an existing parent (or as a root)"""

    id: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    parent_id: str | None = Field(None, description="Parent tenant ID; omit for a root tenant")


class TenantResponse(BaseModel):
    """Tenant details response"""

    id: str
    name: str
    parent_id: str | None

    model_config = {"from_attributes": True}


class TenantTreeResponse(BaseModel):
    """Response after importing a tenant tree"""

    root_id: str
    created: int
