from pydantic import BaseModel, Field


class ResourceCreate(BaseModel):
    """Register a resource owned by a tenant"""

    id: str = Field(..., min_length=1, max_length=255)
    type: str | None = Field(None, min_length=1, max_length=100)
    tenant_id: str = Field(..., min_length=1, description="Owning tenant ID")


class ResourceResponse(BaseModel):
    """Schema for resource response"""

    id: str
    type: str | None

    model_config = {"from_attributes": True}


class OwnershipChange(BaseModel):
    """Move a resource to another tenant"""

    new_owner_id: str = Field(..., min_length=1)
    resource_type: str | None = Field(None, min_length=1, max_length=100)


class OwnershipResponse(BaseModel):
    """Schema for resource ownership response"""

    resource_id: str
    resource_type: str | None
    tenant_id: str

    model_config = {"from_attributes": True}
