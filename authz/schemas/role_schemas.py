from pydantic import BaseModel, Field


class RoleCreate(BaseModel):
    """Schema for creating a role"""

    id: str = Field(..., min_length=1, max_length=255)
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    permissions: list[str] | None = Field(
        default=None, description="Permission tokens; empty or null grants nothing"
    )


class RoleResponse(BaseModel):
    """Schema for role response"""

    id: str
    name: str | None
    description: str | None
    permissions: list[str] | None

    model_config = {"from_attributes": True}
