from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    """Schema for registering an account"""

    id: str = Field(..., min_length=1, max_length=255)
    name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    organization: str | None = Field(None, max_length=255)


class AccountResponse(BaseModel):
    """Schema for account response"""

    id: str
    name: str | None
    email: str | None
    organization: str | None

    model_config = {"from_attributes": True}
