"""Schemas for users and login."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email_address: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    id: int
    email_address: str

    model_config = {"from_attributes": True}
