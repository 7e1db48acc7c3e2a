from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CreateUserRequest(BaseModel):
    email: str = Field(description="Login email address")
    display_name: str = Field(description="Public display name (1-50 characters)")
    password: str = Field(description="At least 8 characters with a letter and a digit")


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: int
    email: str
    display_name: str
    email_verified: bool
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class PublicUserResponse(BaseModel):
    """Profile visible to anyone; the email address is not part of it."""

    id: int
    display_name: str
    email_verified: bool
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    user_id: int
    email: str
    display_name: str


class VerificationIssuedResponse(BaseModel):
    user_id: int
    expires_at: datetime
