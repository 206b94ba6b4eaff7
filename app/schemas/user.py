"""User Pydantic schemas for registration and login."""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    """Schema for registering a new account."""

    email: EmailStr
    password: str = Field(min_length=8)
    name: str | None = Field(default=None, max_length=200)
    # Admins are provisioned out of band, never self-registered
    role: Literal["seeker", "agent"] = "seeker"


class UserResponse(BaseModel):
    """Schema for user response."""

    id: uuid.UUID
    email: EmailStr
    created_at: datetime
    is_active: bool

    model_config = {"from_attributes": True}


class Token(BaseModel):
    """Schema for JWT token response."""

    access_token: str
    token_type: str


class TokenData(BaseModel):
    """Schema for token payload data."""

    user_id: uuid.UUID | None = None


class LoginRequest(BaseModel):
    """Schema for login request."""

    email: EmailStr
    password: str
