"""Profile read models.

`OwnProfile` and `PublicAgentProfile` are deliberately unrelated classes: the
public type has no contact fields to leak, and neither can be passed where the
other is expected.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from app.models.enums import Role


class OwnProfile(BaseModel):
    """Full profile row, only ever returned to the profile's owner."""

    id: uuid.UUID
    email: str
    role: Role
    name: str | None
    phone: str | None
    verified: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class PublicAgentProfile(BaseModel):
    """Safe subset of an agent profile, readable by anyone."""

    id: uuid.UUID
    name: str | None
    role: Role
    verified: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ProfileUpdate(BaseModel):
    """Schema for updating your own profile."""

    name: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=20)
