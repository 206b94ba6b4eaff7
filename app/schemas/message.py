"""Message Pydantic schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel

from app.models.enums import MessageStatus


class MessageCreate(BaseModel):
    """
    Schema for sending an inquiry about a property.

    Lengths and formats are enforced by the write validator so that direct
    store callers get the same checks.
    """

    body: str
    email: str | None = None
    phone: str | None = None


class MessageStatusUpdate(BaseModel):
    """Schema for an agent updating an inquiry's status."""

    status: MessageStatus


class MessageResponse(BaseModel):
    """Schema for message response."""

    id: uuid.UUID
    property_id: uuid.UUID
    seeker_id: uuid.UUID
    agent_id: uuid.UUID
    body: str
    email: str | None
    phone: str | None
    status: MessageStatus
    created_at: datetime

    model_config = {"from_attributes": True}
