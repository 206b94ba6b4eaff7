"""SavedProperty Pydantic schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel


class SavedPropertyResponse(BaseModel):
    """Schema for a favourite."""

    id: uuid.UUID
    user_id: uuid.UUID
    property_id: uuid.UUID
    created_at: datetime

    model_config = {"from_attributes": True}
