"""PropertyPhoto Pydantic schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class PhotoCreate(BaseModel):
    """Schema for attaching an uploaded image to a property."""

    storage_path: str = Field(min_length=1, max_length=500)
    thumb_path: str | None = None
    med_path: str | None = None
    ordering: int = Field(default=0, ge=0)


class PhotoUpdate(BaseModel):
    """Schema for updating a photo's derived paths or position."""

    thumb_path: str | None = None
    med_path: str | None = None
    ordering: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_at_least_one_field(self) -> "PhotoUpdate":
        """Ensure at least one field is provided for update."""
        if all(v is None for v in [self.thumb_path, self.med_path, self.ordering]):
            raise ValueError("At least one field must be provided for update")
        return self


class PhotoResponse(BaseModel):
    """Schema for photo response."""

    id: uuid.UUID
    property_id: uuid.UUID
    storage_path: str
    thumb_path: str | None
    med_path: str | None
    ordering: int
    created_at: datetime

    model_config = {"from_attributes": True}
