"""Property Pydantic schemas for request/response validation."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from app.models.enums import PropertyStatus
from app.schemas.photo import PhotoResponse


class PropertyBase(BaseModel):
    """Base property schema."""

    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    price: Decimal | None = Field(default=None, ge=0)
    currency: str = Field(default="KES", min_length=3, max_length=3)
    for_rent: bool = False
    beds: int = Field(default=0, ge=0)
    baths: int = Field(default=0, ge=0)
    area_sqft: int | None = Field(default=None, ge=0)
    address: str | None = None
    city: str | None = None
    region: str | None = None
    latitude: Decimal | None = Field(default=None, ge=-90, le=90)
    longitude: Decimal | None = Field(default=None, ge=-180, le=180)


class PropertyCreate(PropertyBase):
    """Schema for creating a listing. New listings start as drafts."""

    status: PropertyStatus = PropertyStatus.DRAFT


class PropertyUpdate(BaseModel):
    """Schema for updating a listing."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    price: Decimal | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    for_rent: bool | None = None
    beds: int | None = Field(default=None, ge=0)
    baths: int | None = Field(default=None, ge=0)
    area_sqft: int | None = Field(default=None, ge=0)
    address: str | None = None
    city: str | None = None
    region: str | None = None
    latitude: Decimal | None = Field(default=None, ge=-90, le=90)
    longitude: Decimal | None = Field(default=None, ge=-180, le=180)
    status: PropertyStatus | None = None


class PropertySearch(BaseModel):
    """Home page search filters with pagination."""

    city: str | None = None
    min_beds: int | None = Field(default=None, ge=0)
    min_baths: int | None = Field(default=None, ge=0)
    for_rent: bool | None = None
    min_price: Decimal | None = Field(default=None, ge=0)
    max_price: Decimal | None = Field(default=None, ge=0)
    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=100, ge=1, le=500)

    @model_validator(mode="after")
    def check_price_range(self) -> "PropertySearch":
        """Ensure the price range is not inverted."""
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError("min_price cannot exceed max_price")
        return self


class PropertyResponse(PropertyBase):
    """Schema for property response."""

    id: uuid.UUID
    agent_id: uuid.UUID
    status: PropertyStatus
    created_at: datetime
    photos: list[PhotoResponse] = []

    model_config = {"from_attributes": True}
