"""MarketData Pydantic schemas."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel


class MarketDataResponse(BaseModel):
    """Schema for a regional market aggregate."""

    id: uuid.UUID
    region: str
    period: date
    avg_price: Decimal | None
    count_listings: int
    created_at: datetime

    model_config = {"from_attributes": True}
