"""MarketData database model - regional price aggregates."""

import uuid
from datetime import UTC, date, datetime
from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class MarketData(Base):
    """Average listing price per region and period."""

    __tablename__ = "market_data"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    region: Mapped[str] = mapped_column(String(100), index=True)
    period: Mapped[date]
    avg_price: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    count_listings: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
