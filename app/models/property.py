"""Property database model."""

import uuid
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.enums import PropertyStatus

if TYPE_CHECKING:
    from app.models.message import Message
    from app.models.profile import Profile
    from app.models.property_photo import PropertyPhoto
    from app.models.saved_property import SavedProperty


class Property(Base):
    """Listing owned by an agent; public once published."""

    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_properties_price"),
        CheckConstraint(
            "status in ('draft', 'published', 'archived')",
            name="ck_properties_status",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    agent_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"),
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal | None] = mapped_column(
        Numeric(precision=14, scale=2), nullable=True, index=True
    )
    currency: Mapped[str] = mapped_column(String(3), default="KES")
    for_rent: Mapped[bool] = mapped_column(default=False)
    beds: Mapped[int] = mapped_column(default=0)
    baths: Mapped[int] = mapped_column(default=0)
    area_sqft: Mapped[int | None] = mapped_column(nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    latitude: Mapped[Decimal | None] = mapped_column(Numeric(9, 6), nullable=True)
    longitude: Mapped[Decimal | None] = mapped_column(Numeric(9, 6), nullable=True)
    status: Mapped[PropertyStatus] = mapped_column(
        String(20), default=PropertyStatus.DRAFT, index=True
    )
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    # Relationships
    agent: Mapped["Profile"] = relationship(back_populates="properties")
    photos: Mapped[list["PropertyPhoto"]] = relationship(
        back_populates="parent_property",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PropertyPhoto.ordering",
    )
    saves: Mapped[list["SavedProperty"]] = relationship(
        back_populates="listing",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    messages: Mapped[list["Message"]] = relationship(
        back_populates="listing",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
