"""PropertyPhoto database model."""

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base

if TYPE_CHECKING:
    from app.models.property import Property


class PropertyPhoto(Base):
    """Image attached to a property; shares the property's visibility."""

    __tablename__ = "property_photos"
    __table_args__ = (CheckConstraint("ordering >= 0", name="ck_property_photos_ordering"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    property_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        index=True,
    )
    storage_path: Mapped[str] = mapped_column(String(500))
    thumb_path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    med_path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    ordering: Mapped[int] = mapped_column(default=0)  # Display order, gaps allowed
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    # Relationships
    parent_property: Mapped["Property"] = relationship(back_populates="photos")
