"""ProcessingLog database model - image pipeline outcomes."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class ProcessingLog(Base):
    """Result of processing one uploaded photo. Service access only."""

    __tablename__ = "processing_logs"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    photo_storage_path: Mapped[str] = mapped_column(String(500))
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(30))
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
