"""Profile database model."""

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String, select
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.models.enums import Role

if TYPE_CHECKING:
    from app.models.property import Property
    from app.models.user import User


class Profile(Base):
    """Public-facing identity of a user; one per user, created at registration."""

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("role in ('seeker', 'agent', 'admin')", name="ck_profiles_role"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    email: Mapped[str] = mapped_column(String(255), unique=True)
    role: Mapped[Role] = mapped_column(String(20), index=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    verified: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    # Relationships
    user: Mapped["User"] = relationship(back_populates="profile")
    properties: Mapped[list["Property"]] = relationship(
        back_populates="agent",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


# Narrow projection of agent rows without contact columns. Public reads of other
# people's profiles go through this selectable, never through the base table.
public_agent_profiles = (
    select(
        Profile.id,
        Profile.name,
        Profile.role,
        Profile.verified,
        Profile.created_at,
    )
    .where(Profile.role == Role.AGENT)
    .subquery("public_agent_profiles")
)
