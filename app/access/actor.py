"""The identity a request runs as."""

import uuid
from dataclasses import dataclass

from app.models.enums import Role


@dataclass(frozen=True)
class Actor:
    """
    Who is performing a request.

    `id` is None for anonymous visitors. The service actor stands in for the
    backend's service role and bypasses row policies; it is never derived from
    a client token.
    """

    id: uuid.UUID | None = None
    role: Role | None = None
    is_service: bool = False

    @classmethod
    def anonymous(cls) -> "Actor":
        return cls()

    @classmethod
    def service(cls) -> "Actor":
        return cls(is_service=True)

    @classmethod
    def authenticated(cls, actor_id: uuid.UUID, role: Role | str | None = None) -> "Actor":
        return cls(id=actor_id, role=Role(role) if role is not None else None)

    @property
    def is_anonymous(self) -> bool:
        return self.id is None and not self.is_service

    def owns(self, owner_id: uuid.UUID | None) -> bool:
        """True when the actor is the concrete identity `owner_id`."""
        return self.id is not None and owner_id is not None and self.id == owner_id


ANONYMOUS = Actor.anonymous()
