"""Factories shared by the test modules."""

from decimal import Decimal

from app.access.actor import Actor
from app.access.store import EntityStore
from app.models.enums import Action, Entity, PropertyStatus, Role
from app.models.profile import Profile
from app.models.property import Property
from app.models.user import User
from app.services.auth import create_access_token


def make_profile(
    db,
    email: str,
    role: Role,
    name: str | None = None,
    phone: str | None = None,
) -> Profile:
    """Insert a user and its profile directly, skipping password hashing."""
    user = User(email=email, hashed_password="not-a-real-hash")
    user.profile = Profile(email=email, role=role, name=name, phone=phone)
    db.add(user)
    db.commit()
    return user.profile


def actor_for(profile: Profile) -> Actor:
    """The authenticated actor for a profile."""
    return Actor.authenticated(profile.id, profile.role)


def auth_headers(profile: Profile) -> dict[str, str]:
    """Bearer header for a profile."""
    token = create_access_token(data={"sub": str(profile.id)})
    return {"Authorization": f"Bearer {token}"}


def make_property(db, agent: Profile, **overrides) -> Property:
    """Create a listing owned by `agent` through the store."""
    payload = {
        "agent_id": agent.id,
        "title": "Two bedroom apartment",
        "price": Decimal("85000"),
        "for_rent": True,
        "beds": 2,
        "baths": 1,
        "city": "Nairobi",
        "status": PropertyStatus.DRAFT,
    }
    payload.update(overrides)
    return EntityStore(db).write(Entity.PROPERTIES, Action.INSERT, payload, actor_for(agent))
