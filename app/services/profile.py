"""Profile service: own profile and public agent directory."""

import uuid

from sqlalchemy.orm import Session

from app.access.actor import Actor
from app.access.store import EntityStore
from app.core.exceptions import NotFound
from app.models.enums import Action, Entity
from app.schemas.profile import OwnProfile, ProfileUpdate, PublicAgentProfile


def get_own_profile(db: Session, actor: Actor) -> OwnProfile:
    """Get the actor's full profile."""
    if actor.id is None:
        raise NotFound("Profile not found")
    return EntityStore(db).get(Entity.PROFILES, actor.id, actor)


def update_own_profile(db: Session, actor: Actor, profile_data: ProfileUpdate) -> OwnProfile:
    """Update the actor's name and phone."""
    changes = profile_data.model_dump(exclude_unset=True)
    row = EntityStore(db).write(
        Entity.PROFILES,
        Action.UPDATE,
        {"id": actor.id, **changes},
        actor,
    )
    return OwnProfile.model_validate(row)


def list_agents(
    db: Session,
    actor: Actor,
    skip: int = 0,
    limit: int = 100,
) -> list[PublicAgentProfile]:
    """List agents with their public fields."""
    return EntityStore(db).read(Entity.PUBLIC_AGENT_PROFILES, None, actor, skip=skip, limit=limit)


def get_agent(db: Session, actor: Actor, agent_id: uuid.UUID) -> PublicAgentProfile:
    """Get one agent's public fields."""
    return EntityStore(db).get(Entity.PUBLIC_AGENT_PROFILES, agent_id, actor)
