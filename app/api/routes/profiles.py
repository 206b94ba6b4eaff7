"""Profile and agent directory routes."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.access.actor import Actor
from app.api.deps import get_current_actor, require_actor
from app.core.database import get_db
from app.schemas.profile import OwnProfile, ProfileUpdate, PublicAgentProfile
from app.services import profile as profile_service

router = APIRouter(tags=["profiles"])


@router.get("/profiles/me", response_model=OwnProfile)
def read_own_profile(
    actor: Actor = Depends(require_actor),
    db: Session = Depends(get_db),
) -> OwnProfile:
    """Get your own full profile."""
    return profile_service.get_own_profile(db, actor)


@router.patch("/profiles/me", response_model=OwnProfile)
def update_own_profile(
    profile_data: ProfileUpdate,
    actor: Actor = Depends(require_actor),
    db: Session = Depends(get_db),
) -> OwnProfile:
    """Update your name or phone."""
    return profile_service.update_own_profile(db, actor, profile_data)


@router.get("/agents", response_model=list[PublicAgentProfile])
def list_agents(
    skip: int = 0,
    limit: int = 100,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> list[PublicAgentProfile]:
    """List agents (public fields only)."""
    return profile_service.list_agents(db, actor, skip, limit)


@router.get("/agents/{agent_id}", response_model=PublicAgentProfile)
def get_agent(
    agent_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> PublicAgentProfile:
    """Get an agent's public profile."""
    return profile_service.get_agent(db, actor, agent_id)
