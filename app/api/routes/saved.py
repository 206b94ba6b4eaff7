"""Favourites API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.access.actor import Actor
from app.api.deps import get_current_actor
from app.core.database import get_db
from app.schemas.property import PropertyResponse
from app.schemas.saved_property import SavedPropertyResponse
from app.services import saved_property as saved_service

router = APIRouter(prefix="/saved", tags=["saved"])


@router.get("", response_model=list[PropertyResponse])
def list_favourites(
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> list[PropertyResponse]:
    """Your saved listings, most recently saved first."""
    properties = saved_service.get_favourite_properties(db, actor)
    return [PropertyResponse.model_validate(p) for p in properties]


@router.put("/{property_id}", response_model=SavedPropertyResponse)
def save_property(
    property_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> SavedPropertyResponse:
    """Save a listing. Saving it again returns the existing favourite."""
    saved = saved_service.save_property(db, actor, property_id)
    return SavedPropertyResponse.model_validate(saved)


@router.delete("/{property_id}", status_code=204)
def unsave_property(
    property_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> None:
    """Remove a listing from your favourites."""
    saved_service.unsave_property(db, actor, property_id)
