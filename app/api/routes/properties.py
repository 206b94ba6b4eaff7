"""Property API routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.access.actor import Actor
from app.api.deps import get_current_actor
from app.core.database import get_db
from app.schemas.property import PropertyCreate, PropertyResponse, PropertySearch, PropertyUpdate
from app.services import property as property_service

router = APIRouter(prefix="/properties", tags=["properties"])


@router.post("", response_model=PropertyResponse, status_code=201)
def create_property(
    property_data: PropertyCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> PropertyResponse:
    """Create a listing. It stays a draft until published."""
    property_obj = property_service.create_property(db, actor, property_data)
    return PropertyResponse.model_validate(property_obj)


@router.get("", response_model=list[PropertyResponse])
def search_properties(
    search: Annotated[PropertySearch, Query()],
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> list[PropertyResponse]:
    """Search published listings, newest first."""
    properties = property_service.search_properties(db, actor, search)
    return [PropertyResponse.model_validate(p) for p in properties]


@router.get("/mine", response_model=list[PropertyResponse])
def list_my_properties(
    skip: int = 0,
    limit: int = 100,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> list[PropertyResponse]:
    """List your own listings in every status."""
    properties = property_service.get_properties_for_agent(db, actor, skip, limit)
    return [PropertyResponse.model_validate(p) for p in properties]


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(
    property_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> PropertyResponse:
    """Get a property by ID."""
    property_obj = property_service.get_property(db, actor, property_id)
    return PropertyResponse.model_validate(property_obj)


@router.patch("/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: UUID,
    property_data: PropertyUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> PropertyResponse:
    """Update a listing you own."""
    property_obj = property_service.update_property(db, actor, property_id, property_data)
    return PropertyResponse.model_validate(property_obj)


@router.delete("/{property_id}", status_code=204)
def delete_property(
    property_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> None:
    """Delete a listing with its photos, saves and messages."""
    property_service.delete_property(db, actor, property_id)
