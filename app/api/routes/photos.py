"""PropertyPhoto API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.access.actor import Actor
from app.api.deps import get_current_actor
from app.core.database import get_db
from app.schemas.photo import PhotoCreate, PhotoResponse, PhotoUpdate
from app.services import photo as photo_service

router = APIRouter(tags=["photos"])


@router.get("/properties/{property_id}/photos", response_model=list[PhotoResponse])
def list_photos(
    property_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> list[PhotoResponse]:
    """List a property's photos in display order."""
    photos = photo_service.get_photos(db, actor, property_id)
    return [PhotoResponse.model_validate(p) for p in photos]


@router.post(
    "/properties/{property_id}/photos",
    response_model=PhotoResponse,
    status_code=201,
)
def add_photo(
    property_id: UUID,
    photo_data: PhotoCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> PhotoResponse:
    """Attach an uploaded image to your listing."""
    photo = photo_service.add_photo(db, actor, property_id, photo_data)
    return PhotoResponse.model_validate(photo)


@router.patch("/photos/{photo_id}", response_model=PhotoResponse)
def update_photo(
    photo_id: UUID,
    photo_data: PhotoUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> PhotoResponse:
    """Update a photo's ordering or derived paths."""
    photo = photo_service.update_photo(db, actor, photo_id, photo_data)
    return PhotoResponse.model_validate(photo)


@router.delete("/photos/{photo_id}", status_code=204)
def delete_photo(
    photo_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> None:
    """Remove a photo from your listing."""
    photo_service.delete_photo(db, actor, photo_id)
