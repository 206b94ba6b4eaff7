"""PropertyPhoto service."""

import uuid

from sqlalchemy.orm import Session

from app.access.actor import Actor
from app.access.store import EntityStore
from app.models.enums import Action, Entity
from app.models.property_photo import PropertyPhoto
from app.schemas.photo import PhotoCreate, PhotoUpdate


def get_photos(db: Session, actor: Actor, property_id: uuid.UUID) -> list[PropertyPhoto]:
    """Photos of a property in display order; empty when the property is invisible."""
    return EntityStore(db).read(
        Entity.PROPERTY_PHOTOS,
        {"property_id": property_id},
        actor,
        order_by=[PropertyPhoto.ordering, PropertyPhoto.created_at],
    )


def add_photo(
    db: Session,
    actor: Actor,
    property_id: uuid.UUID,
    photo_data: PhotoCreate,
) -> PropertyPhoto:
    """Attach an uploaded image to a property the actor owns."""
    payload = photo_data.model_dump()
    payload["property_id"] = property_id
    return EntityStore(db).write(Entity.PROPERTY_PHOTOS, Action.INSERT, payload, actor)


def update_photo(
    db: Session,
    actor: Actor,
    photo_id: uuid.UUID,
    photo_data: PhotoUpdate,
) -> PropertyPhoto:
    """Update derived paths or ordering of a photo."""
    changes = photo_data.model_dump(exclude_unset=True)
    return EntityStore(db).write(
        Entity.PROPERTY_PHOTOS,
        Action.UPDATE,
        {"id": photo_id, **changes},
        actor,
    )


def delete_photo(db: Session, actor: Actor, photo_id: uuid.UUID) -> None:
    """Remove a photo row."""
    EntityStore(db).write(Entity.PROPERTY_PHOTOS, Action.DELETE, {"id": photo_id}, actor)
