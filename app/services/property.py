"""Property service for listing management and search."""

import uuid

from sqlalchemy.orm import Session

from app.access.actor import Actor
from app.access.store import EntityStore
from app.models.enums import Action, Entity, PropertyStatus
from app.models.property import Property
from app.schemas.property import PropertyCreate, PropertySearch, PropertyUpdate


def create_property(db: Session, actor: Actor, property_data: PropertyCreate) -> Property:
    """Create a listing owned by the actor."""
    payload = property_data.model_dump()
    payload["agent_id"] = actor.id
    return EntityStore(db).write(Entity.PROPERTIES, Action.INSERT, payload, actor)


def get_property(db: Session, actor: Actor, property_id: uuid.UUID) -> Property:
    """Get a property by ID if the actor can see it."""
    return EntityStore(db).get(Entity.PROPERTIES, property_id, actor)


def search_properties(
    db: Session,
    actor: Actor,
    search: PropertySearch,
) -> list[Property]:
    """Published listings matching the home page filters, newest first."""
    criteria = []
    if search.city:
        criteria.append(Property.city.ilike(f"%{search.city}%"))
    if search.min_beds is not None:
        criteria.append(Property.beds >= search.min_beds)
    if search.min_baths is not None:
        criteria.append(Property.baths >= search.min_baths)
    if search.for_rent is not None:
        criteria.append(Property.for_rent == search.for_rent)
    if search.min_price is not None:
        criteria.append(Property.price >= search.min_price)
    if search.max_price is not None:
        criteria.append(Property.price <= search.max_price)

    return EntityStore(db).read(
        Entity.PROPERTIES,
        {"status": PropertyStatus.PUBLISHED},
        actor,
        criteria=criteria,
        order_by=[Property.created_at.desc()],
        skip=search.skip,
        limit=search.limit,
    )


def get_properties_for_agent(
    db: Session,
    actor: Actor,
    skip: int = 0,
    limit: int = 100,
) -> list[Property]:
    """The actor's own listings in every status (agent dashboard)."""
    if actor.id is None:
        return []
    return EntityStore(db).read(
        Entity.PROPERTIES,
        {"agent_id": actor.id},
        actor,
        order_by=[Property.created_at.desc()],
        skip=skip,
        limit=limit,
    )


def update_property(
    db: Session,
    actor: Actor,
    property_id: uuid.UUID,
    property_data: PropertyUpdate,
) -> Property:
    """Update a listing the actor owns."""
    changes = property_data.model_dump(exclude_unset=True)
    return EntityStore(db).write(
        Entity.PROPERTIES,
        Action.UPDATE,
        {"id": property_id, **changes},
        actor,
    )


def delete_property(db: Session, actor: Actor, property_id: uuid.UUID) -> None:
    """Delete a listing; its photos, saves and messages go with it."""
    EntityStore(db).write(Entity.PROPERTIES, Action.DELETE, {"id": property_id}, actor)
