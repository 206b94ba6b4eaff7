"""
Favourites service.

Saving is idempotent: a second save of the same listing, including one that
loses a race on the unique (user_id, property_id) constraint, returns the row
that is already there.
"""

import logging
import uuid

from sqlalchemy.orm import Session

from app.access.actor import Actor
from app.access.store import EntityStore
from app.core.exceptions import Conflict
from app.models.enums import Action, Entity
from app.models.property import Property
from app.models.saved_property import SavedProperty

logger = logging.getLogger(__name__)


def _find_saved(
    store: EntityStore,
    actor: Actor,
    property_id: uuid.UUID,
) -> SavedProperty | None:
    rows = store.read(
        Entity.SAVED_PROPERTIES,
        {"user_id": actor.id, "property_id": property_id},
        actor,
        limit=1,
    )
    return rows[0] if rows else None


def save_property(db: Session, actor: Actor, property_id: uuid.UUID) -> SavedProperty:
    """Add a listing to the actor's favourites."""
    store = EntityStore(db)
    try:
        return store.write(
            Entity.SAVED_PROPERTIES,
            Action.INSERT,
            {"user_id": actor.id, "property_id": property_id},
            actor,
        )
    except Conflict:
        existing = _find_saved(store, actor, property_id)
        if existing is None:
            raise
        logger.info(
            "property already saved",
            extra={"actor_id": str(actor.id), "entity": Entity.SAVED_PROPERTIES.value},
        )
        return existing


def unsave_property(db: Session, actor: Actor, property_id: uuid.UUID) -> bool:
    """
    Remove a listing from the actor's favourites.

    Returns:
        True if a favourite was removed, False if there was none

    """
    store = EntityStore(db)
    existing = _find_saved(store, actor, property_id) if actor.id else None
    if existing is None:
        return False
    store.write(Entity.SAVED_PROPERTIES, Action.DELETE, {"id": existing.id}, actor)
    return True


def get_saved(db: Session, actor: Actor) -> list[SavedProperty]:
    """The actor's favourites, newest first."""
    if actor.id is None:
        return []
    return EntityStore(db).read(
        Entity.SAVED_PROPERTIES,
        {"user_id": actor.id},
        actor,
        order_by=[SavedProperty.created_at.desc()],
    )


def get_favourite_properties(db: Session, actor: Actor) -> list[Property]:
    """Saved listings that are still visible to the actor, most recently saved first."""
    saved = get_saved(db, actor)
    if not saved:
        return []
    properties = EntityStore(db).read(
        Entity.PROPERTIES,
        {"id": [row.property_id for row in saved]},
        actor,
        limit=len(saved),
    )
    by_id = {p.id: p for p in properties}
    return [by_id[row.property_id] for row in saved if row.property_id in by_id]
