"""Inquiry messages between seekers and listing agents."""

import uuid
from typing import Literal

from sqlalchemy.orm import Session

from app.access.actor import Actor
from app.access.store import EntityStore
from app.core.exceptions import NotFound
from app.models.enums import Action, Entity, MessageStatus
from app.models.message import Message
from app.schemas.message import MessageCreate

Mailbox = Literal["received", "sent"]


def send_inquiry(
    db: Session,
    actor: Actor,
    property_id: uuid.UUID,
    message_data: MessageCreate,
) -> Message:
    """
    Send an inquiry about a visible property to its agent.

    The agent is taken from the property. When no contact email is given the
    sender's profile email is used.

    Raises:
        NotFound: If the property does not exist or is not visible
        PermissionDenied: If the actor is anonymous
        ValidationError: If the contact details or body are invalid

    """
    store = EntityStore(db)
    listing = store.get(Entity.PROPERTIES, property_id, actor)

    email = message_data.email
    if not email and actor.id is not None:
        try:
            email = store.get(Entity.PROFILES, actor.id, actor).email
        except NotFound:
            email = None

    payload = {
        "property_id": listing.id,
        "seeker_id": actor.id,
        "agent_id": listing.agent_id,
        "body": message_data.body,
        "email": email,
        "phone": message_data.phone,
    }
    return store.write(Entity.MESSAGES, Action.INSERT, payload, actor)


def get_messages(
    db: Session,
    actor: Actor,
    mailbox: Mailbox | None = None,
    status: MessageStatus | None = None,
    skip: int = 0,
    limit: int = 100,
) -> list[Message]:
    """
    Messages the actor sent or received, newest first.

    Args:
        db: Database session
        actor: Reading actor
        mailbox: "received" for the agent side, "sent" for the seeker side,
            None for both
        status: Only messages in this status
        skip: Number of records to skip
        limit: Maximum number of records to return

    """
    if actor.id is None:
        return []
    filters: dict = {}
    if mailbox == "received":
        filters["agent_id"] = actor.id
    elif mailbox == "sent":
        filters["seeker_id"] = actor.id
    if status is not None:
        filters["status"] = status
    return EntityStore(db).read(
        Entity.MESSAGES,
        filters,
        actor,
        order_by=[Message.created_at.desc()],
        skip=skip,
        limit=limit,
    )


def update_message_status(
    db: Session,
    actor: Actor,
    message_id: uuid.UUID,
    status: MessageStatus,
) -> Message:
    """Mark a received message read or responded."""
    return EntityStore(db).write(
        Entity.MESSAGES,
        Action.UPDATE,
        {"id": message_id, "status": status},
        actor,
    )


def delete_message(db: Session, actor: Actor, message_id: uuid.UUID) -> None:
    """Withdraw a message the actor sent."""
    EntityStore(db).write(Entity.MESSAGES, Action.DELETE, {"id": message_id}, actor)
