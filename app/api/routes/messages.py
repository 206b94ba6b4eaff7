"""Inquiry message API routes."""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.access.actor import Actor
from app.api.deps import get_current_actor
from app.core.database import get_db
from app.models.enums import MessageStatus
from app.schemas.message import MessageCreate, MessageResponse, MessageStatusUpdate
from app.services import message as message_service

router = APIRouter(tags=["messages"])


@router.post(
    "/properties/{property_id}/messages",
    response_model=MessageResponse,
    status_code=201,
)
def send_inquiry(
    property_id: UUID,
    message_data: MessageCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Send an inquiry to the listing's agent."""
    message = message_service.send_inquiry(db, actor, property_id, message_data)
    return MessageResponse.model_validate(message)


@router.get("/messages", response_model=list[MessageResponse])
def list_messages(
    mailbox: Literal["received", "sent"] | None = None,
    status: MessageStatus | None = None,
    skip: int = 0,
    limit: int = 100,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> list[MessageResponse]:
    """Messages you sent or received, newest first."""
    messages = message_service.get_messages(db, actor, mailbox, status, skip, limit)
    return [MessageResponse.model_validate(m) for m in messages]


@router.patch("/messages/{message_id}", response_model=MessageResponse)
def update_message_status(
    message_id: UUID,
    status_data: MessageStatusUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Mark a received inquiry read or responded."""
    message = message_service.update_message_status(db, actor, message_id, status_data.status)
    return MessageResponse.model_validate(message)


@router.delete("/messages/{message_id}", status_code=204)
def delete_message(
    message_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> None:
    """Withdraw an inquiry you sent."""
    message_service.delete_message(db, actor, message_id)
