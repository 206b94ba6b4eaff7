"""
Write-time payload invariants.

Runs after the policy engine has allowed a write. Every check for a write is
evaluated, failures are collected, and a single ValidationError carrying all
reasons rejects the whole write.
"""

import re
from collections.abc import Callable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from app.access.actor import Actor
from app.core.exceptions import ValidationError
from app.models.enums import Action, Entity, MessageStatus, PropertyStatus, Role

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
PHONE_PATTERN = re.compile(r"^\+?[0-9]{6,20}$")
PHONE_SEPARATORS = re.compile(r"[ \-()]")

MAX_EMAIL_LENGTH = 255
MAX_PHONE_LENGTH = 20
MAX_BODY_LENGTH = 5000
MAX_NAME_LENGTH = 200

NOT_VISIBLE = "property_id does not reference a visible property"


# =============================================================================
# Single-field checks
# =============================================================================


def check_seeker(seeker_id: Any, actor: Actor) -> str | None:
    """The inquiring seeker must be the authenticated actor."""
    if actor.id is None or seeker_id != actor.id:
        return "seeker_id must match authenticated user"
    return None


def check_email(email: str | None) -> str | None:
    """Optional contact email: local@domain, at most 255 characters."""
    if not email:
        return None
    if len(email) > MAX_EMAIL_LENGTH:
        return f"Email must be at most {MAX_EMAIL_LENGTH} characters"
    if not EMAIL_PATTERN.fullmatch(email):
        return "Invalid email format"
    return None


def check_phone(phone: str | None) -> str | None:
    """Optional phone: 6-20 digits with an optional leading plus once separators are removed."""
    if not phone:
        return None
    if len(phone) > MAX_PHONE_LENGTH:
        return f"Phone must be at most {MAX_PHONE_LENGTH} characters"
    if not PHONE_PATTERN.fullmatch(PHONE_SEPARATORS.sub("", phone)):
        return "Invalid phone format"
    return None


def check_body(body: str | None) -> str | None:
    """Message body: non-blank, at most 5000 characters."""
    if body is None or not body.strip():
        return "Message body cannot be empty"
    if len(body) > MAX_BODY_LENGTH:
        return f"Message must be at most {MAX_BODY_LENGTH} characters"
    return None


def _check_non_negative(values: Mapping[str, Any], field: str) -> str | None:
    value = values.get(field)
    if value is None:
        return None
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return f"{field} must be a number"
    if number < 0:
        return f"{field} must be greater than or equal to 0"
    return None


def _check_choice(value: Any, choices: type, field: str) -> str | None:
    if value is None:
        return None
    allowed = {member.value for member in choices}
    if str(getattr(value, "value", value)) not in allowed:
        return f"{field} must be one of: {', '.join(sorted(allowed))}"
    return None


def _collect(*reasons: str | None) -> list[str]:
    return [reason for reason in reasons if reason]


# =============================================================================
# Per-entity checks
# =============================================================================


def message_errors(payload: Mapping[str, Any], actor: Actor) -> list[str]:
    """
    The four inquiry checks, all evaluated.

    Returns every failing reason in check order (seeker, email, phone, body).
    """
    return _collect(
        check_seeker(payload.get("seeker_id"), actor),
        check_email(payload.get("email")),
        check_phone(payload.get("phone")),
        check_body(payload.get("body")),
    )


def message_listing_errors(payload: Mapping[str, Any], listing: Any) -> list[str]:
    """The inquiry must target a visible property and address its agent."""
    if listing is None:
        return [NOT_VISIBLE]
    if payload.get("agent_id") != listing.agent_id:
        return ["agent_id must match the property's agent"]
    return []


def message_insert_errors(payload: Mapping[str, Any], actor: Actor, listing: Any) -> list[str]:
    """Field checks followed by the listing checks for a new inquiry."""
    return message_errors(payload, actor) + message_listing_errors(payload, listing)


def message_update_errors(values: Mapping[str, Any]) -> list[str]:
    return _collect(_check_choice(values.get("status"), MessageStatus, "status"))


def property_errors(values: Mapping[str, Any], agent: Any) -> list[str]:
    """Listing content and ownership invariants."""
    title = values.get("title")
    return _collect(
        None if title and str(title).strip() else "title cannot be empty",
        _check_non_negative(values, "price"),
        _check_non_negative(values, "beds"),
        _check_non_negative(values, "baths"),
        _check_non_negative(values, "area_sqft"),
        _check_choice(values.get("status"), PropertyStatus, "status"),
        None
        if agent is not None and agent.role == Role.AGENT
        else "agent_id must reference an agent profile",
    )


def photo_errors(values: Mapping[str, Any], listing: Any) -> list[str]:
    """Ordering and storage namespace of a photo row."""
    if listing is None:
        return [NOT_VISIBLE]
    storage_path = values.get("storage_path") or ""
    prefix = f"{listing.agent_id}/{listing.id}/"
    return _collect(
        _check_non_negative(values, "ordering"),
        None if storage_path.strip() else "storage_path cannot be empty",
        None
        if not storage_path.strip() or storage_path.startswith(prefix)
        else f"storage_path must be inside {prefix}",
    )


def saved_property_errors(values: Mapping[str, Any], listing: Any) -> list[str]:
    return [] if listing is not None else [NOT_VISIBLE]


def profile_errors(values: Mapping[str, Any]) -> list[str]:
    """Profile contact fields and role."""
    name = values.get("name")
    return _collect(
        check_phone(values.get("phone")),
        f"name must be at most {MAX_NAME_LENGTH} characters"
        if name and len(name) > MAX_NAME_LENGTH
        else None,
        _check_choice(values.get("role"), Role, "role"),
    )


# =============================================================================
# Dispatch
# =============================================================================

# (entity, action) -> fn(values, actor, related) returning reasons
_CHECKS: dict[tuple[Entity, Action], Callable[[Mapping[str, Any], Actor, Any], list[str]]] = {
    (Entity.MESSAGES, Action.INSERT): message_insert_errors,
    (Entity.MESSAGES, Action.UPDATE): lambda values, actor, _: message_update_errors(values),
    (Entity.PROPERTIES, Action.INSERT): lambda values, actor, agent: property_errors(values, agent),
    (Entity.PROPERTIES, Action.UPDATE): lambda values, actor, agent: property_errors(values, agent),
    (Entity.PROPERTY_PHOTOS, Action.INSERT): lambda values, actor, listing: photo_errors(
        values, listing
    ),
    (Entity.PROPERTY_PHOTOS, Action.UPDATE): lambda values, actor, listing: photo_errors(
        values, listing
    ),
    (Entity.SAVED_PROPERTIES, Action.INSERT): lambda values, actor, listing: (
        saved_property_errors(values, listing)
    ),
    (Entity.PROFILES, Action.INSERT): lambda values, actor, _: profile_errors(values),
    (Entity.PROFILES, Action.UPDATE): lambda values, actor, _: profile_errors(values),
}


def validate_write(
    entity: Entity,
    action: Action,
    values: Mapping[str, Any],
    actor: Actor,
    related: Any = None,
) -> None:
    """
    Run the payload checks registered for (entity, action).

    Args:
        entity: Target entity
        action: INSERT or UPDATE (deletes carry no payload)
        values: Full row values after the write would be applied
        actor: Actor performing the write
        related: The row the checks depend on: the owning Property for
            messages, photos and saves, the agent Profile for properties

    Raises:
        ValidationError: With every failing reason

    """
    check = _CHECKS.get((Entity(entity), Action(action)))
    if check is None:
        return
    reasons = check(values, actor, related)
    if reasons:
        raise ValidationError(*reasons)
