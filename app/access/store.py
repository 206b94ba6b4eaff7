"""
Policy-gated entity store.

The single read/write surface the services use. Every read is narrowed by the
entity's visibility predicate; every write goes policy gate -> payload
validation -> database, and is committed atomically or rolled back.
"""

import logging
import uuid
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import ColumnElement, Uuid, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.access.actor import Actor
from app.access.policy import PROPERTY_POLICY, Policy, get_policy
from app.access.validation import validate_write
from app.core.exceptions import AccessError, Conflict, NotFound, PermissionDenied, ValidationError
from app.models.enums import Action, Entity
from app.models.profile import Profile, public_agent_profiles
from app.models.property import Property
from app.schemas.profile import OwnProfile, PublicAgentProfile

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100


def _coerce_value(column: Any, key: str, value: Any) -> Any:
    if isinstance(column.type, Uuid) and isinstance(value, str):
        try:
            return uuid.UUID(value)
        except ValueError as exc:
            raise ValidationError(f"{key} must be a valid UUID") from exc
    return value


def filter_clauses(columns: Any, filters: Mapping[str, Any] | None) -> list[ColumnElement[bool]]:
    """Turn {column: value} equality filters into SQL criteria."""
    clauses: list[ColumnElement[bool]] = []
    for key, value in (filters or {}).items():
        if key not in columns:
            raise ValidationError(f"unknown column '{key}'")
        column = columns[key]
        if value is None:
            clauses.append(column.is_(None))
        elif isinstance(value, (list, tuple, set, frozenset)):
            clauses.append(column.in_([_coerce_value(column, key, v) for v in value]))
        else:
            clauses.append(column == _coerce_value(column, key, value))
    return clauses


def row_values(row: Any) -> dict[str, Any]:
    """Current column values of a mapped row."""
    mapper = sa_inspect(row).mapper
    return {attr.key: getattr(row, attr.key) for attr in mapper.column_attrs}


class EntityStore:
    """Read/write entities on behalf of an actor."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def read(
        self,
        entity: Entity,
        filters: Mapping[str, Any] | None,
        actor: Actor,
        *,
        criteria: Sequence[ColumnElement[bool]] = (),
        order_by: Sequence[Any] = (),
        skip: int = 0,
        limit: int = DEFAULT_LIMIT,
    ) -> list[Any]:
        """
        Return the rows of `entity` matching `filters` that `actor` may see.

        Args:
            entity: Entity to read
            filters: Column equality filters
            actor: Actor performing the read
            criteria: Extra SQL criteria (search ranges and the like)
            order_by: Ordering expressions
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            ORM rows, except for profile entities which yield OwnProfile /
            PublicAgentProfile read models. Rows the actor may not see are
            simply absent.

        """
        entity = Entity(entity)
        if entity is Entity.PROFILES:
            return self._read_profiles(filters, actor, skip=skip, limit=limit)
        if entity is Entity.PUBLIC_AGENT_PROFILES:
            return self._read_public_agents(filters, actor, skip=skip, limit=limit)

        policy = get_policy(entity)
        stmt = (
            select(policy.model)
            .where(
                policy.read_filter(actor),
                *filter_clauses(sa_inspect(policy.model).columns, filters),
                *criteria,
            )
            .order_by(*order_by)
            .offset(skip)
            .limit(limit)
        )
        return list(self.db.scalars(stmt).all())

    def get(self, entity: Entity, row_id: uuid.UUID | str, actor: Actor) -> Any:
        """
        Return one visible row by id.

        Raises:
            NotFound: If the row is absent or invisible to the actor

        """
        rows = self.read(entity, {"id": row_id}, actor, limit=1)
        if not rows:
            raise NotFound(f"{get_policy(entity).label} not found")
        return rows[0]

    def _read_profiles(
        self,
        filters: Mapping[str, Any] | None,
        actor: Actor,
        *,
        skip: int,
        limit: int,
    ) -> list[OwnProfile | PublicAgentProfile]:
        """Own full row from the base table, everyone else from the public projection."""
        policy = get_policy(Entity.PROFILES)
        own_stmt = select(Profile).where(
            policy.read_filter(actor),
            *filter_clauses(sa_inspect(Profile).columns, filters),
        )
        own = [OwnProfile.model_validate(row) for row in self.db.scalars(own_stmt).all()]
        exclude = {row.id for row in own}
        public = [
            row
            for row in self._read_public_agents(filters, actor, skip=skip, limit=limit)
            if row.id not in exclude
        ]
        return own + public

    def _read_public_agents(
        self,
        filters: Mapping[str, Any] | None,
        actor: Actor,
        *,
        skip: int,
        limit: int,
    ) -> list[PublicAgentProfile]:
        view = public_agent_profiles
        if filters and any(key not in view.c for key in filters):
            # Filtering on a column the projection does not carry can never match
            return []
        policy = get_policy(Entity.PUBLIC_AGENT_PROFILES)
        stmt = (
            select(view)
            .where(policy.read_filter(actor), *filter_clauses(view.c, filters))
            .order_by(view.c.created_at)
            .offset(skip)
            .limit(limit)
        )
        return [
            PublicAgentProfile.model_validate(dict(row)) for row in self.db.execute(stmt).mappings()
        ]

    def _visible_property(self, actor: Actor, property_id: Any) -> Property | None:
        if property_id is None:
            return None
        return self.db.scalar(
            select(Property).where(
                Property.id == property_id,
                PROPERTY_POLICY.read_filter(actor),
            )
        )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def write(
        self,
        entity: Entity,
        action: Action,
        payload: Mapping[str, Any],
        actor: Actor,
    ) -> Any:
        """
        Insert, update or delete one row as `actor`.

        Updates and deletes identify the row by `payload["id"]`; the remaining
        keys of an update payload are the changes.

        Returns:
            The written row, refreshed; None for deletes

        Raises:
            PermissionDenied: If the policy does not allow the write
            ValidationError: If the payload breaks an invariant
            NotFound: If the row to update/delete is absent or invisible
            Conflict: If a uniqueness constraint rejects the write

        """
        entity = Entity(entity)
        action = Action(action)
        if entity is Entity.PUBLIC_AGENT_PROFILES:
            raise PermissionDenied("public_agent_profiles is read-only")
        policy = get_policy(entity)
        log_extra = {
            "actor_id": str(actor.id) if actor.id else None,
            "entity": entity.value,
            "action": action.value,
        }

        try:
            if action is Action.INSERT:
                row = self._insert(policy, payload, actor)
            elif action is Action.UPDATE:
                row = self._update(policy, payload, actor)
            elif action is Action.DELETE:
                row = self._delete(policy, payload, actor)
            else:
                raise ValidationError(f"unsupported write action '{action.value}'")
            self.db.commit()
        except AccessError as exc:
            self.db.rollback()
            logger.info("write rejected: %s", exc.detail, extra=log_extra)
            raise
        except IntegrityError as exc:
            self.db.rollback()
            logger.info("write rejected by constraint: %s", exc.orig, extra=log_extra)
            if "unique" in str(exc.orig).lower():
                raise Conflict(f"{policy.label} already exists") from exc
            raise ValidationError(f"{policy.label} violates a database constraint") from exc

        logger.debug("write applied", extra=log_extra)
        if row is None:
            return None
        self.db.refresh(row)
        return row

    def _coerce(self, policy: Policy, payload: Mapping[str, Any]) -> dict[str, Any]:
        columns = sa_inspect(policy.model).columns
        values = {}
        for key, value in payload.items():
            if key not in columns:
                raise ValidationError(f"unknown column '{key}'")
            values[key] = _coerce_value(columns[key], key, value)
        return values

    def _related(self, policy: Policy, values: Mapping[str, Any], actor: Actor) -> Any:
        """The row a write's checks depend on, looked up as the actor sees it."""
        if policy.entity is Entity.PROPERTIES:
            return self.db.get(Profile, values["agent_id"]) if values.get("agent_id") else None
        if policy.entity in (
            Entity.PROPERTY_PHOTOS,
            Entity.SAVED_PROPERTIES,
            Entity.MESSAGES,
        ):
            return self._visible_property(actor, values.get("property_id"))
        return None

    def _insert(self, policy: Policy, payload: Mapping[str, Any], actor: Actor) -> Any:
        values = self._coerce(policy, payload)
        row = policy.model(**values)
        related = self._related(policy, values, actor)
        parent = related if policy.entity is Entity.PROPERTY_PHOTOS else None

        if not policy.allows(actor, Action.INSERT, row, parent):
            raise PermissionDenied(f"Not allowed to create this {policy.label.lower()}")
        validate_write(policy.entity, Action.INSERT, values, actor, related)

        self.db.add(row)
        self.db.flush()
        return row

    def _target(self, policy: Policy, payload: Mapping[str, Any], actor: Actor) -> Any:
        if payload.get("id") is None:
            raise ValidationError("id is required")
        row_id = self._coerce(policy, {"id": payload["id"]})["id"]
        row = self.db.scalar(
            select(policy.model).where(policy.model.id == row_id, policy.read_filter(actor))
        )
        if row is None:
            raise NotFound(f"{policy.label} not found")
        return row

    def _update(self, policy: Policy, payload: Mapping[str, Any], actor: Actor) -> Any:
        row = self._target(policy, payload, actor)
        if not policy.allows(actor, Action.UPDATE, row):
            raise PermissionDenied(f"Not allowed to update this {policy.label.lower()}")

        changes = self._coerce(policy, {k: v for k, v in payload.items() if k != "id"})
        frozen = sorted(set(changes) - policy.mutable_columns)
        if frozen:
            raise ValidationError(*(f"column '{key}' cannot be updated" for key in frozen))

        values = {**row_values(row), **changes}
        if policy.entity is Entity.PROPERTIES:
            related = row.agent
        elif policy.entity is Entity.PROPERTY_PHOTOS:
            related = row.parent_property
        else:
            related = None
        validate_write(policy.entity, Action.UPDATE, values, actor, related)

        for key, value in changes.items():
            setattr(row, key, value)
        self.db.flush()
        return row

    def _delete(self, policy: Policy, payload: Mapping[str, Any], actor: Actor) -> None:
        row = self._target(policy, payload, actor)
        if not policy.allows(actor, Action.DELETE, row):
            raise PermissionDenied(f"Not allowed to delete this {policy.label.lower()}")
        self.db.delete(row)
        self.db.flush()
        return None
