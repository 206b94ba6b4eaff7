"""
Row-level access policies.

Each entity has one Policy that answers two questions for an actor:

* `visible(actor)` - a SQL predicate that narrows reads to the rows the actor
  may see. Reads never fail on visibility, they just return fewer rows.
* `can_read` / `can_insert` / `can_update` / `can_delete` - pure predicates on
  a row instance, used to gate writes and to check single rows in memory.

Both forms encode the same rule and are tested against each other.

Profiles are exposed through two separate entities. `profiles` is the base
table and only ever shows an actor their own row. `public_agent_profiles` is a
narrow projection (see `app.models.profile.public_agent_profiles`) that holds
no contact columns and is granted to everyone on its own.
"""

from typing import Any

from sqlalchemy import ColumnElement, false, or_, true

from app.access.actor import Actor
from app.models.enums import Action, Entity, PropertyStatus, Role
from app.models.market_data import MarketData
from app.models.message import Message
from app.models.processing_log import ProcessingLog
from app.models.profile import Profile
from app.models.property import Property
from app.models.property_photo import PropertyPhoto
from app.models.saved_property import SavedProperty


class Policy:
    """Deny-by-default rule set for one entity."""

    entity: Entity
    model: Any
    label: str = "Row"
    # Columns an update payload may touch once the update itself is allowed
    mutable_columns: frozenset[str] = frozenset()

    def visible(self, actor: Actor) -> ColumnElement[bool]:
        return false()

    def can_read(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return False

    def can_insert(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return False

    def can_update(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return False

    def can_delete(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return False

    def read_filter(self, actor: Actor) -> ColumnElement[bool]:
        """Visibility predicate, with the service actor seeing every row."""
        if actor.is_service:
            return true()
        return self.visible(actor)

    def allows(self, actor: Actor, action: Action, row: Any, parent: Any = None) -> bool:
        if actor.is_service:
            return True
        checks = {
            Action.READ: self.can_read,
            Action.INSERT: self.can_insert,
            Action.UPDATE: self.can_update,
            Action.DELETE: self.can_delete,
        }
        return checks[action](actor, row, parent)


class ProfilePolicy(Policy):
    """Base profile rows: self only, in full."""

    entity = Entity.PROFILES
    model = Profile
    label = "Profile"
    mutable_columns = frozenset({"name", "phone"})

    def visible(self, actor: Actor) -> ColumnElement[bool]:
        if actor.id is None:
            return false()
        return Profile.id == actor.id

    def can_read(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return actor.owns(row.id)

    def can_insert(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return actor.owns(row.id)

    def can_update(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return actor.owns(row.id)


class PublicAgentProfilePolicy(Policy):
    """
    Safe agent projection, readable by anonymous and authenticated actors.

    The projection itself only contains agent rows, so the grant is
    unconditional. The row predicate still checks the role for callers that
    hold a full Profile instance.
    """

    entity = Entity.PUBLIC_AGENT_PROFILES
    model = Profile
    label = "Agent"

    def visible(self, actor: Actor) -> ColumnElement[bool]:
        return true()

    def can_read(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return row.role == Role.AGENT


class PropertyPolicy(Policy):
    """Published listings are public; owners see and manage their own."""

    entity = Entity.PROPERTIES
    model = Property
    label = "Property"
    mutable_columns = frozenset(
        {
            "title",
            "description",
            "price",
            "currency",
            "for_rent",
            "beds",
            "baths",
            "area_sqft",
            "address",
            "city",
            "region",
            "latitude",
            "longitude",
            "status",
        }
    )

    def visible(self, actor: Actor) -> ColumnElement[bool]:
        published = Property.status == PropertyStatus.PUBLISHED
        if actor.id is None:
            return published
        return or_(published, Property.agent_id == actor.id)

    def can_read(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        # Owner rule first: agents see their own listings in any status
        return actor.owns(row.agent_id) or row.status == PropertyStatus.PUBLISHED

    def can_insert(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return actor.owns(row.agent_id)

    def can_update(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return actor.owns(row.agent_id)

    def can_delete(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return actor.owns(row.agent_id)


class PropertyPhotoPolicy(Policy):
    """Photos follow their parent property."""

    entity = Entity.PROPERTY_PHOTOS
    model = PropertyPhoto
    label = "Photo"
    mutable_columns = frozenset({"thumb_path", "med_path", "ordering"})

    def visible(self, actor: Actor) -> ColumnElement[bool]:
        return PropertyPhoto.parent_property.has(PROPERTY_POLICY.visible(actor))

    @staticmethod
    def _parent(row: Any, parent: Any) -> Any:
        return parent if parent is not None else row.parent_property

    def can_read(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        listing = self._parent(row, parent)
        return listing is not None and PROPERTY_POLICY.can_read(actor, listing)

    def _owns_parent(self, actor: Actor, row: Any, parent: Any) -> bool:
        listing = self._parent(row, parent)
        return listing is not None and actor.owns(listing.agent_id)

    def can_insert(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return self._owns_parent(actor, row, parent)

    def can_update(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return self._owns_parent(actor, row, parent)

    def can_delete(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return self._owns_parent(actor, row, parent)


class SavedPropertyPolicy(Policy):
    """Favourites are private to the user who saved them."""

    entity = Entity.SAVED_PROPERTIES
    model = SavedProperty
    label = "Saved property"

    def visible(self, actor: Actor) -> ColumnElement[bool]:
        if actor.id is None:
            return false()
        return SavedProperty.user_id == actor.id

    def can_read(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return actor.owns(row.user_id)

    def can_insert(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return actor.owns(row.user_id)

    def can_delete(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return actor.owns(row.user_id)


class MessagePolicy(Policy):
    """Inquiries are shared between the sending seeker and the receiving agent."""

    entity = Entity.MESSAGES
    model = Message
    label = "Message"
    mutable_columns = frozenset({"status"})

    def visible(self, actor: Actor) -> ColumnElement[bool]:
        if actor.id is None:
            return false()
        return or_(Message.agent_id == actor.id, Message.seeker_id == actor.id)

    def can_read(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return actor.owns(row.agent_id) or actor.owns(row.seeker_id)

    def can_insert(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return actor.owns(row.seeker_id)

    def can_update(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return actor.owns(row.agent_id)

    def can_delete(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return actor.owns(row.seeker_id)


class MarketDataPolicy(Policy):
    """Aggregates are public and read-only."""

    entity = Entity.MARKET_DATA
    model = MarketData
    label = "Market data"

    def visible(self, actor: Actor) -> ColumnElement[bool]:
        return true()

    def can_read(self, actor: Actor, row: Any, parent: Any = None) -> bool:
        return True


class ProcessingLogPolicy(Policy):
    """Pipeline logs are for the service actor only."""

    entity = Entity.PROCESSING_LOGS
    model = ProcessingLog
    label = "Processing log"


PROPERTY_POLICY = PropertyPolicy()

POLICIES: dict[Entity, Policy] = {
    policy.entity: policy
    for policy in (
        ProfilePolicy(),
        PublicAgentProfilePolicy(),
        PROPERTY_POLICY,
        PropertyPhotoPolicy(),
        SavedPropertyPolicy(),
        MessagePolicy(),
        MarketDataPolicy(),
        ProcessingLogPolicy(),
    )
}


def get_policy(entity: Entity) -> Policy:
    """Look up the policy for an entity."""
    return POLICIES[Entity(entity)]


def allow(actor: Actor, action: Action, entity: Entity, row: Any, parent: Any = None) -> bool:
    """
    Decide whether `actor` may perform `action` on `row`.

    `parent` supplies the owning Property for photo rows that are not yet
    attached to one (inserts).
    """
    return get_policy(entity).allows(actor, Action(action), row, parent)


def visibility_filter(actor: Actor, entity: Entity) -> ColumnElement[bool]:
    """SQL predicate restricting a query on `entity` to rows `actor` may read."""
    return get_policy(entity).read_filter(actor)
