"""Enum definitions for roles, statuses and access-control vocabulary."""

from enum import Enum


class Role(str, Enum):
    """Profile role, fixed at registration."""

    SEEKER = "seeker"
    AGENT = "agent"
    ADMIN = "admin"


class PropertyStatus(str, Enum):
    """Listing lifecycle; only published listings are public."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class MessageStatus(str, Enum):
    """Inquiry handling state, set by the receiving agent."""

    UNREAD = "unread"
    READ = "read"
    RESPONDED = "responded"


class Entity(str, Enum):
    """Tables and views guarded by the policy engine."""

    PROFILES = "profiles"
    PUBLIC_AGENT_PROFILES = "public_agent_profiles"
    PROPERTIES = "properties"
    PROPERTY_PHOTOS = "property_photos"
    SAVED_PROPERTIES = "saved_properties"
    MESSAGES = "messages"
    MARKET_DATA = "market_data"
    PROCESSING_LOGS = "processing_logs"


class Action(str, Enum):
    """Operations an actor can attempt on a row."""

    READ = "read"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
