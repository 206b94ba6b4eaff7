"""
Object path rules for the property image bucket.

Objects are addressed as `{owner_id}/{property_id}/{filename}`. Anyone may
read; only the identity named by the first path segment may write.
"""

import posixpath
import uuid

from app.access.actor import Actor
from app.core.config import settings
from app.core.exceptions import ValidationError


def object_path(owner_id: uuid.UUID, property_id: uuid.UUID, filename: str) -> str:
    """Build the namespaced path for an uploaded file."""
    name = posixpath.basename(filename.replace("\\", "/"))
    if not name or name in (".", ".."):
        raise ValidationError("filename cannot be empty")
    return f"{owner_id}/{property_id}/{name}"


def split_path(path: str) -> list[str]:
    """Path segments, rejecting traversal and empty segments."""
    segments = path.strip("/").split("/")
    if any(segment in ("", ".", "..") for segment in segments):
        raise ValidationError("invalid object path")
    return segments


def owner_segment(path: str) -> str | None:
    """The identity that owns `path`, i.e. its first folder."""
    segments = split_path(path)
    # Files at the bucket root have no owner folder
    return segments[0] if len(segments) > 1 else None


def can_write_object(actor: Actor, path: str) -> bool:
    """Insert, update and delete all require owning the path's first folder."""
    if actor.is_service:
        return True
    if actor.id is None:
        return False
    return owner_segment(path) == str(actor.id)


def check_upload(content_type: str | None, size: int) -> None:
    """Enforce the bucket's size limit and MIME allow-list."""
    reasons = []
    if content_type not in settings.STORAGE_ALLOWED_MIME_TYPES:
        reasons.append(f"content type '{content_type}' is not allowed")
    if size > settings.STORAGE_MAX_FILE_SIZE:
        reasons.append(f"file exceeds {settings.STORAGE_MAX_FILE_SIZE} bytes")
    if size == 0:
        reasons.append("file is empty")
    if reasons:
        raise ValidationError(*reasons)
