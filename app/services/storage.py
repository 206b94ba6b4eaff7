"""Local filesystem object store for the property image bucket."""

import logging
from pathlib import Path

from app.access.actor import Actor
from app.access.storage import can_write_object, check_upload, split_path
from app.core.config import settings
from app.core.exceptions import NotFound, PermissionDenied

logger = logging.getLogger(__name__)


class ObjectStorage:
    """Files of one bucket under a root directory."""

    def __init__(self, root: str | Path, bucket: str) -> None:
        self.bucket = bucket
        self.bucket_dir = Path(root) / bucket

    def _file(self, path: str) -> Path:
        return self.bucket_dir.joinpath(*split_path(path))

    def public_url(self, path: str) -> str:
        """URL the static mount serves the object under."""
        return f"/storage/{self.bucket}/{'/'.join(split_path(path))}"

    def ensure_writable(self, actor: Actor, path: str) -> None:
        """Raise PermissionDenied unless the actor owns the path's folder."""
        if not can_write_object(actor, path):
            raise PermissionDenied("Not allowed to write to this folder")

    def put(self, actor: Actor, path: str, data: bytes, content_type: str | None) -> str:
        """
        Store (or replace) an object.

        Args:
            actor: Uploading actor
            path: Object path, `{owner_id}/{property_id}/{filename}`
            data: File contents
            content_type: Declared MIME type

        Returns:
            The normalized object path

        Raises:
            PermissionDenied: If the actor does not own the path's folder
            ValidationError: If the file breaks the size or type limits

        """
        self.ensure_writable(actor, path)
        check_upload(content_type, len(data))

        target = self._file(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.info("stored object %s (%d bytes)", path, len(data), extra={"actor_id": str(actor.id)})
        return "/".join(split_path(path))

    def delete(self, actor: Actor, path: str) -> None:
        """Remove an object the actor owns."""
        self.ensure_writable(actor, path)
        target = self._file(path)
        if not target.is_file():
            raise NotFound("Object not found")
        target.unlink()
        logger.info("deleted object %s", path, extra={"actor_id": str(actor.id)})


def get_storage() -> ObjectStorage:
    """Dependency for the configured bucket."""
    return ObjectStorage(settings.STORAGE_ROOT, settings.STORAGE_BUCKET)
