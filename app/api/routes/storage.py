"""Property image upload routes."""

from fastapi import APIRouter, Depends, UploadFile

from app.access.actor import Actor
from app.api.deps import get_current_actor
from app.core.config import settings
from app.services.storage import ObjectStorage, get_storage

router = APIRouter(prefix="/storage", tags=["storage"])


@router.put("/{path:path}", status_code=201)
async def upload_object(
    path: str,
    file: UploadFile,
    actor: Actor = Depends(get_current_actor),
    storage: ObjectStorage = Depends(get_storage),
) -> dict[str, str]:
    """Upload an image to `{your_id}/{property_id}/{filename}`."""
    storage.ensure_writable(actor, path)
    # One byte past the limit is enough to reject an oversized file
    data = await file.read(settings.STORAGE_MAX_FILE_SIZE + 1)
    stored = storage.put(actor, path, data, file.content_type)
    return {"path": stored, "url": storage.public_url(stored)}


@router.delete("/{path:path}", status_code=204)
def delete_object(
    path: str,
    actor: Actor = Depends(get_current_actor),
    storage: ObjectStorage = Depends(get_storage),
) -> None:
    """Delete an image from your folder."""
    storage.delete(actor, path)
