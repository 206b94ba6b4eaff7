"""Tests for the property image bucket."""

import uuid

import pytest

from app.access.actor import ANONYMOUS, Actor
from app.access.storage import can_write_object, check_upload, object_path, owner_segment
from app.core.config import settings
from app.core.exceptions import NotFound, PermissionDenied, ValidationError
from app.models.enums import Role
from tests.helpers import actor_for, auth_headers

OWNER_ID = uuid.uuid4()
PROPERTY_ID = uuid.uuid4()
OWNER = Actor.authenticated(OWNER_ID, Role.AGENT)
PATH = f"{OWNER_ID}/{PROPERTY_ID}/1700000000-0.jpg"


class TestPathRules:
    """Tests for object path ownership."""

    def test_object_path_uses_basename(self):
        assert object_path(OWNER_ID, PROPERTY_ID, "../../etc/photo.png") == (
            f"{OWNER_ID}/{PROPERTY_ID}/photo.png"
        )

    def test_owner_segment(self):
        assert owner_segment(PATH) == str(OWNER_ID)
        assert owner_segment("loose.jpg") is None

    @pytest.mark.parametrize("path", [f"{OWNER_ID}/../x.jpg", f"{OWNER_ID}//x.jpg"])
    def test_traversal_rejected(self, path):
        with pytest.raises(ValidationError):
            owner_segment(path)

    def test_write_requires_owning_folder(self):
        assert can_write_object(OWNER, PATH)
        assert not can_write_object(Actor.authenticated(uuid.uuid4(), Role.AGENT), PATH)
        assert not can_write_object(ANONYMOUS, PATH)
        assert not can_write_object(OWNER, "loose.jpg")
        assert can_write_object(Actor.service(), "loose.jpg")


class TestUploadLimits:
    """Tests for size and content type limits."""

    @pytest.mark.parametrize("content_type", ["image/jpeg", "image/jpg", "image/png", "image/webp"])
    def test_allowed_types(self, content_type):
        check_upload(content_type, 1024)

    def test_gif_rejected(self):
        with pytest.raises(ValidationError):
            check_upload("image/gif", 1024)

    def test_size_limit(self):
        check_upload("image/png", 5 * 1024 * 1024)
        with pytest.raises(ValidationError):
            check_upload("image/png", 5 * 1024 * 1024 + 1)

    def test_empty_file(self):
        with pytest.raises(ValidationError):
            check_upload("image/png", 0)


class TestObjectStorage:
    """Tests for the filesystem object store."""

    def test_put_and_delete(self, storage):
        stored = storage.put(OWNER, PATH, b"jpeg-bytes", "image/jpeg")
        assert stored == PATH
        assert (storage.bucket_dir / PATH).read_bytes() == b"jpeg-bytes"
        assert storage.public_url(PATH) == f"/storage/property-images/{PATH}"

        storage.delete(OWNER, PATH)
        assert not (storage.bucket_dir / PATH).exists()

    def test_put_into_foreign_folder(self, storage):
        with pytest.raises(PermissionDenied):
            storage.put(Actor.authenticated(uuid.uuid4()), PATH, b"x", "image/jpeg")
        assert not (storage.bucket_dir / PATH).exists()

    def test_delete_missing(self, storage):
        with pytest.raises(NotFound):
            storage.delete(OWNER, PATH)


class TestStorageEndpoints:
    """Tests for PUT/DELETE /api/storage/{path}."""

    def test_upload(self, client, storage, agent, published_property):
        path = f"{agent.id}/{published_property.id}/1.jpg"
        response = client.put(
            f"/api/storage/{path}",
            files={"file": ("1.jpg", b"jpeg-bytes", "image/jpeg")},
            headers=auth_headers(agent),
        )
        assert response.status_code == 201
        assert response.json() == {"path": path, "url": f"/storage/property-images/{path}"}
        assert (storage.bucket_dir / path).is_file()

    def test_upload_to_other_folder(self, client, agent, other_agent, published_property):
        path = f"{agent.id}/{published_property.id}/1.jpg"
        response = client.put(
            f"/api/storage/{path}",
            files={"file": ("1.jpg", b"jpeg-bytes", "image/jpeg")},
            headers=auth_headers(other_agent),
        )
        assert response.status_code == 403

    def test_upload_wrong_type(self, client, agent, published_property):
        path = f"{agent.id}/{published_property.id}/1.gif"
        response = client.put(
            f"/api/storage/{path}",
            files={"file": ("1.gif", b"GIF89a", "image/gif")},
            headers=auth_headers(agent),
        )
        assert response.status_code == 422
        assert response.json()["reasons"] == ["content type 'image/gif' is not allowed"]

    def test_upload_oversized(self, client, storage, agent, published_property):
        path = f"{agent.id}/{published_property.id}/big.jpg"
        oversized = b"x" * (settings.STORAGE_MAX_FILE_SIZE + 1)
        response = client.put(
            f"/api/storage/{path}",
            files={"file": ("big.jpg", oversized, "image/jpeg")},
            headers=auth_headers(agent),
        )
        assert response.status_code == 422
        assert response.json()["reasons"] == [f"file exceeds {settings.STORAGE_MAX_FILE_SIZE} bytes"]
        assert not (storage.bucket_dir / path).exists()

    def test_anonymous_upload(self, client, storage, agent, published_property):
        path = f"{agent.id}/{published_property.id}/1.jpg"
        response = client.put(
            f"/api/storage/{path}",
            files={"file": ("1.jpg", b"jpeg-bytes", "image/jpeg")},
        )
        assert response.status_code == 403
        assert not (storage.bucket_dir / path).exists()

    def test_anonymous_delete(self, client, storage, agent, published_property):
        path = f"{agent.id}/{published_property.id}/1.jpg"
        storage.put(actor_for(agent), path, b"x", "image/png")
        assert client.delete(f"/api/storage/{path}").status_code == 403
        assert client.delete(f"/api/storage/{path}", headers=auth_headers(agent)).status_code == 204
