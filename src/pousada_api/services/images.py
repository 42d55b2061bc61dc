"""Image catalog backed by the media store."""

import logging
import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Protocol
from uuid import uuid4

from pousada_api.domain.images import ImageAsset, StoredImage
from pousada_api.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
_KEY_PREFIX = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}-"
)


class MediaStore(Protocol):
    """Blob storage interface for uploaded images."""

    async def list_keys(self) -> list[str]:
        """Return every stored object key."""

    async def get(self, key: str) -> StoredImage | None:
        """Return an object's bytes and content type, if present."""

    async def exists(self, key: str) -> bool:
        """Return True when an object is stored under the key."""

    async def put(self, key: str, content: bytes, content_type: str) -> None:
        """Store bytes under a key with content-type metadata."""

    async def delete(self, key: str) -> None:
        """Remove an object."""


@dataclass
class ImageService:
    """Service for listing, serving, uploading and deleting images."""

    store: MediaStore
    public_base_url: str = ""

    async def list_images(self) -> list[ImageAsset]:
        """Return the catalog derived from the media store listing."""
        keys = await self.store.list_keys()
        return [self._asset(key) for key in keys if not key.startswith(".")]

    async def get_image(self, image_id: str) -> StoredImage:
        """Return the stored bytes for an image."""
        image = await self.store.get(image_id)
        if image is None:
            raise NotFound("Image not found")
        return image

    async def upload_image(
        self, content: bytes, filename: str, content_type: str | None
    ) -> ImageAsset:
        """Store an uploaded image under a collision-resistant key."""
        if not content:
            raise ValidationError("Uploaded file is empty")
        if not content_type or not content_type.startswith("image/"):
            raise ValidationError("Only image uploads are accepted")

        key = f"{uuid4()}-{_safe_name(filename)}"
        await self.store.put(key, content, content_type)
        logger.info("Image uploaded", extra={"image_id": key, "bytes": len(content)})
        return self._asset(key)

    async def delete_image(self, image_id: str) -> None:
        """Remove an image from the media store."""
        if not await self.store.exists(image_id):
            raise NotFound("Image not found")
        await self.store.delete(image_id)
        logger.info("Image deleted", extra={"image_id": image_id})

    def _asset(self, key: str) -> ImageAsset:
        return ImageAsset(
            id=key,
            url=f"{self.public_base_url.rstrip('/')}/images/{key}",
            alt=_KEY_PREFIX.sub("", key),
        )


def _safe_name(filename: str) -> str:
    name = PurePosixPath(filename.replace("\\", "/")).name
    cleaned = _UNSAFE_CHARS.sub("-", name).strip("-.")
    return cleaned or "image"
