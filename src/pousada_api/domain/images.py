"""Image catalog domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageAsset:
    """Catalog entry for an image in the media store."""

    id: str
    url: str
    alt: str


@dataclass(frozen=True)
class StoredImage:
    """Raw image content fetched from the media store."""

    content: bytes
    content_type: str
