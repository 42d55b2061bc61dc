"""Supabase Storage bucket used as the media store."""

from dataclasses import dataclass

from supabase import AsyncClient

from pousada_api.adapters.supabase_errors import run_query
from pousada_api.domain.images import StoredImage
from pousada_api.services.images import MediaStore

_PAGE_SIZE = 100
_DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class SupabaseMediaStore(MediaStore):
    """Media store implemented on a Supabase Storage bucket."""

    client: AsyncClient
    bucket: str = "images"

    async def list_keys(self) -> list[str]:
        """Return every object name in the bucket, paging through the listing."""
        keys: list[str] = []
        offset = 0
        while True:
            page = await run_query(
                "list_images",
                self.client.storage.from_(self.bucket).list(
                    None,
                    {
                        "limit": _PAGE_SIZE,
                        "offset": offset,
                        "sortBy": {"column": "created_at", "order": "asc"},
                    },
                ),
            )
            keys.extend(str(item["name"]) for item in page)
            if len(page) < _PAGE_SIZE:
                return keys
            offset += _PAGE_SIZE

    async def get(self, key: str) -> StoredImage | None:
        """Download an object with the content type recorded at upload."""
        entry = await self._find(key)
        if entry is None:
            return None
        content = await run_query(
            "download_image", self.client.storage.from_(self.bucket).download(key)
        )
        metadata = entry.get("metadata") or {}
        return StoredImage(
            content=content,
            content_type=str(metadata.get("mimetype") or _DEFAULT_CONTENT_TYPE),
        )

    async def exists(self, key: str) -> bool:
        """Return True when the bucket holds an object with this name."""
        return await self._find(key) is not None

    async def put(self, key: str, content: bytes, content_type: str) -> None:
        """Upload bytes with their content type."""
        await run_query(
            "upload_image",
            self.client.storage.from_(self.bucket).upload(
                key, content, {"content-type": content_type}
            ),
        )

    async def delete(self, key: str) -> None:
        """Remove an object from the bucket."""
        await run_query(
            "delete_image", self.client.storage.from_(self.bucket).remove([key])
        )

    async def _find(self, key: str) -> dict[str, object] | None:
        matches = await run_query(
            "find_image",
            self.client.storage.from_(self.bucket).list(
                None, {"limit": _PAGE_SIZE, "offset": 0, "search": key}
            ),
        )
        for item in matches:
            if item.get("name") == key:
                return item
        return None
