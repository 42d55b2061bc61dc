"""Supabase repository for the site configuration."""

from dataclasses import dataclass

from supabase import AsyncClient

from pousada_api.adapters.supabase_errors import run_query
from pousada_api.domain.site import SiteConfig, SiteOption
from pousada_api.errors import StorageFailure
from pousada_api.services.site_config import SiteConfigRepository

_SINGLETON_ID = 1


@dataclass
class SupabaseSiteConfigRepository(SiteConfigRepository):
    """Stores the configuration as a single ``site_config`` row."""

    client: AsyncClient

    async def get_config(self) -> SiteConfig | None:
        """Return the stored configuration row, if present."""
        response = await run_query(
            "get_site_config",
            self.client.table("site_config")
            .select("description, options")
            .eq("id", _SINGLETON_ID)
            .limit(1)
            .execute(),
        )
        if not response.data:
            return None
        return _to_config(response.data[0])

    async def save_config(self, config: SiteConfig) -> SiteConfig:
        """Upsert the singleton configuration row."""
        response = await run_query(
            "save_site_config",
            self.client.table("site_config")
            .upsert(
                {
                    "id": _SINGLETON_ID,
                    "description": config.description,
                    "options": [
                        {"id": option.id, "label": option.label, "price": option.price}
                        for option in config.options
                    ],
                }
            )
            .execute(),
        )
        if not response.data:
            raise StorageFailure("Failed to save site configuration")
        return _to_config(response.data[0])


def _to_config(row: dict[str, object]) -> SiteConfig:
    return SiteConfig(
        description=str(row.get("description") or ""),
        options=[
            SiteOption(
                id=str(option["id"]),
                label=str(option["label"]),
                price=float(option["price"]),
            )
            for option in row.get("options") or []
        ],
    )
