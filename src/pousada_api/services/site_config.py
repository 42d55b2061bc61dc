"""Site configuration service."""

from dataclasses import dataclass
from typing import Protocol

from pousada_api.domain.site import DEFAULT_SITE_CONFIG, SiteConfig
from pousada_api.errors import ValidationError


class SiteConfigRepository(Protocol):
    """Persistence interface for the singleton site configuration."""

    async def get_config(self) -> SiteConfig | None:
        """Return the stored configuration, if any."""

    async def save_config(self, config: SiteConfig) -> SiteConfig:
        """Overwrite the stored configuration and return it."""


@dataclass
class SiteConfigService:
    """Service for reading and replacing the site configuration."""

    repository: SiteConfigRepository

    async def get_config(self) -> SiteConfig:
        """Return the configuration, seeding defaults on first read."""
        config = await self.repository.get_config()
        if config is None:
            config = await self.repository.save_config(DEFAULT_SITE_CONFIG)
        return config

    async def update_config(self, config: SiteConfig) -> SiteConfig:
        """Replace the configuration wholesale."""
        option_ids = [option.id for option in config.options]
        if len(option_ids) != len(set(option_ids)):
            raise ValidationError("Option ids must be unique")
        if any(option.price < 0 for option in config.options):
            raise ValidationError("Option prices cannot be negative")
        return await self.repository.save_config(config)
