"""Site configuration domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SiteOption:
    """A bookable extra offered with a stay."""

    id: str
    label: str
    price: float


@dataclass(frozen=True)
class SiteConfig:
    """Singleton site configuration."""

    description: str
    options: list[SiteOption] = field(default_factory=list)


DEFAULT_SITE_CONFIG = SiteConfig(description="Bem-vindo à nossa pousada.")
