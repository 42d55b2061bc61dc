"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import AsyncClient

from pousada_api.adapters.supabase_account_repository import (
    SupabaseAccountRepository,
)
from pousada_api.adapters.supabase_booking_repository import (
    SupabaseBookingRepository,
)
from pousada_api.adapters.supabase_media_store import SupabaseMediaStore
from pousada_api.adapters.supabase_site_config_repository import (
    SupabaseSiteConfigRepository,
)
from pousada_api.config import Settings
from pousada_api.services.accounts import AccountService
from pousada_api.services.bookings import BookingService
from pousada_api.services.images import ImageService
from pousada_api.services.passwords import BcryptPasswordHasher
from pousada_api.services.site_config import SiteConfigService
from pousada_api.services.tokens import TokenService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_service: TokenService
    account_service: AccountService
    booking_service: BookingService
    site_config_service: SiteConfigService
    image_service: ImageService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = AsyncClient(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    account_repository = SupabaseAccountRepository(supabase_client)
    booking_repository = SupabaseBookingRepository(supabase_client)
    site_config_repository = SupabaseSiteConfigRepository(supabase_client)
    media_store = SupabaseMediaStore(
        supabase_client, bucket=resolved_settings.images_bucket
    )
    token_service = TokenService(
        secret=resolved_settings.token_secret,
        ttl_seconds=resolved_settings.token_ttl_seconds,
    )
    account_service = AccountService(
        repository=account_repository,
        password_hasher=BcryptPasswordHasher(rounds=resolved_settings.bcrypt_rounds),
        token_service=token_service,
    )
    booking_service = BookingService(
        repository=booking_repository,
        account_repository=account_repository,
    )
    image_service = ImageService(
        store=media_store,
        public_base_url=resolved_settings.public_base_url,
    )

    return AppContainer(
        settings=resolved_settings,
        token_service=token_service,
        account_service=account_service,
        booking_service=booking_service,
        site_config_service=SiteConfigService(site_config_repository),
        image_service=image_service,
    )
