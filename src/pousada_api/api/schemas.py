"""Request and response models for the HTTP API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pousada_api.domain.bookings import BookingListing, BookingRecord, OccupiedRange
from pousada_api.domain.images import ImageAsset
from pousada_api.domain.models import AccountRecord, Role
from pousada_api.domain.site import SiteConfig, SiteOption


class ApiModel(BaseModel):
    """Base model exchanging camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CredentialsIn(ApiModel):
    """Signup or login payload."""

    email: str
    password: str


class UserOut(ApiModel):
    """Public view of an account."""

    id: UUID
    email: str
    role: Role
    phone_number: str | None = None

    @classmethod
    def from_record(cls, account: AccountRecord) -> "UserOut":
        """Build the public view, leaving the password hash behind."""
        return cls(
            id=account.id,
            email=account.email,
            role=account.role,
            phone_number=account.phone_number,
        )


class AuthOut(ApiModel):
    """Token plus the authenticated user."""

    token: str
    user: UserOut


class ProfileUpdateIn(ApiModel):
    """Profile fields an account may change on itself."""

    phone_number: str


class SiteOptionModel(ApiModel):
    """A bookable extra."""

    id: str = Field(min_length=1)
    label: str
    price: float


class SiteConfigModel(ApiModel):
    """Site description and bookable extras."""

    description: str
    options: list[SiteOptionModel] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, config: SiteConfig) -> "SiteConfigModel":
        """Convert from the domain model."""
        return cls(
            description=config.description,
            options=[
                SiteOptionModel(id=option.id, label=option.label, price=option.price)
                for option in config.options
            ],
        )

    def to_domain(self) -> SiteConfig:
        """Convert to the domain model."""
        return SiteConfig(
            description=self.description,
            options=[
                SiteOption(id=option.id, label=option.label, price=option.price)
                for option in self.options
            ],
        )


class BookingCreateIn(ApiModel):
    """Payload for a new booking."""

    start_date: date
    end_date: date
    description: str = ""
    option_selections: dict[str, bool] = Field(default_factory=dict)


class BookingPatchIn(ApiModel):
    """Partial booking edit."""

    start_date: date | None = None
    end_date: date | None = None
    description: str | None = None
    option_selections: dict[str, bool] | None = None


class OwnerOut(ApiModel):
    """Booking owner contact."""

    email: str
    phone_number: str | None = None


class BookingOut(ApiModel):
    """A stored booking."""

    id: UUID
    owner_account_id: UUID
    start_date: date
    end_date: date
    description: str
    option_selections: dict[str, bool]
    owner: OwnerOut | None = None

    @classmethod
    def from_record(
        cls, booking: BookingRecord, owner: OwnerOut | None = None
    ) -> "BookingOut":
        """Convert from the domain record."""
        return cls(
            id=booking.id,
            owner_account_id=booking.owner_account_id,
            start_date=booking.start_date,
            end_date=booking.end_date,
            description=booking.description,
            option_selections=booking.option_selections,
            owner=owner,
        )

    @classmethod
    def from_listing(cls, listing: BookingListing) -> "BookingOut":
        """Convert a listing entry, including the owner contact if present."""
        owner = (
            OwnerOut(
                email=listing.owner.email,
                phone_number=listing.owner.phone_number,
            )
            if listing.owner
            else None
        )
        return cls.from_record(listing.booking, owner)


class OccupiedRangeOut(ApiModel):
    """Dates held by some booking, as shown on the public calendar."""

    start_date: date
    end_date: date

    @classmethod
    def from_domain(cls, occupied: OccupiedRange) -> "OccupiedRangeOut":
        """Convert from the domain model."""
        return cls(start_date=occupied.start_date, end_date=occupied.end_date)


class ImageOut(ApiModel):
    """Image catalog entry."""

    id: str
    url: str
    alt: str

    @classmethod
    def from_domain(cls, asset: ImageAsset) -> "ImageOut":
        """Convert from the domain model."""
        return cls(id=asset.id, url=asset.url, alt=asset.alt)
