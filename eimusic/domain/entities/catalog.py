"""Catalog entities: artists and the content they publish.

Pure representations with zero external dependencies. Durations are in
seconds and money amounts in meticais (MT).
"""

from datetime import date, datetime
from typing import Literal, Self

import attrs
from attrs import define, field, validators

from .shared import RecordValue, not_blank, to_record

ArtistStatus = Literal["active", "inactive", "suspended"]
ContentStatus = Literal["draft", "published", "removed"]
ArtistPlan = Literal["basic", "premium", "enterprise"]
PaymentMethod = Literal["mpesa", "visa", "paypal"]

ARTIST_STATUSES: tuple[str, ...] = ("active", "inactive", "suspended")
CONTENT_STATUSES: tuple[str, ...] = ("draft", "published", "removed")
ARTIST_PLANS: tuple[str, ...] = ("basic", "premium", "enterprise")
PAYMENT_METHODS: tuple[str, ...] = ("mpesa", "visa", "paypal")

_non_negative_int = [validators.instance_of(int), validators.ge(0)]
_non_negative_amount = [validators.instance_of((int, float)), validators.ge(0)]
_optional_id = validators.optional(validators.instance_of(int))


class _CatalogEntity:
    """Behaviour shared by every catalog entity."""

    def to_record(self) -> dict[str, RecordValue]:
        """Flatten into a record for listing screens."""
        return to_record(self)

    def with_changes(self, **changes) -> Self:
        """Create a new entity with the given fields replaced."""
        return attrs.evolve(self, **changes)


@define(frozen=True, slots=True)
class Artist(_CatalogEntity):
    """A performer registered on the platform."""

    name: str = field(validator=[validators.instance_of(str), not_blank])
    email: str = field(default="", validator=validators.instance_of(str))
    genre: str = field(default="", validator=validators.instance_of(str))
    verified: bool = field(default=False, validator=validators.instance_of(bool))
    status: ArtistStatus = field(
        default="active", validator=validators.in_(ARTIST_STATUSES)
    )
    monetization_plan: ArtistPlan = field(
        default="basic", validator=validators.in_(ARTIST_PLANS)
    )
    payment_method: PaymentMethod | None = field(
        default=None, validator=validators.optional(validators.in_(PAYMENT_METHODS))
    )
    phone_number: str | None = None
    total_tracks: int = field(default=0, validator=_non_negative_int)
    total_revenue: float = field(default=0.0, validator=_non_negative_amount)
    profile_image: str | None = None
    bio: str | None = None
    joined_date: date | None = None

    id: int | None = field(default=None, validator=_optional_id)
    created_at: datetime | None = None


@define(frozen=True, slots=True)
class Album(_CatalogEntity):
    """A release grouping several tracks of one artist."""

    title: str = field(validator=[validators.instance_of(str), not_blank])
    artist_id: int | None = field(default=None, validator=_optional_id)
    artist_name: str = ""
    track_count: int = field(default=0, validator=_non_negative_int)
    total_duration: int = field(default=0, validator=_non_negative_int)
    plays: int = field(default=0, validator=_non_negative_int)
    revenue: float = field(default=0.0, validator=_non_negative_amount)
    release_date: date | None = None
    status: ContentStatus = field(
        default="draft", validator=validators.in_(CONTENT_STATUSES)
    )
    cover_art: str | None = None

    id: int | None = field(default=None, validator=_optional_id)
    created_at: datetime | None = None


@define(frozen=True, slots=True)
class Track(_CatalogEntity):
    """A single audio recording."""

    title: str = field(validator=[validators.instance_of(str), not_blank])
    artist_id: int | None = field(default=None, validator=_optional_id)
    artist_name: str = ""
    album_id: int | None = field(default=None, validator=_optional_id)
    album_title: str | None = None
    duration: int = field(default=0, validator=_non_negative_int)
    plays: int = field(default=0, validator=_non_negative_int)
    streams: int = field(default=0, validator=_non_negative_int)
    revenue: float = field(default=0.0, validator=_non_negative_amount)
    status: ContentStatus = field(
        default="draft", validator=validators.in_(CONTENT_STATUSES)
    )
    upload_date: date | None = None
    release_date: date | None = None
    cover_art: str | None = None
    file_url: str | None = None

    id: int | None = field(default=None, validator=_optional_id)
    created_at: datetime | None = None


@define(frozen=True, slots=True)
class Video(_CatalogEntity):
    """A music video."""

    title: str = field(validator=[validators.instance_of(str), not_blank])
    artist_id: int | None = field(default=None, validator=_optional_id)
    artist_name: str = ""
    duration: int = field(default=0, validator=_non_negative_int)
    views: int = field(default=0, validator=_non_negative_int)
    revenue: float = field(default=0.0, validator=_non_negative_amount)
    status: ContentStatus = field(
        default="draft", validator=validators.in_(CONTENT_STATUSES)
    )
    upload_date: date | None = None
    thumbnail_url: str | None = None
    video_url: str | None = None

    id: int | None = field(default=None, validator=_optional_id)
    created_at: datetime | None = None
