"""
Listing lifecycle: open -> (expired) -> closed -> reopened -> deleted.

Expiry is derived from the creation time and never persisted. It only hides a listing from
browsing: an expired listing that was never closed still occupies its owner's single listing
slot until the owner deletes it.
"""

from collections.abc import Collection, Sequence
from enum import auto

from heliclockter import datetime_utc, timedelta

from squadboard.logic.ranks import make_rank_label
from squadboard.models.db.listing import Listing, ListingCreateBody, ListingInsertable
from squadboard.utils.errors import (
    ActiveListingExistsError,
    ApplicationError,
    ListingNotOpenError,
    ListingValidationError,
)
from squadboard.utils.id_types import UserId
from squadboard.utils.types import EnumAutoStr

LISTING_EXPIRY = timedelta(hours=2)
MAX_PLAY_STYLES = 3


class ListingState(EnumAutoStr):
    OPEN = auto()
    EXPIRED = auto()
    CLOSED = auto()


def listing_expires_at(listing: Listing) -> datetime_utc:
    return datetime_utc.from_datetime(listing.created + LISTING_EXPIRY)


def is_listing_expired(listing: Listing, now: datetime_utc) -> bool:
    return now >= listing_expires_at(listing)


def get_listing_state(listing: Listing, now: datetime_utc) -> ListingState:
    if listing.is_closed:
        return ListingState.CLOSED
    if is_listing_expired(listing, now):
        return ListingState.EXPIRED
    return ListingState.OPEN


def is_listing_visible(listing: Listing, now: datetime_utc) -> bool:
    return get_listing_state(listing, now) is ListingState.OPEN


def get_remaining_time(listing: Listing, now: datetime_utc) -> timedelta | None:
    remaining = listing_expires_at(listing) - now
    if remaining <= timedelta(0):
        return None
    return remaining


def format_remaining_time(remaining: timedelta | None) -> str | None:
    if remaining is None:
        return None
    total_minutes = int(remaining.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}時間{minutes}分"


def check_is_owner(listing: Listing, user_id: UserId, *, allow_admin: bool = False) -> bool:
    return allow_admin or listing.user_id == user_id


def check_can_create_listing(owned_listings: Sequence[Listing]) -> None:
    if any(not listing.is_closed for listing in owned_listings):
        raise ActiveListingExistsError()


def check_can_apply(listing: Listing, applicant_user_id: UserId, now: datetime_utc) -> None:
    if listing.user_id == applicant_user_id:
        raise ApplicationError("You cannot apply to your own listing")
    if get_listing_state(listing, now) is not ListingState.OPEN:
        raise ApplicationError("This listing is no longer accepting applications")


def check_can_close(listing: Listing) -> None:
    if listing.is_closed:
        raise ListingNotOpenError("Listing is already closed")


def check_can_reopen(listing: Listing, owned_listings: Sequence[Listing]) -> None:
    if not listing.is_closed:
        raise ListingNotOpenError("Listing is not closed")
    if any(other.id != listing.id and not other.is_closed for other in owned_listings):
        raise ActiveListingExistsError()


def _normalize_play_styles(play_styles: Sequence[str], active_tag_names: Collection[str]) -> list[str]:
    normalized: list[str] = []
    for style in play_styles:
        name = style.strip()
        if name != "" and name not in normalized:
            normalized.append(name)

    if len(normalized) < 1:
        raise ListingValidationError("Select at least one play style")
    if len(normalized) > MAX_PLAY_STYLES:
        raise ListingValidationError(f"Select at most {MAX_PLAY_STYLES} play styles")

    inactive = [name for name in normalized if name not in active_tag_names]
    if len(inactive) > 0:
        raise ListingValidationError(f"Unknown or inactive play styles: {', '.join(inactive)}")
    return normalized


def _rank_division(tier: object, division: int | None) -> int | None:
    label = make_rank_label(tier, division)
    if label.tier is None or not label.tier.has_divisions:
        return None
    return label.division if label.division is not None else 4


def build_listing_insertable(
    body: ListingCreateBody,
    owner_id: UserId,
    active_tag_names: Collection[str],
    now: datetime_utc,
) -> ListingInsertable:
    title = body.title.strip()
    if title == "":
        raise ListingValidationError("Title is required")

    play_styles = _normalize_play_styles(body.play_styles, active_tag_names)
    allowed_age_groups = list(dict.fromkeys(age_group.value for age_group in body.allowed_age_groups))

    return ListingInsertable(
        title=title,
        recruit_count=body.recruit_count,
        mode=body.mode.value,
        allowed_age_groups=allowed_age_groups,
        min_rank_tier=body.min_rank_tier.value if body.min_rank_tier is not None else None,
        min_rank_division=_rank_division(body.min_rank_tier, body.min_rank_division),
        vc_type=body.vc_type.value,
        play_styles=play_styles,
        other_text=body.other_text.strip(),
        current_rank_tier=body.current_rank_tier.value if body.current_rank_tier is not None else None,
        current_rank_division=_rank_division(body.current_rank_tier, body.current_rank_division),
        max_rank_tier=body.max_rank_tier.value if body.max_rank_tier is not None else None,
        max_rank_division=_rank_division(body.max_rank_tier, body.max_rank_division),
        age_group=body.age_group.value if body.age_group is not None else None,
        platform=body.platform.value if body.platform is not None else None,
        user_id=owner_id,
        created=now,
    )
