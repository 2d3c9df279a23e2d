from collections.abc import Sequence
from typing import Literal, TypeVar

from heliclockter import datetime_utc
from pydantic import BaseModel

from squadboard.logic.labels import (
    AgeGroup,
    GameMode,
    Platform,
    VoiceChat,
    normalize_age_group,
    normalize_mode,
    normalize_platform,
    normalize_voice_chat,
)
from squadboard.logic.lifecycle import is_listing_visible
from squadboard.logic.ranks import DivisionFilter, TierFilter, exact_rank_matches, matches_min_requirement
from squadboard.models.db.listing import Listing
from squadboard.utils.id_types import UserId

ListingT = TypeVar("ListingT", bound=Listing)


class ListingFilter(BaseModel):
    title: str = ""
    recruit_count: Literal["all", "1", "2"] = "all"
    mode: Literal["all"] | GameMode = "all"
    min_rank_tier: TierFilter = "all"
    min_rank_division: DivisionFilter = "all"
    vc_type: Literal["all"] | VoiceChat = "all"
    allowed_age_group: Literal["all"] | AgeGroup = "all"
    play_style: str = "all"
    other_text: str = ""
    current_rank_tier: TierFilter = "all"
    current_rank_division: DivisionFilter = "all"
    max_rank_tier: TierFilter = "all"
    max_rank_division: DivisionFilter = "all"
    poster_age_group: Literal["all"] | AgeGroup = "all"
    poster_platform: Literal["all"] | Platform = "all"


def _contains_text(haystack: str | None, needle: str) -> bool:
    normalized_needle = needle.strip().lower()
    return normalized_needle == "" or normalized_needle in (haystack or "").lower()


def listing_matches_filter(listing: Listing, listing_filter: ListingFilter) -> bool:
    if not _contains_text(listing.title, listing_filter.title):
        return False
    if listing_filter.recruit_count != "all" and listing.recruit_count != int(listing_filter.recruit_count):
        return False
    if listing_filter.mode != "all" and normalize_mode(listing.mode) != listing_filter.mode:
        return False
    if not matches_min_requirement(
        listing.min_rank_tier,
        listing.min_rank_division,
        listing_filter.min_rank_tier,
        listing_filter.min_rank_division,
    ):
        return False
    if listing_filter.vc_type != "all" and normalize_voice_chat(listing.vc_type) != listing_filter.vc_type:
        return False
    if listing_filter.allowed_age_group != "all":
        allowed = {normalize_age_group(age_group) for age_group in listing.allowed_age_groups}
        if listing_filter.allowed_age_group not in allowed:
            return False
    if listing_filter.play_style != "all" and listing_filter.play_style not in listing.play_styles:
        return False
    if not _contains_text(listing.other_text, listing_filter.other_text):
        return False
    if not exact_rank_matches(
        listing.current_rank_tier,
        listing.current_rank_division,
        listing_filter.current_rank_tier,
        listing_filter.current_rank_division,
    ):
        return False
    if not exact_rank_matches(
        listing.max_rank_tier,
        listing.max_rank_division,
        listing_filter.max_rank_tier,
        listing_filter.max_rank_division,
    ):
        return False
    if (
        listing_filter.poster_age_group != "all"
        and normalize_age_group(listing.age_group) != listing_filter.poster_age_group
    ):
        return False
    if (
        listing_filter.poster_platform != "all"
        and normalize_platform(listing.platform) != listing_filter.poster_platform
    ):
        return False
    return True


def filter_listings(
    listings: Sequence[ListingT],
    listing_filter: ListingFilter,
    *,
    now: datetime_utc,
    viewer_id: UserId | None = None,
) -> list[ListingT]:
    matching = [
        listing
        for listing in listings
        if is_listing_visible(listing, now) and listing_matches_filter(listing, listing_filter)
    ]
    if viewer_id is None:
        return matching
    # sorted() is stable, so listings keep their order within each group.
    return sorted(matching, key=lambda listing: listing.user_id != viewer_id)
