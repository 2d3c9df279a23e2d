from heliclockter import datetime_utc

from squadboard.logic.labels import normalize_age_group, normalize_platform
from squadboard.logic.ranks import RankLabel, make_rank_label, normalize_rank_label
from squadboard.models.db.listing import ListingDefaults
from squadboard.models.db.profile import ExternalStatProfile, Profile, ProfileInsertable
from squadboard.utils.id_types import UserId


def to_internal_rank(external: ExternalStatProfile) -> RankLabel:
    explicit = make_rank_label(external.current_rank_tier, external.current_rank_division)
    if not explicit.is_unset:
        return explicit
    return normalize_rank_label(external.rank_label)


def _to_max_rank(external: ExternalStatProfile) -> RankLabel:
    return make_rank_label(external.max_rank_tier, external.max_rank_division)


def profile_from_external(
    user_id: UserId,
    external: ExternalStatProfile,
    now: datetime_utc,
    existing: Profile | None = None,
) -> ProfileInsertable:
    """
    Project a stat source profile onto the stored profile of ``user_id``.

    Fields the stat source knows nothing about, like the age group, are carried over from
    ``existing``. A max rank the source does not report keeps the stored one.
    """
    current = to_internal_rank(external)
    max_rank = _to_max_rank(external)
    if max_rank.is_unset and existing is not None:
        max_rank = make_rank_label(existing.max_rank_tier, existing.max_rank_division)

    platform = normalize_platform(external.tracker_platform)
    return ProfileInsertable(
        user_id=user_id,
        tracker_platform=platform.value if platform is not None else external.tracker_platform,
        tracker_handle=external.tracker_handle,
        display_name=external.display_name,
        avatar_url=external.avatar_url,
        current_rank_tier=current.tier.value if current.tier is not None else None,
        current_rank_division=current.division,
        max_rank_tier=max_rank.tier.value if max_rank.tier is not None else None,
        max_rank_division=max_rank.division,
        tracker_level=external.level,
        tracker_rank_score=external.rank_score,
        tracker_kills=external.kills,
        tracker_damage=external.damage,
        age_group=existing.age_group if existing is not None else None,
        updated=now,
    )


def apply_as_listing_defaults(profile: Profile | None) -> ListingDefaults:
    if profile is None:
        return ListingDefaults()

    current = make_rank_label(profile.current_rank_tier, profile.current_rank_division)
    max_rank = make_rank_label(profile.max_rank_tier, profile.max_rank_division)
    return ListingDefaults(
        current_rank_tier=current.tier,
        current_rank_division=current.division,
        max_rank_tier=max_rank.tier,
        max_rank_division=max_rank.division,
        age_group=normalize_age_group(profile.age_group),
        platform=normalize_platform(profile.tracker_platform),
    )
