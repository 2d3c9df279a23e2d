from heliclockter import datetime_utc

from squadboard.logic.labels import AgeGroup, Platform
from squadboard.logic.profile_link import apply_as_listing_defaults, profile_from_external, to_internal_rank
from squadboard.logic.ranks import RankLabel, RankTier
from squadboard.models.db.listing import ListingDefaults
from squadboard.models.db.profile import ExternalStatProfile, Profile
from squadboard.utils.id_types import UserId


def _external(**overrides: object) -> ExternalStatProfile:
    values: dict[str, object] = {
        "trackerPlatform": "psn",
        "trackerHandle": "wraith_main",
        "displayName": "Wraith Main",
        "rankLabel": "Diamond III",
        "rankScore": "12,345",
        "level": 500,
        "kills": "10,200",
        "damage": 3100000.0,
    }
    values.update(overrides)
    return ExternalStatProfile.model_validate(values)


def test_external_profile_sanitizes_counters() -> None:
    external = _external(level="n/a", damage=float("inf"), currentRankDivision=7)

    assert external.rank_score == 12345
    assert external.kills == 10200
    assert external.level is None
    assert external.damage is None
    assert external.current_rank_division is None


def test_to_internal_rank_prefers_explicit_fields() -> None:
    assert to_internal_rank(_external()) == RankLabel(RankTier.DIAMOND, 3)
    assert to_internal_rank(_external(currentRankTier="gold", currentRankDivision=1)) == RankLabel(RankTier.GOLD, 1)
    assert to_internal_rank(_external(rankLabel="Apex Predator")) == RankLabel(RankTier.PREDATOR, None)
    assert to_internal_rank(_external(rankLabel="Rookie")).is_unset
    assert to_internal_rank(_external(rankLabel=None)).is_unset


def test_profile_from_external_keeps_local_only_fields() -> None:
    now = datetime_utc.now()
    existing = Profile(
        user_id=UserId(3),
        max_rank_tier="master",
        age_group="30s",
        updated=now,
    )

    profile = profile_from_external(UserId(3), _external(), now, existing=existing)

    assert profile.user_id == 3
    assert profile.tracker_platform == "psn"
    assert profile.tracker_handle == "wraith_main"
    assert profile.current_rank_tier == "diamond"
    assert profile.current_rank_division == 3
    assert profile.max_rank_tier == "master"
    assert profile.max_rank_division is None
    assert profile.tracker_rank_score == 12345
    assert profile.age_group == "30s"
    assert profile.updated == now


def test_apply_as_listing_defaults_without_profile() -> None:
    assert apply_as_listing_defaults(None) == ListingDefaults()


def test_apply_as_listing_defaults_from_partial_profile() -> None:
    profile = Profile(
        user_id=UserId(3),
        tracker_platform="PlayStation",
        current_rank_tier="プラチナ",
        current_rank_division=2,
        max_rank_tier="unknown",
        max_rank_division=1,
        age_group="20代",
        updated=datetime_utc.now(),
    )

    defaults = apply_as_listing_defaults(profile)

    assert defaults == ListingDefaults(
        current_rank_tier=RankTier.PLATINUM,
        current_rank_division=2,
        max_rank_tier=None,
        max_rank_division=None,
        age_group=AgeGroup.TWENTIES,
        platform=Platform.PSN,
    )
