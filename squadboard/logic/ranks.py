"""
Rank tiers, divisions and the requirement score used to compare them.

A rank is a tier out of seven ordered tiers plus, for tiers below master, a division from
1 (strongest) to 4 (weakest). Rank data reaches us from listings written by several client
versions and from the stat source, so everything here accepts arbitrary input and degrades
to "unset" instead of raising.
"""

import re
from typing import Literal, NamedTuple

from squadboard.logic.labels import LabelMapping
from squadboard.utils.types import EnumValues


class RankTier(EnumValues):
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"
    DIAMOND = "diamond"
    MASTER = "master"
    PREDATOR = "predator"

    @property
    def has_divisions(self) -> bool:
        return self not in (RankTier.MASTER, RankTier.PREDATOR)

    @property
    def index(self) -> int:
        return RANK_TIER_ORDER.index(self)


RANK_TIER_ORDER: tuple[RankTier, ...] = tuple(RankTier)
DIVISION_HIGHEST = 1
DIVISION_LOWEST = 4
UNSET_RANK_LABEL = "未設定"

RANK_TIERS = LabelMapping(
    RankTier,
    {
        RankTier.BRONZE: "ブロンズ",
        RankTier.SILVER: "シルバー",
        RankTier.GOLD: "ゴールド",
        RankTier.PLATINUM: "プラチナ",
        RankTier.DIAMOND: "ダイヤ",
        RankTier.MASTER: "マスター",
        RankTier.PREDATOR: "プレデター",
    },
)

TierFilter = Literal["all", "none"] | RankTier
DivisionFilter = Literal["all", "1", "2", "3", "4"]

_ROMAN_DIVISIONS = {"i": 1, "ii": 2, "iii": 3, "iv": 4}
_DIVISION_TOKEN = re.compile(r"(?<![a-z0-9])(iv|iii|ii|i|[1-4])(?![a-z0-9])")
_TIER_KEYWORDS = tuple((tier, re.compile(rf"(?<![a-z]){tier.value}(?![a-z])")) for tier in RankTier)


class RankLabel(NamedTuple):
    tier: RankTier | None = None
    division: int | None = None

    @property
    def is_unset(self) -> bool:
        return self.tier is None


def normalize_tier(label: object) -> RankTier | None:
    exact = RANK_TIERS.to_key(label)
    if exact is not None or not isinstance(label, str):
        return exact

    lowered = label.strip().lower()
    if lowered == "":
        return None

    for tier, keyword in _TIER_KEYWORDS:
        if keyword.search(lowered) is not None or RANK_TIERS.to_label(tier) in label:
            return tier
    return None


def _integral(value: object) -> object:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _coerce_division(value: object) -> int | None:
    value = _integral(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if DIVISION_HIGHEST <= value <= DIVISION_LOWEST else None
    if isinstance(value, str) and value.strip().isdigit():
        return _coerce_division(int(value.strip()))
    return None


def _clamp_division(value: object) -> int:
    # Missing divisions count as the weakest one.
    value = _integral(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value.strip())
    if isinstance(value, bool) or not isinstance(value, int):
        return DIVISION_LOWEST
    return min(DIVISION_LOWEST, max(DIVISION_HIGHEST, value))


def normalize_division(label: object) -> int | None:
    direct = _coerce_division(label)
    if direct is not None or not isinstance(label, str):
        return direct

    tier = normalize_tier(label)
    if tier is not None and not tier.has_divisions:
        return None

    match = _DIVISION_TOKEN.search(label.lower())
    if match is None:
        return None
    token = match.group(1)
    return _ROMAN_DIVISIONS.get(token) or _coerce_division(token)


def make_rank_label(tier: object, division: object = None) -> RankLabel:
    normalized_tier = normalize_tier(tier)
    if normalized_tier is None:
        return RankLabel()
    if not normalized_tier.has_divisions:
        return RankLabel(normalized_tier, None)
    return RankLabel(normalized_tier, _coerce_division(division))


def normalize_rank_label(label: object) -> RankLabel:
    return make_rank_label(normalize_tier(label), normalize_division(label))


def requirement_score(tier: object, division: object = None) -> int:
    normalized_tier = normalize_tier(tier)
    if normalized_tier is None:
        return 0

    base = (normalized_tier.index + 1) * 10
    if not normalized_tier.has_divisions:
        return base

    return base + (DIVISION_LOWEST + 1 - _clamp_division(division))


def meets_minimum(
    candidate_tier: object,
    candidate_division: object,
    threshold_tier: object,
    threshold_division: object = None,
) -> bool:
    if threshold_tier == "none" or normalize_tier(threshold_tier) is None:
        return True
    return requirement_score(candidate_tier, candidate_division) >= requirement_score(
        threshold_tier, threshold_division
    )


def matches_min_requirement(
    tier: object,
    division: object,
    filter_tier: TierFilter,
    filter_division: DivisionFilter = "all",
) -> bool:
    """
    Match a listing's own minimum-rank requirement against a browsing filter.

    ``"none"`` looks for listings without any requirement, which is different from ``"all"``.
    A tier filter keeps listings that require at least that rank; with no division picked the
    weakest division of the tier is used as the threshold.
    """
    if filter_tier == "all":
        return True

    listing_score = requirement_score(tier, division)
    if filter_tier == "none":
        return listing_score == 0

    threshold_division = DIVISION_LOWEST if filter_division == "all" else int(filter_division)
    return meets_minimum(tier, division, filter_tier, threshold_division)


def exact_rank_matches(
    tier: object,
    division: object,
    filter_tier: TierFilter,
    filter_division: DivisionFilter = "all",
) -> bool:
    normalized_tier = normalize_tier(tier)
    if filter_tier == "all":
        tier_matched = True
    elif filter_tier == "none":
        tier_matched = normalized_tier is None
    else:
        tier_matched = normalized_tier is not None and normalized_tier == normalize_tier(filter_tier)

    if not tier_matched:
        return False
    if filter_division == "all":
        return True
    if normalized_tier is None or not normalized_tier.has_divisions:
        return True
    return _coerce_division(division) == int(filter_division)


def format_rank(tier: object, division: object = None) -> str:
    label = make_rank_label(tier, division)
    if label.tier is None:
        return UNSET_RANK_LABEL

    tier_label = RANK_TIERS.to_label(label.tier)
    if not label.tier.has_divisions or label.division is None:
        return tier_label
    return f"{tier_label} {label.division}"
