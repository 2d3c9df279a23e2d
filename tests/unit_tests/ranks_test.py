import pytest

from squadboard.logic.ranks import (
    RANK_TIER_ORDER,
    RankLabel,
    RankTier,
    exact_rank_matches,
    format_rank,
    make_rank_label,
    matches_min_requirement,
    meets_minimum,
    normalize_division,
    normalize_rank_label,
    normalize_tier,
    requirement_score,
)


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("gold", RankTier.GOLD),
        ("GOLD", RankTier.GOLD),
        ("  Platinum ", RankTier.PLATINUM),
        ("ダイヤ", RankTier.DIAMOND),
        ("プレデター", RankTier.PREDATOR),
        ("Diamond III", RankTier.DIAMOND),
        ("ゴールド 2", RankTier.GOLD),
        (RankTier.SILVER, RankTier.SILVER),
        ("unranked", None),
        ("", None),
        (None, None),
        (42, None),
    ],
)
def test_normalize_tier(label: object, expected: RankTier | None) -> None:
    assert normalize_tier(label) == expected


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Diamond IV", 4),
        ("gold iii", 3),
        ("Silver II", 2),
        ("Bronze I", 1),
        ("プラチナ 2", 2),
        ("3", 3),
        (1, 1),
        (0, None),
        (5, None),
        ("Master", None),
        ("Predator 1", None),
        ("Gold", None),
        ("Diamondiv", None),
        (None, None),
    ],
)
def test_normalize_division(label: object, expected: int | None) -> None:
    assert normalize_division(label) == expected


def test_normalize_rank_label_degrades_to_unset() -> None:
    assert normalize_rank_label("Diamond II") == RankLabel(RankTier.DIAMOND, 2)
    assert normalize_rank_label("Master") == RankLabel(RankTier.MASTER, None)
    assert normalize_rank_label("not a rank").is_unset
    assert make_rank_label("master", 3) == RankLabel(RankTier.MASTER, None)


def test_requirement_score_values() -> None:
    assert requirement_score(None) == 0
    assert requirement_score("bogus", 2) == 0
    assert requirement_score("bronze", 4) == 11
    assert requirement_score("bronze", 1) == 14
    assert requirement_score("gold", 2) == 33
    assert requirement_score("master") == 60
    assert requirement_score("predator", 1) == 70


def test_requirement_score_missing_division_counts_as_weakest() -> None:
    assert requirement_score("platinum", None) == requirement_score("platinum", 4)


def test_requirement_score_clamps_out_of_range_divisions() -> None:
    assert requirement_score("gold", 0) == requirement_score("gold", 1)
    assert requirement_score("gold", 9) == requirement_score("gold", 4)


def test_requirement_score_is_monotonic_over_the_whole_ladder() -> None:
    ladder = []
    for tier in RANK_TIER_ORDER:
        if tier.has_divisions:
            ladder.extend((tier, division) for division in (4, 3, 2, 1))
        else:
            ladder.append((tier, None))

    scores = [requirement_score(tier, division) for tier, division in ladder]
    assert scores == sorted(scores)
    assert len(set(scores)) == len(scores)


def test_higher_tier_beats_every_division_of_lower_tier() -> None:
    for lower, higher in zip(RANK_TIER_ORDER, RANK_TIER_ORDER[1:]):
        assert requirement_score(higher, 4) > requirement_score(lower, 1)


def test_meets_minimum() -> None:
    assert meets_minimum("gold", 1, "gold", 2)
    assert meets_minimum("gold", 2, "gold", 2)
    assert not meets_minimum("gold", 3, "gold", 2)
    assert meets_minimum("platinum", 4, "gold", 1)
    assert meets_minimum(None, None, "none")
    assert meets_minimum("bronze", 4, None)


def test_matches_min_requirement_none_only_matches_listings_without_requirement() -> None:
    assert matches_min_requirement(None, None, "none")
    assert matches_min_requirement("未設定", None, "none")
    assert not matches_min_requirement("gold", 2, "none")
    assert matches_min_requirement("gold", 2, "all")
    assert matches_min_requirement(None, None, "all")


def test_matches_min_requirement_with_tier_threshold() -> None:
    assert matches_min_requirement("gold", 4, RankTier.GOLD)
    assert matches_min_requirement("diamond", 4, RankTier.GOLD)
    assert not matches_min_requirement("silver", 1, RankTier.GOLD)
    assert matches_min_requirement("gold", 2, RankTier.GOLD, "2")
    assert not matches_min_requirement("gold", 3, RankTier.GOLD, "2")
    assert not matches_min_requirement(None, None, RankTier.BRONZE)


def test_exact_rank_matches() -> None:
    assert exact_rank_matches("gold", 2, "all")
    assert exact_rank_matches("gold", 2, RankTier.GOLD)
    assert exact_rank_matches("gold", 2, RankTier.GOLD, "2")
    assert not exact_rank_matches("gold", 3, RankTier.GOLD, "2")
    assert not exact_rank_matches("silver", 2, RankTier.GOLD)
    assert exact_rank_matches(None, None, "none")
    assert not exact_rank_matches("gold", 1, "none")
    assert exact_rank_matches("master", None, RankTier.MASTER, "3")
    assert exact_rank_matches("ゴールド", 2, RankTier.GOLD, "2")


def test_format_rank() -> None:
    assert format_rank(None) == "未設定"
    assert format_rank("gold", 2) == "ゴールド 2"
    assert format_rank("gold") == "ゴールド"
    assert format_rank("master", 1) == "マスター"
    assert format_rank("???", 1) == "未設定"


@pytest.mark.parametrize("tier", [*RankTier, None, "garbage", "未設定"])
@pytest.mark.parametrize("division", [None, 1, 4, 9, "iv"])
def test_meets_minimum_none_threshold_always_passes(tier: object, division: object) -> None:
    assert meets_minimum(tier, division, "none")
    assert meets_minimum(tier, division, "none", 1)


@pytest.mark.parametrize("label", ["gold", "ダイヤ 2", "Predator", "Bronze IV", "%%%", "", "rookie"])
def test_normalize_tier_is_idempotent(label: str) -> None:
    tier = normalize_tier(label)
    assert normalize_tier(tier) == tier
    if tier is not None:
        assert normalize_tier(tier.value) is tier


@pytest.mark.parametrize("label", ["silverware", "masterpiece", "goldfish", "Diamondiv"])
def test_normalize_tier_ignores_keywords_inside_other_words(label: str) -> None:
    assert normalize_tier(label) is None


def test_normalize_tier_keyword_next_to_digits_or_punctuation() -> None:
    assert normalize_tier("gold2") is RankTier.GOLD
    assert normalize_tier("[Platinum]") is RankTier.PLATINUM
    assert normalize_tier("ランク: ダイヤ4") is RankTier.DIAMOND


def test_integral_float_divisions_are_accepted() -> None:
    assert requirement_score("gold", 2.0) == requirement_score("gold", 2)
    assert requirement_score("gold", 2.5) == requirement_score("gold", 4)
    assert make_rank_label("gold", 3.0) == RankLabel(RankTier.GOLD, 3)
    assert normalize_division(1.0) == 1
    assert normalize_division(float("nan")) is None
