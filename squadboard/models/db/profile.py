import math
from typing import Annotated

from heliclockter import datetime_utc
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from squadboard.logic.labels import AgeGroup, Platform
from squadboard.logic.ranks import RankTier
from squadboard.models.db.shared import BaseModelORM
from squadboard.utils.id_types import UserId


def _to_optional_number(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.replace(",", "").strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


class ProfileInsertable(BaseModelORM):
    user_id: UserId
    tracker_platform: str | None = None
    tracker_handle: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None
    current_rank_tier: str | None = None
    current_rank_division: int | None = None
    max_rank_tier: str | None = None
    max_rank_division: int | None = None
    tracker_level: int | None = None
    tracker_rank_score: int | None = None
    tracker_kills: int | None = None
    tracker_damage: int | None = None
    age_group: str | None = None
    updated: datetime_utc


class Profile(ProfileInsertable):
    pass


class ProfileUpdateBody(BaseModel):
    tracker_platform: Platform | None = None
    tracker_handle: str | None = Field(default=None, max_length=64)
    current_rank_tier: RankTier | None = None
    current_rank_division: int | None = Field(default=None, ge=1, le=4)
    max_rank_tier: RankTier | None = None
    max_rank_division: int | None = Field(default=None, ge=1, le=4)
    age_group: AgeGroup | None = None


class StatSourceLookupBody(BaseModel):
    platform: Platform
    player_id: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]


class ExternalStatProfile(BaseModel):
    """The normalized subset of a stat source profile that we consume."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tracker_platform: str
    tracker_handle: str
    display_name: str | None = None
    avatar_url: str | None = None
    rank_label: str | None = None
    current_rank_tier: str | None = None
    current_rank_division: int | None = None
    max_rank_tier: str | None = None
    max_rank_division: int | None = None
    level: int | None = None
    rank_score: int | None = None
    kills: int | None = None
    damage: int | None = None

    @field_validator("level", "rank_score", "kills", "damage", mode="before")
    @classmethod
    def sanitize_counter(cls, value: object) -> int | None:
        number = _to_optional_number(value)
        return None if number is None else int(number)

    @field_validator("current_rank_division", "max_rank_division", mode="before")
    @classmethod
    def sanitize_division(cls, value: object) -> int | None:
        number = _to_optional_number(value)
        if number is None or not 1 <= int(number) <= 4:
            return None
        return int(number)
