from typing import Literal

from heliclockter import datetime_utc
from pydantic import BaseModel, Field, field_validator

from squadboard.logic.labels import AgeGroup, GameMode, Platform, VoiceChat
from squadboard.logic.ranks import RankTier
from squadboard.models.db.shared import BaseModelORM
from squadboard.utils.id_types import ListingId, UserId


class ListingBase(BaseModelORM):
    # Stored values are canonical keys, but rows written by older clients may still hold
    # localized labels, so these stay plain strings and are normalized when read.
    title: str
    recruit_count: int
    mode: str
    allowed_age_groups: list[str] = Field(default_factory=list)
    min_rank_tier: str | None = None
    min_rank_division: int | None = None
    vc_type: str
    play_styles: list[str] = Field(default_factory=list)
    other_text: str = ""
    current_rank_tier: str | None = None
    current_rank_division: int | None = None
    max_rank_tier: str | None = None
    max_rank_division: int | None = None
    age_group: str | None = None
    platform: str | None = None

    @field_validator("allowed_age_groups", "play_styles", mode="before")
    @classmethod
    def sanitize_string_list(cls, value: object) -> list[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [str(item) for item in value if item is not None]

    @field_validator("other_text", mode="before")
    @classmethod
    def sanitize_other_text(cls, value: object) -> str:
        return "" if value is None else str(value)


class ListingInsertable(ListingBase):
    user_id: UserId
    created: datetime_utc
    is_closed: bool = False
    winner_user_id: UserId | None = None


class Listing(ListingInsertable):
    id: ListingId


class ListingWithApplicationCount(Listing):
    application_count: int = 0


class ListingView(ListingWithApplicationCount):
    expires_at: datetime_utc
    remaining_time_label: str | None = None
    min_rank_label: str
    current_rank_label: str
    max_rank_label: str
    is_mine: bool = False
    has_applied: bool = False


class ListingCreateBody(BaseModel):
    title: str = Field(max_length=120)
    recruit_count: Literal[1, 2] = 1
    mode: GameMode = GameMode.RANK
    allowed_age_groups: list[AgeGroup] = Field(default_factory=list)
    min_rank_tier: RankTier | None = None
    min_rank_division: int | None = Field(default=None, ge=1, le=4)
    vc_type: VoiceChat = VoiceChat.GAME
    play_styles: list[str] = Field(default_factory=list)
    other_text: str = Field(default="", max_length=500)
    current_rank_tier: RankTier | None = None
    current_rank_division: int | None = Field(default=None, ge=1, le=4)
    max_rank_tier: RankTier | None = None
    max_rank_division: int | None = Field(default=None, ge=1, le=4)
    age_group: AgeGroup | None = None
    platform: Platform | None = None


class ListingDefaults(BaseModel):
    current_rank_tier: RankTier | None = None
    current_rank_division: int | None = None
    max_rank_tier: RankTier | None = None
    max_rank_division: int | None = None
    age_group: AgeGroup | None = None
    platform: Platform | None = None


class FinalizeBody(BaseModel):
    winner_user_id: UserId
    account_name: str = ""
    invite_link: str | None = None
    message: str = ""
