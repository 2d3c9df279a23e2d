"""
Enumerations for the loosely typed listing attributes (mode, voice chat, age group, platform).

Listings written by older clients stored localized display labels instead of keys, so every
enumeration comes with a total mapping in both directions: ``to_label`` for display and
``to_key`` for turning any known surface string back into a member. Unknown strings map to
``None`` rather than raising.
"""

from collections.abc import Mapping
from typing import Generic, TypeVar

from squadboard.utils.types import EnumValues

E = TypeVar("E", bound=EnumValues)


class LabelMapping(Generic[E]):
    def __init__(
        self,
        enum_cls: type[E],
        labels: Mapping[E, str],
        aliases: Mapping[str, E] | None = None,
    ) -> None:
        missing = [member.value for member in enum_cls if member not in labels]
        if len(missing) > 0:
            raise ValueError(f"Missing display labels for {enum_cls.__name__}: {missing}")

        self.enum_cls = enum_cls
        self._labels = dict(labels)
        self._by_key: dict[str, E] = {}
        for member in enum_cls:
            self._by_key[member.value.lower()] = member
            self._by_key[self._labels[member].lower()] = member
        for alias, member in (aliases or {}).items():
            self._by_key[alias.strip().lower()] = member

    def to_label(self, member: E) -> str:
        return self._labels[member]

    def to_key(self, value: object) -> E | None:
        if isinstance(value, self.enum_cls):
            return value
        if not isinstance(value, str):
            return None
        return self._by_key.get(value.strip().lower())


class GameMode(EnumValues):
    RANK = "rank"
    CASUAL = "casual"


class VoiceChat(EnumValues):
    GAME = "game"
    DISCORD = "discord"
    OFF = "off"

    @property
    def requires_invite_link(self) -> bool:
        return self is VoiceChat.DISCORD


class AgeGroup(EnumValues):
    TEENS = "10s"
    TWENTIES = "20s"
    THIRTIES = "30s"
    FORTIES_AND_UP = "40s"


class Platform(EnumValues):
    ORIGIN = "origin"
    XBL = "xbl"
    PSN = "psn"


GAME_MODES = LabelMapping(
    GameMode,
    {
        GameMode.RANK: "ランク",
        GameMode.CASUAL: "カジュアル",
    },
)

VOICE_CHATS = LabelMapping(
    VoiceChat,
    {
        VoiceChat.GAME: "ゲーム内VC",
        VoiceChat.DISCORD: "Discord",
        VoiceChat.OFF: "VCなし",
    },
)

AGE_GROUPS = LabelMapping(
    AgeGroup,
    {
        AgeGroup.TEENS: "10代",
        AgeGroup.TWENTIES: "20代",
        AgeGroup.THIRTIES: "30代",
        AgeGroup.FORTIES_AND_UP: "40代以上",
    },
)

PLATFORMS = LabelMapping(
    Platform,
    {
        Platform.ORIGIN: "PC (Origin/EA app)",
        Platform.XBL: "Xbox",
        Platform.PSN: "PlayStation",
    },
    aliases={
        "pc": Platform.ORIGIN,
        "xbox": Platform.XBL,
        "playstation": Platform.PSN,
    },
)


def normalize_mode(value: object) -> GameMode | None:
    return GAME_MODES.to_key(value)


def normalize_voice_chat(value: object) -> VoiceChat | None:
    return VOICE_CHATS.to_key(value)


def normalize_age_group(value: object) -> AgeGroup | None:
    return AGE_GROUPS.to_key(value)


def normalize_platform(value: object) -> Platform | None:
    return PLATFORMS.to_key(value)
