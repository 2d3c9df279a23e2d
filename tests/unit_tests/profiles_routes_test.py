import pytest
from heliclockter import datetime_utc
from starlette.exceptions import HTTPException
from starlette.requests import Request

from squadboard.logic.labels import Platform
from squadboard.models.db.account import UserAccountType
from squadboard.models.db.profile import ExternalStatProfile, Profile, ProfileInsertable, StatSourceLookupBody
from squadboard.models.db.user import UserPublic
from squadboard.routes import profiles as profiles_routes
from squadboard.utils.errors import StatSourceError
from squadboard.utils.id_types import UserId
from squadboard.utils.rate_limit import RateLimiter


class _FakeStatSource:
    def __init__(self, error: StatSourceError | None = None) -> None:
        self.error = error
        self.calls: list[tuple[Platform, str]] = []

    async def fetch_profile(self, platform: Platform, player_id: str) -> ExternalStatProfile:
        self.calls.append((platform, player_id))
        if self.error is not None:
            raise self.error
        return ExternalStatProfile(
            tracker_platform=platform.value,
            tracker_handle=player_id,
            rank_label="Gold II",
            rank_score=5400,
        )

    async def aclose(self) -> None:
        pass


def _user() -> UserPublic:
    return UserPublic(
        id=UserId(7),
        email="user7@example.com",
        name="User 7",
        created=datetime_utc.now(),
        account_type=UserAccountType.REGULAR,
    )


def _request() -> Request:
    return Request({"type": "http", "client": ("10.0.0.1", 51234), "headers": []})


def _patch_profiles(monkeypatch: pytest.MonkeyPatch, saved: list[ProfileInsertable]) -> None:
    async def fake_get_profile(_: UserId) -> Profile | None:
        return None

    async def fake_upsert(profile: ProfileInsertable) -> Profile:
        saved.append(profile)
        return Profile.model_validate(profile.model_dump())

    monkeypatch.setattr(profiles_routes, "get_profile", fake_get_profile)
    monkeypatch.setattr(profiles_routes, "sql_upsert_profile", fake_upsert)


@pytest.mark.asyncio
async def test_link_profile_saves_internal_rank(monkeypatch: pytest.MonkeyPatch) -> None:
    saved: list[ProfileInsertable] = []
    _patch_profiles(monkeypatch, saved)
    stat_source = _FakeStatSource()

    response = await profiles_routes.link_my_profile(
        _request(),
        StatSourceLookupBody(platform=Platform.PSN, player_id="  wraith_main "),
        _user(),
        stat_source,
        RateLimiter(max_requests=20, window_s=600),
    )

    assert stat_source.calls == [(Platform.PSN, "wraith_main")]
    assert response.data is not None
    assert response.data.current_rank_tier == "gold"
    assert response.data.current_rank_division == 2
    assert saved[0].tracker_rank_score == 5400


@pytest.mark.asyncio
async def test_link_profile_is_rate_limited(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_profiles(monkeypatch, [])
    stat_source = _FakeStatSource()
    rate_limiter = RateLimiter(max_requests=1, window_s=600)
    body = StatSourceLookupBody(platform=Platform.PSN, player_id="wraith_main")

    await profiles_routes.link_my_profile(_request(), body, _user(), stat_source, rate_limiter)
    with pytest.raises(HTTPException) as exc_info:
        await profiles_routes.link_my_profile(_request(), body, _user(), stat_source, rate_limiter)

    assert exc_info.value.status_code == 429
    assert exc_info.value.headers is not None
    assert int(exc_info.value.headers["Retry-After"]) > 0
    assert len(stat_source.calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (StatSourceError("Player was not found on the stat source", 404), 404),
        (StatSourceError("Stat source failed with status 503", 503), 502),
        (StatSourceError("Stat source is unreachable"), 502),
    ],
)
async def test_link_profile_stat_source_failures(
    monkeypatch: pytest.MonkeyPatch, error: StatSourceError, status_code: int
) -> None:
    saved: list[ProfileInsertable] = []
    _patch_profiles(monkeypatch, saved)

    with pytest.raises(HTTPException) as exc_info:
        await profiles_routes.link_my_profile(
            _request(),
            StatSourceLookupBody(platform=Platform.XBL, player_id="someone"),
            _user(),
            _FakeStatSource(error),
            RateLimiter(max_requests=20, window_s=600),
        )

    assert exc_info.value.status_code == status_code
    assert saved == []


def test_lookup_body_rejects_unknown_platform_and_long_ids() -> None:
    with pytest.raises(ValueError):
        StatSourceLookupBody.model_validate({"platform": "switch", "player_id": "someone"})
    with pytest.raises(ValueError):
        StatSourceLookupBody.model_validate({"platform": "psn", "player_id": "x" * 65})
    with pytest.raises(ValueError):
        StatSourceLookupBody.model_validate({"platform": "psn", "player_id": "   "})
