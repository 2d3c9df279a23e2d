import httpx
import pytest

from squadboard.logic.labels import Platform
from squadboard.utils.errors import StatSourceError
from squadboard.utils.stat_source import HttpStatSource

PROFILE_PAYLOAD = {
    "profile": {
        "trackerPlatform": "origin",
        "trackerHandle": "Wraith Main",
        "displayName": "Wraith Main",
        "avatarUrl": "https://example.org/avatar.png",
        "rankLabel": "Platinum II",
        "rankScore": 8123,
        "level": "412",
        "kills": 5000,
        "damage": "1,250,000",
    }
}


def _stat_source(handler: httpx.MockTransport, api_key: str | None = "secret") -> HttpStatSource:
    client = httpx.AsyncClient(transport=handler)
    return HttpStatSource("https://stats.example.org/v1/apex/", api_key=api_key, client=client)


@pytest.mark.asyncio
async def test_fetch_profile_parses_normalized_subset() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=PROFILE_PAYLOAD)

    stat_source = _stat_source(httpx.MockTransport(handler))
    profile = await stat_source.fetch_profile(Platform.ORIGIN, "Wraith Main")

    assert profile.tracker_handle == "Wraith Main"
    assert profile.rank_label == "Platinum II"
    assert profile.level == 412
    assert profile.damage == 1250000

    assert len(requests) == 1
    assert requests[0].url.raw_path == b"/v1/apex/origin/Wraith%20Main"
    assert requests[0].headers["TRN-Api-Key"] == "secret"


@pytest.mark.asyncio
async def test_fetch_profile_without_api_key_sends_no_key_header() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert "TRN-Api-Key" not in request.headers
        return httpx.Response(200, json=PROFILE_PAYLOAD["profile"])

    profile = await _stat_source(httpx.MockTransport(handler), api_key=None).fetch_profile(Platform.PSN, "abc")
    assert profile.tracker_platform == "origin"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("response", "status_code"),
    [
        (httpx.Response(404, json={"errors": []}), 404),
        (httpx.Response(503, text="unavailable"), 503),
        (httpx.Response(200, text="not json"), None),
        (httpx.Response(200, json={"profile": {"displayName": "missing handle"}}), None),
    ],
)
async def test_fetch_profile_failures_raise_stat_source_error(
    response: httpx.Response, status_code: int | None
) -> None:
    stat_source = _stat_source(httpx.MockTransport(lambda _: response))

    with pytest.raises(StatSourceError) as exc_info:
        await stat_source.fetch_profile(Platform.XBL, "someone")

    assert exc_info.value.status_code == status_code


@pytest.mark.asyncio
async def test_fetch_profile_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(StatSourceError, match="unreachable"):
        await _stat_source(httpx.MockTransport(handler)).fetch_profile(Platform.XBL, "someone")
