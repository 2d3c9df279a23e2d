from typing import Protocol
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from squadboard.logic.labels import Platform
from squadboard.models.db.profile import ExternalStatProfile
from squadboard.utils.errors import StatSourceError
from squadboard.utils.logging import logger

USER_AGENT = "squadboard/1.0"


class StatSource(Protocol):
    async def fetch_profile(self, platform: Platform, player_id: str) -> ExternalStatProfile: ...

    async def aclose(self) -> None: ...


class HttpStatSource:
    """
    Client for a stat source that serves already normalized player profiles.

    The service answers ``GET {base_url}/{platform}/{player_id}`` with a JSON body holding the
    profile either at the top level or under ``profile``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None = None,
        timeout_s: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=timeout_s)
        self._client_created = client is None

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
        if self.api_key:
            headers["TRN-Api-Key"] = self.api_key
        return headers

    async def fetch_profile(self, platform: Platform, player_id: str) -> ExternalStatProfile:
        url = f"{self.base_url}/{platform.value}/{quote(player_id, safe='')}"
        try:
            response = await self._client.get(url, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.warning(f"Stat source request failed for {platform.value}/{player_id}: {exc}")
            raise StatSourceError("Stat source is unreachable") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            raise StatSourceError("Player was not found on the stat source", response.status_code)
        if response.is_error:
            logger.warning(f"Stat source answered {response.status_code} for {platform.value}/{player_id}")
            raise StatSourceError(
                f"Stat source failed with status {response.status_code}", response.status_code
            )

        try:
            payload = response.json()
            body = payload.get("profile", payload) if isinstance(payload, dict) else payload
            return ExternalStatProfile.model_validate(body)
        except (ValueError, ValidationError) as exc:
            logger.warning(f"Stat source returned an unusable profile for {platform.value}/{player_id}")
            raise StatSourceError("Stat source returned an invalid profile") from exc

    async def aclose(self) -> None:
        if self._client_created:
            await self._client.aclose()
