from typing import Any

import pytest
from heliclockter import datetime_utc

from squadboard.models.db.application import ApplicationInsertable
from squadboard.sql import applications as applications_sql
from squadboard.utils.errors import ApplicationError, DuplicateApplicationError
from squadboard.utils.id_types import ListingId, UserId


class _Row:
    def __init__(self, **values: Any) -> None:
        self._mapping = values


class _DummyTransaction:
    def __init__(self, events: list[str]) -> None:
        self.events = events

    async def __aenter__(self) -> "_DummyTransaction":
        self.events.append("begin")
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> bool:
        self.events.append("commit" if exc_type is None else "rollback")
        return False


def _application() -> ApplicationInsertable:
    return ApplicationInsertable(listing_id=ListingId(3), applicant_user_id=UserId(20), created=datetime_utc.now())


def _patch_database(
    monkeypatch: pytest.MonkeyPatch,
    events: list[str],
    listing_row: _Row | None,
    inserted: bool = True,
) -> None:
    async def fake_fetch_one(query: str, values: dict[str, Any]) -> _Row | None:
        if "FOR SHARE" in query:
            events.append("lock")
            return listing_row

        events.append("insert")
        if not inserted:
            return None
        return _Row(id=1, **values)

    monkeypatch.setattr(applications_sql.database, "fetch_one", fake_fetch_one)
    monkeypatch.setattr(applications_sql.database, "transaction", lambda: _DummyTransaction(events))


@pytest.mark.asyncio
async def test_application_is_inserted_under_listing_lock(monkeypatch: pytest.MonkeyPatch) -> None:
    events: list[str] = []
    _patch_database(monkeypatch, events, _Row(is_closed=False))

    application = await applications_sql.sql_create_application(_application())

    assert application.listing_id == 3
    assert application.applicant_user_id == 20
    assert events == ["begin", "lock", "insert", "commit"]


@pytest.mark.asyncio
@pytest.mark.parametrize("listing_row", [_Row(is_closed=True), None])
async def test_application_to_closed_or_missing_listing_is_rejected(
    monkeypatch: pytest.MonkeyPatch, listing_row: _Row | None
) -> None:
    events: list[str] = []
    _patch_database(monkeypatch, events, listing_row)

    with pytest.raises(ApplicationError, match="no longer accepting"):
        await applications_sql.sql_create_application(_application())

    assert events == ["begin", "lock", "rollback"]


@pytest.mark.asyncio
async def test_duplicate_application_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    events: list[str] = []
    _patch_database(monkeypatch, events, _Row(is_closed=False), inserted=False)

    with pytest.raises(DuplicateApplicationError):
        await applications_sql.sql_create_application(_application())
