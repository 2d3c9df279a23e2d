from heliclockter import datetime_utc

from squadboard.database import database
from squadboard.logic.finalize import build_result_notices, validate_finalize
from squadboard.models.db.listing import FinalizeBody, Listing
from squadboard.sql.applications import get_applications_for_listing
from squadboard.sql.listings import get_listing_for_update, sql_close_listing_for_owner
from squadboard.sql.result_notices import sql_upsert_result_notices
from squadboard.utils.errors import FinalizeError
from squadboard.utils.id_types import UserId
from squadboard.utils.logging import logger


async def sql_finalize_listing(
    listing: Listing,
    caller_id: UserId,
    body: FinalizeBody,
    now: datetime_utc | None = None,
) -> Listing:
    """
    Pick the winner of a listing, notify every applicant and close the listing.

    The listing row is locked before the applications are read, so an application cannot
    slip in between building the notices and closing the listing. All preconditions are
    validated before anything is written, and a failure at any step rolls back the whole
    transaction.
    """
    async with database.transaction():
        locked = await get_listing_for_update(listing.id)
        if locked is None:
            raise FinalizeError("Listing was removed while picking a winner")

        applications = await get_applications_for_listing(locked.id)
        validate_finalize(locked, caller_id, applications, body)
        notices = build_result_notices(locked, applications, body, now or datetime_utc.now())

        await sql_upsert_result_notices(notices)
        closed = await sql_close_listing_for_owner(locked.id, caller_id, body.winner_user_id)
        if closed is None:
            raise FinalizeError("Listing was closed or removed while picking a winner")

    logger.info(
        f"Finalized listing {listing.id}: winner {body.winner_user_id}, "
        f"{len(notices)} result notices written"
    )
    return closed
