"""
Picking a winner for a listing.

Validation and notice construction are pure so that every precondition is checked before the
database is touched. Persisting the notices and closing the listing happens in
``squadboard.sql.finalize`` inside a single transaction.
"""

from collections.abc import Sequence

from heliclockter import datetime_utc

from squadboard.logic.labels import VoiceChat, normalize_voice_chat
from squadboard.models.db.application import Application
from squadboard.models.db.listing import FinalizeBody, Listing
from squadboard.models.db.result_notice import ResultNoticeInsertable, ResultStatus
from squadboard.utils.errors import FinalizeError
from squadboard.utils.id_types import UserId

REJECTED_MESSAGE = "今回は選考外となりました。"


def validate_finalize(
    listing: Listing,
    caller_id: UserId,
    applications: Sequence[Application],
    body: FinalizeBody,
) -> None:
    if listing.user_id != caller_id:
        raise FinalizeError("Only the owner of a listing can pick a winner")
    if listing.is_closed:
        raise FinalizeError("Listing is already closed, reopen it before picking another winner")
    if len(applications) < 1:
        raise FinalizeError("Listing has no applications")
    if body.winner_user_id not in {application.applicant_user_id for application in applications}:
        raise FinalizeError("Winner must be one of the applicants")
    if body.account_name.strip() == "":
        raise FinalizeError("Account name is required")
    if body.message.strip() == "":
        raise FinalizeError("Message is required")
    if normalize_voice_chat(listing.vc_type) is VoiceChat.DISCORD and (body.invite_link or "").strip() == "":
        raise FinalizeError("An invite link is required for Discord listings")


def build_result_notices(
    listing: Listing,
    applications: Sequence[Application],
    body: FinalizeBody,
    now: datetime_utc,
) -> list[ResultNoticeInsertable]:
    voice_chat = normalize_voice_chat(listing.vc_type)
    invite_link = (body.invite_link or "").strip()
    selected_invite_link = invite_link if voice_chat is VoiceChat.DISCORD and invite_link != "" else None

    notices: list[ResultNoticeInsertable] = []
    seen: set[UserId] = set()
    for application in applications:
        if application.applicant_user_id in seen:
            continue
        seen.add(application.applicant_user_id)

        is_winner = application.applicant_user_id == body.winner_user_id
        notices.append(
            ResultNoticeInsertable(
                listing_id=listing.id,
                listing_title=listing.title,
                vc_type=voice_chat.value if voice_chat is not None else listing.vc_type,
                recruiter_user_id=listing.user_id,
                applicant_user_id=application.applicant_user_id,
                status=ResultStatus.SELECTED if is_winner else ResultStatus.REJECTED,
                account_name=body.account_name.strip() if is_winner else None,
                invite_link=selected_invite_link if is_winner else None,
                message=body.message.strip() if is_winner else REJECTED_MESSAGE,
                created=now,
            )
        )
    return notices
