from heliclockter import datetime_utc

from squadboard.models.db.shared import BaseModelORM
from squadboard.utils.id_types import ApplicationId, ListingId, UserId


class ApplicationInsertable(BaseModelORM):
    listing_id: ListingId
    applicant_user_id: UserId
    created: datetime_utc


class Application(ApplicationInsertable):
    id: ApplicationId


class ApplicantView(BaseModelORM):
    """An application joined with the applicant's stored profile, shown to the listing owner."""

    application_id: ApplicationId
    applicant_user_id: UserId
    applicant_name: str
    created: datetime_utc
    display_name: str | None = None
    tracker_handle: str | None = None
    current_rank_tier: str | None = None
    current_rank_division: int | None = None
    max_rank_tier: str | None = None
    max_rank_division: int | None = None
    age_group: str | None = None
    current_rank_label: str | None = None
    max_rank_label: str | None = None
