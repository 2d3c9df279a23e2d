from heliclockter import datetime_utc

from squadboard.models.db.shared import BaseModelORM
from squadboard.utils.id_types import ListingId, ResultNoticeId, UserId
from squadboard.utils.types import EnumValues


class ResultStatus(EnumValues):
    SELECTED = "selected"
    REJECTED = "rejected"


class ResultNoticeInsertable(BaseModelORM):
    listing_id: ListingId | None
    listing_title: str
    vc_type: str | None = None
    recruiter_user_id: UserId
    applicant_user_id: UserId
    status: ResultStatus
    account_name: str | None = None
    invite_link: str | None = None
    message: str
    created: datetime_utc


class ResultNotice(ResultNoticeInsertable):
    id: ResultNoticeId
