from collections.abc import Sequence

from squadboard.database import database
from squadboard.models.db.result_notice import ResultNotice, ResultNoticeInsertable
from squadboard.utils.id_types import UserId


async def sql_upsert_result_notices(notices: Sequence[ResultNoticeInsertable]) -> None:
    if len(notices) < 1:
        return

    query = """
        INSERT INTO result_notices (
            listing_id, listing_title, vc_type, recruiter_user_id, applicant_user_id,
            status, account_name, invite_link, message, created
        )
        VALUES (
            :listing_id, :listing_title, :vc_type, :recruiter_user_id, :applicant_user_id,
            :status, :account_name, :invite_link, :message, :created
        )
        ON CONFLICT (listing_id, applicant_user_id) DO UPDATE
        SET listing_title = EXCLUDED.listing_title,
            vc_type = EXCLUDED.vc_type,
            recruiter_user_id = EXCLUDED.recruiter_user_id,
            status = EXCLUDED.status,
            account_name = EXCLUDED.account_name,
            invite_link = EXCLUDED.invite_link,
            message = EXCLUDED.message,
            created = EXCLUDED.created
        """
    await database.execute_many(
        query=query,
        values=[
            {
                "listing_id": notice.listing_id,
                "listing_title": notice.listing_title,
                "vc_type": notice.vc_type,
                "recruiter_user_id": notice.recruiter_user_id,
                "applicant_user_id": notice.applicant_user_id,
                "status": notice.status.value,
                "account_name": notice.account_name,
                "invite_link": notice.invite_link,
                "message": notice.message,
                "created": notice.created,
            }
            for notice in notices
        ],
    )


async def get_result_notices_for_applicant(applicant_user_id: UserId) -> list[ResultNotice]:
    query = """
        SELECT *
        FROM result_notices
        WHERE applicant_user_id = :applicant_user_id
        ORDER BY created DESC, id DESC
        """
    result = await database.fetch_all(query=query, values={"applicant_user_id": applicant_user_id})
    return [ResultNotice.model_validate(dict(notice._mapping)) for notice in result]
