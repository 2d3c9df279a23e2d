from squadboard.database import database
from squadboard.logic.ranks import format_rank
from squadboard.models.db.application import ApplicantView, Application, ApplicationInsertable
from squadboard.utils.errors import ApplicationError, DuplicateApplicationError
from squadboard.utils.id_types import ListingId, UserId


async def sql_create_application(application: ApplicationInsertable) -> Application:
    # The share lock makes a concurrent finalize wait for this insert, or makes this insert
    # see the listing closed once finalize commits.
    lock_query = """
        SELECT is_closed
        FROM listings
        WHERE id = :listing_id
        FOR SHARE
        """
    query = """
        INSERT INTO applications (listing_id, applicant_user_id, created)
        VALUES (:listing_id, :applicant_user_id, :created)
        ON CONFLICT (listing_id, applicant_user_id) DO NOTHING
        RETURNING *
        """
    async with database.transaction():
        listing = await database.fetch_one(query=lock_query, values={"listing_id": application.listing_id})
        if listing is None or listing._mapping["is_closed"]:
            raise ApplicationError("This listing is no longer accepting applications")

        result = await database.fetch_one(
            query=query,
            values={
                "listing_id": application.listing_id,
                "applicant_user_id": application.applicant_user_id,
                "created": application.created,
            },
        )
    if result is None:
        raise DuplicateApplicationError()
    return Application.model_validate(dict(result._mapping))


async def get_applications_for_listing(listing_id: ListingId) -> list[Application]:
    query = """
        SELECT *
        FROM applications
        WHERE listing_id = :listing_id
        ORDER BY created ASC, id ASC
        """
    result = await database.fetch_all(query=query, values={"listing_id": listing_id})
    return [Application.model_validate(dict(application._mapping)) for application in result]


async def get_applicants_with_profiles(listing_id: ListingId) -> list[ApplicantView]:
    query = """
        SELECT
            a.id AS application_id,
            a.applicant_user_id,
            a.created,
            u.name AS applicant_name,
            p.display_name,
            p.tracker_handle,
            p.current_rank_tier,
            p.current_rank_division,
            p.max_rank_tier,
            p.max_rank_division,
            p.age_group
        FROM applications a
        JOIN users u ON u.id = a.applicant_user_id
        LEFT JOIN profiles p ON p.user_id = a.applicant_user_id
        WHERE a.listing_id = :listing_id
        ORDER BY a.created ASC, a.id ASC
        """
    result = await database.fetch_all(query=query, values={"listing_id": listing_id})

    applicants = []
    for row in result:
        applicant = ApplicantView.model_validate(dict(row._mapping))
        applicant.current_rank_label = format_rank(applicant.current_rank_tier, applicant.current_rank_division)
        applicant.max_rank_label = format_rank(applicant.max_rank_tier, applicant.max_rank_division)
        applicants.append(applicant)
    return applicants


async def get_applied_listing_ids(applicant_user_id: UserId) -> set[ListingId]:
    query = """
        SELECT listing_id
        FROM applications
        WHERE applicant_user_id = :applicant_user_id
        """
    result = await database.fetch_all(query=query, values={"applicant_user_id": applicant_user_id})
    return {ListingId(row._mapping["listing_id"]) for row in result}
