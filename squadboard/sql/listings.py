from squadboard.database import database
from squadboard.models.db.listing import Listing, ListingInsertable, ListingWithApplicationCount
from squadboard.utils.errors import ActiveListingExistsError, UniqueIndex, check_unique_constraint_violation
from squadboard.utils.id_types import ListingId, UserId


async def get_listings(include_closed: bool = False) -> list[ListingWithApplicationCount]:
    query = """
        SELECT l.*, COUNT(a.id) AS application_count
        FROM listings l
        LEFT JOIN applications a ON a.listing_id = l.id
        WHERE (:include_closed OR l.is_closed = FALSE)
        GROUP BY l.id
        ORDER BY l.created DESC, l.id DESC
        """
    result = await database.fetch_all(query=query, values={"include_closed": include_closed})
    return [ListingWithApplicationCount.model_validate(dict(listing._mapping)) for listing in result]


async def get_listing_by_id(listing_id: ListingId) -> Listing | None:
    query = """
        SELECT *
        FROM listings
        WHERE id = :listing_id
        """
    result = await database.fetch_one(query=query, values={"listing_id": listing_id})
    return Listing.model_validate(dict(result._mapping)) if result is not None else None


async def get_listings_for_owner(user_id: UserId) -> list[Listing]:
    query = """
        SELECT *
        FROM listings
        WHERE user_id = :user_id
        ORDER BY created DESC
        """
    result = await database.fetch_all(query=query, values={"user_id": user_id})
    return [Listing.model_validate(dict(listing._mapping)) for listing in result]


async def sql_create_listing(listing: ListingInsertable) -> Listing:
    # The partial unique index on (user_id) WHERE is_closed = FALSE rejects the losing writer
    # when two creates race, in which case nothing is returned.
    query = """
        INSERT INTO listings (
            title, user_id, recruit_count, mode, allowed_age_groups, min_rank_tier,
            min_rank_division, vc_type, play_styles, other_text, current_rank_tier,
            current_rank_division, max_rank_tier, max_rank_division, age_group, platform,
            created, is_closed
        )
        VALUES (
            :title, :user_id, :recruit_count, :mode, :allowed_age_groups, :min_rank_tier,
            :min_rank_division, :vc_type, :play_styles, :other_text, :current_rank_tier,
            :current_rank_division, :max_rank_tier, :max_rank_division, :age_group, :platform,
            :created, FALSE
        )
        ON CONFLICT (user_id) WHERE is_closed = FALSE DO NOTHING
        RETURNING *
        """
    result = await database.fetch_one(
        query=query,
        values=listing.model_dump(exclude={"is_closed", "winner_user_id"}),
    )
    if result is None:
        raise ActiveListingExistsError()
    return Listing.model_validate(dict(result._mapping))


async def sql_delete_listing(listing_id: ListingId) -> None:
    query = """
        DELETE FROM listings
        WHERE id = :listing_id
        """
    await database.execute(query=query, values={"listing_id": listing_id})


async def sql_close_listing(listing_id: ListingId) -> Listing | None:
    query = """
        UPDATE listings
        SET is_closed = TRUE
        WHERE id = :listing_id
          AND is_closed = FALSE
        RETURNING *
        """
    result = await database.fetch_one(query=query, values={"listing_id": listing_id})
    return Listing.model_validate(dict(result._mapping)) if result is not None else None


async def get_listing_for_update(listing_id: ListingId) -> Listing | None:
    # Must run inside a transaction; the row stays locked until it ends.
    query = """
        SELECT *
        FROM listings
        WHERE id = :listing_id
        FOR UPDATE
        """
    result = await database.fetch_one(query=query, values={"listing_id": listing_id})
    return Listing.model_validate(dict(result._mapping)) if result is not None else None


async def sql_close_listing_for_owner(
    listing_id: ListingId, owner_id: UserId, winner_user_id: UserId
) -> Listing | None:
    query = """
        UPDATE listings
        SET is_closed = TRUE, winner_user_id = :winner_user_id
        WHERE id = :listing_id
          AND user_id = :owner_id
          AND is_closed = FALSE
        RETURNING *
        """
    result = await database.fetch_one(
        query=query,
        values={"listing_id": listing_id, "owner_id": owner_id, "winner_user_id": winner_user_id},
    )
    return Listing.model_validate(dict(result._mapping)) if result is not None else None


async def sql_reopen_listing(listing_id: ListingId) -> Listing | None:
    query = """
        UPDATE listings
        SET is_closed = FALSE, winner_user_id = NULL
        WHERE id = :listing_id
          AND is_closed = TRUE
        RETURNING *
        """
    with check_unique_constraint_violation({UniqueIndex.ix_listings_one_open_per_owner}):
        result = await database.fetch_one(query=query, values={"listing_id": listing_id})
    return Listing.model_validate(dict(result._mapping)) if result is not None else None
