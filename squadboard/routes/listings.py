from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from heliclockter import datetime_utc
from starlette import status

from squadboard.config import config
from squadboard.logic.filtering import ListingFilter, filter_listings
from squadboard.logic.lifecycle import (
    build_listing_insertable,
    check_can_apply,
    check_can_close,
    check_can_create_listing,
    check_can_reopen,
    check_is_owner,
    format_remaining_time,
    get_remaining_time,
    listing_expires_at,
)
from squadboard.logic.profile_link import apply_as_listing_defaults
from squadboard.logic.ranks import format_rank
from squadboard.models.db.application import ApplicationInsertable
from squadboard.models.db.listing import (
    FinalizeBody,
    Listing,
    ListingCreateBody,
    ListingView,
    ListingWithApplicationCount,
)
from squadboard.models.db.user import UserPublic
from squadboard.routes.auth import is_admin_user, user_authenticated
from squadboard.routes.models import (
    ApplicantsResponse,
    AppliedListingIdsResponse,
    ListingDefaultsResponse,
    ListingResponse,
    ListingsResponse,
    SuccessResponse,
)
from squadboard.sql.applications import (
    get_applicants_with_profiles,
    get_applied_listing_ids,
    sql_create_application,
)
from squadboard.sql.finalize import sql_finalize_listing
from squadboard.sql.listings import (
    get_listing_by_id,
    get_listings,
    get_listings_for_owner,
    sql_close_listing,
    sql_create_listing,
    sql_delete_listing,
    sql_reopen_listing,
)
from squadboard.sql.play_style_tags import get_active_play_style_tag_names
from squadboard.sql.profiles import get_profile
from squadboard.utils.id_types import ListingId, UserId
from squadboard.utils.logging import logger

router = APIRouter(prefix=config.api_prefix)


def to_listing_view(
    listing: ListingWithApplicationCount,
    now: datetime_utc,
    viewer_id: UserId,
    applied_listing_ids: set[ListingId],
) -> ListingView:
    return ListingView(
        **listing.model_dump(),
        expires_at=listing_expires_at(listing),
        remaining_time_label=format_remaining_time(get_remaining_time(listing, now)),
        min_rank_label=format_rank(listing.min_rank_tier, listing.min_rank_division),
        current_rank_label=format_rank(listing.current_rank_tier, listing.current_rank_division),
        max_rank_label=format_rank(listing.max_rank_tier, listing.max_rank_division),
        is_mine=listing.user_id == viewer_id,
        has_applied=listing.id in applied_listing_ids,
    )


async def get_listing_or_404(listing_id: ListingId) -> Listing:
    listing = await get_listing_by_id(listing_id)
    if listing is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Listing not found")
    return listing


@router.get("/listings", response_model=ListingsResponse)
async def list_listings(
    listing_filter: Annotated[ListingFilter, Query()],
    user_public: UserPublic = Depends(user_authenticated),
) -> ListingsResponse:
    now = datetime_utc.now()
    listings = filter_listings(await get_listings(), listing_filter, now=now, viewer_id=user_public.id)
    applied_listing_ids = await get_applied_listing_ids(user_public.id)
    return ListingsResponse(
        data=[to_listing_view(listing, now, user_public.id, applied_listing_ids) for listing in listings]
    )


@router.get("/listings/defaults", response_model=ListingDefaultsResponse)
async def get_listing_defaults(
    user_public: UserPublic = Depends(user_authenticated),
) -> ListingDefaultsResponse:
    return ListingDefaultsResponse(data=apply_as_listing_defaults(await get_profile(user_public.id)))


@router.post("/listings", response_model=ListingResponse)
async def create_listing(
    listing_body: ListingCreateBody,
    user_public: UserPublic = Depends(user_authenticated),
) -> ListingResponse:
    try:
        check_can_create_listing(await get_listings_for_owner(user_public.id))
        listing = build_listing_insertable(
            listing_body,
            user_public.id,
            await get_active_play_style_tag_names(),
            datetime_utc.now(),
        )
        created = await sql_create_listing(listing)
    except ValueError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(exc)) from exc

    logger.info(f"User {user_public.id} created listing {created.id}")
    return ListingResponse(data=created)


@router.delete("/listings/{listing_id}", response_model=SuccessResponse)
async def delete_listing(
    listing_id: ListingId,
    user_public: UserPublic = Depends(user_authenticated),
) -> SuccessResponse:
    listing = await get_listing_or_404(listing_id)
    if not check_is_owner(listing, user_public.id, allow_admin=is_admin_user(user_public)):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Can't delete this listing")

    await sql_delete_listing(listing_id)
    logger.info(f"User {user_public.id} deleted listing {listing_id}")
    return SuccessResponse()


@router.post("/listings/{listing_id}/close", response_model=ListingResponse)
async def close_listing(
    listing_id: ListingId,
    user_public: UserPublic = Depends(user_authenticated),
) -> ListingResponse:
    listing = await get_listing_or_404(listing_id)
    if not check_is_owner(listing, user_public.id, allow_admin=is_admin_user(user_public)):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Can't close this listing")

    try:
        check_can_close(listing)
    except ValueError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(exc)) from exc

    closed = await sql_close_listing(listing_id)
    if closed is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Listing is already closed")

    logger.info(f"User {user_public.id} closed listing {listing_id}")
    return ListingResponse(data=closed)


@router.post("/listings/{listing_id}/reopen", response_model=ListingResponse)
async def reopen_listing(
    listing_id: ListingId,
    user_public: UserPublic = Depends(user_authenticated),
) -> ListingResponse:
    listing = await get_listing_or_404(listing_id)
    if not check_is_owner(listing, user_public.id):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Can't reopen this listing")

    try:
        check_can_reopen(listing, await get_listings_for_owner(user_public.id))
        reopened = await sql_reopen_listing(listing_id)
    except ValueError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(exc)) from exc

    if reopened is None:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Listing is not closed")

    logger.info(f"User {user_public.id} reopened listing {listing_id}")
    return ListingResponse(data=reopened)


@router.post("/listings/{listing_id}/applications", response_model=SuccessResponse)
async def apply_to_listing(
    listing_id: ListingId,
    user_public: UserPublic = Depends(user_authenticated),
) -> SuccessResponse:
    listing = await get_listing_or_404(listing_id)
    now = datetime_utc.now()
    try:
        check_can_apply(listing, user_public.id, now)
        await sql_create_application(
            ApplicationInsertable(listing_id=listing_id, applicant_user_id=user_public.id, created=now)
        )
    except ValueError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(exc)) from exc

    return SuccessResponse()


@router.get("/listings/{listing_id}/applications", response_model=ApplicantsResponse)
async def list_applicants(
    listing_id: ListingId,
    user_public: UserPublic = Depends(user_authenticated),
) -> ApplicantsResponse:
    listing = await get_listing_or_404(listing_id)
    if not check_is_owner(listing, user_public.id, allow_admin=is_admin_user(user_public)):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Can't view applicants of this listing")

    return ApplicantsResponse(data=await get_applicants_with_profiles(listing_id))


@router.post("/listings/{listing_id}/finalize", response_model=ListingResponse)
async def finalize_listing(
    listing_id: ListingId,
    finalize_body: FinalizeBody,
    user_public: UserPublic = Depends(user_authenticated),
) -> ListingResponse:
    listing = await get_listing_or_404(listing_id)
    if not check_is_owner(listing, user_public.id):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Only the owner can pick a winner")

    try:
        closed = await sql_finalize_listing(listing, user_public.id, finalize_body)
    except ValueError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(exc)) from exc

    return ListingResponse(data=closed)


@router.get("/applications/me", response_model=AppliedListingIdsResponse)
async def get_my_applications(
    user_public: UserPublic = Depends(user_authenticated),
) -> AppliedListingIdsResponse:
    return AppliedListingIdsResponse(data=sorted(await get_applied_listing_ids(user_public.id)))
