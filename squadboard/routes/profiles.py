from fastapi import APIRouter, Depends, HTTPException, Request
from heliclockter import datetime_utc
from starlette import status

from squadboard.config import config
from squadboard.logic.profile_link import profile_from_external
from squadboard.logic.ranks import make_rank_label
from squadboard.models.db.profile import ProfileInsertable, ProfileUpdateBody, StatSourceLookupBody
from squadboard.models.db.user import UserPublic
from squadboard.routes.auth import user_authenticated
from squadboard.routes.models import ProfileResponse
from squadboard.sql.profiles import get_profile, sql_upsert_profile
from squadboard.utils.errors import StatSourceError
from squadboard.utils.logging import logger
from squadboard.utils.rate_limit import RateLimiter
from squadboard.utils.stat_source import StatSource

router = APIRouter(prefix=config.api_prefix)


def get_stat_source(request: Request) -> StatSource:
    return request.app.state.stat_source


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_rate_limit_key(request: Request, user_public: UserPublic) -> str:
    client_host = request.client.host if request.client is not None else "unknown"
    return f"{user_public.id}:{client_host}"


@router.get("/profiles/me", response_model=ProfileResponse)
async def get_my_profile(user_public: UserPublic = Depends(user_authenticated)) -> ProfileResponse:
    return ProfileResponse(data=await get_profile(user_public.id))


@router.put("/profiles/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_body: ProfileUpdateBody,
    user_public: UserPublic = Depends(user_authenticated),
) -> ProfileResponse:
    existing = await get_profile(user_public.id)
    current = make_rank_label(profile_body.current_rank_tier, profile_body.current_rank_division)
    max_rank = make_rank_label(profile_body.max_rank_tier, profile_body.max_rank_division)

    base = existing.model_dump() if existing is not None else {}
    base.update(
        user_id=user_public.id,
        tracker_platform=(
            profile_body.tracker_platform.value
            if profile_body.tracker_platform is not None
            else base.get("tracker_platform")
        ),
        tracker_handle=(
            profile_body.tracker_handle.strip()
            if profile_body.tracker_handle is not None
            else base.get("tracker_handle")
        ),
        current_rank_tier=current.tier.value if current.tier is not None else None,
        current_rank_division=current.division,
        max_rank_tier=max_rank.tier.value if max_rank.tier is not None else None,
        max_rank_division=max_rank.division,
        age_group=profile_body.age_group.value if profile_body.age_group is not None else None,
        updated=datetime_utc.now(),
    )
    return ProfileResponse(data=await sql_upsert_profile(ProfileInsertable.model_validate(base)))


@router.post("/profiles/me/link", response_model=ProfileResponse)
async def link_my_profile(
    request: Request,
    lookup_body: StatSourceLookupBody,
    user_public: UserPublic = Depends(user_authenticated),
    stat_source: StatSource = Depends(get_stat_source),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
) -> ProfileResponse:
    decision = await rate_limiter.hit(get_rate_limit_key(request, user_public))
    if not decision.allowed:
        raise HTTPException(
            status.HTTP_429_TOO_MANY_REQUESTS,
            "Too many requests. Please try again later.",
            headers={"Retry-After": str(decision.retry_after_s)},
        )

    try:
        external = await stat_source.fetch_profile(lookup_body.platform, lookup_body.player_id)
    except StatSourceError as exc:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            raise HTTPException(status.HTTP_404_NOT_FOUND, str(exc)) from exc
        raise HTTPException(status.HTTP_502_BAD_GATEWAY, str(exc)) from exc

    profile = profile_from_external(
        user_public.id, external, datetime_utc.now(), existing=await get_profile(user_public.id)
    )
    saved = await sql_upsert_profile(profile)
    logger.info(f"User {user_public.id} linked stat source profile {lookup_body.platform.value}")
    return ProfileResponse(data=saved)
