from fastapi import APIRouter, Depends, HTTPException, Query
from heliclockter import datetime_utc
from starlette import status

from squadboard.config import config
from squadboard.models.db.play_style_tag import (
    PlayStyleTagCreateBody,
    PlayStyleTagInsertable,
    PlayStyleTagUpdateBody,
)
from squadboard.models.db.user import UserPublic
from squadboard.routes.auth import is_admin_user, user_authenticated
from squadboard.routes.models import PlayStyleTagResponse, PlayStyleTagsResponse, SuccessResponse
from squadboard.sql.play_style_tags import (
    get_play_style_tags,
    sql_create_play_style_tag,
    sql_delete_play_style_tag,
    sql_update_play_style_tag,
)
from squadboard.utils.id_types import PlayStyleTagId

router = APIRouter(prefix=config.api_prefix)


@router.get("/play_style_tags", response_model=PlayStyleTagsResponse)
async def list_play_style_tags(
    include_inactive: bool = Query(default=False),
    user_public: UserPublic = Depends(user_authenticated),
) -> PlayStyleTagsResponse:
    # Inactive tags stay valid on old listings, only admins manage them.
    include_inactive = include_inactive and is_admin_user(user_public)
    return PlayStyleTagsResponse(data=await get_play_style_tags(include_inactive))


@router.post("/play_style_tags", response_model=PlayStyleTagResponse)
async def create_play_style_tag(
    tag_body: PlayStyleTagCreateBody,
    user_public: UserPublic = Depends(user_authenticated),
) -> PlayStyleTagResponse:
    if not is_admin_user(user_public):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Admin access required")

    try:
        tag = await sql_create_play_style_tag(
            PlayStyleTagInsertable(name=tag_body.name, is_active=True, created=datetime_utc.now())
        )
    except ValueError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(exc)) from exc
    return PlayStyleTagResponse(data=tag)


@router.put("/play_style_tags/{tag_id}", response_model=PlayStyleTagResponse)
async def update_play_style_tag(
    tag_id: PlayStyleTagId,
    tag_body: PlayStyleTagUpdateBody,
    user_public: UserPublic = Depends(user_authenticated),
) -> PlayStyleTagResponse:
    if not is_admin_user(user_public):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Admin access required")

    tag = await sql_update_play_style_tag(tag_id, tag_body.is_active)
    if tag is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Play style tag not found")
    return PlayStyleTagResponse(data=tag)


@router.delete("/play_style_tags/{tag_id}", response_model=SuccessResponse)
async def delete_play_style_tag(
    tag_id: PlayStyleTagId,
    user_public: UserPublic = Depends(user_authenticated),
) -> SuccessResponse:
    if not is_admin_user(user_public):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Admin access required")

    if not await sql_delete_play_style_tag(tag_id):
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Play style tag not found")
    return SuccessResponse()
