from fastapi import APIRouter, Depends

from squadboard.config import config
from squadboard.models.db.user import UserPublic
from squadboard.routes.auth import user_authenticated
from squadboard.routes.models import ResultNoticesResponse
from squadboard.sql.result_notices import get_result_notices_for_applicant

router = APIRouter(prefix=config.api_prefix)


@router.get("/result_notices/me", response_model=ResultNoticesResponse)
async def get_my_result_notices(
    user_public: UserPublic = Depends(user_authenticated),
) -> ResultNoticesResponse:
    return ResultNoticesResponse(data=await get_result_notices_for_applicant(user_public.id))
