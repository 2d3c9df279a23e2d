from fastapi import APIRouter, Depends, HTTPException
from heliclockter import datetime_utc, timedelta
from starlette import status

from squadboard.config import config
from squadboard.models.db.account import UserAccountType
from squadboard.models.db.user import UserInsertable, UserPublic, UserToRegister
from squadboard.routes.auth import ACCESS_TOKEN_EXPIRE_MINUTES, Token, create_access_token, user_authenticated
from squadboard.routes.models import TokenResponse, UserPublicResponse
from squadboard.sql.users import check_whether_email_is_in_use, create_user
from squadboard.utils.security import hash_password

router = APIRouter(prefix=config.api_prefix)


@router.get("/users/me", response_model=UserPublicResponse)
async def get_me(user_public: UserPublic = Depends(user_authenticated)) -> UserPublicResponse:
    return UserPublicResponse(data=user_public)


@router.post("/users/register", response_model=TokenResponse)
async def register_user(user_to_register: UserToRegister) -> TokenResponse:
    if not config.allow_user_registration:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Account creation is unavailable for now")

    user = UserInsertable(
        email=user_to_register.email,
        password_hash=hash_password(user_to_register.password),
        name=user_to_register.name,
        created=datetime_utc.now(),
        account_type=UserAccountType.REGULAR,
    )
    if await check_whether_email_is_in_use(user.email):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Email address already in use")

    user_created = await create_user(user)
    access_token = create_access_token(
        data={"user": user_created.email},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return TokenResponse(
        data=Token(access_token=access_token, token_type="bearer", user_id=user_created.id)
    )
