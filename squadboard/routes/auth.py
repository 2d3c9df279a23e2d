from typing import Any

import jwt
from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from heliclockter import datetime_utc, timedelta
from pydantic import BaseModel
from starlette import status

from squadboard.config import config
from squadboard.models.db.account import UserAccountType
from squadboard.models.db.user import UserInDB, UserPublic
from squadboard.sql.users import get_user
from squadboard.utils.id_types import UserId
from squadboard.utils.security import verify_password

router = APIRouter(prefix=config.api_prefix)

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 7 * 24 * 60

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{config.api_prefix}/token")


class Token(BaseModel):
    access_token: str
    token_type: str
    user_id: UserId


class TokenData(BaseModel):
    email: str


async def authenticate_user(email: str, password: str) -> UserInDB | None:
    user = await get_user(email)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def create_access_token(data: dict[str, Any], expires_delta: timedelta) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": datetime_utc.now() + expires_delta})
    return jwt.encode(to_encode, config.jwt_secret, algorithm=ALGORITHM)


async def check_jwt_and_get_user(token: str) -> UserPublic | None:
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[ALGORITHM])
        email = payload.get("user")
        if not isinstance(email, str):
            return None
        token_data = TokenData(email=email)
    except jwt.PyJWTError:
        return None

    user = await get_user(email=token_data.email)
    return UserPublic.model_validate(user.model_dump()) if user is not None else None


async def user_authenticated(token: str = Depends(oauth2_scheme)) -> UserPublic:
    user = await check_jwt_and_get_user(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def is_admin_user(user: UserPublic) -> bool:
    return user.account_type is UserAccountType.ADMIN


@router.post("/token", response_model=Token)
async def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends()) -> Token:
    user = await authenticate_user(form_data.username, form_data.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(
        data={"user": user.email},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return Token(access_token=access_token, token_type="bearer", user_id=user.id)
