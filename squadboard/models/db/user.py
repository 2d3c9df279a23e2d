from typing import Annotated

from heliclockter import datetime_utc
from pydantic import BaseModel, StringConstraints

from squadboard.models.db.account import UserAccountType
from squadboard.models.db.shared import BaseModelORM
from squadboard.utils.id_types import UserId


class UserBase(BaseModelORM):
    email: str
    name: str
    created: datetime_utc
    account_type: UserAccountType


class UserInsertable(UserBase):
    password_hash: str | None = None


class User(UserBase):
    id: UserId
    password_hash: str | None = None


class UserPublic(UserBase):
    id: UserId


class UserToRegister(BaseModel):
    email: Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=254)]
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]
    password: Annotated[str, StringConstraints(min_length=8, max_length=48)]


class UserInDB(UserBase):
    id: UserId
    password_hash: str
