from typing import Annotated

from heliclockter import datetime_utc
from pydantic import BaseModel, StringConstraints

from squadboard.models.db.shared import BaseModelORM
from squadboard.utils.id_types import PlayStyleTagId


class PlayStyleTagInsertable(BaseModelORM):
    name: str
    is_active: bool = True
    created: datetime_utc


class PlayStyleTag(PlayStyleTagInsertable):
    id: PlayStyleTagId


class PlayStyleTagCreateBody(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=40)]


class PlayStyleTagUpdateBody(BaseModel):
    is_active: bool
