from typing import TypeVar

from databases import Database
from pydantic import BaseModel
from sqlalchemy.sql import Select

BaseModelT = TypeVar("BaseModelT", bound=BaseModel)


async def fetch_one_parsed(
    database: Database, model: type[BaseModelT], query: Select
) -> BaseModelT | None:
    record = await database.fetch_one(query)
    return model.model_validate(dict(record._mapping)) if record is not None else None
