from squadboard.database import database
from squadboard.models.db.play_style_tag import PlayStyleTag, PlayStyleTagInsertable
from squadboard.utils.errors import DuplicatePlayStyleTagError
from squadboard.utils.id_types import PlayStyleTagId


async def get_play_style_tags(include_inactive: bool = False) -> list[PlayStyleTag]:
    query = """
        SELECT *
        FROM play_style_tags
        WHERE (:include_inactive OR is_active = TRUE)
        ORDER BY id ASC
        """
    result = await database.fetch_all(query=query, values={"include_inactive": include_inactive})
    return [PlayStyleTag.model_validate(dict(tag._mapping)) for tag in result]


async def get_active_play_style_tag_names() -> set[str]:
    return {tag.name for tag in await get_play_style_tags()}


async def sql_create_play_style_tag(tag: PlayStyleTagInsertable) -> PlayStyleTag:
    query = """
        INSERT INTO play_style_tags (name, is_active, created)
        VALUES (:name, :is_active, :created)
        ON CONFLICT (name) DO NOTHING
        RETURNING *
        """
    result = await database.fetch_one(
        query=query,
        values={"name": tag.name, "is_active": tag.is_active, "created": tag.created},
    )
    if result is None:
        raise DuplicatePlayStyleTagError(tag.name)
    return PlayStyleTag.model_validate(dict(result._mapping))


async def sql_update_play_style_tag(tag_id: PlayStyleTagId, is_active: bool) -> PlayStyleTag | None:
    query = """
        UPDATE play_style_tags
        SET is_active = :is_active
        WHERE id = :tag_id
        RETURNING *
        """
    result = await database.fetch_one(query=query, values={"tag_id": tag_id, "is_active": is_active})
    return PlayStyleTag.model_validate(dict(result._mapping)) if result is not None else None


async def sql_delete_play_style_tag(tag_id: PlayStyleTagId) -> bool:
    query = """
        DELETE FROM play_style_tags
        WHERE id = :tag_id
        RETURNING id
        """
    result = await database.fetch_one(query=query, values={"tag_id": tag_id})
    return result is not None
