from squadboard.database import database
from squadboard.models.db.profile import Profile, ProfileInsertable
from squadboard.utils.id_types import UserId
from squadboard.utils.types import assert_some


async def get_profile(user_id: UserId) -> Profile | None:
    query = """
        SELECT *
        FROM profiles
        WHERE user_id = :user_id
        """
    result = await database.fetch_one(query=query, values={"user_id": user_id})
    return Profile.model_validate(dict(result._mapping)) if result is not None else None


async def sql_upsert_profile(profile: ProfileInsertable) -> Profile:
    query = """
        INSERT INTO profiles (
            user_id, tracker_platform, tracker_handle, display_name, avatar_url,
            current_rank_tier, current_rank_division, max_rank_tier, max_rank_division,
            tracker_level, tracker_rank_score, tracker_kills, tracker_damage, age_group, updated
        )
        VALUES (
            :user_id, :tracker_platform, :tracker_handle, :display_name, :avatar_url,
            :current_rank_tier, :current_rank_division, :max_rank_tier, :max_rank_division,
            :tracker_level, :tracker_rank_score, :tracker_kills, :tracker_damage, :age_group, :updated
        )
        ON CONFLICT (user_id) DO UPDATE
        SET tracker_platform = EXCLUDED.tracker_platform,
            tracker_handle = EXCLUDED.tracker_handle,
            display_name = EXCLUDED.display_name,
            avatar_url = EXCLUDED.avatar_url,
            current_rank_tier = EXCLUDED.current_rank_tier,
            current_rank_division = EXCLUDED.current_rank_division,
            max_rank_tier = EXCLUDED.max_rank_tier,
            max_rank_division = EXCLUDED.max_rank_division,
            tracker_level = EXCLUDED.tracker_level,
            tracker_rank_score = EXCLUDED.tracker_rank_score,
            tracker_kills = EXCLUDED.tracker_kills,
            tracker_damage = EXCLUDED.tracker_damage,
            age_group = EXCLUDED.age_group,
            updated = EXCLUDED.updated
        RETURNING *
        """
    result = await database.fetch_one(query=query, values=profile.model_dump())
    return Profile.model_validate(dict(assert_some(result)._mapping))
