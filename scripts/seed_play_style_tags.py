#!/usr/bin/env python3
import argparse
import asyncio

from heliclockter import datetime_utc

from squadboard.database import database
from squadboard.models.db.play_style_tag import PlayStyleTagInsertable
from squadboard.sql.play_style_tags import get_play_style_tags, sql_create_play_style_tag

DEFAULT_PLAY_STYLE_TAGS = [
    "エンジョイ",
    "ガチ",
    "初心者歓迎",
    "まったり",
    "ランク上げ",
    "キル重視",
    "立ち回り重視",
]


async def seed_play_style_tags(names: list[str]) -> None:
    existing = {tag.name for tag in await get_play_style_tags(include_inactive=True)}
    created = 0
    for name in names:
        normalized = name.strip()
        if normalized == "" or normalized in existing:
            continue

        await sql_create_play_style_tag(
            PlayStyleTagInsertable(name=normalized, is_active=True, created=datetime_utc.now())
        )
        existing.add(normalized)
        created += 1

    print(f"Created {created} play style tags, {len(existing)} tags in total")


async def async_main() -> None:
    parser = argparse.ArgumentParser(description="Seed the admin-curated play style tags.")
    parser.add_argument(
        "--tag",
        action="append",
        dest="tags",
        default=None,
        help="Tag name to create, can be repeated. Defaults to a built-in starter set.",
    )
    args = parser.parse_args()

    await database.connect()
    try:
        await seed_play_style_tags(args.tags or DEFAULT_PLAY_STYLE_TAGS)
    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(async_main())
