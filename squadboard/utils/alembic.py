import fcntl
from collections.abc import Iterator
from contextlib import contextmanager

from alembic.config import Config

from alembic import command
from squadboard.utils.logging import logger

_MIGRATION_LOCK_PATH = "/tmp/squadboard-alembic.lock"


@contextmanager
def _migration_lock() -> Iterator[None]:
    # Several workers may start at once, only one of them should migrate at a time.
    with open(_MIGRATION_LOCK_PATH, "w", encoding="utf-8") as lock_file:
        fcntl.flock(lock_file, fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(lock_file, fcntl.LOCK_UN)


def get_alembic_config() -> Config:
    return Config("alembic.ini")


def alembic_run_migrations() -> None:
    with _migration_lock():
        logger.info("Running migrations")
        command.upgrade(get_alembic_config(), "head")
