import fcntl
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from alembic.config import Config
from alembic.script import ScriptDirectory

from alembic import command
from tcgleague.utils.logging import logger

BACKEND_DIR = Path(__file__).resolve().parents[2]
MIGRATION_LOCK_PATH = Path("/tmp/tcgleague-migrations.lock")


@contextmanager
def migration_lock() -> Iterator[None]:
    """Serializes migrations between workers that start at the same time."""
    with MIGRATION_LOCK_PATH.open("w", encoding="utf-8") as lock_file:
        fcntl.flock(lock_file, fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(lock_file, fcntl.LOCK_UN)


def get_alembic_config() -> Config:
    alembic_config = Config(str(BACKEND_DIR / "alembic.ini"))
    alembic_config.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    return alembic_config


def alembic_run_migrations() -> None:
    alembic_config = get_alembic_config()
    heads = ScriptDirectory.from_config(alembic_config).get_heads()
    with migration_lock():
        logger.info(f"Upgrading event schema to {', '.join(heads)}")
        command.upgrade(alembic_config, "head")
