"""Apply or roll back Alembic migrations on the HealFit SQLite database.

Usage:
    python scripts/migrate.py                 # upgrade to head
    python scripts/migrate.py upgrade <rev>
    python scripts/migrate.py downgrade <rev>
"""
import os
import sys
from alembic import command
from alembic.config import Config

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

from healfit.config import get_settings  # noqa: E402


def _alembic_config(url: str) -> Config:
    cfg = Config(os.path.join(BASE_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(BASE_DIR, "alembic"))
    cfg.set_main_option("sqlalchemy.url", url)
    return cfg


def main(argv: list[str]) -> None:
    action = argv[0] if argv else "upgrade"
    revision = argv[1] if len(argv) > 1 else "head"

    cfg = _alembic_config(get_settings().database_url)
    if action == "upgrade":
        command.upgrade(cfg, revision)
    elif action == "downgrade":
        command.downgrade(cfg, revision if len(argv) > 1 else "-1")
    else:
        sys.exit(f"Unknown action: {action}")


if __name__ == "__main__":
    main(sys.argv[1:])
