"""Tests for the Alembic migration chain."""

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

import stayhub.models  # noqa: F401
from stayhub.database import Base

ROOT = Path(__file__).resolve().parent.parent


def _alembic_config(database_path: Path) -> Config:
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", f"sqlite+aiosqlite:///{database_path}")
    return config


def _table_names(database_path: Path) -> set[str]:
    engine = create_engine(f"sqlite:///{database_path}")
    try:
        return set(inspect(engine).get_table_names())
    finally:
        engine.dispose()


def test_upgrade_creates_every_model_table(tmp_path: Path) -> None:
    database_path = tmp_path / "schema.db"

    command.upgrade(_alembic_config(database_path), "head")

    tables = _table_names(database_path)
    assert set(Base.metadata.tables) <= tables
    assert "alembic_version" in tables


def test_downgrade_to_base_drops_model_tables(tmp_path: Path) -> None:
    database_path = tmp_path / "schema.db"
    config = _alembic_config(database_path)

    command.upgrade(config, "head")
    command.downgrade(config, "base")

    assert _table_names(database_path) == {"alembic_version"}
