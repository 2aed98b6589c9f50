"""Test the Alembic migration pipeline against a scratch SQLite database."""

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def _config(url: str) -> Config:
    alembic_cfg = Config(str(ALEMBIC_INI))
    alembic_cfg.set_main_option("sqlalchemy.url", url)
    return alembic_cfg


def test_upgrade_and_downgrade(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrations.db'}"
    alembic_cfg = _config(url)

    command.upgrade(alembic_cfg, "head")

    engine = create_engine(url)
    tables = set(inspect(engine).get_table_names())
    assert {"users", "jobs", "applications", "documents"} <= tables

    unique = inspect(engine).get_unique_constraints("applications")
    assert any(set(c["column_names"]) == {"job_id", "applicant_id"} for c in unique)

    command.downgrade(alembic_cfg, "base")
    assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    engine.dispose()
