from __future__ import annotations

from pathlib import Path

import sqlalchemy as sa
from alembic.config import Config

from alembic import command

ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


def _alembic_config(database_url: str) -> Config:
    alembic_config = Config(str(ALEMBIC_INI))
    alembic_config.set_main_option("sqlalchemy.url", database_url)
    return alembic_config


def test_migration_creates_required_tables_and_uniques(tmp_path: Path) -> None:
    database_url = f"sqlite+pysqlite:///{tmp_path / 'schema.db'}"
    command.upgrade(_alembic_config(database_url), "head")

    inspector = sa.inspect(sa.create_engine(database_url))

    assert {"users", "auth_tokens", "patients"} <= set(inspector.get_table_names())
    users_uniques = {
        tuple(constraint["column_names"])
        for constraint in inspector.get_unique_constraints("users")
    }
    patients_uniques = {
        tuple(constraint["column_names"])
        for constraint in inspector.get_unique_constraints("patients")
    }
    assert ("email",) in users_uniques
    assert ("email",) in patients_uniques
    assert "ix_auth_tokens_user_id" in {
        index["name"] for index in inspector.get_indexes("auth_tokens")
    }


def test_downgrade_to_base_removes_tables(tmp_path: Path) -> None:
    database_url = f"sqlite+pysqlite:///{tmp_path / 'downgrade.db'}"
    alembic_config = _alembic_config(database_url)
    command.upgrade(alembic_config, "head")

    command.downgrade(alembic_config, "base")

    table_names = set(sa.inspect(sa.create_engine(database_url)).get_table_names())
    assert not {"users", "auth_tokens", "patients"} & table_names
