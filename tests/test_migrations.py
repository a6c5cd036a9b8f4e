# tests/test_migrations.py
"""The alembic history builds the same schema as the ORM metadata."""

from unittest.mock import patch

from sqlalchemy import create_engine, inspect

from threadboard.core.settings import settings
from threadboard.scripts.migrate import run_upgrade_head


def test_upgrade_head_creates_tables(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"

    with patch.object(settings, "database_url", url):
        run_upgrade_head()

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        assert {"users", "message", "alembic_version"} <= set(inspector.get_table_names())

        columns = {column["name"] for column in inspector.get_columns("message")}
        assert columns == {
            "id", "user_id", "message", "parent_id", "message_time", "created_at", "updated_at",
        }
        parent_fk = next(
            fk for fk in inspector.get_foreign_keys("message") if fk["constrained_columns"] == ["parent_id"]
        )
        assert parent_fk["referred_table"] == "message"
        assert parent_fk["options"].get("ondelete") == "SET NULL"
    finally:
        engine.dispose()


def test_init_db_creates_tables_on_configured_engine() -> None:
    from threadboard.db.session import drop_tables, engine
    from threadboard.init_db import init_db

    init_db()
    try:
        assert {"users", "message"} <= set(inspect(engine).get_table_names())
    finally:
        drop_tables()
