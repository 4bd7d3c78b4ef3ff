from cashcard_api.app.core.config import settings
from cashcard_api.app.core.db import MIGRATIONS, get_connection, init_db


def count(sql):
    conn = get_connection()
    try:
        return conn.execute(sql).fetchone()[0]
    finally:
        conn.close()


def test_migrations_recorded_once(db_path):
    init_db()
    init_db()

    assert count("SELECT COUNT(*) FROM migrations") == len(MIGRATIONS)
    assert count("SELECT COUNT(*) FROM users") == 3


def test_seeding_can_be_disabled(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "empty.db"))
    monkeypatch.setattr(settings, "seed_demo_users", False)

    init_db()

    assert count("SELECT COUNT(*) FROM users") == 0
    assert count("SELECT COUNT(*) FROM cash_cards") == 0
