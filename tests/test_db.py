"""Tests for database path resolution and migrations."""

import os

from blog_tracker_api.app.core.db import MIGRATIONS, get_connection, get_database_path, init_db


def test_relative_database_path_resolves_under_project_root() -> None:
    path = get_database_path("tracker.db")

    assert os.path.isabs(path)
    assert path.endswith(os.path.join("blog_tracker_api", "tracker.db"))


def test_absolute_database_path_is_kept(tmp_path) -> None:
    target = str(tmp_path / "x.db")

    assert get_database_path(target) == target


def test_init_db_applies_all_migrations_once(tmp_path) -> None:
    path = str(tmp_path / "tracker.db")

    assert init_db(path) == MIGRATIONS[-1][0]
    assert init_db(path) == MIGRATIONS[-1][0]

    conn = get_connection(path)
    try:
        versions = [row["version"] for row in conn.execute("SELECT version FROM migrations ORDER BY version")]
        france = conn.execute("SELECT country_code FROM countries WHERE country_name = 'France'").fetchone()
        count = conn.execute("SELECT COUNT(*) AS n FROM countries").fetchone()["n"]
    finally:
        conn.close()

    assert versions == [version for version, _ in MIGRATIONS]
    assert france["country_code"] == "FR"
    assert count > 50
