import sqlite3

import pytest

from eamcore.database import Database, default_database_path


@pytest.fixture
def db(tmp_path):
    with Database(tmp_path / "nested" / "eam.db") as database:
        yield database


def test_default_path_layout():
    path = default_database_path()
    assert path.name == "eam.db"
    assert path.parent.name == "epic_asset_manager"


def test_creates_file_and_parent(tmp_path):
    target = tmp_path / "a" / "b" / "eam.db"
    with Database(target) as database:
        assert database.path == target
    assert target.exists()


def test_favorites_round_trip(db):
    assert db.is_favorite("asset-1") is False
    db.add_favorite("asset-1")
    assert db.is_favorite("asset-1") is True
    db.add_favorite("asset-1")
    assert db.is_favorite("asset-1") is True
    db.remove_favorite("asset-1")
    assert db.is_favorite("asset-1") is False


def test_remove_missing_favorite_is_harmless(db):
    db.remove_favorite("missing")
    assert db.is_favorite("missing") is False


def test_project_engine(db):
    assert db.project_engine("/p/Game.uproject") is None
    db.set_project_engine("/p/Game.uproject", "engine-a")
    assert db.project_engine("/p/Game.uproject") == "engine-a"
    db.set_project_engine("/p/Game.uproject", "engine-b")
    assert db.project_engine("/p/Game.uproject") == "engine-b"


def test_user_data(db):
    assert db.user_data("theme") is None
    db.set_user_data("theme", "dark")
    db.set_user_data("theme", "light")
    assert db.user_data("theme") == "light"


def test_data_persists_across_connections(tmp_path):
    target = tmp_path / "eam.db"
    with Database(target) as first:
        first.add_favorite("kept")
        first.set_user_data("k", "v")
    with Database(target) as second:
        assert second.is_favorite("kept") is True
        assert second.user_data("k") == "v"


def test_closed_database_rejects_queries(tmp_path):
    database = Database(tmp_path / "eam.db")
    database.close()
    with pytest.raises(sqlite3.ProgrammingError):
        database.is_favorite("x")