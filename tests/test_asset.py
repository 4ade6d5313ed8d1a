from datetime import datetime, timezone

import pytest

from eamcore.asset import AssetData, AssetType, decide_kind, downloaded_locations
from eamcore.assetinfo import AssetInfo, Category, ReleaseInfo
from eamcore.database import Database


def make_asset(paths=None, releases=None, modified=None, title="Sample"):
    categories = None if paths is None else [Category(path=p) for p in paths]
    return AssetInfo(
        id="asset-1",
        title=title,
        categories=categories,
        release_info=releases,
        last_modified_date=modified,
    )


@pytest.fixture
def database(tmp_path):
    with Database(tmp_path / "eam.db") as db:
        yield db


def test_decide_kind_uses_first_exact_path():
    asset = make_asset(["assets/props", "engines", "assets"])
    assert decide_kind(asset) is AssetType.ENGINE


def test_decide_kind_none_without_match():
    assert decide_kind(make_asset(None)) is None
    assert decide_kind(make_asset(["assets/props"])) is None


@pytest.mark.parametrize(
    "path, kind",
    [
        ("assets", AssetType.ASSET),
        ("games", AssetType.GAME),
        ("plugins", AssetType.PLUGIN),
        ("projects", AssetType.PROJECT),
        ("engines", AssetType.ENGINE),
    ],
)
def test_asset_data_kind(path, kind):
    assert AssetData(make_asset([path])).kind() is kind


def test_asset_kind_value_is_stored_name():
    assert decide_kind(make_asset(["assets"])).value == "asset"
    assert AssetData(make_asset(["projects"])).kind().value == "projects"


def test_downloaded_locations(tmp_path):
    vault_a = tmp_path / "a"
    vault_b = tmp_path / "b"
    (vault_b / "app" / "data").mkdir(parents=True)
    vault_a.mkdir()
    assert downloaded_locations([vault_a, vault_b], "app") == [vault_b / "app" / "data"]
    assert downloaded_locations([vault_a], "app") == []


def test_check_downloaded(tmp_path):
    releases = [ReleaseInfo(app_id=None), ReleaseInfo(app_id="app")]
    asset = make_asset(["assets"], releases=releases)
    data = AssetData(asset, vault_directories=[tmp_path])
    assert data.downloaded is False
    (tmp_path / "app" / "data").mkdir(parents=True)
    assert data.check_downloaded() is True
    assert data.downloaded is True


def test_favorite_from_database(database):
    database.add_favorite("asset-1")
    assert AssetData(make_asset(["assets"]), database=database).favorite is True


def test_favorite_without_database():
    assert AssetData(make_asset(["assets"])).check_favorite() is False


def test_favorite_with_closed_database(tmp_path):
    db = Database(tmp_path / "eam.db")
    db.add_favorite("asset-1")
    data = AssetData(make_asset(["assets"]), database=db)
    db.close()
    assert data.check_favorite() is False


def test_refresh_notifies_and_updates(database):
    data = AssetData(make_asset(["assets"]), database=database)
    seen = []
    data.connect(seen.append)
    database.add_favorite("asset-1")
    data.refresh()
    assert seen == [data]
    assert data.favorite is True


@pytest.mark.parametrize(
    "expr, expected",
    [
        ("assets", True),
        ("ASSETS", True),
        ("textures", True),
        ("games", False),
        ("!games", True),
        ("!assets", False),
        ("games|assets", True),
        ("games&assets", False),
        ("assets&textures", True),
        ("assets&favorites", False),
        ("favorites|downloaded", False),
        ("games|favorites|textures", True),
    ],
)
def test_check_category(expr, expected):
    data = AssetData(make_asset(["assets/textures"]))
    assert data.check_category(expr) is expected


def test_check_category_favorites(database):
    database.add_favorite("asset-1")
    data = AssetData(make_asset(["assets/textures"]), database=database)
    assert data.check_category("favorites&assets") is True
    assert data.check_category("!favorites") is False


def test_release_prefers_latest_release():
    early = datetime(2020, 1, 1, tzinfo=timezone.utc)
    late = datetime(2021, 1, 1, tzinfo=timezone.utc)
    modified = datetime(2022, 1, 1, tzinfo=timezone.utc)
    asset = make_asset(
        ["assets"],
        releases=[ReleaseInfo(date_added=early), ReleaseInfo(date_added=late)],
        modified=modified,
    )
    data = AssetData(asset)
    assert data.release() == late
    assert data.last_modified() == modified


def test_release_falls_back_to_last_modified():
    modified = datetime(2022, 1, 1, tzinfo=timezone.utc)
    data = AssetData(make_asset(["assets"], modified=modified))
    assert data.release() == modified


def test_name_and_thumbnail():
    data = AssetData(make_asset(["assets"], title="Rocks"), image=b"png")
    assert data.name == "Rocks"
    assert data.thumbnail == b"png"
    assert data.id == "asset-1"