import pytest

from eamcore.entries import CategoryData, LogData


def test_category_positional_order():
    cat = CategoryData("Favorites", "favorites", "favorites", True)
    assert cat.name == "Favorites"
    assert cat.filter == "favorites"
    assert cat.path == "favorites"
    assert cat.leaf is True


def test_category_equality():
    a = CategoryData("All", "", "all", False)
    b = CategoryData(name="All", filter="", path="all", leaf=False)
    assert a == b
    assert a != CategoryData("All", "", "all", True)


def test_category_requires_all_fields():
    with pytest.raises(TypeError):
        CategoryData("All", "", "all")


def test_log_data_fields():
    entry = LogData("/p/Saved/Logs/Game.log", "Game.log", False)
    assert entry.path == "/p/Saved/Logs/Game.log"
    assert entry.name == "Game.log"
    assert entry.crash is False


def test_log_data_is_mutable():
    entry = LogData("/p/log", "log", False)
    entry.crash = True
    assert entry == LogData("/p/log", "log", True)


def test_log_data_requires_crash():
    with pytest.raises(TypeError):
        LogData("/p/log", "log")