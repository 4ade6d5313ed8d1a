"""Store assets as shown in the browser, with their favourite and download state."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Union

from eamcore.assetinfo import AssetInfo
from eamcore.database import Database

log = logging.getLogger(__name__)


class AssetType(Enum):
    """The kind of an asset; the value is the name the browser stores for it."""

    ASSET = "asset"
    PROJECT = "projects"
    GAME = "games"
    ENGINE = "engines"
    PLUGIN = "plugins"


_KIND_BY_PATH = {
    "assets": AssetType.ASSET,
    "games": AssetType.GAME,
    "plugins": AssetType.PLUGIN,
    "projects": AssetType.PROJECT,
    "engines": AssetType.ENGINE,
}


def decide_kind(asset: AssetInfo) -> Optional[AssetType]:
    """The kind given by the first category whose path names one exactly."""
    for category in asset.categories or ():
        kind = _KIND_BY_PATH.get(category.path)
        if kind is not None:
            return kind
    return None


def downloaded_locations(
    directories: Iterable[Union[str, Path]], asset_id: str
) -> list[Path]:
    """The ``<vault>/<asset_id>/data`` directories that exist."""
    candidates = (Path(directory) / asset_id / "data" for directory in directories)
    return [path for path in candidates if path.exists()]


class AssetData:
    """An asset listed in the browser."""

    def __init__(
        self,
        asset: AssetInfo,
        image: Any = None,
        database: Optional[Database] = None,
        vault_directories: Iterable[Union[str, Path]] = (),
    ) -> None:
        self.asset = asset
        self.id = asset.id
        self.database = database
        self.vault_directories = list(vault_directories)
        self.favorite = False
        self.downloaded = False
        self._listeners: list[Callable[["AssetData"], None]] = []
        self.check_favorite()
        self.name = asset.title
        self.check_downloaded()
        self._kind = decide_kind(asset)
        self.thumbnail = image

    def connect(self, callback: Callable[["AssetData"], None]) -> None:
        """Call *callback* with this asset each time it is refreshed."""
        self._listeners.append(callback)

    def kind(self) -> Optional[AssetType]:
        """The kind of the asset, if its categories name one."""
        return self._kind

    def release(self) -> Optional[datetime]:
        """When the latest release was added, or the last modification without releases."""
        latest = self.asset.latest_release()
        if latest is None:
            return self.asset.last_modified_date
        return latest.date_added

    def last_modified(self) -> Optional[datetime]:
        return self.asset.last_modified_date

    def _has_category(self, cat: str) -> bool:
        if cat == "favorites":
            return self.favorite
        if cat == "downloaded":
            return self.downloaded
        needle = cat.lower()
        return any(needle in c.path.lower() for c in self.asset.categories or ())

    def check_category(self, cat: str) -> bool:
        """Evaluate a filter such as ``assets&!favorites|downloaded``.

        Terms are joined by ``&`` and ``|`` and evaluated right to left;
        a leading ``!`` negates a term.
        """
        end = len(cat)
        for position, char in enumerate(cat):
            if char in "|&":
                end = position
                break
        term = cat[:end]
        if term.startswith("!"):
            result = not self._has_category(term[1:])
        else:
            result = self._has_category(term)
        if end == len(cat):
            return result
        operator = cat[end]
        remainder = cat[end + 1:]
        if operator == "&":
            return self.check_category(remainder) if result else result
        return result or self.check_category(remainder)

    def check_downloaded(self) -> bool:
        """Update and return whether any release is present in a vault directory."""
        self.downloaded = any(
            release.app_id is not None
            and downloaded_locations(self.vault_directories, release.app_id)
            for release in self.asset.release_info or ()
        )
        return self.downloaded

    def check_favorite(self) -> bool:
        """Update and return whether the asset is marked as a favourite."""
        favorite = False
        if self.database is not None:
            try:
                favorite = self.database.is_favorite(self.id)
            except sqlite3.Error as err:
                log.error("Unable to check favourite state of %s: %s", self.id, err)
        self.favorite = favorite
        return favorite

    def refresh(self) -> None:
        """Recheck the favourite and download state and notify the listeners."""
        self.check_favorite()
        self.check_downloaded()
        for listener in list(self._listeners):
            listener(self)

    def __repr__(self) -> str:
        return f"AssetData(id={self.id!r}, name={self.name!r})"