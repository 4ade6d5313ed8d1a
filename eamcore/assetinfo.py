"""Marketplace asset metadata and the search helpers that work on it."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, TypeVar

_FRACTION = re.compile(r"\.(\d+)")

_T = TypeVar("_T", str, bytes, list, tuple)


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp as sent by the store, normalised to UTC."""
    if not value:
        return None
    text = str(value).strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    # Older interpreters only accept 3 or 6 fractional digits.
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass
class Category:
    """A store category an asset belongs to, identified by its path."""

    path: str


@dataclass
class KeyImage:
    """An image attached to an asset, such as its thumbnail."""

    type_field: str
    url: str = ""
    md5: Optional[str] = None
    width: int = 0
    height: int = 0
    size: int = 0
    uploaded_date: Optional[datetime] = None


@dataclass
class ReleaseInfo:
    """One released build of an asset."""

    id: Optional[str] = None
    app_id: Optional[str] = None
    compatible_apps: Optional[list[str]] = None
    platform: Optional[list[str]] = None
    date_added: Optional[datetime] = None
    release_note: Optional[str] = None
    version_title: Optional[str] = None


@dataclass
class AssetInfo:
    """Metadata describing one asset of the store catalogue."""

    id: str
    namespace: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    categories: Optional[list[Category]] = None
    key_images: Optional[list[KeyImage]] = None
    release_info: Optional[list[ReleaseInfo]] = None
    creation_date: Optional[datetime] = None
    last_modified_date: Optional[datetime] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def latest_release(self) -> Optional[ReleaseInfo]:
        """Return the release added most recently, or None if there is none."""
        latest: Optional[ReleaseInfo] = None
        for release in self.release_info or ():
            if latest is None:
                latest = release
            elif release.date_added is not None and (
                latest.date_added is None or release.date_added > latest.date_added
            ):
                latest = release
        return latest

    def thumbnail(self) -> Optional[KeyImage]:
        """Return the first image usable as a thumbnail."""
        for image in self.key_images or ():
            kind = image.type_field.lower()
            if kind in ("thumbnail", "dieselgamebox"):
                return image
        return None

    def matches_filter(self, tag: Optional[str], search: Optional[str]) -> bool:
        """Whether the asset is in a category containing *tag* and its title contains *search*."""
        if tag is None:
            tag_found = True
        else:
            tag_found = any(tag in category.path for category in self.categories or ())
        if search is None:
            return tag_found
        if not tag_found:
            return False
        if self.title is None:
            return True
        return search.lower() in self.title.lower()


_KNOWN_KEYS = {
    "id",
    "namespace",
    "title",
    "description",
    "categories",
    "keyImages",
    "releaseInfo",
    "creationDate",
    "lastModifiedDate",
}


def _parse_key_image(data: Mapping[str, Any]) -> KeyImage:
    return KeyImage(
        type_field=data.get("type", ""),
        url=data.get("url", ""),
        md5=data.get("md5"),
        width=int(data.get("width") or 0),
        height=int(data.get("height") or 0),
        size=int(data.get("size") or 0),
        uploaded_date=_parse_datetime(data.get("uploadedDate")),
    )


def _parse_release(data: Mapping[str, Any]) -> ReleaseInfo:
    return ReleaseInfo(
        id=data.get("id"),
        app_id=data.get("appId"),
        compatible_apps=data.get("compatibleApps"),
        platform=data.get("platform"),
        date_added=_parse_datetime(data.get("dateAdded")),
        release_note=data.get("releaseNote"),
        version_title=data.get("versionTitle"),
    )


def parse_asset_info(data: Mapping[str, Any]) -> AssetInfo:
    """Build an AssetInfo from the decoded JSON object the store returns."""
    if "id" not in data:
        raise ValueError("asset info has no id")
    categories = data.get("categories")
    key_images = data.get("keyImages")
    releases = data.get("releaseInfo")
    return AssetInfo(
        id=data["id"],
        namespace=data.get("namespace"),
        title=data.get("title"),
        description=data.get("description"),
        categories=None
        if categories is None
        else [Category(path=c.get("path", "")) for c in categories],
        key_images=None
        if key_images is None
        else [_parse_key_image(image) for image in key_images],
        release_info=None if releases is None else [_parse_release(r) for r in releases],
        creation_date=_parse_datetime(data.get("creationDate")),
        last_modified_date=_parse_datetime(data.get("lastModifiedDate")),
        extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
    )


def first_non_empty(value: _T, other: _T) -> _T:
    """Return *value* unless it is empty, in which case return *other*."""
    return other if len(value) == 0 else value