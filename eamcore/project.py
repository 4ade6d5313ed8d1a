"""Projects (``.uproject`` files) listed in the browser."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from eamcore.plugin import (
    Module,
    Plugin,
    _build,
    _bool,
    _field,
    _int,
    _list_of,
    _steps,
    _str,
    _str_list,
    parse_module,
    parse_plugin,
)

log = logging.getLogger(__name__)

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@dataclass
class Uproject:
    """Contents of a ``.uproject`` descriptor."""

    file_version: int = _field(_int, default=0)
    engine_association: str = _field(_str, default="")
    category: str = _field(_str, default="")
    description: str = _field(_str, default="")
    modules: Optional[list[Module]] = _field(_list_of(parse_module), optional=True)
    plugins: Optional[list[Plugin]] = _field(_list_of(parse_plugin), optional=True)
    disable_engine_plugins_by_default: Optional[bool] = _field(_bool, optional=True)
    enterprise: Optional[bool] = _field(_bool, optional=True)
    additional_plugin_directories: Optional[list[str]] = _field(_str_list, optional=True)
    additional_root_directories: Optional[list[str]] = _field(_str_list, optional=True)
    target_platforms: Optional[list[str]] = _field(_str_list, optional=True)
    epic_sample_name_hash: Optional[str] = _field(_str, optional=True)
    pre_build_steps: Optional[dict[str, list[str]]] = _field(_steps, optional=True)
    post_build_steps: Optional[dict[str, list[str]]] = _field(_steps, optional=True)


def parse_uproject(text: str) -> Uproject:
    """Parse the JSON text of a ``.uproject`` file.

    Raises ValueError when the text is not valid JSON of the right shape.
    """
    return _build(Uproject, json.loads(text), "uproject")


def read_uproject(path: Union[str, Path]) -> Uproject:
    """Read a ``.uproject`` file, falling back to a default descriptor on any failure."""
    try:
        contents = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return Uproject()
    try:
        return parse_uproject(contents)
    except ValueError as err:
        log.error("Unable to parse uproject %s: %s", path, err)
        return Uproject()


def thumbnail_path(path: Union[str, Path]) -> Optional[Path]:
    """Where the editor saves the screenshot of the project at *path*."""
    project = Path(path)
    parent = project.parent
    if parent == project:
        return None
    return parent / "Saved" / "AutoScreenshot.png"


class ProjectData:
    """A project listed in the browser, with its descriptor and thumbnail."""

    def __init__(self, path: str, name: str) -> None:
        self.path = path
        self.name = name
        self.guid: Optional[str] = None
        self.thumbnail: Optional[bytes] = None
        uproject = read_uproject(path)
        uproject.engine_association = "".join(
            c for c in uproject.engine_association if c not in "{}"
        )
        self.uproject: Optional[Uproject] = uproject
        self._listeners: list[Callable[["ProjectData"], None]] = []

    def connect(self, callback: Callable[["ProjectData"], None]) -> None:
        """Call *callback* with this project each time its thumbnail is loaded."""
        self._listeners.append(callback)

    def load_thumbnail(self) -> Optional[bytes]:
        """Load the project's screenshot, notify the listeners and return its bytes.

        Returns None when there is no screenshot or it cannot be used.
        """
        picture = thumbnail_path(self.path)
        if picture is None:
            return None
        if not picture.exists():
            log.info("No project picture exists for %s", self.path)
            return None
        try:
            image = picture.read_bytes()
        except OSError as err:
            log.error("Unable to load file to texture: %s", err)
            return None
        if not image.startswith(_PNG_SIGNATURE):
            log.error("Unable to load file to texture: %s is not a PNG image", picture)
            return None
        self.thumbnail = image
        for listener in list(self._listeners):
            listener(self)
        return image

    def __repr__(self) -> str:
        return f"ProjectData(path={self.path!r}, name={self.name!r})"