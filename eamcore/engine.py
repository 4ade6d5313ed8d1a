"""Installed engine builds and the version information they carry."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union

log = logging.getLogger(__name__)

_INT_FIELDS = {
    "MajorVersion": "major_version",
    "MinorVersion": "minor_version",
    "PatchVersion": "patch_version",
    "Changelist": "changelist",
    "CompatibleChangelist": "compatible_changelist",
    "IsLicenseeVersion": "is_licensee_version",
    "IsPromotedBuild": "is_promoted_build",
}


@dataclass
class UnrealVersion:
    """Contents of an engine's ``Build.version`` file."""

    major_version: int = 0
    minor_version: int = 0
    patch_version: int = 0
    changelist: int = 0
    compatible_changelist: int = 0
    is_licensee_version: int = 0
    is_promoted_build: int = 0
    branch_name: str = ""

    def format(self) -> str:
        """``major.minor.patch`` for a valid version, else the branch name."""
        if self.valid():
            return f"{self.major_version}.{self.minor_version}.{self.patch_version}"
        return self.branch_name

    def valid(self) -> bool:
        """False only when every numeric field is -1."""
        return not all(
            value == -1
            for value in (
                self.major_version,
                self.minor_version,
                self.patch_version,
                self.changelist,
                self.compatible_changelist,
                self.is_licensee_version,
                self.is_promoted_build,
            )
        )

    def compare(self, other: "UnrealVersion") -> int:
        """Order by major, minor and patch; invalid versions sort last.

        Returns -1, 0 or 1.
        """
        if not self.valid():
            return 1
        if not other.valid():
            return -1
        mine = (self.major_version, self.minor_version, self.patch_version)
        theirs = (other.major_version, other.minor_version, other.patch_version)
        return (mine > theirs) - (mine < theirs)


def parse_unreal_version(text: str) -> UnrealVersion:
    """Parse the JSON of a ``Build.version`` file; missing keys take defaults.

    Raises ValueError when the text is not a JSON object of the right shape.
    """
    data: Any = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("engine version must be a JSON object")
    values: dict[str, Any] = {}
    for key, attr in _INT_FIELDS.items():
        if key in data:
            value = data[key]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{key} must be an integer")
            values[attr] = value
    if "BranchName" in data:
        branch = data["BranchName"]
        if not isinstance(branch, str):
            raise ValueError("BranchName must be a string")
        values["branch_name"] = branch
    return UnrealVersion(**values)


def read_engine_version(path: Union[str, Path]) -> Optional[UnrealVersion]:
    """Read the version of the engine installed at *path*.

    Returns None when the version file cannot be read, and a default
    version when it can be read but not parsed.
    """
    version_file = Path(path) / "Engine" / "Build" / "Build.version"
    try:
        contents = version_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    try:
        return parse_unreal_version(contents)
    except ValueError:
        return UnrealVersion()


@dataclass(frozen=True)
class UpdateMsg:
    """Reports whether the engine's repository is behind its remote."""

    waiting: bool


@dataclass(frozen=True)
class BranchMsg:
    """Reports the branch the engine's repository has checked out."""

    branch: str


Msg = Union[UpdateMsg, BranchMsg]


class EngineData:
    """An engine installation listed in the browser."""

    def __init__(
        self,
        path: str,
        guid: str,
        version: UnrealVersion,
        position: int,
    ) -> None:
        self.path = path
        self.guid = guid
        self.ueversion = version
        self.version = version.format()
        self.position = position
        self.branch: Optional[str] = None
        self.has_branch = False
        self.needs_update = False
        self._listeners: list[Callable[["EngineData"], None]] = []

    def connect(self, callback: Callable[["EngineData"], None]) -> None:
        """Call *callback* with this engine each time an update finishes."""
        self._listeners.append(callback)

    def update(self, msg: Msg) -> None:
        """Apply a status message and notify the listeners."""
        if isinstance(msg, UpdateMsg):
            self.needs_update = msg.waiting
        elif isinstance(msg, BranchMsg):
            self.has_branch = bool(msg.branch)
            self.branch = msg.branch
        else:
            raise TypeError(f"unknown engine message: {msg!r}")
        for listener in list(self._listeners):
            listener(self)

    def valid(self) -> bool:
        """Whether the engine's version information is valid."""
        return self.ueversion.valid()