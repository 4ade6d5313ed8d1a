"""Simple list entries shown in the browser: categories and log files."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CategoryData:
    """A category in the side bar, with the filter expression it applies."""

    name: str
    filter: str
    path: str
    leaf: bool


@dataclass
class LogData:
    """A log file of a project or engine, flagged when it records a crash."""

    path: str
    name: str
    crash: bool