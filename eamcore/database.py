"""Local SQLite store for favourites, project engines and user settings."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Optional, Union

import platformdirs

log = logging.getLogger(__name__)

_SCHEMA = (
    """CREATE TABLE IF NOT EXISTS unreal_project_latest_engine (
        project TEXT PRIMARY KEY NOT NULL,
        engine TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS favorite_asset (
        asset TEXT PRIMARY KEY NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS user_data (
        name TEXT PRIMARY KEY NOT NULL,
        value TEXT NOT NULL
    )""",
)


def default_database_path() -> Path:
    """Location of the database in the user's data directory."""
    base = Path(platformdirs.user_data_dir("epic_asset_manager", appauthor=False))
    return base / "eam.db"


class Database:
    """A connection to the application database, created on first use."""

    def __init__(self, path: Union[str, Path, None] = None) -> None:
        self.path = Path(path) if path is not None else default_database_path()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self.path))
        log.info("Running DB Migrations...")
        with self._conn:
            for statement in _SCHEMA:
                self._conn.execute(statement)
        log.info("Database initialized.")

    def is_favorite(self, asset: str) -> bool:
        row = self._conn.execute(
            "SELECT EXISTS(SELECT 1 FROM favorite_asset WHERE asset = ?)", (asset,)
        ).fetchone()
        return bool(row[0])

    def add_favorite(self, asset: str) -> None:
        with self._conn:
            self._conn.execute(
                "INSERT OR IGNORE INTO favorite_asset (asset) VALUES (?)", (asset,)
            )

    def remove_favorite(self, asset: str) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM favorite_asset WHERE asset = ?", (asset,))

    def set_project_engine(self, project: str, engine: str) -> None:
        with self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO unreal_project_latest_engine (project, engine) "
                "VALUES (?, ?)",
                (project, engine),
            )

    def project_engine(self, project: str) -> Optional[str]:
        row = self._conn.execute(
            "SELECT engine FROM unreal_project_latest_engine WHERE project = ?",
            (project,),
        ).fetchone()
        return None if row is None else row[0]

    def set_user_data(self, name: str, value: str) -> None:
        with self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO user_data (name, value) VALUES (?, ?)",
                (name, value),
            )

    def user_data(self, name: str) -> Optional[str]:
        row = self._conn.execute(
            "SELECT value FROM user_data WHERE name = ?", (name,)
        ).fetchone()
        return None if row is None else row[0]

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *args) -> None:
        self.close()