"""Models, SQLite storage and web helpers for Unreal Engine assets, engines, projects and plugins."""

__version__ = "3.8.6"