"""
SQLite persistence for uploaded content and issued links.

Import from here::

    from uploader_bot.storage import open_database, FileRepository, LinkRepository
"""

from __future__ import annotations

from .db import connect, migrate, open_database
from .repositories import (
    DuplicateKeyError,
    FileRecord,
    FileRepository,
    LinkRecord,
    LinkRepository,
    StorageError,
    generate_key,
)

__all__ = [
    "DuplicateKeyError",
    "FileRecord",
    "FileRepository",
    "LinkRecord",
    "LinkRepository",
    "StorageError",
    "connect",
    "generate_key",
    "migrate",
    "open_database",
]
