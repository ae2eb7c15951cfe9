"""
Repositories (SQL-only)
=======================
- Pure CRUD over ``files`` and ``links``.
- Blocking sqlite calls run in a worker thread behind a shared asyncio lock.
"""

from __future__ import annotations

import asyncio
import base64
import datetime
import secrets
import sqlite3
from dataclasses import dataclass
from typing import Optional

KEY_BYTES = 8


class StorageError(Exception):
    """A repository call failed."""


class DuplicateKeyError(StorageError):
    """A freshly minted content key collided with an existing row."""


@dataclass(frozen=True, slots=True)
class FileRecord:
    key: str
    file_id: str
    kind: str
    caption: str


@dataclass(frozen=True, slots=True)
class LinkRecord:
    key: str
    url: str
    created_at: datetime.datetime


def generate_key() -> str:
    """Return 8 random bytes as unpadded URL-safe base64 (11 chars)."""
    raw = secrets.token_bytes(KEY_BYTES)
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


class FileRepository:
    """Async CRUD helpers for the ``files`` table."""

    def __init__(self, conn: sqlite3.Connection, lock: asyncio.Lock):
        self.conn = conn
        self._lock = lock

    async def create(self, file_id: str, kind: str, caption: str) -> str:
        """
        Insert a content row under a new random key.

        :param file_id: Telegram file handle.
        :param kind: ``document``, ``video`` or ``photo``.
        :param caption: Already-normalized caption.
        :returns: The new content key.
        :raises DuplicateKeyError: the key already exists (never retried).
        """
        key = generate_key()
        sql = "INSERT INTO files (file_id, file_key, caption, file_type) VALUES (?, ?, ?, ?)"

        def _run():
            with self.conn:
                self.conn.execute(sql, (file_id, key, caption, kind))

        async with self._lock:
            try:
                await asyncio.to_thread(_run)  # blocking sqlite call
            except sqlite3.IntegrityError as exc:
                raise DuplicateKeyError(f"save file: key {key} already exists") from exc
            except sqlite3.Error as exc:
                raise StorageError(f"save file: {exc}") from exc
        return key

    async def update_caption(self, key: str, caption: str) -> bool:
        """
        Replace the caption of ``key``.

        :returns: ``True`` if a row was updated.
        """
        sql = "UPDATE files SET caption = ? WHERE file_key = ?"

        def _run() -> bool:
            with self.conn:
                cur = self.conn.execute(sql, (caption, key))
            return cur.rowcount > 0

        async with self._lock:
            try:
                return await asyncio.to_thread(_run)
            except sqlite3.Error as exc:
                raise StorageError(f"update caption: {exc}") from exc

    async def get(self, key: str) -> Optional[FileRecord]:
        """Return the record for ``key`` or ``None``."""
        sql = "SELECT file_id, caption, file_type FROM files WHERE file_key = ?"

        def _query() -> Optional[FileRecord]:
            row = self.conn.execute(sql, (key,)).fetchone()
            if row is None:
                return None
            return FileRecord(
                key=key,
                file_id=row["file_id"],
                kind=row["file_type"],
                caption=row["caption"] or "",
            )

        async with self._lock:
            try:
                return await asyncio.to_thread(_query)  # blocking sqlite call
            except sqlite3.Error as exc:
                raise StorageError(f"get file: {exc}") from exc


class LinkRepository:
    """Append-only store of issued share links."""

    def __init__(self, conn: sqlite3.Connection, lock: asyncio.Lock):
        self.conn = conn
        self._lock = lock

    async def create(
        self, key: str, url: str, created_at: datetime.datetime | None = None
    ) -> LinkRecord:
        record = LinkRecord(
            key=key,
            url=url,
            created_at=created_at or datetime.datetime.now(datetime.timezone.utc),
        )
        sql = "INSERT INTO links (file_key, url, created_at) VALUES (?, ?, ?)"

        def _run():
            with self.conn:
                self.conn.execute(sql, (record.key, record.url, record.created_at.isoformat()))

        async with self._lock:
            try:
                await asyncio.to_thread(_run)
            except sqlite3.Error as exc:
                raise StorageError(f"save link: {exc}") from exc
        return record
