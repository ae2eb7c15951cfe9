"""
SQLite bootstrap and connection helpers
=======================================

- WAL journal; the bot is a single writer with many short reads.
- Schema lives next to this module in ``schema.sql``.
"""

from __future__ import annotations

import pathlib
import sqlite3

_PRAGMAS = (
    "journal_mode=WAL",
    "synchronous=NORMAL",
    "foreign_keys=ON",
    "busy_timeout=5000",  # ms
)


def connect(path: str | pathlib.Path) -> sqlite3.Connection:
    target = pathlib.Path(path)
    if str(target) != ":memory:":
        target.parent.mkdir(parents=True, exist_ok=True)

    # Autocommit mode: repositories open `with conn:` transactions themselves,
    # from worker threads.
    conn = sqlite3.connect(str(target), isolation_level=None, check_same_thread=False)
    for pragma in _PRAGMAS:
        conn.execute(f"PRAGMA {pragma};")
    conn.row_factory = sqlite3.Row
    return conn


def migrate(conn: sqlite3.Connection) -> None:
    """Apply ``schema.sql``; every statement is ``IF NOT EXISTS``."""
    sql = pathlib.Path(__file__).with_name("schema.sql").read_text(encoding="utf-8")
    with conn:
        conn.executescript(sql)


def open_database(path: str | pathlib.Path) -> sqlite3.Connection:
    """Connect and migrate in one step; errors are fatal at startup."""
    conn = connect(path)
    try:
        migrate(conn)
    except sqlite3.Error:
        conn.close()
        raise
    return conn
