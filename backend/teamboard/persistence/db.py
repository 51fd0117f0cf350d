"""SQLite connection, transactions + schema initialisation."""
from __future__ import annotations
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from teamboard.core import config

_MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), "migrations")


def get_connection() -> sqlite3.Connection:
    # DATABASE_PATH is read per call so tests can point it at a temporary file
    conn = sqlite3.connect(config.DATABASE_PATH, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


@contextmanager
def transaction() -> Iterator[sqlite3.Connection]:
    """
    One write transaction: commits when the block exits normally, rolls back on any exception.
    BEGIN IMMEDIATE takes the write lock up front, so read-then-write sequences inside
    the block cannot interleave with another writer.
    """
    conn = get_connection()
    try:
        conn.execute("BEGIN IMMEDIATE")
        yield conn
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()


def is_unique_violation(error: sqlite3.IntegrityError) -> bool:
    return "UNIQUE constraint failed" in str(error)


def init_db() -> None:
    """Run all migration SQL files against the database."""
    db_dir = os.path.dirname(config.DATABASE_PATH)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
    conn = get_connection()
    try:
        for migration in sorted(os.listdir(_MIGRATIONS_DIR)):
            if not migration.endswith(".sql"):
                continue
            with open(os.path.join(_MIGRATIONS_DIR, migration), "r", encoding="utf-8") as f:
                conn.executescript(f.read())
        conn.commit()
    finally:
        conn.close()
