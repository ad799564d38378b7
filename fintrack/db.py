import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from . import config

_SCHEMA = "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)"


@contextmanager
def get_conn(store_path: Path | None = None) -> Iterator[sqlite3.Connection]:
    """Yield a sqlite3 connection to the key-value store, creating it if needed."""
    path = store_path or config.STORE_PATH
    if not path:
        raise RuntimeError("Store path is not configured. Please choose a store file.")
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    try:
        conn.execute(_SCHEMA)
        yield conn
    finally:
        conn.close()


def get_item(key: str, store_path: Path | None = None) -> str | None:
    with get_conn(store_path) as conn:
        row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
    return row[0] if row else None


def set_item(key: str, value: str, store_path: Path | None = None) -> None:
    with get_conn(store_path) as conn:
        conn.execute(
            "INSERT INTO kv (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
        )
        conn.commit()
