"""Key-value stores for saved auction sessions."""

from __future__ import annotations

import os
import sqlite3
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Protocol


DEFAULT_DB_PATH = Path("pyauction.sqlite")


class SessionStore(Protocol):
    def load(self, key: str) -> Optional[str]: ...

    def save(self, key: str, payload: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemorySessionStore:
    """In-process store; contents vanish with the object."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, payload: str) -> None:
        self._data[key] = payload

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class SqliteSessionStore:
    """SQLite-backed blob store keyed by session name.

    An explicit ``db_path`` wins; otherwise ``PYAUCTION_DB_PATH`` is used,
    then a temp-dir database under pytest, then ``pyauction.sqlite`` in the
    working directory.
    """

    def __init__(self, db_path: Path | str | None = None):
        self._use_uri = False
        env_db = os.getenv("PYAUCTION_DB_PATH")
        if db_path is not None:
            self._set_location(str(db_path))
        elif env_db:
            self._set_location(env_db)
        elif os.getenv("PYTEST_CURRENT_TEST"):
            test_dir = Path(tempfile.gettempdir()) / "pyauction-test"
            test_dir.mkdir(parents=True, exist_ok=True)
            self.db_path = test_dir / "pyauction.sqlite"
        else:
            self.db_path = DEFAULT_DB_PATH
        self._ensure_schema()

    def _set_location(self, location: str) -> None:
        if location.startswith("file:"):
            self.db_path = location
            self._use_uri = True
        else:
            self.db_path = Path(location)

    def _fallback(self) -> sqlite3.Connection:
        fallback_dir = Path(tempfile.gettempdir()) / "pyauction-runtime"
        fallback_dir.mkdir(parents=True, exist_ok=True)
        fallback = fallback_dir / "pyauction.sqlite"
        conn = sqlite3.connect(fallback)
        self.db_path = fallback
        self._use_uri = False
        self._create_schema(conn)
        return conn

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(self.db_path)
            except (OSError, sqlite3.OperationalError):
                conn = self._fallback()
        else:
            try:
                conn = sqlite3.connect(self.db_path, uri=self._use_uri)
            except sqlite3.OperationalError:
                conn = self._fallback()
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        conn = self._connect()
        try:
            self._create_schema(conn)
        finally:
            conn.close()

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS sessions (
                key TEXT PRIMARY KEY,
                payload_json TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.commit()

    def load(self, key: str) -> Optional[str]:
        conn = self._connect()
        try:
            row = conn.execute("SELECT payload_json FROM sessions WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return row["payload_json"]

    def save(self, key: str, payload: str) -> None:
        now = datetime.now(timezone.utc).isoformat()
        conn = self._connect()
        try:
            conn.execute(
                """
                INSERT INTO sessions (key, payload_json, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    payload_json = excluded.payload_json,
                    updated_at = excluded.updated_at
                """,
                (key, payload, now),
            )
            conn.commit()
        finally:
            conn.close()

    def delete(self, key: str) -> None:
        conn = self._connect()
        try:
            conn.execute("DELETE FROM sessions WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()
