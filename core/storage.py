# core/storage.py
import contextlib
import datetime
import json
import os
import sqlite3
from typing import Any, Dict, List, Optional

import pytz
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from .logger import get_logger

logger = get_logger(__name__)

DB_PATH = os.getenv("DB_PATH", "data/storefront_state.sqlite3")
STORAGE_MAX_ATTEMPTS = int(os.getenv("STORAGE_MAX_ATTEMPTS", "5"))

# Bumped when the snapshot payload layout changes incompatibly
SNAPSHOT_VERSION = 0

# sqlite reports a busy/locked database as OperationalError
_retry_locked = retry(
    retry=retry_if_exception_type(sqlite3.OperationalError),
    wait=wait_exponential(multiplier=0.05, max=2) + wait_random(0, 0.05),
    stop=stop_after_attempt(STORAGE_MAX_ATTEMPTS),
)


def now_utc_iso() -> str:
    return datetime.datetime.now(tz=pytz.UTC).isoformat()


class SqliteStorage:
    """
    Durable snapshots of store state, one JSON record per namespace.

    Each store writes its whole serializable state under a fixed name
    (e.g. "goddess-cart"); a save replaces the previous snapshot.
    """

    def __init__(self, db_path: str = DB_PATH):
        self.db_path = db_path
        self._ready = False

    @contextlib.contextmanager
    def _connect(self):
        db_dir = os.path.dirname(self.db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        con = sqlite3.connect(self.db_path, timeout=5)
        try:
            yield con
        finally:
            con.close()

    def ensure_db(self):
        if self._ready:
            return
        with self._connect() as con:
            cur = con.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS snapshots (
                    name TEXT PRIMARY KEY,
                    payload TEXT NOT NULL,
                    version INTEGER NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """
            )
            con.commit()
        self._ready = True

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Return the stored state for `name`, or None when nothing was saved.
        Raises ValueError when the stored payload is not a JSON object or was
        written with a newer layout version.
        """
        self.ensure_db()
        with self._connect() as con:
            cur = con.cursor()
            cur.execute("SELECT payload, version FROM snapshots WHERE name=?", (name,))
            row = cur.fetchone()

        if row is None:
            return None

        payload, version = row
        if version > SNAPSHOT_VERSION:
            raise ValueError(
                f"snapshot '{name}' has layout version {version}, "
                f"newer than supported {SNAPSHOT_VERSION}"
            )

        state = json.loads(payload)
        if not isinstance(state, dict):
            raise ValueError(f"snapshot '{name}' is not an object")
        return state

    @_retry_locked
    def save(self, name: str, state: Dict[str, Any]) -> None:
        self.ensure_db()
        payload = json.dumps(state, separators=(",", ":"))
        with self._connect() as con:
            cur = con.cursor()
            cur.execute(
                """
                INSERT INTO snapshots (name, payload, version, updated_at)
                VALUES (?,?,?,?)
                ON CONFLICT(name) DO UPDATE SET
                    payload=excluded.payload,
                    version=excluded.version,
                    updated_at=excluded.updated_at
            """,
                (name, payload, SNAPSHOT_VERSION, now_utc_iso()),
            )
            con.commit()
        logger.debug("Saved snapshot '%s' (%d bytes).", name, len(payload))

    def names(self) -> List[str]:
        self.ensure_db()
        with self._connect() as con:
            cur = con.cursor()
            cur.execute("SELECT name FROM snapshots ORDER BY name")
            rows = cur.fetchall()
        return [row[0] for row in rows]

    def updated_at(self, name: str) -> Optional[str]:
        self.ensure_db()
        with self._connect() as con:
            cur = con.cursor()
            cur.execute("SELECT updated_at FROM snapshots WHERE name=?", (name,))
            row = cur.fetchone()
        return row[0] if row else None
