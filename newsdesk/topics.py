"""
SQLite-backed topic store for the news desk.

Schema
──────
table: kv
  key   TEXT PRIMARY KEY
  value TEXT NOT NULL   (JSON-encoded)

The tracked topics live in a single row under ``TOPICS_KEY`` as a JSON list
of strings. Insertion order is display order.
"""

from __future__ import annotations

import json
import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "newsdesk.db"

#: Fixed storage key for the topic list.
TOPICS_KEY = "newsTopics"


def _db_path() -> Path:
    """Return the database file path, honouring a DB_PATH env var if set."""
    env = os.getenv("DB_PATH")
    return Path(env) if env else DEFAULT_DB_PATH


@contextmanager
def _connect(path: Path):
    """Yield a connected sqlite3.Connection, creating the file/dir if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _ensure_schema(conn: sqlite3.Connection) -> None:
    conn.execute(
        "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
    )


def _decode(payload: str | None) -> list[str]:
    """Decode a stored payload; anything but a JSON list of strings is empty."""
    if payload is None:
        return []
    try:
        data = json.loads(payload)
    except ValueError:
        logger.warning("Ignoring malformed topic payload: %r", payload[:80])
        return []
    if not isinstance(data, list) or not all(isinstance(t, str) for t in data):
        logger.warning("Ignoring topic payload that is not a list of strings")
        return []
    # Drop blanks and duplicates a hand-edited payload might contain
    topics: list[str] = []
    for topic in data:
        topic = topic.strip()
        if topic and topic not in topics:
            topics.append(topic)
    return topics


class TopicStore:
    """Ordered, duplicate-free set of tracked topics with durable storage.

    Every successful mutation rewrites the whole list. Write failures are
    logged and otherwise ignored: durability is best effort and never
    blocks the caller.
    """

    def __init__(self, db_path: str | Path | None = None) -> None:
        self._path = Path(db_path) if db_path else _db_path()
        self._topics: list[str] = []

    @property
    def topics(self) -> list[str]:
        return list(self._topics)

    def __contains__(self, topic: object) -> bool:
        return topic in self._topics

    def __len__(self) -> int:
        return len(self._topics)

    def load(self) -> list[str]:
        """Read the persisted topic list, replacing the in-memory set.

        Returns:
            The loaded topics; empty if nothing is stored, the payload is
            malformed, or the database cannot be read.
        """
        try:
            with _connect(self._path) as conn:
                _ensure_schema(conn)
                row = conn.execute(
                    "SELECT value FROM kv WHERE key = ?", (TOPICS_KEY,)
                ).fetchone()
        except (sqlite3.Error, OSError) as exc:
            logger.warning("Could not read topics from %s: %s", self._path, exc)
            row = None

        self._topics = _decode(row[0] if row else None)
        logger.info("Loaded %d topic(s) from %s", len(self._topics), self._path)
        return self.topics

    def add(self, topic: str) -> bool:
        """Append *topic* (trimmed) unless it is blank or already tracked.

        Returns:
            True if the set changed.
        """
        topic = topic.strip()
        if not topic or topic in self._topics:
            return False
        self._topics.append(topic)
        self._persist()
        return True

    def remove(self, topic: str) -> bool:
        """Remove *topic* (exact match) if tracked.

        Returns:
            True if the set changed.
        """
        if topic not in self._topics:
            return False
        self._topics.remove(topic)
        self._persist()
        return True

    def _persist(self) -> None:
        payload = json.dumps(self._topics)
        try:
            with _connect(self._path) as conn:
                _ensure_schema(conn)
                conn.execute(
                    "INSERT INTO kv (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (TOPICS_KEY, payload),
                )
        except (sqlite3.Error, OSError) as exc:
            logger.warning("Could not persist topics to %s: %s", self._path, exc)
