"""SQLite-backed key-value storage for local tool state."""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from config.settings_pydantic import settings
from zacksrank.data.exceptions import StorageError

logger = logging.getLogger("zacksrank")


class LocalStorage:
    """String key-value store persisted in a single SQLite file."""

    def __init__(self, storage_path: Path | str | None = None) -> None:
        """Initialize storage.

        Args:
            storage_path: Path to SQLite database file. If None, uses settings default.
        """
        self.storage_path = Path(storage_path or settings.storage_path).expanduser()
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Initialize database schema."""
        with sqlite3.connect(self.storage_path) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS local_storage (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """,
            )
            conn.commit()

    def get_item(self, key: str) -> str | None:
        """Read the value stored under a key.

        Args:
            key: Storage key.

        Returns:
            Stored string, or None if the key is absent.

        Raises:
            StorageError: If the database cannot be read.
        """
        try:
            with sqlite3.connect(self.storage_path) as conn:
                row = conn.execute(
                    "SELECT value FROM local_storage WHERE key = ?",
                    (key,),
                ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Error reading {key!r} from {self.storage_path}: {e}") from e

        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one.

        Raises:
            StorageError: If the database cannot be written.
        """
        try:
            with sqlite3.connect(self.storage_path) as conn:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO local_storage (key, value, updated_at)
                    VALUES (?, ?, ?)
                    """,
                    (key, value, datetime.now().isoformat()),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Error writing {key!r} to {self.storage_path}: {e}") from e

        logger.debug(f"Stored {key!r} ({len(value)} bytes)")

    def remove_item(self, key: str) -> None:
        """Delete a key. Deleting an absent key is a no-op.

        Raises:
            StorageError: If the database cannot be written.
        """
        try:
            with sqlite3.connect(self.storage_path) as conn:
                conn.execute("DELETE FROM local_storage WHERE key = ?", (key,))
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Error removing {key!r} from {self.storage_path}: {e}") from e

        logger.debug(f"Removed {key!r}")

    def all_items(self) -> dict[str, str]:
        """Return every stored key and value."""
        try:
            with sqlite3.connect(self.storage_path) as conn:
                rows = conn.execute("SELECT key, value FROM local_storage ORDER BY key").fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Error listing {self.storage_path}: {e}") from e

        return dict(rows)
