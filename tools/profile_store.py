"""Profile storage abstractions and SQLite implementation."""
from __future__ import annotations

import sqlite3
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from models.profile import SavedOutfit, UserProfile

# SQLite INTEGER is a signed 64-bit value.
MAX_ROW_ID = 2**63 - 1


class UnknownUserError(LookupError):
    """Raised when a write references a user id that does not exist."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"Unknown user_id {user_id}")
        self.user_id = user_id


def _is_row_id(value: int) -> bool:
    return -MAX_ROW_ID - 1 <= value <= MAX_ROW_ID


class ProfileStore:
    """Persistence interface for user profiles and saved outfits."""

    def create_user(self, name: str, style_preference: str, body_type: str) -> int:
        raise NotImplementedError

    def get_user(self, user_id: int) -> Optional[UserProfile]:
        raise NotImplementedError

    def create_saved_outfit(self, user_id: int, outfit_json: str, occasion: Optional[str]) -> int:
        raise NotImplementedError

    def list_saved_outfits(self, user_id: int) -> List[SavedOutfit]:
        raise NotImplementedError


class SQLiteProfileStore(ProfileStore):
    """Local SQLite-backed store for users and their saved outfits."""

    def __init__(self, database_path: str | Path = "data/stylesense.db") -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit or roll back, then close the connection."""

        with closing(self._connect()) as conn:
            with conn:
                yield conn

    def _ensure_tables(self) -> None:
        with self._transaction() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    style_preference TEXT,
                    body_type TEXT,
                    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
                );
                CREATE TABLE IF NOT EXISTS saved_outfits (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id INTEGER NOT NULL,
                    outfit_json TEXT NOT NULL,
                    occasion TEXT,
                    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                    FOREIGN KEY(user_id) REFERENCES users(id)
                );
                CREATE INDEX IF NOT EXISTS idx_saved_outfits_user ON saved_outfits(user_id);
                """
            )

    def create_user(self, name: str, style_preference: str, body_type: str) -> int:
        with self._transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO users (name, style_preference, body_type) VALUES (?, ?, ?)",
                (name, style_preference, body_type),
            )
            return int(cursor.lastrowid)

    def get_user(self, user_id: int) -> Optional[UserProfile]:
        if not _is_row_id(user_id):
            return None
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT id, name, style_preference, body_type, created_at FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        if row is None:
            return None
        return UserProfile(
            id=row["id"],
            name=row["name"],
            style_preference=row["style_preference"],
            body_type=row["body_type"],
            created_at=row["created_at"],
        )

    def create_saved_outfit(self, user_id: int, outfit_json: str, occasion: Optional[str]) -> int:
        if not _is_row_id(user_id):
            raise UnknownUserError(user_id)
        try:
            with self._transaction() as conn:
                cursor = conn.execute(
                    "INSERT INTO saved_outfits (user_id, outfit_json, occasion) VALUES (?, ?, ?)",
                    (user_id, outfit_json, occasion),
                )
                return int(cursor.lastrowid)
        except sqlite3.IntegrityError as exc:
            if "FOREIGN KEY" not in str(exc):
                raise
            raise UnknownUserError(user_id) from exc

    def list_saved_outfits(self, user_id: int) -> List[SavedOutfit]:
        if not _is_row_id(user_id):
            return []
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT id, user_id, outfit_json, occasion, created_at FROM saved_outfits "
                "WHERE user_id = ? ORDER BY id",
                (user_id,),
            ).fetchall()
        return [
            SavedOutfit(
                id=row["id"],
                user_id=row["user_id"],
                outfit_json=row["outfit_json"],
                occasion=row["occasion"],
                created_at=row["created_at"],
            )
            for row in rows
        ]


__all__ = ["MAX_ROW_ID", "ProfileStore", "SQLiteProfileStore", "UnknownUserError"]
