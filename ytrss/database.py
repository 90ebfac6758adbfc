"""SQLite storage for users and their channel subscriptions."""

from __future__ import annotations

import os
import sqlite3
import threading
from dataclasses import dataclass, field

from .components import Channel

DEFAULT_PATH = "./yt_rss.db"
DEFAULT_THEME = "rose-pine"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    theme TEXT NOT NULL DEFAULT 'rose-pine'
);
CREATE TABLE IF NOT EXISTS channels (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    name TEXT NOT NULL,
    url TEXT NOT NULL,
    FOREIGN KEY(user_id) REFERENCES users(id)
);
"""


@dataclass(frozen=True)
class User:
    """A registered user; the password hash is only filled in for logins."""

    id: int
    username: str
    theme: str = DEFAULT_THEME
    password_hash: str = field(default="", repr=False, compare=False)


class Database:
    """A thread-safe handle on the application's SQLite database."""

    def __init__(self, path: str | os.PathLike[str] = DEFAULT_PATH) -> None:
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock:
            self._conn.executescript(_SCHEMA)

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection."""
        with self._lock:
            self._conn.close()

    def _write(self, sql: str, params: tuple) -> sqlite3.Cursor:
        with self._lock, self._conn:
            return self._conn.execute(sql, params)

    def _fetchone(self, sql: str, params: tuple) -> tuple | None:
        with self._lock:
            return self._conn.execute(sql, params).fetchone()

    def create_user(self, username: str, password_hash: str) -> int:
        """Insert a user and return its id.

        Raises sqlite3.IntegrityError when the username is already taken.
        """
        cursor = self._write(
            "INSERT INTO users (username, password_hash) VALUES (?, ?)",
            (username, password_hash),
        )
        return cursor.lastrowid

    def find_user_by_name(self, username: str) -> User | None:
        """Return the user with this name, including the password hash."""
        row = self._fetchone(
            "SELECT id, username, theme, password_hash FROM users WHERE username = ?",
            (username,),
        )
        if row is None:
            return None
        user_id, name, theme, password_hash = row
        return User(id=user_id, username=name, theme=theme, password_hash=password_hash)

    def find_user_by_id(self, user_id: int) -> User | None:
        """Return the user with this id, without the password hash."""
        row = self._fetchone(
            "SELECT id, username, theme FROM users WHERE id = ?", (user_id,)
        )
        return User(*row) if row is not None else None

    def set_theme(self, user_id: int, theme: str) -> None:
        """Store the user's chosen theme."""
        self._write("UPDATE users SET theme = ? WHERE id = ?", (theme, user_id))

    def channels_for_user(self, user_id: int) -> list[Channel]:
        """Return the user's channels in the order they were added."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT name, url FROM channels WHERE user_id = ?", (user_id,)
            ).fetchall()
        return [Channel(name=name, url=url) for name, url in rows]

    def channel_exists(self, user_id: int, url: str) -> bool:
        """Whether the user already follows the feed at this URL."""
        row = self._fetchone(
            "SELECT id FROM channels WHERE user_id = ? AND url = ?", (user_id, url)
        )
        return row is not None

    def add_channel(self, user_id: int, name: str, url: str) -> None:
        """Subscribe the user to a channel feed."""
        self._write(
            "INSERT INTO channels (user_id, name, url) VALUES (?, ?, ?)",
            (user_id, name, url),
        )

    def delete_channel(self, user_id: int, url: str) -> None:
        """Remove every subscription of the user to this feed URL."""
        self._write(
            "DELETE FROM channels WHERE user_id = ? AND url = ?", (user_id, url)
        )