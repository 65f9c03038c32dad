"""
Identity store backed by the ``users`` table.
"""

import sqlite3
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Optional

from ..core.db import Database
from ..models import User


class DuplicateEmailError(Exception):
    """Raised by ``UserStore.save`` when the email is already registered."""


class UserStore(ABC):
    """Abstract interface for user lookups and persistence."""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        """Return the user with exactly this email (case‑sensitive), if any."""

    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    def save(self, user: User) -> User:
        """Persist a new user and return it with its assigned id.

        Raises:
            DuplicateEmailError: If another user already has the email.
        """


class SQLiteUserStore(UserStore):

    def __init__(self, db: Database) -> None:
        self.db = db

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password"],
        )

    def find_by_email(self, email: str) -> Optional[User]:
        with self.db.cursor() as cursor:
            row = cursor.execute(
                "SELECT id, name, email, password FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        return self._row_to_user(row) if row else None

    def find_by_id(self, user_id: int) -> Optional[User]:
        with self.db.cursor() as cursor:
            row = cursor.execute(
                "SELECT id, name, email, password FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        return self._row_to_user(row) if row else None

    def save(self, user: User) -> User:
        try:
            with self.db.cursor() as cursor:
                cursor.execute(
                    "INSERT INTO users (name, email, password) VALUES (?, ?, ?)",
                    (user.name, user.email, user.password_hash),
                )
                user_id = cursor.lastrowid
        except sqlite3.IntegrityError as exc:
            raise DuplicateEmailError(user.email) from exc
        return replace(user, id=user_id)
