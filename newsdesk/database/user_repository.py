"""
Repository for user operations.
"""

import sqlite3
import uuid

from .connection import DatabaseConnection, utc_now
from .converters import row_to_user
from .models import DBUser


class DuplicateEmailError(Exception):
    """Raised when inserting a user whose email is already registered."""


class UserRepository:
    """Repository for user CRUD operations."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def add(self, name: str, email: str, password_digest: str, role: str) -> DBUser:
        """
        Create a user.

        Args:
            name: Display name
            email: Unique email address
            password_digest: Hashed credential
            role: 'author' or 'reader'

        Returns:
            The stored user

        Raises:
            DuplicateEmailError: If the email is already taken
        """
        user_id = str(uuid.uuid4())
        now = utc_now()
        with self._db.conn() as conn:
            try:
                conn.execute(
                    """
                    INSERT INTO users (id, name, email, password, role, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (user_id, name, email, password_digest, role, now, now)
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateEmailError(email) from e
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return row_to_user(row)

    def get_by_email(self, email: str) -> DBUser | None:
        """Get user by email."""
        with self._db.conn() as conn:
            cursor = conn.execute(
                "SELECT * FROM users WHERE email = ?",
                (email,)
            )
            row = cursor.fetchone()
            return row_to_user(row) if row else None
