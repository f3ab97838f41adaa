"""
Business logic for users.

The ``UserService`` is the user directory: it creates users, lists
them and resolves an id to a user.  Every method receives the
:class:`~exercise_tracker_api.app.core.db.Database` handle explicitly.
"""

import logging
import re
import sqlite3
from typing import List, Optional

from ..core.db import Database, generate_id
from ..core.errors import UserNotFoundError
from ..schemas.user import UserRead

USER_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


class UserService:
    """Service for user identity records."""

    @classmethod
    async def create_user(cls, db: Database, username: Optional[str]) -> UserRead:
        """Persist a new user and return it with its generated id."""
        logger = logging.getLogger(__name__)
        user_id = generate_id()
        with db.cursor() as cursor:
            cursor.execute(
                "INSERT INTO users (id, username) VALUES (?, ?)",
                (user_id, username),
            )
        logger.info("Created user %s (%s)", user_id, username)
        return UserRead(id=user_id, username=username)

    @classmethod
    async def list_users(cls, db: Database) -> List[UserRead]:
        """Return all users in insertion order.  An empty store yields an empty list."""
        with db.cursor() as cursor:
            rows = cursor.execute(
                "SELECT id, username FROM users ORDER BY seq ASC"
            ).fetchall()
        return [cls._row_to_user_read(row) for row in rows]

    @classmethod
    async def find_user_by_id(cls, db: Database, user_id: str) -> UserRead:
        """Resolve ``user_id`` to a user.

        Raises :class:`UserNotFoundError` when no user has this id or when
        the id is not a well formed identifier.
        """
        if not isinstance(user_id, str) or not USER_ID_PATTERN.match(user_id):
            raise UserNotFoundError(user_id)
        with db.cursor() as cursor:
            row = cursor.execute(
                "SELECT id, username FROM users WHERE id = ?",
                (user_id.lower(),),
            ).fetchone()
        if row is None:
            raise UserNotFoundError(user_id)
        return cls._row_to_user_read(row)

    @staticmethod
    def _row_to_user_read(row: sqlite3.Row) -> UserRead:
        return UserRead(id=row["id"], username=row["username"])
