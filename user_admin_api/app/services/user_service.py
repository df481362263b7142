"""
Business logic for users.

``UserService`` persists users in the SQLite database defined in
``core.db``.  Each method opens its own connection, raises a
``ValueError`` subclass for domain failures and returns plain
dictionaries ready to be written as JSON.

``based_on_query`` classifies the query string of a listing request
and ``FIND_USER`` maps each classification to the finder resolving it.
"""

import json
import logging
import sqlite3
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from user_admin_api.app.core.db import get_connection
from user_admin_api.app.schemas.user import QueryDescriptor, QueryField, User


logger = logging.getLogger(__name__)


class UserNotFoundError(ValueError):
    """Raised when no user exists with the requested uid."""

    def __init__(self, uid: str) -> None:
        super().__init__(f"User {uid} not found")
        self.uid = uid


class UserAlreadyExistsError(ValueError):
    """Raised when creating a user whose uid is already taken."""

    def __init__(self, uid: str) -> None:
        super().__init__(f"User {uid} already exists")
        self.uid = uid


def based_on_query(query: Mapping[str, Any]) -> QueryDescriptor:
    """Decide which finder resolves a listing query.

    ``uid`` takes precedence over ``email``.  Without either, every
    user is listed.
    """
    uid = query.get("uid")
    if uid:
        return QueryDescriptor(by=QueryField.UID, param=uid)
    email = query.get("email")
    if email:
        return QueryDescriptor(by=QueryField.EMAIL, param=email)
    return QueryDescriptor(by=QueryField.ALL, param=None)


class UserService:
    """Service class for managing users."""

    @classmethod
    async def find_by_uid(cls, uid: str) -> List[Dict[str, Any]]:
        """Return the user with ``uid`` as a one-element list, or ``[]``."""
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM users WHERE uid = ?", (uid,)).fetchone()
            return [cls._row_to_user(row)] if row else []
        finally:
            conn.close()

    @classmethod
    async def find_by_email(cls, email: str) -> List[Dict[str, Any]]:
        """Return every user registered with ``email``."""
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM users WHERE email = ? ORDER BY created_at, rowid",
                (email,),
            ).fetchall()
            return [cls._row_to_user(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def find_all(cls, _: Optional[str] = None) -> List[Dict[str, Any]]:
        """Return all users in creation order.

        Accepts and ignores a parameter so it can be called like the
        other finders.
        """
        conn = get_connection()
        try:
            rows = conn.execute("SELECT * FROM users ORDER BY created_at, rowid").fetchall()
            return [cls._row_to_user(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def create_user(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert a new user and return it.

        A uid is generated when ``data`` carries none.  Raises
        ``UserAlreadyExistsError`` if the uid is taken.
        """
        user = User.model_validate(dict(data)).model_dump()
        if not user.get("uid"):
            user["uid"] = uuid.uuid4().hex
        uid = user.pop("uid")
        email = user.pop("email")
        conn = get_connection()
        try:
            try:
                conn.execute(
                    "INSERT INTO users (uid, email, data) VALUES (?, ?, ?)",
                    (uid, email, json.dumps(user)),
                )
            except sqlite3.IntegrityError as e:
                raise UserAlreadyExistsError(uid) from e
            conn.commit()
            logger.info("Created user %s", uid)
            row = conn.execute("SELECT * FROM users WHERE uid = ?", (uid,)).fetchone()
            return cls._row_to_user(row)
        finally:
            conn.close()

    @classmethod
    async def update_user_by_uid(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge ``data`` into the stored user with the same uid.

        Fields absent from ``data`` keep their stored value.  Raises
        ``UserNotFoundError`` if no such user exists.
        """
        updates = User.model_validate(dict(data)).model_dump(exclude_unset=True)
        uid = updates.pop("uid", None)
        if not uid:
            raise ValueError("uid is required to update a user")
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM users WHERE uid = ?", (uid,)).fetchone()
            if not row:
                raise UserNotFoundError(uid)
            email = updates.pop("email", row["email"])
            merged = json.loads(row["data"] or "{}")
            merged.update(updates)
            conn.execute(
                "UPDATE users SET email = ?, data = ?, updated_at = CURRENT_TIMESTAMP WHERE uid = ?",
                (email, json.dumps(merged), uid),
            )
            conn.commit()
            logger.info("Updated user %s", uid)
            row = conn.execute("SELECT * FROM users WHERE uid = ?", (uid,)).fetchone()
            return cls._row_to_user(row)
        finally:
            conn.close()

    @classmethod
    async def remove_user(cls, uid: str) -> Dict[str, Any]:
        """Delete the user with ``uid`` and return it as it was stored."""
        if not uid:
            raise ValueError("uid is required to remove a user")
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM users WHERE uid = ?", (uid,)).fetchone()
            if not row:
                raise UserNotFoundError(uid)
            conn.execute("DELETE FROM users WHERE uid = ?", (uid,))
            conn.commit()
            logger.info("Removed user %s", uid)
            return cls._row_to_user(row)
        finally:
            conn.close()

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> Dict[str, Any]:
        """Convert a database row to the user dictionary returned by the API."""
        user: Dict[str, Any] = json.loads(row["data"] or "{}")
        user["uid"] = row["uid"]
        user["email"] = row["email"]
        return user


FIND_USER: Dict[QueryField, Callable[[Optional[str]], Awaitable[List[Dict[str, Any]]]]] = {
    QueryField.UID: UserService.find_by_uid,
    QueryField.EMAIL: UserService.find_by_email,
    QueryField.ALL: UserService.find_all,
}
