"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
All SQL queries related to the "Users" table live here.
"""

from typing import Any, Optional

from db.connection import get_connection, release_connection
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, name, email, age, created_at"
_UPDATABLE_COLUMNS = ("name", "email", "age")


class UserRepository:
    """Repository for CRUD operations on the Users table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, user: User) -> User:
        """
        Insert a new user record.

        Args:
            user: The User domain object to persist.

        Returns:
            The same User with its `id` and `created_at` populated.

        Raises:
            psycopg2.errors.UniqueViolation: If the email is already taken.
        """
        sql = """
            INSERT INTO "Users" (name, email, age)
            VALUES (%s, %s, %s)
            RETURNING id, created_at;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (user.name, user.email, user.age))
                row = cur.fetchone()
                user.id = row[0]
                user.created_at = row[1]
            conn.commit()
            logger.info(f"Added user #{user.id} <{user.email}>")
            return user
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add user <{user.email}>: {e}")
            raise
        finally:
            release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[User]:
        """
        Fetch every user.

        Returns:
            List of User objects ordered by id ascending.
        """
        sql = f'SELECT {_COLUMNS} FROM "Users" ORDER BY id ASC;'
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_user(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_by_id(self, user_id: int) -> Optional[User]:
        """
        Fetch a single user by ID.

        Returns:
            A User object or None if not found.
        """
        sql = f'SELECT {_COLUMNS} FROM "Users" WHERE id = %s;'
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (user_id,))
                row = cur.fetchone()
                return self._row_to_user(row) if row else None
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, user_id: int, changes: dict[str, Any]) -> bool:
        """
        Apply column changes to an existing user.

        Args:
            user_id: Primary key of the user to change.
            changes: Mapping of column name to new value. Only name, email
                and age may be changed. An empty mapping changes nothing.

        Returns:
            True if the user exists (and was updated), False otherwise.
        """
        unknown = set(changes) - set(_UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update column(s): {', '.join(sorted(unknown))}")

        if not changes:
            return self.get_by_id(user_id) is not None

        columns = [c for c in _UPDATABLE_COLUMNS if c in changes]
        assignments = ", ".join(f"{c} = %s" for c in columns)
        sql = f'UPDATE "Users" SET {assignments} WHERE id = %s;'
        params = [changes[c] for c in columns] + [user_id]

        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                updated = cur.rowcount > 0
            conn.commit()
            if updated:
                logger.info(f"Updated user #{user_id} ({', '.join(columns)})")
            return updated
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update user #{user_id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, user_id: int) -> bool:
        """
        Permanently delete a user by ID.

        Returns:
            True if a row was deleted, False otherwise.
        """
        sql = 'DELETE FROM "Users" WHERE id = %s;'
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (user_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted user #{user_id}")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete user #{user_id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_user(row: tuple) -> User:
        """Convert a database row tuple to a User domain object."""
        return User(
            id=row[0],
            name=row[1],
            email=row[2],
            age=row[3],
            created_at=row[4],
        )
