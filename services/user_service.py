"""
services/user_service.py
-------------------------
The user operations called by the console: create, list, find, update
and delete. Each operation is a coroutine; the blocking repository call
runs in a worker thread so the event loop only resumes once the
database round-trip has completed. Every create/update/delete commits
on its own.
"""

import asyncio
from typing import Any, Optional

from models.user import UNSET, User, validate_email_address
from repositories.user_repo import UserRepository
from utils.logger import get_logger

logger = get_logger(__name__)


def _is_supplied(value: Any) -> bool:
    """A field counts as supplied unless it is UNSET, None or an empty string."""
    return value is not UNSET and value is not None and value != ""


class UserService:
    """Async CRUD operations over the Users table."""

    def __init__(self, repo: Optional[UserRepository] = None):
        self.user_repo = repo or UserRepository()

    async def create_user(self, name: str, email: str, age: int) -> User:
        """
        Create and persist a new user.

        Raises:
            InvalidEmailError: If the email is malformed.
            psycopg2.errors.UniqueViolation: If the email is already used.
        """
        validate_email_address(email)
        user = User(name=name, email=email, age=age)
        return await asyncio.to_thread(self.user_repo.add, user)

    async def list_users(self) -> list[User]:
        """Return all users ordered by id."""
        return await asyncio.to_thread(self.user_repo.get_all)

    async def get_user(self, user_id: int) -> Optional[User]:
        """Return the user with this id, or None."""
        return await asyncio.to_thread(self.user_repo.get_by_id, user_id)

    async def update_user(
        self,
        user_id: int,
        name: Any = UNSET,
        email: Any = UNSET,
        age: Any = UNSET,
    ) -> bool:
        """
        Change the supplied fields of a user.

        Omitted fields (UNSET, None, or an empty string for name/email)
        are left unchanged.

        Returns:
            False if no user has this id, True once the change is saved.
        """
        changes: dict[str, Any] = {}
        if _is_supplied(name):
            changes["name"] = name
        if _is_supplied(email):
            changes["email"] = validate_email_address(email)
        if age is not UNSET and age is not None:
            changes["age"] = age

        updated = await asyncio.to_thread(self.user_repo.update, user_id, changes)
        if not updated:
            logger.info(f"Update skipped: no user #{user_id}")
        return updated

    async def delete_user(self, user_id: int) -> bool:
        """Delete a user. Returns False if no user has this id."""
        return await asyncio.to_thread(self.user_repo.delete, user_id)
