"""
models/user.py
--------------
Domain model for user records stored in the "Users" table.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from email_validator import EmailNotValidError, validate_email

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 150


class InvalidEmailError(ValueError):
    """Raised when an email address is not syntactically valid."""


class _Unset:
    """Marker for an update field that was not supplied."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


def validate_email_address(email: str) -> str:
    """
    Check that ``email`` is a syntactically valid address.

    Only the syntax is checked; no DNS lookup is made. Length and
    uniqueness are left to the database.

    Returns:
        The address unchanged.

    Raises:
        InvalidEmailError: If the address is malformed.
    """
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise InvalidEmailError(f"Invalid email address '{email}': {e}") from e
    return email


@dataclass
class User:
    """
    Represents a single user record.

    Attributes:
        name: Display name, at most 100 characters.
        email: Unique email address, at most 150 characters.
        age: Age in years (no range enforced).
        id: Database primary key (None for new records).
        created_at: UTC timestamp set by the database on insert.
    """
    name: str
    email: str
    age: int
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __str__(self) -> str:
        return f"{self.name} - {self.email}"
