"""
handlers/menu_handler.py
-------------------------
Console handlers for the menu entries. Each handler prompts for the
fields it needs, delegates to UserService, and prints the outcome.
Exceptions are not caught here; the menu loop reports them.
"""

from datetime import timezone
from typing import Optional

from models.user import UNSET, User
from services.user_service import UserService
from utils.logger import get_logger

logger = get_logger(__name__)

_CONFIRM_ANSWERS = ("y", "yes")

TABLE_HEADER = (
    "ID | Name           | Email                    | Age | Created\n"
    "---|----------------|--------------------------|-----|------------------"
)


def _read_int(prompt: str) -> Optional[int]:
    """Prompt for an integer; returns None if the answer is not one."""
    raw = input(prompt).strip()
    try:
        return int(raw)
    except ValueError:
        return None


def _not_found(user_id: int) -> None:
    print(f"❌ No user found with ID {user_id}")


def format_created(user: User) -> str:
    """Render the creation time in UTC as dd.mm.YYYY HH:MM."""
    created = user.created_at
    if created is None:
        return ""
    if created.tzinfo is not None:
        created = created.astimezone(timezone.utc)
    return created.strftime("%d.%m.%Y %H:%M")


def format_user_row(user: User) -> str:
    return (
        f"{user.id:>2} | {user.name:<14} | {user.email:<24} | "
        f"{user.age:>3} | {format_created(user)}"
    )


def print_user_table(users: list[User]) -> None:
    print("\n📋 All Users:")
    print(TABLE_HEADER)
    for user in users:
        print(format_user_row(user))


async def add_user_interactive(service: UserService) -> None:
    name = input("Name: ")
    email = input("Email: ").strip()
    age = _read_int("Age: ")
    if age is None:
        print("❌ Invalid age!")
        return

    user = await service.create_user(name, email, age)
    print(f"✅ User added: {user.name} (ID: {user.id})")


async def list_users_interactive(service: UserService) -> None:
    users = await service.list_users()
    print_user_table(users)


async def find_user_interactive(service: UserService) -> None:
    user_id = _read_int("User ID to find: ")
    if user_id is None:
        print("❌ Invalid ID!")
        return

    user = await service.get_user(user_id)
    if user is None:
        _not_found(user_id)
    else:
        print(f"👤 User found: {user}")


async def update_user_interactive(service: UserService) -> None:
    """
    Prompt for an ID and the new values. A blank answer keeps the
    current value; a non-numeric age raises ValueError.
    """
    user_id = _read_int("User ID to update: ")
    if user_id is None:
        print("❌ Invalid ID!")
        return

    name = input("New name (leave blank to keep): ")
    email = input("New email (leave blank to keep): ").strip()
    raw_age = input("New age (leave blank to keep): ").strip()
    age = int(raw_age) if raw_age else UNSET

    updated = await service.update_user(
        user_id,
        name=name or UNSET,
        email=email or UNSET,
        age=age,
    )
    if updated:
        print(f"✅ User updated: {user_id}")
    else:
        _not_found(user_id)


async def delete_user_interactive(service: UserService) -> None:
    user_id = _read_int("User ID to delete: ")
    if user_id is None:
        print("❌ Invalid ID!")
        return

    answer = input(f"Are you sure you want to delete user {user_id}? (y/n): ")
    if answer.strip().lower() not in _CONFIRM_ANSWERS:
        logger.info(f"Deletion of user #{user_id} cancelled")
        print("Operation cancelled.")
        return

    if await service.delete_user(user_id):
        print(f"🗑️ User deleted: {user_id}")
    else:
        _not_found(user_id)
