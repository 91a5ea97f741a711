"""
main.py
-------
Entry point for the UserConsole application.

Responsibilities:
    - Open the PostgreSQL connection and ensure the schema exists.
    - Run the interactive CRUD menu (default), the demo scenario,
      or only the schema bootstrap.
    - Close the connection on exit.
"""

import argparse
import asyncio
import sys
from typing import Sequence

from db.connection import database
from db.init_db import create_tables
from handlers.menu_handler import (
    add_user_interactive,
    delete_user_interactive,
    find_user_interactive,
    list_users_interactive,
    print_user_table,
    update_user_interactive,
)
from services.user_service import UserService
from utils.logger import get_logger

logger = get_logger(__name__)

MENU_TEXT = """
📋 MENU:
1. Add user
2. List all users
3. Find user (ID)
4. Update user
5. Delete user
0. Exit"""

_HANDLERS = {
    "1": add_user_interactive,
    "2": list_users_interactive,
    "3": find_user_interactive,
    "4": update_user_interactive,
    "5": delete_user_interactive,
}


async def run_menu(service: UserService) -> None:
    """
    Show the menu and dispatch selections until the user exits.

    An error raised while handling a selection is reported and the loop
    keeps going. End of input or Ctrl+C behave like choosing exit.
    """
    while True:
        print(MENU_TEXT)
        choice = ""
        try:
            choice = input("\nYour choice: ").strip()
            if choice == "0":
                print("👋 Goodbye!")
                return

            handler = _HANDLERS.get(choice)
            if handler is None:
                print("❌ Invalid choice!")
                continue
            await handler(service)
        except (EOFError, KeyboardInterrupt):
            print("\n👋 Goodbye!")
            return
        except Exception as e:
            logger.error(f"Menu option {choice!r} failed: {e}")
            print(f"❌ Error: {e}")


async def run_demo(service: UserService) -> None:
    """Run a fixed create / list / find / update / list scenario."""
    print("🎯 Running demo operations...\n")

    user = await service.create_user("Arda Caliskan", "arda.demo@example.com", 18)
    print(f"✅ User added: {user.name} (ID: {user.id})")

    print_user_table(await service.list_users())

    print("\n🔍 Find by ID:")
    found = await service.get_user(user.id)
    print(f"👤 User found: {found}")

    print("\n📝 Update:")
    await service.update_user(user.id, name="Arda Caliskan (updated)", age=19)
    print(f"✅ User updated: {user.id}")

    print_user_table(await service.list_users())
    print("\n" + "=" * 50)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="PostgreSQL console CRUD application")
    parser.add_argument(
        "command",
        nargs="?",
        default="shell",
        choices=("shell", "demo", "init-db"),
        help="shell: interactive menu (default); demo: run the demo scenario; "
        "init-db: only create the schema",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Connection string overriding DATABASE_URL / DB_* settings",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Bootstrap the database and run the selected command."""
    args = _parse_args(argv if argv is not None else sys.argv[1:])

    print("🚀 PostgreSQL Console CRUD Application")
    print("=====================================\n")

    try:
        # ── 1. Database setup ─────────────────────────────────
        with database(args.database_url):
            print("📦 Preparing database...")
            create_tables()
            print("✅ Database ready!\n")

            if args.command == "init-db":
                return

            # ── 2. Run the selected command ───────────────────────
            service = UserService()
            if args.command == "demo":
                asyncio.run(run_demo(service))
            else:
                asyncio.run(run_menu(service))
    except KeyboardInterrupt:
        # Ctrl+C that reached asyncio.run as a cancelled menu task
        print("\n👋 Goodbye!")
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        print(f"❌ Error: {e}")


if __name__ == "__main__":
    main()
