#!/usr/bin/env python3
"""
Family & User Management CLI

Command-line tool for managing families and users from the server terminal.
Use this to bootstrap a family, add members, or recover accounts without the web UI.

Usage:
    python user_cli.py create-family <name>
    python user_cli.py create-user <family_id> <name> <email> <password>
    python user_cli.py list-users [--family <family_id>]
    python user_cli.py reset-password <email> <new_password>
    python user_cli.py activate <email>
    python user_cli.py deactivate <email>
    python user_cli.py delete <email>
"""
import sys
import argparse
import asyncio
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.session import get_async_engine
from backend.app.services import user_service


async def cmd_create_family(name: str) -> bool:
    """Create a new family."""
    async with AsyncSession(get_async_engine(), expire_on_commit=False) as session:
        family = await user_service.create_family(session, name)
        print(f"✅ Family '{name}' created with ID {family.id}")
        return True


async def cmd_create_user(family_id: str, name: str, email: str, password: str) -> bool:
    """Create a user inside an existing family."""
    async with AsyncSession(get_async_engine(), expire_on_commit=False) as session:
        user, error = await user_service.create_user(session, name, email, password, family_id=family_id)

        if user:
            print(f"✅ User '{email}' created with ID {user.id}")
            return True
        print(f"❌ {error}")
        return False


async def cmd_list_users(family_id: str | None = None) -> None:
    """List users, optionally of one family."""
    async with AsyncSession(get_async_engine(), expire_on_commit=False) as session:
        users = await user_service.list_users(session, family_id=family_id)

        if not users:
            print("No users found")
            return

        print(f"\n{'ID':<38} {'Family':<38} {'Name':<20} {'Email':<30} {'Active':<8}")
        print("-" * 136)

        for user in users:
            active = "🗑️" if user.deleted_at else ("✅" if user.is_active else "❌")
            print(f"{user.id:<38} {user.family_id:<38} {user.name:<20} {user.email:<30} {active:<8}")

        print(f"\nTotal: {len(users)} user(s)")


async def cmd_reset_password(email: str, new_password: str) -> bool:
    """Reset a user's password."""
    async with AsyncSession(get_async_engine(), expire_on_commit=False) as session:
        success, error = await user_service.reset_password(session, email, new_password)

        if success:
            print(f"✅ Password reset for user '{email}'")
        else:
            print(f"❌ {error}")
        return success


async def cmd_set_user_active(email: str, active: bool) -> bool:
    """Activate or deactivate a user."""
    async with AsyncSession(get_async_engine(), expire_on_commit=False) as session:
        success, error = await user_service.set_user_active(session, email, active)

        if success:
            status = "activated" if active else "deactivated"
            print(f"✅ User '{email}' {status}")
        else:
            print(f"❌ {error}")
        return success


async def cmd_delete_user(email: str) -> bool:
    """Soft-delete a user."""
    async with AsyncSession(get_async_engine(), expire_on_commit=False) as session:
        success, error = await user_service.soft_delete_user(session, email)

        if success:
            print(f"✅ User '{email}' deleted")
        else:
            print(f"❌ {error}")
        return success


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="FamilyFolio Family & User Management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python user_cli.py create-family "Rossi Family"
  python user_cli.py create-user <family_id> Anna anna@example.com secretpass
  python user_cli.py list-users --family <family_id>
  python user_cli.py reset-password anna@example.com newpassword123
  python user_cli.py deactivate anna@example.com
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # create-family
    family_parser = subparsers.add_parser("create-family", help="Create a family")
    family_parser.add_argument("name", help="Family name")

    # create-user
    user_parser = subparsers.add_parser("create-user", help="Create a user in a family")
    user_parser.add_argument("family_id", help="Family ID")
    user_parser.add_argument("name", help="Display name")
    user_parser.add_argument("email", help="Email address")
    user_parser.add_argument("password", help="Password")

    # list-users
    list_parser = subparsers.add_parser("list-users", help="List users")
    list_parser.add_argument("--family", dest="family_id", default=None, help="Only users of this family")

    # reset-password
    reset_parser = subparsers.add_parser("reset-password", help="Reset user password")
    reset_parser.add_argument("email", help="User email")
    reset_parser.add_argument("new_password", help="New password")

    # activate / deactivate / delete
    for name, help_text in (("activate", "Activate user"), ("deactivate", "Deactivate user"), ("delete", "Soft-delete user")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("email", help="User email")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "create-family":
        ok = asyncio.run(cmd_create_family(args.name))
    elif args.command == "create-user":
        ok = asyncio.run(cmd_create_user(args.family_id, args.name, args.email, args.password))
    elif args.command == "list-users":
        asyncio.run(cmd_list_users(args.family_id))
        ok = True
    elif args.command == "reset-password":
        ok = asyncio.run(cmd_reset_password(args.email, args.new_password))
    elif args.command == "deactivate":
        ok = asyncio.run(cmd_set_user_active(args.email, False))
    elif args.command == "activate":
        ok = asyncio.run(cmd_set_user_active(args.email, True))
    else:
        ok = asyncio.run(cmd_delete_user(args.email))

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
