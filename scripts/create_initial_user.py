"""Utility script to create a user account or the bootstrap administrator."""

from __future__ import annotations

import argparse
from getpass import getpass

from user_accounts.application.use_cases.users import ensure_admin_exists, register_user
from user_accounts.domain.entities import RoleName
from user_accounts.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a user account for the User Accounts API.",
    )
    parser.add_argument(
        "--admin",
        action="store_true",
        help="Only make sure the configured bootstrap administrator exists.",
    )
    parser.add_argument("--email", help="Email address identifying the account")
    parser.add_argument("--username", help="Display name of the account")
    parser.add_argument(
        "--role",
        default=RoleName.USER.value,
        choices=[role.value for role in RoleName],
        help="Role assigned to the account (default: User)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Account password. Prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        if args.admin:
            seeded = ensure_admin_exists(session)
            if not seeded.ok:
                raise SystemExit(f"Could not seed the administrator: {seeded.message}")
            print("Administrator created." if seeded.value else "Administrator already exists.")
            return

        if not args.email or not args.username:
            raise SystemExit("--email and --username are required unless --admin is given.")

        password = args.password or getpass("Password: ")
        confirm_password = args.password or getpass("Confirm password: ")
        result = register_user(
            session,
            user_id=args.email,
            username=args.username,
            password=password,
            confirm_password=confirm_password,
            role=RoleName(args.role),
        )
        if not result.ok:
            raise SystemExit(f"Could not create the user: {result.message}")

        user = result.value
        print(
            "User created:\n"
            f"  Email: {user.user_id}\n"
            f"  Username: {user.username}\n"
            f"  Role: {user.role.value}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
