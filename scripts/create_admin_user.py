"""Utility script to create an administrator account in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.users.create_user import create_user
from app.domain.entities import ROLE_ADMIN
from app.domain.exceptions import InvalidInputError
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for admin creation."""

    parser = argparse.ArgumentParser(
        description="Create an administrator for the DEMS API.",
    )
    parser.add_argument(
        "--name",
        default="Administrator",
        help="Display name of the administrator (default: Administrator)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Login email of the administrator (default: admin@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Account password. Prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create an administrator using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    with SessionLocal() as session:
        try:
            user = create_user(
                session,
                name=args.name,
                email=args.email,
                password=password,
                role=ROLE_ADMIN,
            )
        except InvalidInputError as exc:
            raise SystemExit(f"Could not create the administrator: {exc}") from exc
        except SQLAlchemyError as exc:
            raise SystemExit(f"Could not store the administrator: {exc}") from exc

    print(
        "Administrator created:\n"
        f"  ID: {user.id}\n"
        f"  Name: {user.name}\n"
        f"  Email: {user.email}"
    )


if __name__ == "__main__":
    main()
