"""Create a login user for the clinic API.

Run after database migration:

    python scripts/create_user.py reception@clinic.local --name "Front Desk"

The password is read from --password or prompted for.
"""

import argparse
import asyncio
import getpass

from sqlalchemy import select

from clinic.db.session import AsyncSessionLocal
from clinic.models.user import User
from clinic.services.auth import AuthService


async def create_user(email: str, password: str, name: str) -> tuple[bool, str]:
    """Create a user unless the email is already registered."""
    async with AsyncSessionLocal() as session:
        result = await session.execute(
            select(User).where(User.email == email.lower())
        )
        if result.scalar_one_or_none():
            return False, f"User {email} already exists"

        user = await AuthService(session).create_user(
            email=email,
            password=password,
            name=name,
        )
        return True, f"Created user {user.email} (id={user.id})"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a clinic API login user")
    parser.add_argument("email")
    parser.add_argument("--name", default="Clinic User")
    parser.add_argument("--password", default=None)
    return parser.parse_args()


async def main() -> None:
    args = parse_args()
    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("A password is required")
        return

    created, message = await create_user(args.email, password, args.name)
    print(message)
    if created:
        print("Log in with POST /api/v1/login")


if __name__ == "__main__":
    asyncio.run(main())
