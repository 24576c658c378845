"""
moto_market.admin_cli

Provision an admin user (`moto-create-admin <username>` or `python -m moto_market.admin_cli`).

Responsibilities:
- Prompt for a password without echoing it.
- Insert the admin with a bcrypt hash into the configured database.
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys

from moto_market.auth.passwords import hash_password
from moto_market.db.init_db import init_db
from moto_market.db.repositories.admins import AdminRepo
from moto_market.db.session import create_engine, create_sessionmaker
from moto_market.settings import Settings, get_settings


async def create_admin(settings: Settings, username: str, password: str) -> bool:
    engine = create_engine(settings)
    try:
        if settings.env in ("dev", "test"):
            await init_db(engine)
        async with create_sessionmaker(engine)() as session:
            admins = AdminRepo(session)
            if await admins.get_by_username(username) is not None:
                return False
            await admins.create(
                username=username,
                password_hash=hash_password(password, rounds=settings.bcrypt_rounds),
            )
            await session.commit()
        return True
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a marketplace admin user.")
    parser.add_argument("username")
    args = parser.parse_args(argv)

    password = getpass.getpass("Password: ")
    if not password:
        print("Error: password cannot be empty", file=sys.stderr)
        return 1
    if getpass.getpass("Confirm password: ") != password:
        print("Error: passwords don't match", file=sys.stderr)
        return 1

    if not asyncio.run(create_admin(get_settings(), args.username, password)):
        print(f"Error: admin {args.username!r} already exists", file=sys.stderr)
        return 1
    print(f"Admin {args.username!r} created.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
