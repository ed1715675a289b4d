#!/usr/bin/env python
"""Create the console administrator from the command line."""

import argparse
import asyncio

from pydantic import ValidationError

from talento_api.database import async_session_maker, engine
from talento_api.exceptions import AdministratorAlreadyExistsError
from talento_api.models.dto.auth import AdminRegisterRequest
from talento_api.services.admin_auth_service import AdminAuthService


async def create_admin(email: str, password: str, first_names: str, last_names: str) -> bool:
    """Create the administrator unless one already exists."""
    try:
        data = AdminRegisterRequest(
            first_names=first_names,
            last_names=last_names,
            email=email,
            password=password,
            confirm_password=password,
        )
    except ValidationError as e:
        for error in e.errors():
            print(f"Invalid input: {error['msg'].removeprefix('Value error, ')}")
        return False

    try:
        async with async_session_maker() as session:
            service = AdminAuthService(session)
            try:
                admin = await service.register_first_admin(data)
            except AdministratorAlreadyExistsError:
                print("An administrator already exists")
                return False
    finally:
        await engine.dispose()

    print(f"Administrator created: {admin.email} (id={admin.id})")
    return True


def main() -> int:
    parser = argparse.ArgumentParser(description="Create the console administrator")
    parser.add_argument("--email", required=True, help="Email address")
    parser.add_argument(
        "--password",
        required=True,
        help="Password (6+ chars with a digit, a lowercase and an uppercase letter)",
    )
    parser.add_argument("--first-names", required=True, help="First names")
    parser.add_argument("--last-names", required=True, help="Last names")
    args = parser.parse_args()

    created = asyncio.run(
        create_admin(args.email, args.password, args.first_names, args.last_names)
    )
    return 0 if created else 1


if __name__ == "__main__":
    raise SystemExit(main())
