"""Create the first admin user.

POST /api/users needs an existing admin as `last_op_id`, so an empty
database cannot be populated through the API alone. Run this once after
`alembic upgrade head`:

    stockroom-create-admin --email admin@example.com --name admin --password s3cret
"""

import argparse
import asyncio
import logging
import sys

from sqlalchemy import or_, select

from stockroom.config import settings
from stockroom.database import async_session_factory, dispose_engine, utcnow
from stockroom.models.user import User
from stockroom.security import hash_password

logger = logging.getLogger(__name__)


async def create_admin(email: str, name: str, password: str) -> User:
    """Insert an admin that records itself as its own last operator.

    Raises:
        ValueError: a user with the same email or name already exists
    """
    email, name, password = email.strip(), name.strip(), password.strip()
    async with async_session_factory() as session:
        existing = await session.execute(
            select(User.id).where(or_(User.email == email, User.name == name))
        )
        if existing.first() is not None:
            raise ValueError(f"A user with email '{email}' or name '{name}' already exists")

        now = utcnow()
        admin = User(
            email=email,
            name=name,
            password=hash_password(password),
            role=settings.admin_role,
            created_at=now,
            updated_at=now,
        )
        session.add(admin)
        await session.flush()
        admin.last_op_id = admin.id
        await session.commit()
    logger.info("Admin %s (%s) created", admin.id, admin.email)
    return admin


async def _run(args: argparse.Namespace) -> User:
    try:
        return await create_admin(args.email, args.name, args.password)
    finally:
        await dispose_engine()


def main() -> int:
    parser = argparse.ArgumentParser(description="Create the first Stockroom admin user.")
    parser.add_argument("--email", required=True, help="Admin login email")
    parser.add_argument("--name", required=True, help="Unique display name")
    parser.add_argument("--password", required=True, help="Initial password")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    try:
        admin = asyncio.run(_run(args))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Created admin {admin.name} with id {admin.id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
