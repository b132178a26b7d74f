"""Database initialization utilities."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.config import settings
from clinic.core.security import hash_password
from clinic.models.user import User

logger = logging.getLogger(__name__)


async def create_initial_admin(session: AsyncSession) -> User | None:
    """Create the initial login user if no user exists yet.

    Args:
        session: Database session

    Returns:
        Created user or None if users already exist
    """
    result = await session.execute(select(User.id).limit(1))
    if result.scalar_one_or_none() is not None:
        logger.info("Users already exist, skipping initial admin creation")
        return None

    # Credentials come from settings and should be changed immediately
    admin = User(
        email=settings.initial_admin_email.lower(),
        hashed_password=hash_password(settings.initial_admin_password),
        name="Administrator",
        is_active=True,
    )
    session.add(admin)
    await session.commit()
    await session.refresh(admin)

    logger.warning(f"Created initial admin user: {admin.email}. Change the password.")
    return admin


async def init_db(session: AsyncSession) -> None:
    """Seed the database with the data the API needs to be usable.

    Args:
        session: Database session
    """
    await create_initial_admin(session)
    logger.info("Database initialization complete")
