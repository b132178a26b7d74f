"""Tests for database seeding."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.config import settings
from clinic.core.security import verify_password
from clinic.db.init_db import create_initial_admin, init_db
from clinic.models.user import User


async def test_initial_admin_created_once(async_session: AsyncSession) -> None:
    admin = await create_initial_admin(async_session)

    assert admin is not None
    assert admin.email == settings.initial_admin_email.lower()
    assert verify_password(settings.initial_admin_password, admin.hashed_password)

    assert await create_initial_admin(async_session) is None


async def test_init_db_skips_when_users_exist(
    async_session: AsyncSession, test_user: User
) -> None:
    await init_db(async_session)

    count = await async_session.scalar(select(func.count()).select_from(User))
    assert count == 1
