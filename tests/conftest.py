"""Pytest configuration and fixtures."""

import os

# Settings are read at import time; point them at the test database first.
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")
os.environ.setdefault("INIT_DB_ON_STARTUP", "false")

from collections.abc import AsyncGenerator, Generator
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from clinic.core.security import hash_password
from clinic.db.base import Base
from clinic.db.session import get_db
from clinic.main import app
from clinic.models.doctor import Doctor, Specialty
from clinic.models.patient import Patient
from clinic.models.user import User
from factories import TEST_PASSWORD, create_test_token, make_address, next_weekday_at


# Use SQLite for testing (simpler than spinning up postgres)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def async_engine():
    """Create async test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def async_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async database session for tests."""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def api_client(async_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the app with the test session injected."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield async_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """Synchronous test client for endpoints that do not touch the database."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def test_user(async_session: AsyncSession) -> User:
    """Create a test login user."""
    user = User(
        email="reception@example.com",
        hashed_password=hash_password(TEST_PASSWORD),
        name="Test Reception",
        is_active=True,
    )
    async_session.add(user)
    await async_session.commit()
    await async_session.refresh(user)
    return user


@pytest.fixture
async def disabled_user(async_session: AsyncSession) -> User:
    """Create a login user whose account is disabled."""
    user = User(
        email="disabled@example.com",
        hashed_password=hash_password(TEST_PASSWORD),
        name="Disabled User",
        is_active=False,
    )
    async_session.add(user)
    await async_session.commit()
    await async_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_user: User) -> dict[str, str]:
    """Create authorization headers for test user."""
    token = create_test_token(test_user)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def test_patient(async_session: AsyncSession) -> Patient:
    """Create an active test patient."""
    patient = Patient(
        name="Ana Pereira",
        email="ana@example.com",
        phone="11977770000",
        document="98765432100",
        address=make_address(),
        active=True,
    )
    async_session.add(patient)
    await async_session.commit()
    await async_session.refresh(patient)
    return patient


@pytest.fixture
async def inactive_patient(async_session: AsyncSession) -> Patient:
    """Create a soft-deleted test patient."""
    patient = Patient(
        name="Bruno Lima",
        email="bruno@example.com",
        phone="11966660000",
        document="11122233344",
        address=make_address(),
        active=True,
    )
    patient.deactivate()
    async_session.add(patient)
    await async_session.commit()
    await async_session.refresh(patient)
    return patient


async def _create_doctor(
    session: AsyncSession,
    name: str,
    registration_code: str,
    specialty: Specialty = Specialty.CARDIOLOGY,
    active: bool = True,
) -> Doctor:
    doctor = Doctor(
        name=name,
        email=f"dr{registration_code}@example.com",
        phone="11955550000",
        registration_code=registration_code,
        specialty=specialty.value,
        address=make_address(),
        active=active,
    )
    session.add(doctor)
    await session.commit()
    await session.refresh(doctor)
    return doctor


@pytest.fixture
async def test_doctor(async_session: AsyncSession) -> Doctor:
    """Create an active cardiologist."""
    return await _create_doctor(async_session, "Dr Carla Mendes", "1001")


@pytest.fixture
def monday_10am() -> datetime:
    """A bookable Monday 10:00 at least a week ahead."""
    return next_weekday_at(10, weekday=0)


@pytest.fixture
def make_doctor(async_session: AsyncSession):
    """Factory for doctors persisted in the test session."""

    async def factory(
        name: str,
        registration_code: str,
        specialty: Specialty = Specialty.CARDIOLOGY,
        active: bool = True,
    ) -> Doctor:
        return await _create_doctor(async_session, name, registration_code, specialty, active)

    return factory


@pytest.fixture(scope="function")
async def file_session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Session factory over a file database, so each session gets its own connection."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'clinic.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    await engine.dispose()
