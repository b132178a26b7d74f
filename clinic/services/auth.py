"""Authentication service for API users."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.security import create_access_token, hash_password, verify_password
from clinic.models.user import User


class AuthService:
    """Service for handling authentication operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def authenticate(self, email: str, password: str) -> User | None:
        """Authenticate a user with email and password.

        Args:
            email: User email address
            password: Plain text password

        Returns:
            User if credentials valid and account active, None otherwise
        """
        result = await self.session.execute(
            select(User).where(User.email == email.lower())
        )
        user = result.scalar_one_or_none()

        if not user:
            return None

        if not user.is_active:
            return None

        if not verify_password(password, user.hashed_password):
            return None

        return user

    def create_token(self, user: User) -> str:
        """Create JWT access token for an authenticated user."""
        return create_access_token(
            subject=str(user.id),
            additional_claims={"email": user.email},
        )

    async def get_user_by_id(self, user_id: int) -> User | None:
        """Get user by ID."""
        return await self.session.get(User, user_id)

    async def create_user(
        self,
        email: str,
        password: str,
        name: str,
    ) -> User:
        """Create a login user with a bcrypt-hashed password."""
        user = User(
            email=email.lower(),
            hashed_password=hash_password(password),
            name=name,
            is_active=True,
        )
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user
