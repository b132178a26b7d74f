"""Login user model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from clinic.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """Clinic staff account allowed to call the API."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User {self.email}>"
