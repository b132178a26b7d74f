"""Doctor model and medical specialties."""

from enum import Enum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from clinic.db.base import Base, SoftDeleteMixin, TimestampMixin
from clinic.models.address import Address, address_composite


class Specialty(str, Enum):
    """Medical specialties offered by the clinic."""

    ORTHOPEDICS = "ORTHOPEDICS"
    CARDIOLOGY = "CARDIOLOGY"
    GYNECOLOGY = "GYNECOLOGY"
    DERMATOLOGY = "DERMATOLOGY"


class Doctor(Base, TimestampMixin, SoftDeleteMixin):
    """Doctor working at the clinic.

    Supports logical deletion (active flag) and physical deletion of the row.
    """

    __tablename__ = "doctors"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    phone: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )
    # Professional council registration code
    registration_code: Mapped[str] = mapped_column(
        String(6),
        unique=True,
        nullable=False,
    )
    specialty: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        index=True,
    )
    address: Mapped[Address] = address_composite()

    def __repr__(self) -> str:
        return f"<Doctor {self.id} {self.registration_code}>"
