"""Patient model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from clinic.db.base import Base, SoftDeleteMixin, TimestampMixin
from clinic.models.address import Address, address_composite


class Patient(Base, TimestampMixin, SoftDeleteMixin):
    """Patient registered with the clinic.

    Patients are never physically removed; deletion clears the active flag.
    """

    __tablename__ = "patients"

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
    # National registration document
    document: Mapped[str] = mapped_column(
        String(14),
        unique=True,
        nullable=False,
    )
    address: Mapped[Address] = address_composite()

    def __repr__(self) -> str:
        return f"<Patient {self.id} {self.name}>"
