"""Appointment model linking a patient and a doctor at a date-time."""

from datetime import date, datetime
from enum import Enum

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from clinic.db.base import Base, IdType, TimestampMixin


class AppointmentStatus(str, Enum):
    """Status of an appointment."""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    CLOSED = "CLOSED"
    CANCELLED = "CANCELLED"


# Statuses after which an appointment can no longer be cancelled
FINAL_STATUSES = frozenset({AppointmentStatus.CANCELLED, AppointmentStatus.CLOSED})


class CancellationReason(str, Enum):
    """Recognised reasons for cancelling an appointment."""

    PATIENT_CANCELLED = "PATIENT_CANCELLED"
    DOCTOR_CANCELLED = "DOCTOR_CANCELLED"
    OTHER = "OTHER"


_NOT_CANCELLED = text("status <> 'CANCELLED'")


class Appointment(Base, TimestampMixin):
    """Scheduled appointment between a patient and a doctor.

    ``date_time`` is a clinic wall-clock time without timezone.
    ``scheduled_date`` duplicates its calendar date so the store can enforce
    one live appointment per patient per day.
    """

    __tablename__ = "appointments"
    __table_args__ = (
        Index(
            "uq_appointments_doctor_slot",
            "doctor_id",
            "date_time",
            unique=True,
            postgresql_where=_NOT_CANCELLED,
            sqlite_where=_NOT_CANCELLED,
        ),
        Index(
            "uq_appointments_patient_day",
            "patient_id",
            "scheduled_date",
            unique=True,
            postgresql_where=_NOT_CANCELLED,
            sqlite_where=_NOT_CANCELLED,
        ),
    )

    patient_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("patients.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    doctor_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("doctors.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    date_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        index=True,
    )
    scheduled_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=AppointmentStatus.OPEN.value,
        nullable=False,
    )
    cancellation_reason: Mapped[str | None] = mapped_column(
        String(30),
        nullable=True,
    )
    cancelled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def cancel(self, reason: CancellationReason, cancelled_at: datetime) -> None:
        """Mark the appointment cancelled; the row is kept."""
        self.status = AppointmentStatus.CANCELLED.value
        self.cancellation_reason = reason.value
        self.cancelled_at = cancelled_at

    def __repr__(self) -> str:
        return f"<Appointment {self.id} {self.date_time} {self.status}>"
