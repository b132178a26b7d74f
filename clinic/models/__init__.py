"""SQLAlchemy models."""

from clinic.models.address import Address
from clinic.models.appointment import (
    Appointment,
    AppointmentStatus,
    CancellationReason,
)
from clinic.models.doctor import Doctor, Specialty
from clinic.models.patient import Patient
from clinic.models.user import User

__all__ = [
    "Address",
    "Appointment",
    "AppointmentStatus",
    "CancellationReason",
    "Doctor",
    "Patient",
    "Specialty",
    "User",
]
