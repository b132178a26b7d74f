"""Pydantic schemas for appointment booking and cancellation."""

from datetime import datetime

from pydantic import BaseModel, Field

from clinic.models.doctor import Specialty


class AppointmentCreate(BaseModel):
    """Request to book an appointment.

    Without ``doctor_id`` the first free active doctor is chosen, optionally
    restricted to ``specialty``.
    """

    patient_id: int
    doctor_id: int | None = None
    specialty: Specialty | None = None
    date_time: datetime


class AppointmentCancel(BaseModel):
    """Request to cancel an appointment.

    ``reason`` is checked against the recognised codes by the service so that
    an unknown code is reported as a cancellation rule failure.
    """

    appointment_id: int
    reason: str = Field(..., max_length=30)


class AppointmentRead(BaseModel):
    """Appointment as returned by the API."""

    id: int
    patient_id: int
    doctor_id: int
    date_time: datetime
    status: str
    cancellation_reason: str | None
    cancelled_at: datetime | None

    model_config = {"from_attributes": True}
