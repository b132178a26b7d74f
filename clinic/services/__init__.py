"""Business logic services."""

from clinic.services.appointments import AppointmentService, BookingRejectedError
from clinic.services.auth import AuthService
from clinic.services.doctors import DoctorService
from clinic.services.patients import PatientService

__all__ = [
    "AppointmentService",
    "AuthService",
    "BookingRejectedError",
    "DoctorService",
    "PatientService",
]
