"""Booking module for appointment rule enforcement."""

from clinic.booking.cancellation import CancellationRejection, check_cancellation
from clinic.booking.policy import (
    BookingDecision,
    BookingRejection,
    BookingSnapshot,
    DoctorCandidate,
    evaluate_booking,
    select_available_doctor,
)

__all__ = [
    "BookingDecision",
    "BookingRejection",
    "BookingSnapshot",
    "CancellationRejection",
    "DoctorCandidate",
    "check_cancellation",
    "evaluate_booking",
    "select_available_doctor",
]
