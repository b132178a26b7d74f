"""Cancellation rule enforcement."""

from enum import Enum
from typing import Optional

from clinic.models.appointment import CancellationReason, FINAL_STATUSES


class CancellationRejection(str, Enum):
    """Reason a cancellation request was rejected."""

    APPOINTMENT_NOT_FOUND = "appointment_not_found"
    INVALID_REASON = "invalid_reason"
    ALREADY_FINALIZED = "already_finalized"


CANCELLATION_MESSAGES: dict[CancellationRejection, str] = {
    CancellationRejection.APPOINTMENT_NOT_FOUND: "appointment not found",
    CancellationRejection.INVALID_REASON: "invalid cancellation reason",
    CancellationRejection.ALREADY_FINALIZED: "appointment already finalized",
}


def parse_cancellation_reason(reason: str | None) -> CancellationReason | None:
    """Map a reason code onto the recognised set, or None if it is not one."""
    if not reason:
        return None
    try:
        return CancellationReason(reason.strip().upper())
    except ValueError:
        return None


def check_cancellation(
    status: str | None,
    reason: str | None,
) -> Optional[CancellationRejection]:
    """Validate a cancellation against the appointment's current status.

    Args:
        status: Current appointment status, or None if the appointment does not exist
        reason: Requested reason code

    Returns:
        The first failing rule, or None if the appointment may be cancelled
    """
    if status is None:
        return CancellationRejection.APPOINTMENT_NOT_FOUND

    if parse_cancellation_reason(reason) is None:
        return CancellationRejection.INVALID_REASON

    if status in {s.value for s in FINAL_STATUSES}:
        return CancellationRejection.ALREADY_FINALIZED

    return None
