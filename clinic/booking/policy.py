"""Booking rule enforcement.

Every rule is a plain function over values already read from the store, so
the whole rule set can be evaluated (and tested) without a database. The
appointment service builds a ``BookingSnapshot`` under a row lock, asks
``evaluate_booking`` for a decision and only then writes.
"""

from dataclasses import dataclass, field
from datetime import datetime, time
from enum import Enum
from typing import Iterable, Optional

# Default clinic opening window, [opening, closing)
OPENING_TIME = time(7, 0)
CLOSING_TIME = time(19, 0)

# datetime.weekday() values on which the clinic is closed
CLOSED_WEEKDAYS = frozenset({6})  # Sunday


class BookingRejection(str, Enum):
    """Reason a proposed appointment was rejected."""

    NOT_IN_FUTURE = "not_in_future"
    OUTSIDE_OPERATING_HOURS = "outside_operating_hours"
    PATIENT_INACTIVE = "patient_inactive"
    PATIENT_ALREADY_BOOKED = "patient_already_booked"
    DOCTOR_UNAVAILABLE = "doctor_unavailable"
    NO_DOCTOR_AVAILABLE = "no_doctor_available"


REJECTION_MESSAGES: dict[BookingRejection, str] = {
    BookingRejection.NOT_IN_FUTURE: "appointment must be in the future",
    BookingRejection.OUTSIDE_OPERATING_HOURS: "outside clinic operating hours",
    BookingRejection.PATIENT_INACTIVE: "patient not found or inactive",
    BookingRejection.PATIENT_ALREADY_BOOKED: "patient already has an appointment that day",
    BookingRejection.DOCTOR_UNAVAILABLE: "doctor not available at that time",
    BookingRejection.NO_DOCTOR_AVAILABLE: "no doctor available",
}

# Rejections caused by competing bookings rather than by the request itself
CONFLICT_REJECTIONS = frozenset({
    BookingRejection.PATIENT_ALREADY_BOOKED,
    BookingRejection.DOCTOR_UNAVAILABLE,
    BookingRejection.NO_DOCTOR_AVAILABLE,
})


@dataclass(frozen=True)
class DoctorCandidate:
    """The parts of a doctor record the booking rules look at."""

    id: int
    active: bool
    specialty: str | None = None


@dataclass(frozen=True)
class BookingSnapshot:
    """State read from the store for one booking request.

    Attributes:
        date_time: Requested clinic wall-clock time
        now: Current clinic wall-clock time
        patient_active: Patient's active flag, or None if the patient does not exist
        patient_has_appointment_that_day: Patient holds a non-cancelled appointment that date
        requested_doctor_id: Doctor named in the request, if any
        requested_doctor: That doctor's record, or None if it does not exist
        candidates: Doctors considered when no doctor was named
        busy_doctor_ids: Doctors holding a non-cancelled appointment at ``date_time``
        specialty: Restricts the fallback search to one specialty
    """

    date_time: datetime
    now: datetime
    patient_active: bool | None
    patient_has_appointment_that_day: bool = False
    requested_doctor_id: int | None = None
    requested_doctor: DoctorCandidate | None = None
    candidates: tuple[DoctorCandidate, ...] = ()
    busy_doctor_ids: frozenset[int] = field(default_factory=frozenset)
    specialty: str | None = None


@dataclass
class BookingDecision:
    """Outcome of evaluating every booking rule.

    Attributes:
        allowed: Whether the appointment may be persisted
        doctor_id: Doctor the appointment goes to (requested or selected)
        rejections: Every failing rule, in evaluation order
    """

    allowed: bool
    doctor_id: int | None = None
    rejections: list[BookingRejection] = field(default_factory=list)

    @property
    def rejection(self) -> BookingRejection | None:
        """First failing rule, which is the one reported to the caller."""
        return self.rejections[0] if self.rejections else None

    @property
    def message(self) -> str:
        """Human-readable reason for the reported rejection."""
        if self.rejection is None:
            return "Booking allowed"
        return REJECTION_MESSAGES[self.rejection]

    @property
    def is_conflict(self) -> bool:
        """Whether the reported rejection comes from competing bookings."""
        return self.rejection in CONFLICT_REJECTIONS


def check_in_future(date_time: datetime, now: datetime) -> Optional[BookingRejection]:
    """Appointment must be strictly after the current moment."""
    if date_time <= now:
        return BookingRejection.NOT_IN_FUTURE
    return None


def check_operating_hours(
    date_time: datetime,
    opening: time = OPENING_TIME,
    closing: time = CLOSING_TIME,
) -> Optional[BookingRejection]:
    """Appointment must start inside [opening, closing) on a day the clinic is open."""
    if date_time.weekday() in CLOSED_WEEKDAYS:
        return BookingRejection.OUTSIDE_OPERATING_HOURS

    if not opening <= date_time.time() < closing:
        return BookingRejection.OUTSIDE_OPERATING_HOURS

    return None


def check_patient_active(patient_active: bool | None) -> Optional[BookingRejection]:
    """Patient must exist and be active."""
    if not patient_active:
        return BookingRejection.PATIENT_INACTIVE
    return None


def check_patient_free(has_appointment_that_day: bool) -> Optional[BookingRejection]:
    """Patient may hold only one non-cancelled appointment per calendar day."""
    if has_appointment_that_day:
        return BookingRejection.PATIENT_ALREADY_BOOKED
    return None


def is_doctor_free(doctor: DoctorCandidate, busy_doctor_ids: Iterable[int]) -> bool:
    """Check a doctor is active and has nothing booked in the slot."""
    return doctor.active and doctor.id not in set(busy_doctor_ids)


def check_doctor_available(
    doctor: DoctorCandidate | None,
    busy_doctor_ids: frozenset[int],
) -> Optional[BookingRejection]:
    """Requested doctor must exist, be active and be free at the requested time."""
    if doctor is None or not is_doctor_free(doctor, busy_doctor_ids):
        return BookingRejection.DOCTOR_UNAVAILABLE
    return None


def select_available_doctor(
    candidates: Iterable[DoctorCandidate],
    busy_doctor_ids: frozenset[int],
    specialty: str | None = None,
) -> DoctorCandidate | None:
    """Pick the doctor for a booking that did not name one.

    Returns the active, free doctor with the lowest id (optionally restricted
    to one specialty), independent of the order ``candidates`` arrive in.
    """
    for doctor in sorted(candidates, key=lambda d: d.id):
        if specialty is not None and doctor.specialty != specialty:
            continue
        if is_doctor_free(doctor, busy_doctor_ids):
            return doctor
    return None


def evaluate_booking(
    snapshot: BookingSnapshot,
    opening: time = OPENING_TIME,
    closing: time = CLOSING_TIME,
) -> BookingDecision:
    """Run every booking rule against a snapshot.

    Rules are independent; all of them are evaluated and the decision records
    each one that failed. The booking is allowed only if none failed.

    Examples:
        >>> snap = BookingSnapshot(
        ...     date_time=datetime(2025, 3, 10, 10, 0),
        ...     now=datetime(2025, 3, 1, 9, 0),
        ...     patient_active=True,
        ...     requested_doctor_id=1,
        ...     requested_doctor=DoctorCandidate(id=1, active=True),
        ... )
        >>> evaluate_booking(snap).allowed
        True
    """
    rejections = [
        check_in_future(snapshot.date_time, snapshot.now),
        check_operating_hours(snapshot.date_time, opening, closing),
        check_patient_active(snapshot.patient_active),
        check_patient_free(snapshot.patient_has_appointment_that_day),
    ]

    doctor_id: int | None = None

    if snapshot.requested_doctor_id is not None:
        rejections.append(
            check_doctor_available(snapshot.requested_doctor, snapshot.busy_doctor_ids)
        )
        doctor_id = snapshot.requested_doctor_id
    else:
        selected = select_available_doctor(
            snapshot.candidates,
            snapshot.busy_doctor_ids,
            specialty=snapshot.specialty,
        )
        if selected is None:
            rejections.append(BookingRejection.NO_DOCTOR_AVAILABLE)
        else:
            doctor_id = selected.id

    failed = [r for r in rejections if r is not None]

    return BookingDecision(
        allowed=not failed,
        doctor_id=doctor_id if not failed else None,
        rejections=failed,
    )
