"""Appointment booking and cancellation service.

Both flows read the current state, decide with the pure rules in
``clinic.booking`` and write inside one transaction. The patient row (and a
requested doctor row) is locked with SELECT ... FOR UPDATE while the rules
run; the partial unique indexes on ``appointments`` catch anything that
slips past, and that IntegrityError is reported as the matching conflict.
"""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.booking.cancellation import (
    CANCELLATION_MESSAGES,
    CancellationRejection,
    check_cancellation,
    parse_cancellation_reason,
)
from clinic.booking.policy import (
    REJECTION_MESSAGES,
    BookingDecision,
    BookingRejection,
    BookingSnapshot,
    DoctorCandidate,
    evaluate_booking,
)
from clinic.core.config import settings
from clinic.core.exceptions import BusinessRuleViolation, ConflictError, NotFoundError
from clinic.core.logging import audit_logger
from clinic.models.appointment import Appointment, AppointmentStatus
from clinic.models.doctor import Doctor, Specialty
from clinic.models.patient import Patient
from clinic.utils.time import clinic_now, to_clinic_time, utc_now

logger = logging.getLogger(__name__)

# Selections made without a named doctor, including the first
AUTO_SELECT_ATTEMPTS = 2


def _is_doctor_slot_violation(exc: IntegrityError) -> bool:
    """Whether the violated unique index is the doctor slot one."""
    return "doctor" in str(exc.orig)


class BookingRejectedError(BusinessRuleViolation):
    """Raised when a booking rule rejects the proposed appointment."""

    def __init__(self, decision: BookingDecision) -> None:
        super().__init__(decision.message)
        self.decision = decision
        if decision.is_conflict:
            self.status_code = ConflictError.status_code


class AppointmentService:
    """Service for booking, reading and cancelling appointments."""

    def __init__(self, session: AsyncSession, actor_id: int | None = None) -> None:
        self.session = session
        self.actor_id = actor_id

    async def get(self, appointment_id: int) -> Appointment:
        """Get a single appointment by id."""
        appointment = await self.session.get(Appointment, appointment_id)
        if appointment is None:
            raise NotFoundError(CANCELLATION_MESSAGES[CancellationRejection.APPOINTMENT_NOT_FOUND])
        return appointment

    async def build_snapshot(
        self,
        patient_id: int,
        doctor_id: int | None,
        date_time: datetime,
        specialty: Specialty | None = None,
    ) -> BookingSnapshot:
        """Read everything the booking rules need, locking the rows involved."""
        patient = await self.session.get(Patient, patient_id, with_for_update=True)

        has_appointment_that_day = False
        if patient is not None:
            result = await self.session.execute(
                select(Appointment.id)
                .where(
                    Appointment.patient_id == patient_id,
                    Appointment.scheduled_date == date_time.date(),
                    Appointment.status != AppointmentStatus.CANCELLED.value,
                )
                .limit(1)
            )
            has_appointment_that_day = result.scalar_one_or_none() is not None

        result = await self.session.execute(
            select(Appointment.doctor_id).where(
                Appointment.date_time == date_time,
                Appointment.status != AppointmentStatus.CANCELLED.value,
            )
        )
        busy_doctor_ids = frozenset(result.scalars().all())

        requested_doctor: DoctorCandidate | None = None
        candidates: tuple[DoctorCandidate, ...] = ()

        if doctor_id is not None:
            doctor = await self.session.get(Doctor, doctor_id, with_for_update=True)
            if doctor is not None:
                requested_doctor = DoctorCandidate(
                    id=doctor.id, active=doctor.active, specialty=doctor.specialty
                )
        else:
            query = select(Doctor).where(Doctor.active == True)  # noqa: E712
            if specialty is not None:
                query = query.where(Doctor.specialty == specialty.value)
            result = await self.session.execute(query.order_by(Doctor.id))
            candidates = tuple(
                DoctorCandidate(id=d.id, active=d.active, specialty=d.specialty)
                for d in result.scalars().all()
            )

        return BookingSnapshot(
            date_time=date_time,
            now=clinic_now(),
            patient_active=patient.active if patient is not None else None,
            patient_has_appointment_that_day=has_appointment_that_day,
            requested_doctor_id=doctor_id,
            requested_doctor=requested_doctor,
            candidates=candidates,
            busy_doctor_ids=busy_doctor_ids,
            specialty=specialty.value if specialty is not None else None,
        )

    async def book(
        self,
        patient_id: int,
        date_time: datetime,
        doctor_id: int | None = None,
        specialty: Specialty | None = None,
    ) -> Appointment:
        """Book an appointment after every booking rule has passed.

        When no doctor is named and a concurrent booking takes the selected
        doctor's slot first, the rules run once more against fresh state so
        the next free doctor is chosen.

        Raises:
            BookingRejectedError: If any rule fails; nothing is written
            ConflictError: If a concurrent booking took the slot first
        """
        date_time = to_clinic_time(date_time)
        attempts = 1 if doctor_id is not None else AUTO_SELECT_ATTEMPTS

        for attempt in range(1, attempts + 1):
            snapshot = await self.build_snapshot(patient_id, doctor_id, date_time, specialty)
            decision = evaluate_booking(
                snapshot,
                opening=settings.opening_time,
                closing=settings.closing_time,
            )

            if not decision.allowed:
                logger.info(
                    f"Booking rejected for patient {patient_id} at {date_time}: "
                    f"{[r.value for r in decision.rejections]}"
                )
                raise BookingRejectedError(decision)

            appointment = Appointment(
                patient_id=patient_id,
                doctor_id=decision.doctor_id,
                date_time=date_time,
                scheduled_date=date_time.date(),
                status=AppointmentStatus.OPEN.value,
            )
            self.session.add(appointment)

            try:
                await self.session.commit()
            except IntegrityError as exc:
                await self.session.rollback()
                slot_taken = _is_doctor_slot_violation(exc)
                if slot_taken and attempt < attempts:
                    logger.info(
                        f"Doctor {decision.doctor_id} taken at {date_time} by a "
                        f"concurrent booking, selecting again"
                    )
                    continue
                raise ConflictError(self._conflict_message(slot_taken, doctor_id)) from exc

            break

        await self.session.refresh(appointment)

        audit_logger.log(
            "appointment_booked",
            self.actor_id,
            "appointment",
            appointment.id,
            metadata={
                "patient_id": patient_id,
                "doctor_id": appointment.doctor_id,
                "date_time": date_time.isoformat(),
                "doctor_auto_selected": doctor_id is None,
            },
        )
        return appointment

    @staticmethod
    def _conflict_message(slot_taken: bool, requested_doctor_id: int | None) -> str:
        """Name the rule a unique-index violation corresponds to."""
        if not slot_taken:
            return REJECTION_MESSAGES[BookingRejection.PATIENT_ALREADY_BOOKED]
        if requested_doctor_id is None:
            return REJECTION_MESSAGES[BookingRejection.NO_DOCTOR_AVAILABLE]
        return REJECTION_MESSAGES[BookingRejection.DOCTOR_UNAVAILABLE]

    async def cancel(self, appointment_id: int, reason: str | None) -> Appointment:
        """Cancel an appointment, keeping the row.

        Raises:
            NotFoundError: If the appointment does not exist
            BusinessRuleViolation: If the reason is not a recognised code
            ConflictError: If the appointment is already cancelled or closed
        """
        result = await self.session.execute(
            select(Appointment)
            .where(Appointment.id == appointment_id)
            .with_for_update()
        )
        appointment = result.scalar_one_or_none()

        rejection = check_cancellation(
            appointment.status if appointment is not None else None,
            reason,
        )

        if rejection is not None:
            message = CANCELLATION_MESSAGES[rejection]
            if rejection == CancellationRejection.APPOINTMENT_NOT_FOUND:
                raise NotFoundError(message)
            if rejection == CancellationRejection.ALREADY_FINALIZED:
                raise ConflictError(message)
            raise BusinessRuleViolation(message)

        reason_code = parse_cancellation_reason(reason)
        appointment.cancel(reason_code, cancelled_at=utc_now())
        await self.session.commit()

        audit_logger.log(
            "appointment_cancelled",
            self.actor_id,
            "appointment",
            appointment_id,
            metadata={"reason": reason_code.value},
        )
        return appointment
