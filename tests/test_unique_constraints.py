"""Storage-level uniqueness for live appointments.

The partial unique indexes are the backstop behind the booking rules:
they reject a second live appointment for the same doctor slot or the
same patient day, and ignore cancelled rows.
"""

from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.models.appointment import Appointment, AppointmentStatus, CancellationReason
from clinic.models.doctor import Doctor
from clinic.models.patient import Patient
from clinic.utils.time import utc_now
from factories import make_address

WHEN = datetime(2030, 1, 7, 10, 0)


def appointment(patient_id: int, doctor_id: int, when: datetime = WHEN, **kwargs) -> Appointment:
    return Appointment(
        patient_id=patient_id,
        doctor_id=doctor_id,
        date_time=when,
        scheduled_date=when.date(),
        **kwargs,
    )


async def add_patient(session: AsyncSession, document: str) -> int:
    patient = Patient(
        name=f"Patient {document}",
        email=f"p{document}@example.com",
        phone="11900000000",
        document=document,
        address=make_address(),
    )
    session.add(patient)
    await session.commit()
    return patient.id


async def test_doctor_slot_is_unique(
    async_session: AsyncSession, test_doctor: Doctor
) -> None:
    doctor_id = test_doctor.id
    first = await add_patient(async_session, "10000000001")
    second = await add_patient(async_session, "10000000002")

    async_session.add(appointment(first, doctor_id))
    await async_session.commit()

    async_session.add(appointment(second, doctor_id))
    with pytest.raises(IntegrityError):
        await async_session.commit()
    await async_session.rollback()


async def test_patient_day_is_unique(
    async_session: AsyncSession, make_doctor
) -> None:
    first = (await make_doctor("Dr A", "5001")).id
    second = (await make_doctor("Dr B", "5002")).id
    patient_id = await add_patient(async_session, "10000000003")

    async_session.add(appointment(patient_id, first))
    await async_session.commit()

    async_session.add(appointment(patient_id, second, WHEN.replace(hour=15)))
    with pytest.raises(IntegrityError):
        await async_session.commit()
    await async_session.rollback()


async def test_cancelled_rows_do_not_block(
    async_session: AsyncSession, test_doctor: Doctor
) -> None:
    doctor_id = test_doctor.id
    patient_id = await add_patient(async_session, "10000000004")

    cancelled = appointment(patient_id, doctor_id)
    cancelled.cancel(CancellationReason.OTHER, cancelled_at=utc_now())
    async_session.add(cancelled)
    await async_session.commit()

    replacement = appointment(patient_id, doctor_id)
    async_session.add(replacement)
    await async_session.commit()

    assert replacement.id != cancelled.id
    assert replacement.status == AppointmentStatus.OPEN.value
