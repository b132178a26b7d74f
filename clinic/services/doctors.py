"""Doctor record service."""

import logging
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.exceptions import ConflictError, NotFoundError
from clinic.core.logging import audit_logger
from clinic.models.appointment import Appointment
from clinic.models.doctor import Doctor
from clinic.schemas.doctor import DoctorCreate, DoctorUpdate

logger = logging.getLogger(__name__)


class DoctorService:
    """CRUD for doctors.

    Doctors have two destruction paths: ``deactivate`` clears the active flag,
    ``delete`` removes the row and is refused while appointments reference it.
    """

    def __init__(self, session: AsyncSession, actor_id: int | None = None) -> None:
        self.session = session
        self.actor_id = actor_id

    async def create(self, data: DoctorCreate) -> Doctor:
        """Register a new doctor."""
        existing = await self.session.execute(
            select(Doctor.id).where(Doctor.registration_code == data.registration_code)
        )
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("doctor with this registration code already exists")

        doctor = Doctor(
            name=data.name,
            email=str(data.email).lower(),
            phone=data.phone,
            registration_code=data.registration_code,
            specialty=data.specialty.value,
            address=data.address.to_address(),
            active=True,
        )
        self.session.add(doctor)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            # A concurrent registration took the code first
            await self.session.rollback()
            raise ConflictError("doctor with this registration code already exists") from exc
        await self.session.refresh(doctor)

        audit_logger.log(
            "doctor_registered",
            self.actor_id,
            "doctor",
            doctor.id,
            metadata={"specialty": doctor.specialty},
        )
        return doctor

    async def list_active(self, page: int, size: int) -> tuple[Sequence[Doctor], int]:
        """Return one page of active doctors sorted by name, and the total count."""
        total = await self.session.scalar(
            select(func.count()).select_from(Doctor).where(Doctor.active == True)  # noqa: E712
        )

        result = await self.session.execute(
            select(Doctor)
            .where(Doctor.active == True)  # noqa: E712
            .order_by(Doctor.name, Doctor.id)
            .offset(page * size)
            .limit(size)
        )
        return result.scalars().all(), total or 0

    async def get(self, doctor_id: int) -> Doctor:
        """Get a doctor by id whether active or not."""
        doctor = await self.session.get(Doctor, doctor_id)
        if doctor is None:
            raise NotFoundError("doctor not found")
        return doctor

    async def update(self, data: DoctorUpdate) -> Doctor:
        """Apply the non-null fields of an update."""
        doctor = await self.get(data.id)

        if data.name is not None:
            doctor.name = data.name
        if data.phone is not None:
            doctor.phone = data.phone
        if data.address is not None:
            doctor.address = doctor.address.merged(data.address.model_dump())

        await self.session.commit()
        await self.session.refresh(doctor)

        audit_logger.log("doctor_updated", self.actor_id, "doctor", doctor.id)
        return doctor

    async def deactivate(self, doctor_id: int) -> None:
        """Soft delete a doctor; the record stays readable by id."""
        doctor = await self.get(doctor_id)

        if not doctor.active:
            logger.info(f"Doctor {doctor_id} already inactive")
            return

        doctor.deactivate()
        await self.session.commit()

        audit_logger.log("doctor_deactivated", self.actor_id, "doctor", doctor_id)

    async def delete(self, doctor_id: int) -> None:
        """Physically remove a doctor row.

        Raises:
            NotFoundError: If the doctor does not exist
            ConflictError: If any appointment still references the doctor
        """
        doctor = await self.get(doctor_id)

        referenced = await self.session.scalar(
            select(func.count())
            .select_from(Appointment)
            .where(Appointment.doctor_id == doctor_id)
        )
        if referenced:
            raise ConflictError("doctor has appointments and cannot be deleted")

        await self.session.delete(doctor)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("doctor has appointments and cannot be deleted")

        audit_logger.log("doctor_deleted", self.actor_id, "doctor", doctor_id)
