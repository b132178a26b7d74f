"""Patient record service."""

import logging
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.exceptions import ConflictError, NotFoundError
from clinic.core.logging import audit_logger
from clinic.models.patient import Patient
from clinic.schemas.patient import PatientCreate, PatientUpdate

logger = logging.getLogger(__name__)


class PatientService:
    """CRUD for patients. Deletion is always logical."""

    def __init__(self, session: AsyncSession, actor_id: int | None = None) -> None:
        self.session = session
        self.actor_id = actor_id

    async def create(self, data: PatientCreate) -> Patient:
        """Register a new patient."""
        existing = await self.session.execute(
            select(Patient.id).where(Patient.document == data.document)
        )
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("patient with this document already exists")

        patient = Patient(
            name=data.name,
            email=str(data.email).lower(),
            phone=data.phone,
            document=data.document,
            address=data.address.to_address(),
            active=True,
        )
        self.session.add(patient)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            # A concurrent registration took the document first
            await self.session.rollback()
            raise ConflictError("patient with this document already exists") from exc
        await self.session.refresh(patient)

        audit_logger.log("patient_registered", self.actor_id, "patient", patient.id)
        return patient

    async def list_active(self, page: int, size: int) -> tuple[Sequence[Patient], int]:
        """Return one page of active patients sorted by name, and the total count."""
        total = await self.session.scalar(
            select(func.count()).select_from(Patient).where(Patient.active == True)  # noqa: E712
        )

        result = await self.session.execute(
            select(Patient)
            .where(Patient.active == True)  # noqa: E712
            .order_by(Patient.name, Patient.id)
            .offset(page * size)
            .limit(size)
        )
        return result.scalars().all(), total or 0

    async def get(self, patient_id: int) -> Patient:
        """Get a patient by id whether active or not."""
        patient = await self.session.get(Patient, patient_id)
        if patient is None:
            raise NotFoundError("patient not found")
        return patient

    async def update(self, data: PatientUpdate) -> Patient:
        """Apply the non-null fields of an update."""
        patient = await self.get(data.id)

        if data.name is not None:
            patient.name = data.name
        if data.phone is not None:
            patient.phone = data.phone
        if data.address is not None:
            patient.address = patient.address.merged(data.address.model_dump())

        await self.session.commit()
        await self.session.refresh(patient)

        audit_logger.log("patient_updated", self.actor_id, "patient", patient.id)
        return patient

    async def deactivate(self, patient_id: int) -> None:
        """Soft delete a patient; the record stays readable by id."""
        patient = await self.get(patient_id)

        if not patient.active:
            logger.info(f"Patient {patient_id} already inactive")
            return

        patient.deactivate()
        await self.session.commit()

        audit_logger.log("patient_deactivated", self.actor_id, "patient", patient_id)
