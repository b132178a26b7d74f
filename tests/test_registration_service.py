"""Tests for patient and doctor registration with a mocked session."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from clinic.core.exceptions import ConflictError
from clinic.schemas.doctor import DoctorCreate
from clinic.schemas.patient import PatientCreate
from clinic.services.doctors import DoctorService
from clinic.services.patients import PatientService
from factories import doctor_payload, patient_payload


def _session_losing_insert_race(message: str) -> AsyncMock:
    """Session whose pre-check finds nothing but whose commit hits the unique index."""
    mock_session = AsyncMock()
    mock_session.add = MagicMock()
    mock_session.execute = AsyncMock(
        return_value=MagicMock(scalar_one_or_none=MagicMock(return_value=None))
    )
    mock_session.commit = AsyncMock(
        side_effect=IntegrityError("INSERT ...", {}, Exception(message))
    )
    return mock_session


class TestRegistrationRace:
    async def test_patient_document_taken_between_check_and_commit(self) -> None:
        mock_session = _session_losing_insert_race(
            "UNIQUE constraint failed: patients.document"
        )

        with pytest.raises(ConflictError) as exc_info:
            await PatientService(mock_session).create(PatientCreate(**patient_payload()))

        assert exc_info.value.status_code == 409
        assert exc_info.value.detail == "patient with this document already exists"
        mock_session.rollback.assert_awaited_once()
        mock_session.refresh.assert_not_called()

    async def test_doctor_code_taken_between_check_and_commit(self) -> None:
        mock_session = _session_losing_insert_race(
            "UNIQUE constraint failed: doctors.registration_code"
        )

        with pytest.raises(ConflictError) as exc_info:
            await DoctorService(mock_session).create(DoctorCreate(**doctor_payload()))

        assert exc_info.value.status_code == 409
        assert exc_info.value.detail == "doctor with this registration code already exists"
        mock_session.rollback.assert_awaited_once()
        mock_session.refresh.assert_not_called()
