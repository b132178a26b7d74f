"""Patient record endpoints."""

from fastapi import APIRouter, Response, status

from clinic.api.deps import CurrentUser, DbSession, Pagination
from clinic.schemas.common import Page
from clinic.schemas.patient import PatientCreate, PatientRead, PatientSummary, PatientUpdate
from clinic.services.patients import PatientService

router = APIRouter()


@router.post(
    "",
    response_model=PatientRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register patient",
)
async def create_patient(
    data: PatientCreate,
    session: DbSession,
    user: CurrentUser,
) -> PatientRead:
    """Register a new patient."""
    service = PatientService(session, actor_id=user.id)
    patient = await service.create(data)
    return PatientRead.model_validate(patient)


@router.get(
    "",
    response_model=Page[PatientSummary],
    summary="List active patients",
    description="Active patients only, sorted by name",
)
async def list_patients(
    session: DbSession,
    pagination: Pagination,
) -> Page[PatientSummary]:
    """List one page of active patients."""
    service = PatientService(session)
    patients, total = await service.list_active(pagination.page, pagination.size)
    return Page[PatientSummary].build(
        [PatientSummary.model_validate(p) for p in patients],
        total=total,
        page=pagination.page,
        size=pagination.size,
    )


@router.get(
    "/{patient_id}",
    response_model=PatientRead,
    summary="Get patient",
    description="Returns the patient whether active or not",
)
async def get_patient(patient_id: int, session: DbSession) -> PatientRead:
    """Get a single patient by id."""
    service = PatientService(session)
    patient = await service.get(patient_id)
    return PatientRead.model_validate(patient)


@router.put(
    "",
    response_model=PatientRead,
    summary="Update patient",
)
async def update_patient(
    data: PatientUpdate,
    session: DbSession,
    user: CurrentUser,
) -> PatientRead:
    """Update name, phone and address of a patient."""
    service = PatientService(session, actor_id=user.id)
    patient = await service.update(data)
    return PatientRead.model_validate(patient)


@router.delete(
    "/{patient_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Deactivate patient",
)
async def delete_patient(
    patient_id: int,
    session: DbSession,
    user: CurrentUser,
) -> Response:
    """Soft delete a patient."""
    service = PatientService(session, actor_id=user.id)
    await service.deactivate(patient_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
