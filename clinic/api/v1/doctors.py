"""Doctor record endpoints."""

from fastapi import APIRouter, Response, status

from clinic.api.deps import CurrentUser, DbSession, Pagination
from clinic.schemas.common import Page
from clinic.schemas.doctor import DoctorCreate, DoctorRead, DoctorSummary, DoctorUpdate
from clinic.services.doctors import DoctorService

router = APIRouter()


@router.post(
    "",
    response_model=DoctorRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register doctor",
)
async def create_doctor(
    data: DoctorCreate,
    session: DbSession,
    user: CurrentUser,
) -> DoctorRead:
    """Register a new doctor."""
    service = DoctorService(session, actor_id=user.id)
    doctor = await service.create(data)
    return DoctorRead.model_validate(doctor)


@router.get(
    "",
    response_model=Page[DoctorSummary],
    summary="List active doctors",
    description="Active doctors only, sorted by name",
)
async def list_doctors(
    session: DbSession,
    pagination: Pagination,
) -> Page[DoctorSummary]:
    """List one page of active doctors."""
    service = DoctorService(session)
    doctors, total = await service.list_active(pagination.page, pagination.size)
    return Page[DoctorSummary].build(
        [DoctorSummary.model_validate(d) for d in doctors],
        total=total,
        page=pagination.page,
        size=pagination.size,
    )


@router.get(
    "/{doctor_id}",
    response_model=DoctorRead,
    summary="Get doctor",
    description="Returns the doctor whether active or not",
)
async def get_doctor(doctor_id: int, session: DbSession) -> DoctorRead:
    """Get a single doctor by id."""
    service = DoctorService(session)
    doctor = await service.get(doctor_id)
    return DoctorRead.model_validate(doctor)


@router.put(
    "",
    response_model=DoctorRead,
    summary="Update doctor",
)
async def update_doctor(
    data: DoctorUpdate,
    session: DbSession,
    user: CurrentUser,
) -> DoctorRead:
    """Update name, phone and address of a doctor."""
    service = DoctorService(session, actor_id=user.id)
    doctor = await service.update(data)
    return DoctorRead.model_validate(doctor)


@router.delete(
    "/logically/{doctor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Deactivate doctor",
)
async def deactivate_doctor(
    doctor_id: int,
    session: DbSession,
    user: CurrentUser,
) -> Response:
    """Soft delete a doctor; existing appointments keep their reference."""
    service = DoctorService(session, actor_id=user.id)
    await service.deactivate(doctor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{doctor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete doctor",
    description="Physically removes the doctor; refused while appointments reference it",
)
async def delete_doctor(
    doctor_id: int,
    session: DbSession,
    user: CurrentUser,
) -> Response:
    """Hard delete a doctor."""
    service = DoctorService(session, actor_id=user.id)
    await service.delete(doctor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
