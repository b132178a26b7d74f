"""Appointment booking and cancellation endpoints."""

from fastapi import APIRouter, Response, status

from clinic.api.deps import CurrentUser, DbSession
from clinic.schemas.appointment import AppointmentCancel, AppointmentCreate, AppointmentRead
from clinic.services.appointments import AppointmentService

router = APIRouter()


@router.post(
    "",
    response_model=AppointmentRead,
    status_code=status.HTTP_200_OK,
    summary="Book appointment",
    description=(
        "Books an appointment for a patient. Without doctor_id the first free "
        "active doctor (optionally of the given specialty) is assigned."
    ),
)
async def book_appointment(
    data: AppointmentCreate,
    session: DbSession,
    user: CurrentUser,
) -> AppointmentRead:
    """Book an appointment.

    Rule failures are raised as ``BookingRejectedError`` and rendered by the
    application error handler (400, or 409 for slot and availability
    conflicts).
    """
    service = AppointmentService(session, actor_id=user.id)
    appointment = await service.book(
        patient_id=data.patient_id,
        date_time=data.date_time,
        doctor_id=data.doctor_id,
        specialty=data.specialty,
    )
    return AppointmentRead.model_validate(appointment)


@router.get(
    "/{appointment_id}",
    response_model=AppointmentRead,
    summary="Get appointment",
)
async def get_appointment(appointment_id: int, session: DbSession) -> AppointmentRead:
    """Get a single appointment by id."""
    service = AppointmentService(session)
    appointment = await service.get(appointment_id)
    return AppointmentRead.model_validate(appointment)


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Cancel appointment",
)
async def cancel_appointment(
    data: AppointmentCancel,
    session: DbSession,
    user: CurrentUser,
) -> Response:
    """Cancel an appointment with a reason; the record is kept."""
    service = AppointmentService(session, actor_id=user.id)
    await service.cancel(data.appointment_id, data.reason)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
