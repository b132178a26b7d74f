"""API v1 router aggregating all endpoints."""

from fastapi import APIRouter, Depends

from clinic.api.deps import get_current_user
from clinic.api.v1 import appointments, auth, doctors, health, patients

api_router = APIRouter()

# Health check
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"],
)

# Authentication
api_router.include_router(
    auth.router,
    tags=["auth"],
)

# Records (token required)
api_router.include_router(
    patients.router,
    prefix="/patients",
    tags=["patients"],
    dependencies=[Depends(get_current_user)],
)

api_router.include_router(
    doctors.router,
    prefix="/doctors",
    tags=["doctors"],
    dependencies=[Depends(get_current_user)],
)

# Appointments (token required)
api_router.include_router(
    appointments.router,
    prefix="/appointments",
    tags=["appointments"],
    dependencies=[Depends(get_current_user)],
)
