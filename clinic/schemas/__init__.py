"""Pydantic schemas for request/response validation."""

from clinic.schemas.address import AddressData, AddressRead, AddressUpdate
from clinic.schemas.appointment import AppointmentCancel, AppointmentCreate, AppointmentRead
from clinic.schemas.auth import LoginRequest, TokenResponse
from clinic.schemas.common import Page
from clinic.schemas.doctor import DoctorCreate, DoctorRead, DoctorSummary, DoctorUpdate
from clinic.schemas.patient import PatientCreate, PatientRead, PatientSummary, PatientUpdate

__all__ = [
    "AddressData",
    "AddressRead",
    "AddressUpdate",
    "AppointmentCancel",
    "AppointmentCreate",
    "AppointmentRead",
    "DoctorCreate",
    "DoctorRead",
    "DoctorSummary",
    "DoctorUpdate",
    "LoginRequest",
    "Page",
    "PatientCreate",
    "PatientRead",
    "PatientSummary",
    "PatientUpdate",
    "TokenResponse",
]
