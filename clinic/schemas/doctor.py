"""Pydantic schemas for doctor operations."""

from pydantic import BaseModel, EmailStr, Field

from clinic.models.doctor import Specialty
from clinic.schemas.address import AddressData, AddressRead, AddressUpdate


class DoctorCreate(BaseModel):
    """Schema for registering a doctor."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=8, max_length=20)
    registration_code: str = Field(
        ..., pattern=r"^\d{4,6}$", description="Professional registration, 4 to 6 digits"
    )
    specialty: Specialty
    address: AddressData


class DoctorUpdate(BaseModel):
    """Schema for updating a doctor; only name, phone and address may change."""

    id: int
    name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, min_length=8, max_length=20)
    address: AddressUpdate | None = None


class DoctorSummary(BaseModel):
    """Doctor row in a listing."""

    id: int
    name: str
    email: str
    registration_code: str
    specialty: Specialty

    model_config = {"from_attributes": True}


class DoctorRead(BaseModel):
    """Full doctor record."""

    id: int
    name: str
    email: str
    phone: str
    registration_code: str
    specialty: Specialty
    address: AddressRead
    active: bool

    model_config = {"from_attributes": True}
