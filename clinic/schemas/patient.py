"""Pydantic schemas for patient operations."""

from pydantic import BaseModel, EmailStr, Field

from clinic.schemas.address import AddressData, AddressRead, AddressUpdate


class PatientCreate(BaseModel):
    """Schema for registering a patient."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=8, max_length=20)
    document: str = Field(..., pattern=r"^\d{11}$", description="11-digit registration document")
    address: AddressData


class PatientUpdate(BaseModel):
    """Schema for updating a patient; only name, phone and address may change."""

    id: int
    name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, min_length=8, max_length=20)
    address: AddressUpdate | None = None


class PatientSummary(BaseModel):
    """Patient row in a listing."""

    id: int
    name: str
    email: str
    document: str

    model_config = {"from_attributes": True}


class PatientRead(BaseModel):
    """Full patient record."""

    id: int
    name: str
    email: str
    phone: str
    document: str
    address: AddressRead
    active: bool

    model_config = {"from_attributes": True}
