"""Pydantic schemas for postal addresses."""

from pydantic import BaseModel, Field

from clinic.models.address import Address


class AddressData(BaseModel):
    """Full address supplied when registering a patient or doctor."""

    street: str = Field(..., min_length=1, max_length=150)
    neighbourhood: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., pattern=r"^\d{8}$", description="8 digits, no separator")
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., pattern=r"^[A-Z]{2}$", description="Two-letter state code")
    number: str | None = Field(None, max_length=20)
    complement: str | None = Field(None, max_length=100)

    def to_address(self) -> Address:
        """Build the immutable address value."""
        return Address(**self.model_dump())


class AddressUpdate(BaseModel):
    """Partial address; fields left out keep their current value."""

    street: str | None = Field(None, min_length=1, max_length=150)
    neighbourhood: str | None = Field(None, min_length=1, max_length=100)
    postal_code: str | None = Field(None, pattern=r"^\d{8}$")
    city: str | None = Field(None, min_length=1, max_length=100)
    state: str | None = Field(None, pattern=r"^[A-Z]{2}$")
    number: str | None = Field(None, max_length=20)
    complement: str | None = Field(None, max_length=100)


class AddressRead(BaseModel):
    """Address as returned by the API."""

    street: str
    neighbourhood: str
    postal_code: str
    city: str
    state: str
    number: str | None
    complement: str | None

    model_config = {"from_attributes": True}
