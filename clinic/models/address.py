"""Postal address value embedded in patient and doctor records."""

import dataclasses
from dataclasses import dataclass
from typing import Any

from sqlalchemy import String
from sqlalchemy.orm import composite, mapped_column


@dataclass(frozen=True)
class Address:
    """Immutable postal address.

    Has no identity of its own; it is stored in the ``address_*`` columns of
    the owning row and replaced as a whole when it changes.
    """

    street: str
    neighbourhood: str
    postal_code: str
    city: str
    state: str
    number: str | None = None
    complement: str | None = None

    def merged(self, changes: dict[str, Any]) -> "Address":
        """Return a new address with the non-null values in ``changes`` applied."""
        updates = {
            key: value
            for key, value in changes.items()
            if value is not None and key in ADDRESS_FIELDS
        }
        return dataclasses.replace(self, **updates)


ADDRESS_FIELDS = tuple(f.name for f in dataclasses.fields(Address))


def address_composite():
    """Map an ``Address`` onto ``address_*`` columns of the owning table."""
    return composite(
        Address,
        mapped_column("address_street", String(150), nullable=False),
        mapped_column("address_neighbourhood", String(100), nullable=False),
        mapped_column("address_postal_code", String(8), nullable=False),
        mapped_column("address_city", String(100), nullable=False),
        mapped_column("address_state", String(2), nullable=False),
        mapped_column("address_number", String(20), nullable=True),
        mapped_column("address_complement", String(100), nullable=True),
    )
