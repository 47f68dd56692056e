"""Property model for rental domain."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from mhimmo.models.rental.enums import PropertyStatus, PropertyType


@dataclass
class Property:
    """Rentable property.

    ``status`` and ``tenant_id`` mirror the active contract referencing the
    property: ``occupied`` with the contract's tenant, or ``vacant`` with no
    tenant. Only contract creation changes them.
    """

    id: str
    address: str
    city: str
    postal_code: str
    type: PropertyType
    price: Decimal  # Monthly rent asked
    deposit: Decimal
    surface: Decimal  # Square meters
    rooms: int
    description: str
    created_at: datetime
    status: PropertyStatus = PropertyStatus.VACANT
    tenant_id: str | None = None

    @property
    def is_occupied(self) -> bool:
        return self.status == PropertyStatus.OCCUPIED
