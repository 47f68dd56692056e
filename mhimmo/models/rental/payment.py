"""Payment model for rental domain."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from mhimmo.models.rental.enums import PaymentStatus, PaymentType


@dataclass
class Payment:
    """Tenant payment record (reporting input only)."""

    id: str
    tenant_id: str
    property_id: str
    amount: Decimal
    date: date
    status: PaymentStatus
    type: PaymentType
