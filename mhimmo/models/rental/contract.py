"""Lease contract model for rental domain."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass
class Contract:
    """Lease binding a tenant to a property."""

    id: str
    tenant_id: str
    property_id: str
    start_date: date
    rent: Decimal
    deposit: Decimal
    created_at: datetime
    end_date: date | None = None  # Open-ended when absent
