"""Rental domain models."""

from mhimmo.models.rental.contract import Contract
from mhimmo.models.rental.enums import (
    MessageType,
    PaymentStatus,
    PaymentType,
    PropertyStatus,
    PropertyType,
    Role,
)
from mhimmo.models.rental.message import Message
from mhimmo.models.rental.payment import Payment
from mhimmo.models.rental.property import Property
from mhimmo.models.rental.user import User

__all__ = [
    "Contract",
    "Message",
    "MessageType",
    "Payment",
    "PaymentStatus",
    "PaymentType",
    "Property",
    "PropertyStatus",
    "PropertyType",
    "Role",
    "User",
]
