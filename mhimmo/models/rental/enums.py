"""Enumeration types for rental domain entities."""

from enum import Enum


class Role(str, Enum):
    OWNER = "owner"
    MANAGER = "manager"
    TENANT = "tenant"


class PropertyType(str, Enum):
    APARTMENT = "apartment"
    HOUSE = "house"
    STUDIO = "studio"
    LOFT = "loft"


class PropertyStatus(str, Enum):
    OCCUPIED = "occupied"
    VACANT = "vacant"


class MessageType(str, Enum):
    TEXT = "text"
    FILE = "file"
    IMAGE = "image"


class PaymentStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"
    LATE = "late"


class PaymentType(str, Enum):
    RENT = "rent"
    DEPOSIT = "deposit"
    CHARGES = "charges"
