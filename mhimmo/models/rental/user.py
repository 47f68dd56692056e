"""User model for rental domain."""

from dataclasses import dataclass
from datetime import datetime

from mhimmo.models.rental.enums import Role


@dataclass
class User:
    """Owner, manager or tenant account."""

    id: str
    name: str
    email: str
    role: Role  # immutable after creation
    created_at: datetime
    phone: str | None = None
