"""Request schemas with field-level validation for API boundaries.

Amounts must be strictly positive; unknown fields are ignored, so a
client-supplied ``status`` on a property never reaches the store.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mhimmo.models.rental import MessageType, PropertyType, Role


class LoginRequest(BaseModel):
    email: str
    password: str


class UserCreate(BaseModel):
    """User creation by an owner."""
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    role: Role
    phone: str | None = None


class PropertyCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    type: PropertyType
    price: Decimal = Field(gt=0)
    deposit: Decimal = Field(gt=0)
    surface: Decimal = Field(gt=0)
    rooms: int = Field(gt=0)
    description: str = ""


class ContractCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tenant_id: str = Field(min_length=1)
    property_id: str = Field(min_length=1)
    start_date: date
    end_date: date | None = None
    rent: Decimal = Field(gt=0)
    deposit: Decimal = Field(gt=0)


class MessageCreate(BaseModel):
    recipient_id: str = Field(min_length=1)
    content: str
    type: MessageType = MessageType.TEXT

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("content cannot be empty or whitespace")
        return v
