"""Domain models for rental-property management."""

from mhimmo.models.rental import Contract, Message, Payment, Property, User

__all__ = ["Contract", "Message", "Payment", "Property", "User"]
