"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal
from typing import Any

import pytest

from mhimmo.bootstrap import bootstrap_store
from mhimmo.models.rental import Role, User
from mhimmo.persistence import MemoryBackend, PersistenceAdapter
from mhimmo.store.rental import RentalDataStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def store() -> RentalDataStore:
    """Store holding the bootstrap data set."""
    return bootstrap_store()


@pytest.fixture
def empty_store() -> RentalDataStore:
    """Store with no records."""
    return RentalDataStore()


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def adapter(backend: MemoryBackend) -> PersistenceAdapter:
    return PersistenceAdapter(backend)


@pytest.fixture
def property_fields() -> dict[str, Any]:
    """Keyword arguments for create_property."""
    return {
        "address": "12 Rue Oberkampf",
        "city": "Paris",
        "postal_code": "75011",
        "type": "loft",
        "price": Decimal("1850"),
        "deposit": Decimal("3700"),
        "surface": Decimal("72.5"),
        "rooms": 3,
        "description": "Loft sous verrière",
    }


@pytest.fixture
def contract_dates() -> dict[str, date]:
    return {"start_date": date(2024, 9, 1), "end_date": date(2027, 8, 31)}


@pytest.fixture
def owner(store: RentalDataStore) -> User:
    return store.get_user("admin-1")


@pytest.fixture
def manager(store: RentalDataStore) -> User:
    return store.get_user("manager-1")


@pytest.fixture
def tenant(store: RentalDataStore) -> User:
    return store.get_user("tenant-1")


@pytest.fixture
def people(empty_store: RentalDataStore) -> dict[str, User]:
    """One user per role in an otherwise empty store."""
    return {
        "owner": empty_store.create_user("Olivia Owner", "olivia@example.com", Role.OWNER),
        "manager": empty_store.create_user("Mark Manager", "mark@example.com", Role.MANAGER),
        "tenant": empty_store.create_user("Tina Tenant", "tina@example.com", Role.TENANT),
    }
