"""Demo data generators for the rental domain."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Iterator

from mhimmo.generators.base import BaseGenerator
from mhimmo.models.rental import PropertyType, Role
from mhimmo.store.rental import RentalDataStore

logger = logging.getLogger(__name__)


class UserGenerator(BaseGenerator):
    """Generate user creation fields."""

    def generate(self, role: Role = Role.TENANT) -> dict[str, Any]:
        first = self.fake.first_name()
        last = self.fake.last_name()
        return {
            "name": f"{first} {last}",
            "email": self.fake.unique.email(),
            "role": role,
            "phone": self.fake.phone_number(),
        }

    def generate_batch(self, count: int, role: Role = Role.TENANT) -> Iterator[dict[str, Any]]:
        """Generate fields for ``count`` users.

        Parameters
        ----------
        count : int
            Number of users to generate.
        role : Role
            Role of every generated user.

        Yields
        ------
        dict
            Keyword arguments for ``RentalDataStore.create_user``.
        """
        for _ in range(count):
            yield self.generate(role)


class PropertyGenerator(BaseGenerator):
    """Generate property creation fields with plausible prices."""

    PROPERTY_TYPES = list(PropertyType)
    TYPE_WEIGHTS = [0.50, 0.20, 0.20, 0.10]

    # (surface m2, rooms) ranges per type
    LAYOUTS = {
        PropertyType.APARTMENT: ((35, 110), (2, 5)),
        PropertyType.HOUSE: ((80, 200), (4, 7)),
        PropertyType.STUDIO: ((15, 35), (1, 1)),
        PropertyType.LOFT: ((60, 150), (2, 4)),
    }

    RENT_PER_SQM = (Decimal("12"), Decimal("32"))

    def generate(self) -> dict[str, Any]:
        prop_type = self.rng.choices(self.PROPERTY_TYPES, weights=self.TYPE_WEIGHTS)[0]
        (min_sqm, max_sqm), (min_rooms, max_rooms) = self.LAYOUTS[prop_type]
        surface = self.rng.randint(min_sqm, max_sqm)
        low, high = self.RENT_PER_SQM
        rate = low + (high - low) * Decimal(str(round(self.rng.random(), 2)))
        price = (rate * surface).quantize(Decimal("1"))

        return {
            "address": self.fake.street_address(),
            "city": self.fake.city(),
            "postal_code": self.fake.postcode(),
            "type": prop_type,
            "price": price,
            "deposit": price * 2,
            "surface": Decimal(surface),
            "rooms": self.rng.randint(min_rooms, max_rooms),
            "description": self.fake.sentence(nb_words=12),
        }

    def generate_batch(self, count: int) -> Iterator[dict[str, Any]]:
        for _ in range(count):
            yield self.generate()


@dataclass
class PopulationResult:
    tenants: int
    properties: int
    contracts: int
    messages: int


def populate_store(
    store: RentalDataStore,
    tenants: int = 10,
    properties: int = 12,
    occupancy: float = 0.75,
    seed: int | None = None,
) -> PopulationResult:
    """Add demo tenants, properties, contracts and greetings to ``store``.

    Goes through the store's ``create_*`` operations, so attached mirrors
    see every write. A share ``occupancy`` of the new tenants get a
    contract on one of the new properties.
    """
    users = UserGenerator(seed=seed)
    props = PropertyGenerator(seed=seed)

    if not store.list_users(Role.MANAGER):
        store.create_user(**users.generate(Role.MANAGER))
    manager = store.list_users(Role.MANAGER)[0]

    new_tenants = [store.create_user(**fields) for fields in users.generate_batch(tenants)]
    new_props = [store.create_property(**fields) for fields in props.generate_batch(properties)]

    to_house = min(len(new_props), int(len(new_tenants) * occupancy))
    contracts = 0
    messages = 0
    for tenant, prop in zip(new_tenants[:to_house], new_props[:to_house]):
        start = date.today().replace(day=1) - timedelta(days=props.rng.randint(0, 720))
        store.create_contract(
            tenant_id=tenant.id,
            property_id=prop.id,
            start_date=start.replace(day=1),
            rent=prop.price,
            deposit=prop.deposit,
        )
        contracts += 1
        store.create_message(
            sender_id=manager.id,
            recipient_id=tenant.id,
            content=f"Bienvenue {tenant.name}, votre bail pour {prop.address} est actif.",
        )
        messages += 1

    result = PopulationResult(
        tenants=len(new_tenants),
        properties=len(new_props),
        contracts=contracts,
        messages=messages,
    )
    logger.info("Populated store: %s", result)
    return result
