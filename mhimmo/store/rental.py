"""Rental domain data store with relationship tracking."""

import itertools
import logging
import time
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable

from mhimmo.exceptions import InvalidEntityStateError, ReferentialIntegrityError
from mhimmo.models.rental import (
    Contract,
    Message,
    MessageType,
    Payment,
    Property,
    PropertyStatus,
    PropertyType,
    Role,
    User,
)

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "properties", "contracts", "messages", "payments")

# Fields owned by the store, never merged by update_property
PROTECTED_PROPERTY_FIELDS = frozenset({"id", "status", "tenant_id", "created_at"})

_id_counter = itertools.count(1)

ChangeListener = Callable[[str], None]


def new_id(prefix: str) -> str:
    """Generate a process-unique identifier such as ``prop-18c3f2a1b9e4-7``."""
    return f"{prefix}-{time.time_ns():x}-{next(_id_counter)}"


def to_decimal(value: Any) -> Decimal:
    """Coerce an int/float/str amount to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _pair_key(user_a: str, user_b: str) -> tuple[str, str]:
    return (user_a, user_b) if user_a <= user_b else (user_b, user_a)


@dataclass
class RentalDataStore:
    """In-memory store for rental entities with relationship tracking.

    Mutations (``create_*``, ``update_property``) notify subscribed listeners
    with the name of each collection they touched. The ``add_*`` methods are
    the load path used by rehydration and bootstrap: they index records as
    given and notify nobody.
    """

    # Primary entities
    users: dict[str, User] = field(default_factory=dict)
    properties: dict[str, Property] = field(default_factory=dict)
    contracts: dict[str, Contract] = field(default_factory=dict)

    # Append-only records
    messages: list[Message] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)

    # Raise instead of skipping the occupancy update when a contract
    # references an unknown property or tenant
    strict_references: bool = False

    # Relationship indexes
    _property_contract: dict[str, str] = field(default_factory=dict)
    _tenant_contracts: dict[str, list[str]] = field(default_factory=dict)
    _pair_messages: dict[tuple[str, str], list[int]] = field(default_factory=dict)
    _tenant_payments: dict[str, list[int]] = field(default_factory=dict)

    _listeners: list[ChangeListener] = field(default_factory=list)

    # Change notification
    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callable invoked with the collection name after each mutation."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        """Remove a previously registered listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self, collection: str) -> None:
        """Tell listeners that ``collection`` changed."""
        for listener in list(self._listeners):
            listener(collection)

    # Load path
    def add_user(self, user: User) -> None:
        """Add a user to the store."""
        self.users[user.id] = user

    def add_property(self, prop: Property) -> None:
        """Add a property to the store."""
        self.properties[prop.id] = prop

    def add_contract(self, contract: Contract) -> None:
        """Add a contract to the store."""
        self.contracts[contract.id] = contract
        self._property_contract[contract.property_id] = contract.id
        self._tenant_contracts.setdefault(contract.tenant_id, []).append(contract.id)

    def add_message(self, message: Message) -> None:
        """Add a message to the store."""
        idx = len(self.messages)
        self.messages.append(message)
        key = _pair_key(message.sender_id, message.recipient_id)
        self._pair_messages.setdefault(key, []).append(idx)

    def add_payment(self, payment: Payment) -> None:
        """Add a payment to the store."""
        idx = len(self.payments)
        self.payments.append(payment)
        self._tenant_payments.setdefault(payment.tenant_id, []).append(idx)

    # Mutations
    def create_user(
        self,
        name: str,
        email: str,
        role: Role | str,
        phone: str | None = None,
    ) -> User:
        """Create a user with a generated id and the current timestamp.

        Email uniqueness is not enforced.
        """
        user = User(
            id=new_id("user"),
            name=name,
            email=email,
            role=Role(role),
            phone=phone,
            created_at=datetime.now(),
        )
        self.add_user(user)
        logger.info("Created user %s (%s)", user.id, user.role.value)
        self.notify("users")
        return user

    def create_property(
        self,
        address: str,
        city: str,
        postal_code: str,
        type: PropertyType | str,
        price: Decimal | int | float | str,
        deposit: Decimal | int | float | str,
        surface: Decimal | int | float | str,
        rooms: int,
        description: str = "",
        **ignored: Any,
    ) -> Property:
        """Create a vacant property.

        ``status`` and ``tenant_id`` passed by the caller are discarded: a new
        property has no contract and is therefore vacant.
        """
        if ignored:
            logger.debug("create_property ignoring fields: %s", sorted(ignored))
        prop = Property(
            id=new_id("prop"),
            address=address,
            city=city,
            postal_code=postal_code,
            type=PropertyType(type),
            price=to_decimal(price),
            deposit=to_decimal(deposit),
            surface=to_decimal(surface),
            rooms=int(rooms),
            description=description,
            status=PropertyStatus.VACANT,
            tenant_id=None,
            created_at=datetime.now(),
        )
        self.add_property(prop)
        logger.info("Created property %s in %s", prop.id, prop.city)
        self.notify("properties")
        return prop

    def create_contract(
        self,
        tenant_id: str,
        property_id: str,
        start_date: date,
        rent: Decimal | int | float | str,
        deposit: Decimal | int | float | str,
        end_date: date | None = None,
    ) -> Contract:
        """Create a contract and mark the referenced property occupied.

        The contract and the property are written as two separate
        notifications (``contracts`` then ``properties``). When the property
        does not exist the occupancy update is skipped, unless
        ``strict_references`` is set, in which case nothing is written.

        Raises
        ------
        InvalidEntityStateError
            If the property already has an active contract.
        ReferentialIntegrityError
            In strict mode, if the property or tenant is unknown.
        """
        prop = self.properties.get(property_id)
        if self.strict_references:
            if prop is None:
                raise ReferentialIntegrityError(f"Property {property_id} not found")
            if tenant_id not in self.users:
                raise ReferentialIntegrityError(f"Tenant {tenant_id} not found")

        active_id = self._property_contract.get(property_id)
        if active_id is not None:
            raise InvalidEntityStateError(
                f"Property {property_id} already has an active contract {active_id}"
            )

        contract = Contract(
            id=new_id("contract"),
            tenant_id=tenant_id,
            property_id=property_id,
            start_date=start_date,
            end_date=end_date,
            rent=to_decimal(rent),
            deposit=to_decimal(deposit),
            created_at=datetime.now(),
        )
        self.add_contract(contract)
        logger.info("Created contract %s for property %s", contract.id, property_id)
        self.notify("contracts")

        if prop is None:
            logger.warning(
                "Contract %s references unknown property %s; occupancy not updated",
                contract.id,
                property_id,
            )
            return contract

        prop.status = PropertyStatus.OCCUPIED
        prop.tenant_id = tenant_id
        self.notify("properties")
        return contract

    def create_message(
        self,
        sender_id: str,
        recipient_id: str,
        content: str,
        type: MessageType | str = MessageType.TEXT,
        **ignored: Any,
    ) -> Message:
        """Append a message. New messages are always unread."""
        if ignored:
            logger.debug("create_message ignoring fields: %s", sorted(ignored))
        message = Message(
            id=new_id("msg"),
            sender_id=sender_id,
            recipient_id=recipient_id,
            content=content,
            type=MessageType(type),
            created_at=datetime.now(),
            read=False,
        )
        self.add_message(message)
        self.notify("messages")
        return message

    def update_property(self, property_id: str, **updates: Any) -> Property | None:
        """Merge ``updates`` into a property.

        Unknown ids are a no-op. Identity and occupancy fields are never
        merged; occupancy follows contracts only.
        """
        prop = self.properties.get(property_id)
        if prop is None:
            logger.debug("update_property: property %s not found", property_id)
            return None

        known = {f.name for f in fields(Property)}
        applied = False
        for name, value in updates.items():
            if name in PROTECTED_PROPERTY_FIELDS:
                logger.warning("update_property: field %r is not updatable", name)
                continue
            if name not in known:
                logger.warning("update_property: unknown field %r", name)
                continue
            if name == "type":
                value = PropertyType(value)
            elif name in ("price", "deposit", "surface"):
                value = to_decimal(value)
            elif name == "rooms":
                value = int(value)
            setattr(prop, name, value)
            applied = True

        if applied:
            self.notify("properties")
        return prop

    # Lookups
    def get_user(self, user_id: str) -> User | None:
        """Get a user by id."""
        return self.users.get(user_id)

    def find_user_by_email(self, email: str) -> User | None:
        """Get the first user registered with ``email``."""
        return next((u for u in self.users.values() if u.email == email), None)

    def list_users(self, role: Role | str | None = None) -> list[User]:
        """List users in insertion order, optionally filtered by role."""
        if role is None:
            return list(self.users.values())
        wanted = Role(role)
        return [u for u in self.users.values() if u.role == wanted]

    def get_property(self, property_id: str) -> Property | None:
        """Get a property by id."""
        return self.properties.get(property_id)

    def get_contract(self, contract_id: str) -> Contract | None:
        """Get a contract by id."""
        return self.contracts.get(contract_id)

    def get_property_contract(self, property_id: str) -> Contract | None:
        """Get the active contract for a property."""
        contract_id = self._property_contract.get(property_id)
        return self.contracts.get(contract_id) if contract_id else None

    # Relationship resolution
    def get_property_of_tenant(self, tenant_id: str) -> Property | None:
        """Get the first property occupied by a tenant."""
        return next((p for p in self.properties.values() if p.tenant_id == tenant_id), None)

    def get_contract_of_tenant(self, tenant_id: str) -> Contract | None:
        """Get the first contract signed by a tenant."""
        contract_ids = self._tenant_contracts.get(tenant_id, [])
        return self.contracts[contract_ids[0]] if contract_ids else None

    def get_manager_of(self, tenant_id: str) -> User | None:
        """Get the manager responsible for a tenant.

        There is no tenant-to-manager assignment; every tenant is served by
        the first manager on record.
        """
        return next((u for u in self.users.values() if u.role == Role.MANAGER), None)

    def get_messages_between(self, user_a: str, user_b: str) -> list[Message]:
        """Get the conversation between two users, oldest first.

        Messages with equal timestamps keep their insertion order.
        """
        indices = self._pair_messages.get(_pair_key(user_a, user_b), [])
        thread = [self.messages[i] for i in indices]
        return sorted(thread, key=lambda m: m.created_at)

    def get_tenant_payments(self, tenant_id: str) -> list[Payment]:
        """Get all payments made by a tenant."""
        indices = self._tenant_payments.get(tenant_id, [])
        return [self.payments[i] for i in indices]

    def collection(self, name: str) -> list[Any]:
        """Return the records of a collection in insertion order."""
        if name not in COLLECTIONS:
            raise KeyError(name)
        records = getattr(self, name)
        return list(records.values()) if isinstance(records, dict) else list(records)

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {name: len(getattr(self, name)) for name in COLLECTIONS}
