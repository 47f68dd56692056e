"""Fixed bootstrap data set used when a collection has no persisted slot."""

from datetime import date, datetime, timedelta
from decimal import Decimal

from mhimmo.models.rental import (
    Contract,
    Message,
    MessageType,
    Payment,
    PaymentStatus,
    PaymentType,
    Property,
    PropertyStatus,
    PropertyType,
    Role,
    User,
)
from mhimmo.store.rental import RentalDataStore

ADMIN_EMAIL = "admin@mhimmo.com"
ADMIN_PASSWORD = "admin123"
ADMIN_NAME = "Propriétaire Admin"

BOOTSTRAP_CREDENTIALS: dict[str, str] = {
    ADMIN_EMAIL: ADMIN_PASSWORD,
    "marie.dubois@mhimmo.com": "manager123",
    "jean.dupont@email.com": "tenant123",
    "sophie.martin@email.com": "tenant123",
}


def bootstrap_users(now: datetime | None = None) -> list[User]:
    now = now or datetime.now()
    return [
        User(id="admin-1", name=ADMIN_NAME, email=ADMIN_EMAIL,
             role=Role.OWNER, phone="06 12 34 56 78", created_at=now),
        User(id="manager-1", name="Marie Dubois", email="marie.dubois@mhimmo.com",
             role=Role.MANAGER, phone="06 23 45 67 89", created_at=now),
        User(id="tenant-1", name="Jean Dupont", email="jean.dupont@email.com",
             role=Role.TENANT, phone="06 34 56 78 90", created_at=now),
        User(id="tenant-2", name="Sophie Martin", email="sophie.martin@email.com",
             role=Role.TENANT, phone="06 45 67 89 01", created_at=now),
    ]


def bootstrap_properties(now: datetime | None = None) -> list[Property]:
    now = now or datetime.now()
    return [
        Property(
            id="prop-1",
            address="123 Rue de la Paix",
            city="Paris",
            postal_code="75001",
            type=PropertyType.APARTMENT,
            price=Decimal("1200"),
            deposit=Decimal("2400"),
            surface=Decimal("65"),
            rooms=3,
            description="Bel appartement lumineux au cœur de Paris, proche des transports.",
            status=PropertyStatus.OCCUPIED,
            tenant_id="tenant-1",
            created_at=now,
        ),
        Property(
            id="prop-2",
            address="45 Avenue des Champs",
            city="Lyon",
            postal_code="69001",
            type=PropertyType.STUDIO,
            price=Decimal("750"),
            deposit=Decimal("1500"),
            surface=Decimal("30"),
            rooms=1,
            description="Studio moderne et fonctionnel, idéal pour étudiant ou jeune actif.",
            status=PropertyStatus.OCCUPIED,
            tenant_id="tenant-2",
            created_at=now,
        ),
        Property(
            id="prop-3",
            address="78 Rue du Commerce",
            city="Marseille",
            postal_code="13001",
            type=PropertyType.APARTMENT,
            price=Decimal("950"),
            deposit=Decimal("1900"),
            surface=Decimal("50"),
            rooms=2,
            description="Appartement rénové avec terrasse, quartier dynamique.",
            status=PropertyStatus.VACANT,
            created_at=now,
        ),
    ]


def bootstrap_contracts(now: datetime | None = None) -> list[Contract]:
    now = now or datetime.now()
    return [
        Contract(id="contract-1", tenant_id="tenant-1", property_id="prop-1",
                 start_date=date(2024, 1, 1), rent=Decimal("1200"),
                 deposit=Decimal("2400"), created_at=now),
        Contract(id="contract-2", tenant_id="tenant-2", property_id="prop-2",
                 start_date=date(2024, 2, 1), end_date=date(2025, 2, 1),
                 rent=Decimal("750"), deposit=Decimal("1500"), created_at=now),
    ]


def bootstrap_messages(now: datetime | None = None) -> list[Message]:
    now = now or datetime.now()
    return [
        Message(
            id="msg-1",
            sender_id="tenant-1",
            recipient_id="manager-1",
            content="Bonjour, j'ai un problème avec le chauffage dans mon appartement.",
            type=MessageType.TEXT,
            created_at=now - timedelta(days=1),
            read=True,
        ),
        Message(
            id="msg-2",
            sender_id="manager-1",
            recipient_id="tenant-1",
            content="Bonjour Jean, je vais contacter un technicien pour intervenir rapidement.",
            type=MessageType.TEXT,
            created_at=now - timedelta(hours=23),
            read=True,
        ),
        Message(
            id="msg-3",
            sender_id="admin-1",
            recipient_id="manager-1",
            content="Rapport mensuel disponible pour consultation.",
            type=MessageType.TEXT,
            created_at=now - timedelta(hours=1),
            read=False,
        ),
    ]


def bootstrap_payments() -> list[Payment]:
    return [
        Payment(id="pay-1", tenant_id="tenant-1", property_id="prop-1",
                amount=Decimal("1200"), date=date(2024, 3, 1),
                status=PaymentStatus.PAID, type=PaymentType.RENT),
        Payment(id="pay-2", tenant_id="tenant-2", property_id="prop-2",
                amount=Decimal("750"), date=date(2024, 3, 1),
                status=PaymentStatus.PAID, type=PaymentType.RENT),
        Payment(id="pay-3", tenant_id="tenant-1", property_id="prop-1",
                amount=Decimal("1200"), date=date(2024, 4, 1),
                status=PaymentStatus.PENDING, type=PaymentType.RENT),
    ]


def bootstrap_collection(name: str, now: datetime | None = None) -> list:
    """Return fresh bootstrap records for a collection name."""
    builders = {
        "users": bootstrap_users,
        "properties": bootstrap_properties,
        "contracts": bootstrap_contracts,
        "messages": bootstrap_messages,
    }
    if name == "payments":
        return bootstrap_payments()
    return builders[name](now)


def bootstrap_store(strict_references: bool = False) -> RentalDataStore:
    """Build a store holding only the bootstrap data set."""
    store = RentalDataStore(strict_references=strict_references)
    now = datetime.now()
    for user in bootstrap_users(now):
        store.add_user(user)
    for prop in bootstrap_properties(now):
        store.add_property(prop)
    for contract in bootstrap_contracts(now):
        store.add_contract(contract)
    for message in bootstrap_messages(now):
        store.add_message(message)
    for payment in bootstrap_payments():
        store.add_payment(payment)
    return store
