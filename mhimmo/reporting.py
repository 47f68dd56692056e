"""Read-only aggregate views over the data store."""

from dataclasses import dataclass
from decimal import Decimal

from mhimmo.models.rental import (
    Contract,
    PaymentStatus,
    Property,
    PropertyStatus,
    Role,
    User,
)
from mhimmo.store.rental import RentalDataStore


@dataclass
class DashboardStats:
    """Headline numbers shown on the dashboard."""

    total_properties: int
    occupied_properties: int
    vacant_properties: int
    occupancy_rate: float  # Percentage, 0-100
    total_tenants: int
    monthly_revenue: Decimal  # Sum of contract rents
    unread_messages: int


@dataclass
class TenantRecord:
    """A tenant with the property and contract attached to them."""

    user: User
    property: Property | None
    contract: Contract | None


@dataclass
class TenantHome:
    """What a tenant sees about their own lease."""

    contract: Contract | None
    property: Property | None
    manager: User | None


def dashboard_stats(store: RentalDataStore, viewer_id: str | None = None) -> DashboardStats:
    """Compute dashboard figures; unread count is for ``viewer_id``."""
    total = len(store.properties)
    occupied = sum(1 for p in store.properties.values() if p.status == PropertyStatus.OCCUPIED)
    revenue = sum((c.rent for c in store.contracts.values()), Decimal("0"))
    unread = 0
    if viewer_id is not None:
        unread = sum(1 for m in store.messages if m.recipient_id == viewer_id and not m.read)

    return DashboardStats(
        total_properties=total,
        occupied_properties=occupied,
        vacant_properties=total - occupied,
        occupancy_rate=round(occupied / total * 100, 1) if total else 0.0,
        total_tenants=len(store.list_users(Role.TENANT)),
        monthly_revenue=revenue,
        unread_messages=unread,
    )


def tenant_overview(store: RentalDataStore) -> list[TenantRecord]:
    """Every tenant joined with their property and contract."""
    return [
        TenantRecord(
            user=tenant,
            property=store.get_property_of_tenant(tenant.id),
            contract=store.get_contract_of_tenant(tenant.id),
        )
        for tenant in store.list_users(Role.TENANT)
    ]


def tenant_home(store: RentalDataStore, tenant_id: str) -> TenantHome:
    """Contract, leased property and manager for one tenant."""
    contract = store.get_contract_of_tenant(tenant_id)
    prop = store.get_property(contract.property_id) if contract else None
    return TenantHome(contract=contract, property=prop, manager=store.get_manager_of(tenant_id))


def available_properties(store: RentalDataStore) -> list[Property]:
    """Properties that can still take a contract."""
    return [p for p in store.properties.values() if p.status == PropertyStatus.VACANT]


def payment_totals(store: RentalDataStore, tenant_id: str | None = None) -> dict[PaymentStatus, Decimal]:
    """Sum of payment amounts per status, optionally for one tenant."""
    payments = store.get_tenant_payments(tenant_id) if tenant_id else store.payments
    totals = {status: Decimal("0") for status in PaymentStatus}
    for payment in payments:
        totals[payment.status] += payment.amount
    return totals
