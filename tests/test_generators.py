"""Tests for demo data generators."""

from decimal import Decimal

from mhimmo.generators import PropertyGenerator, UserGenerator, populate_store
from mhimmo.models.rental import PropertyStatus, PropertyType, Role
from mhimmo.store.rental import RentalDataStore


class TestUserGenerator:
    """Tests for UserGenerator."""

    def test_generate(self, seed: int) -> None:
        fields = UserGenerator(seed=seed).generate(Role.MANAGER)

        assert fields["role"] == Role.MANAGER
        assert "@" in fields["email"]
        assert fields["name"]

    def test_batch_emails_unique(self, seed: int) -> None:
        emails = [u["email"] for u in UserGenerator(seed=seed).generate_batch(50)]
        assert len(set(emails)) == 50

    def test_reproducible(self, seed: int) -> None:
        first = UserGenerator(seed=seed).generate()
        second = UserGenerator(seed=seed).generate()
        assert first["name"] == second["name"]


class TestPropertyGenerator:
    """Tests for PropertyGenerator."""

    def test_fields_accepted_by_store(self, seed: int, empty_store: RentalDataStore) -> None:
        for fields in PropertyGenerator(seed=seed).generate_batch(20):
            prop = empty_store.create_property(**fields)
            assert prop.status == PropertyStatus.VACANT

    def test_layout_bounds(self, seed: int) -> None:
        for fields in PropertyGenerator(seed=seed).generate_batch(100):
            (min_sqm, max_sqm), (min_rooms, max_rooms) = PropertyGenerator.LAYOUTS[fields["type"]]
            assert min_sqm <= fields["surface"] <= max_sqm
            assert min_rooms <= fields["rooms"] <= max_rooms
            assert fields["price"] > 0
            assert fields["deposit"] == fields["price"] * 2

    def test_studio_has_one_room(self, seed: int) -> None:
        studios = [f for f in PropertyGenerator(seed=seed).generate_batch(200) if f["type"] == PropertyType.STUDIO]
        assert studios
        assert all(f["rooms"] == 1 for f in studios)

    def test_price_is_whole_euros(self, seed: int) -> None:
        fields = PropertyGenerator(seed=seed).generate()
        assert fields["price"] == fields["price"].quantize(Decimal("1"))


class TestPopulateStore:
    """Tests for populate_store."""

    def test_counts(self, seed: int, empty_store: RentalDataStore) -> None:
        result = populate_store(empty_store, tenants=8, properties=10, occupancy=0.5, seed=seed)

        assert result.tenants == 8
        assert result.properties == 10
        assert result.contracts == 4
        assert result.messages == 4
        assert len(empty_store.list_users(Role.MANAGER)) == 1
        assert len(empty_store.contracts) == 4

    def test_occupancy_invariant(self, seed: int, empty_store: RentalDataStore) -> None:
        populate_store(empty_store, tenants=6, properties=6, occupancy=1.0, seed=seed)

        for contract in empty_store.contracts.values():
            prop = empty_store.get_property(contract.property_id)
            assert prop.status == PropertyStatus.OCCUPIED
            assert prop.tenant_id == contract.tenant_id

    def test_uses_existing_manager(self, seed: int, store: RentalDataStore) -> None:
        populate_store(store, tenants=2, properties=2, seed=seed)

        assert [u.id for u in store.list_users(Role.MANAGER)] == ["manager-1"]
        assert store.messages[-1].sender_id == "manager-1"

    def test_more_tenants_than_properties(self, seed: int, empty_store: RentalDataStore) -> None:
        result = populate_store(empty_store, tenants=10, properties=3, occupancy=1.0, seed=seed)
        assert result.contracts == 3
