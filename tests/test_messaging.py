"""Tests for messaging visibility, conversations and unread counts."""

import pytest

from mhimmo.messaging import (
    VISIBILITY_MATRIX,
    MessagingIndex,
    can_message,
    visible_roles,
)
from mhimmo.models.rental import MessageType, Role, User
from mhimmo.store.rental import RentalDataStore


@pytest.fixture
def index(store: RentalDataStore) -> MessagingIndex:
    return MessagingIndex(store)


class TestVisibility:
    """Tests for the role visibility matrix."""

    def test_matrix_covers_all_roles(self) -> None:
        assert set(VISIBILITY_MATRIX) == set(Role)

    @pytest.mark.parametrize(
        "role,expected",
        [
            (Role.TENANT, {Role.MANAGER}),
            (Role.MANAGER, {Role.OWNER, Role.TENANT}),
            (Role.OWNER, {Role.OWNER, Role.MANAGER, Role.TENANT}),
        ],
    )
    def test_visible_roles(self, role: Role, expected: set[Role]) -> None:
        assert visible_roles(role) == expected

    def test_visible_roles_from_string(self) -> None:
        assert visible_roles("tenant") == {Role.MANAGER}

    def test_tenant_cannot_reach_owner_or_tenant(self, store: RentalDataStore) -> None:
        tenant = store.get_user("tenant-1")
        assert not can_message(tenant, store.get_user("admin-1"))
        assert not can_message(tenant, store.get_user("tenant-2"))
        assert can_message(tenant, store.get_user("manager-1"))

    def test_manager_cannot_reach_manager(self, store: RentalDataStore) -> None:
        manager = store.get_user("manager-1")
        other = store.create_user("Paul Gestion", "paul@mhimmo.com", Role.MANAGER)
        assert not can_message(manager, other)

    def test_never_self(self, owner: User) -> None:
        assert not can_message(owner, owner)

    def test_counterparts_exclude_self(self, index: MessagingIndex, owner: User) -> None:
        ids = [u.id for u in index.counterparts(owner)]
        assert ids == ["manager-1", "tenant-1", "tenant-2"]


class TestConversations:
    """Tests for the conversation list."""

    def test_manager_ordering(self, index: MessagingIndex, manager: User) -> None:
        convs = index.conversations(manager)

        assert [c.user.id for c in convs] == ["admin-1", "tenant-1", "tenant-2"]
        assert convs[0].last_message.id == "msg-3"
        assert convs[1].last_message.id == "msg-2"
        assert convs[2].last_message is None

    def test_unread_counts(self, index: MessagingIndex, manager: User) -> None:
        convs = {c.user.id: c.unread_count for c in index.conversations(manager)}
        assert convs == {"admin-1": 1, "tenant-1": 0, "tenant-2": 0}

    def test_tenant_sees_only_managers(self, index: MessagingIndex, tenant: User) -> None:
        convs = index.conversations(tenant)
        assert [c.user.id for c in convs] == ["manager-1"]

    def test_empty_threads_keep_store_order(self, index: MessagingIndex, owner: User) -> None:
        convs = index.conversations(owner)
        assert [c.user.id for c in convs] == ["manager-1", "tenant-1", "tenant-2"]

    def test_new_message_moves_conversation_first(
        self, index: MessagingIndex, manager: User
    ) -> None:
        index.send(manager, "tenant-2", "Votre quittance est prête")

        convs = index.conversations(manager)

        assert convs[0].user.id == "tenant-2"

    def test_unread_scenario(self, empty_store: RentalDataStore, people: dict[str, User]) -> None:
        """Tenant sends two, manager replies once."""
        index = MessagingIndex(empty_store)
        tenant, manager = people["tenant"], people["manager"]

        index.send(tenant, manager.id, "Bonjour")
        index.send(tenant, manager.id, "Le chauffage est en panne")
        index.send(manager, tenant.id, "Un technicien passe demain")

        manager_view = {c.user.id: c for c in index.conversations(manager)}
        tenant_view = {c.user.id: c for c in index.conversations(tenant)}

        assert manager_view[tenant.id].unread_count == 2
        assert tenant_view[manager.id].unread_count == 1
        assert tenant_view[manager.id].last_message.content == "Un technicien passe demain"


class TestSend:
    """Tests for message sending and its validation."""

    def test_send(self, index: MessagingIndex, store: RentalDataStore, tenant: User) -> None:
        message = index.send(tenant, "manager-1", "  Merci beaucoup  ")

        assert message is not None
        assert message.content == "Merci beaucoup"
        assert message.read is False
        assert message.type == MessageType.TEXT
        assert store.messages[-1] is message

    def test_send_file_type(self, index: MessagingIndex, manager: User) -> None:
        message = index.send(manager, "tenant-1", "etat_des_lieux.pdf", type="file")
        assert message.type == MessageType.FILE

    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    def test_blank_content_rejected(
        self, index: MessagingIndex, store: RentalDataStore, tenant: User, content: str
    ) -> None:
        assert index.send(tenant, "manager-1", content) is None
        assert len(store.messages) == 3

    def test_anonymous_sender_rejected(self, index: MessagingIndex, store: RentalDataStore) -> None:
        assert index.send(None, "manager-1", "Bonjour") is None
        assert len(store.messages) == 3

    def test_unknown_recipient_rejected(self, index: MessagingIndex, tenant: User) -> None:
        assert index.send(tenant, "ghost", "Bonjour") is None

    def test_hidden_recipient_rejected(
        self, index: MessagingIndex, store: RentalDataStore, tenant: User
    ) -> None:
        assert index.send(tenant, "admin-1", "Bonjour") is None
        assert len(store.messages) == 3

    def test_send_notifies_messages(self, index: MessagingIndex, store: RentalDataStore, tenant: User) -> None:
        changes: list[str] = []
        store.subscribe(changes.append)

        index.send(tenant, "manager-1", "Bonjour")

        assert changes == ["messages"]


class TestReadState:
    """Tests for unread totals and marking threads read."""

    def test_unread_total(self, index: MessagingIndex) -> None:
        assert index.unread_total("manager-1") == 1
        assert index.unread_total("tenant-1") == 0

    def test_mark_thread_read(self, index: MessagingIndex, store: RentalDataStore) -> None:
        changes: list[str] = []
        store.subscribe(changes.append)

        flipped = index.mark_thread_read("manager-1", "admin-1")

        assert flipped == 1
        assert index.unread_total("manager-1") == 0
        assert changes == ["messages"]

    def test_mark_read_only_flips_viewer_side(
        self, empty_store: RentalDataStore, people: dict[str, User]
    ) -> None:
        index = MessagingIndex(empty_store)
        tenant, manager = people["tenant"], people["manager"]
        outgoing = index.send(tenant, manager.id, "Bonjour")
        incoming = index.send(manager, tenant.id, "Bonjour à vous")

        index.mark_thread_read(tenant.id, manager.id)

        assert incoming.read is True
        assert outgoing.read is False

    def test_mark_read_twice_is_noop(self, index: MessagingIndex, store: RentalDataStore) -> None:
        index.mark_thread_read("manager-1", "admin-1")
        changes: list[str] = []
        store.subscribe(changes.append)

        assert index.mark_thread_read("manager-1", "admin-1") == 0
        assert changes == []

    def test_thread_matches_store(self, index: MessagingIndex, store: RentalDataStore) -> None:
        assert index.thread("tenant-1", "manager-1") == store.get_messages_between("tenant-1", "manager-1")
