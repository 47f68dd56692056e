"""Mirror the data store to a durable key-value backend."""

import json
import logging
from typing import Any, Protocol

from mhimmo.bootstrap import bootstrap_collection
from mhimmo.config import MhImmoConfig
from mhimmo.exceptions import StorageError
from mhimmo.models.rental import Contract, Message, Payment, Property, User
from mhimmo.persistence.serialization import from_dict, to_dict_fast
from mhimmo.store.rental import COLLECTIONS, RentalDataStore

logger = logging.getLogger(__name__)

KEY_PREFIX = "mhimmo"
SESSION_KEY = f"{KEY_PREFIX}-current-user"
DARK_MODE_KEY = f"{KEY_PREFIX}-dark-mode"
CREDENTIALS_KEY = f"{KEY_PREFIX}-credentials"

ENTITY_TYPES: dict[str, type] = {
    "users": User,
    "properties": Property,
    "contracts": Contract,
    "messages": Message,
    "payments": Payment,
}

# Load order: referenced collections before the ones pointing at them
LOAD_ORDER = ("users", "properties", "contracts", "messages", "payments")


class KeyValueBackend(Protocol):
    """Durable string slots addressed by key."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


def collection_key(name: str) -> str:
    """Slot key for a collection, e.g. ``mhimmo-properties``."""
    if name not in COLLECTIONS:
        raise KeyError(name)
    return f"{KEY_PREFIX}-{name}"


class PersistenceAdapter:
    """Writes whole collections to their slots and rehydrates stores.

    There is no transaction spanning collections: a contract creation is
    mirrored as two independent writes (contracts, then properties).
    """

    def __init__(self, backend: KeyValueBackend, pretty: bool = False) -> None:
        self.backend = backend
        self.pretty = pretty
        self._attached: RentalDataStore | None = None
        self._writes: dict[str, int] = {}

    # Collections
    def save_collection(self, name: str, records: list[Any]) -> None:
        """Serialize and write every record of a collection."""
        data = [to_dict_fast(record) for record in records]
        self._write_json(collection_key(name), data)
        self._writes[name] = self._writes.get(name, 0) + 1
        logger.debug("Mirrored %d %s", len(data), name, extra={"collection": name})

    def load_collection(self, name: str) -> list[Any] | None:
        """Read a collection slot, or ``None`` when the slot is empty."""
        data = self._read_json(collection_key(name))
        if data is None:
            return None
        if not isinstance(data, list):
            raise StorageError(f"Slot {collection_key(name)} does not hold a list")
        entity_type = ENTITY_TYPES[name]
        return [from_dict(entity_type, item) for item in data]

    def flush(self, store: RentalDataStore) -> None:
        """Write all collections of ``store``."""
        for name in COLLECTIONS:
            self.save_collection(name, store.collection(name))

    def attach(self, store: RentalDataStore) -> None:
        """Mirror every subsequent mutation of ``store``."""
        if self._attached is not None:
            self._attached.unsubscribe(self._on_change)
        self._attached = store
        store.subscribe(self._on_change)

    def detach(self) -> None:
        if self._attached is not None:
            self._attached.unsubscribe(self._on_change)
            self._attached = None

    def _on_change(self, collection: str) -> None:
        if self._attached is not None:
            self.save_collection(collection, self._attached.collection(collection))

    def rehydrate(self, strict_references: bool = False, attach: bool = True) -> RentalDataStore:
        """Build a store from persisted slots.

        Each collection without a slot is seeded from the bootstrap data set.
        """
        store = RentalDataStore(strict_references=strict_references)
        loaders = {
            "users": store.add_user,
            "properties": store.add_property,
            "contracts": store.add_contract,
            "messages": store.add_message,
            "payments": store.add_payment,
        }
        for name in LOAD_ORDER:
            records = self.load_collection(name)
            if records is None:
                logger.info("No persisted %s, seeding bootstrap data", name)
                records = bootstrap_collection(name)
            for record in records:
                loaders[name](record)

        logger.info("Rehydrated store: %s", store.summary())
        if attach:
            self.attach(store)
        return store

    # Session identity
    def save_identity(self, identity: dict[str, Any]) -> None:
        self._write_json(SESSION_KEY, identity)

    def load_identity(self) -> dict[str, Any] | None:
        data = self._read_json(SESSION_KEY)
        return data if isinstance(data, dict) else None

    def clear_identity(self) -> None:
        self.backend.delete(SESSION_KEY)

    # Credential table
    def save_credentials(self, entries: dict[str, str]) -> None:
        self._write_json(CREDENTIALS_KEY, dict(entries))

    def load_credentials(self) -> dict[str, str] | None:
        """Persisted email/password pairs, or ``None`` before the first write."""
        data = self._read_json(CREDENTIALS_KEY)
        if data is None:
            return None
        if not isinstance(data, dict):
            raise StorageError(f"Slot {CREDENTIALS_KEY} does not hold an object")
        return {str(email): str(password) for email, password in data.items()}

    # Display preference
    def get_dark_mode(self) -> bool:
        return bool(self._read_json(DARK_MODE_KEY))

    def set_dark_mode(self, enabled: bool) -> None:
        self._write_json(DARK_MODE_KEY, bool(enabled))

    def write_counts(self) -> dict[str, int]:
        """Number of writes per collection since creation."""
        return dict(self._writes)

    def _write_json(self, key: str, data: Any) -> None:
        if self.pretty:
            payload = json.dumps(data, indent=2, ensure_ascii=False)
        else:
            payload = json.dumps(data, ensure_ascii=False)
        self.backend.set(key, payload)

    def _read_json(self, key: str) -> Any:
        raw = self.backend.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Slot {key} holds invalid JSON: {e}") from e


def build_backend(config: MhImmoConfig) -> KeyValueBackend:
    """Create the key-value backend selected by ``config.storage.backend``."""
    backend = config.storage.backend
    if backend == "memory":
        from mhimmo.persistence.memory import MemoryBackend

        return MemoryBackend()
    if backend == "postgres":
        from mhimmo.persistence.postgres import PostgresBackend

        return PostgresBackend(config.postgres.connection_string, table=config.postgres.table)

    from mhimmo.persistence.json_file import JsonFileBackend

    return JsonFileBackend(config.storage.json_dir)
