"""Session gate: binds a credential pair to a user of the store."""

from __future__ import annotations

import hmac
import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import TYPE_CHECKING

from mhimmo.bootstrap import BOOTSTRAP_CREDENTIALS
from mhimmo.models.rental import Role, User
from mhimmo.store.rental import RentalDataStore

if TYPE_CHECKING:
    from mhimmo.persistence.adapter import PersistenceAdapter

logger = logging.getLogger(__name__)

RECORD_MANAGER_ROLES = frozenset({Role.OWNER, Role.MANAGER})


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass
class Identity:
    """Identity bound to an authenticated session."""

    id: str
    email: str
    name: str
    role: Role

    @classmethod
    def from_user(cls, user: User) -> Identity:
        return cls(id=user.id, email=user.email, name=user.name, role=user.role)

    def to_dict(self) -> dict[str, str]:
        data = asdict(self)
        data["role"] = self.role.value
        return data


class CredentialTable:
    """Email/password pairs, kept apart from user records.

    Passwords are compared as given; there is no hashing in this layer.
    With ``persistence`` set, every ``register`` rewrites the credentials
    slot so accounts created at runtime survive a restart.
    """

    def __init__(
        self,
        entries: dict[str, str] | None = None,
        persistence: PersistenceAdapter | None = None,
    ) -> None:
        self._entries = dict(BOOTSTRAP_CREDENTIALS if entries is None else entries)
        self.persistence = persistence

    @classmethod
    def load(cls, persistence: PersistenceAdapter) -> CredentialTable:
        """Table from the credentials slot, or the bootstrap pairs when it is empty."""
        return cls(persistence.load_credentials(), persistence=persistence)

    def __contains__(self, email: str) -> bool:
        return email in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def verify(self, email: str, password: str) -> bool:
        """Whether the literal pair is in the table."""
        expected = self._entries.get(email)
        if expected is None:
            return False
        return hmac.compare_digest(expected.encode("utf-8"), password.encode("utf-8"))

    def register(self, email: str, password: str) -> None:
        """Add or replace the password for ``email``."""
        self._entries[email] = password
        if self.persistence is not None:
            self.persistence.save_credentials(self._entries)


class SessionGate:
    """Two-state session: anonymous, or authenticated as one user.

    The bound identity is persisted through the adapter (when given) so a
    later process can ``resume()`` it.
    """

    def __init__(
        self,
        store: RentalDataStore,
        credentials: CredentialTable | None = None,
        persistence: PersistenceAdapter | None = None,
    ) -> None:
        self.store = store
        if credentials is None:
            credentials = CredentialTable.load(persistence) if persistence is not None else CredentialTable()
        self.credentials = credentials
        self.persistence = persistence
        self._identity: Identity | None = None

    @property
    def state(self) -> SessionState:
        if self._identity is None:
            return SessionState.ANONYMOUS
        return SessionState.AUTHENTICATED

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def current_user(self) -> User | None:
        """The store record of the bound identity, if it still exists."""
        if self._identity is None:
            return None
        return self.store.get_user(self._identity.id)

    def login(self, email: str, password: str) -> bool:
        """Authenticate with an email/password pair.

        Succeeds only if a user with that email exists and the pair matches
        the credential table. A failed attempt leaves the session untouched.
        """
        user = self.store.find_user_by_email(email)
        if user is None or not self.credentials.verify(email, password):
            logger.info("Login failed for %s", email)
            return False

        self._identity = Identity.from_user(user)
        if self.persistence is not None:
            self.persistence.save_identity(self._identity.to_dict())
        logger.info("User %s logged in", user.id, extra={"user_id": user.id})
        return True

    def resume(self) -> bool:
        """Reinstate a persisted identity whose user still exists."""
        if self.persistence is None:
            return self._identity is not None

        saved = self.persistence.load_identity()
        if not saved:
            self._identity = None
            return False

        user = self.store.get_user(saved.get("id", ""))
        if user is None:
            logger.info("Discarding persisted session for unknown user %s", saved.get("id"))
            self.persistence.clear_identity()
            self._identity = None
            return False

        self._identity = Identity.from_user(user)
        return True

    def logout(self) -> None:
        """Return to the anonymous state and forget the persisted identity."""
        self._identity = None
        if self.persistence is not None:
            self.persistence.clear_identity()

    # Advisory permission checks
    def has_role(self, *roles: Role) -> bool:
        return self._identity is not None and self._identity.role in roles

    def is_owner(self) -> bool:
        return self.has_role(Role.OWNER)

    def can_manage_records(self) -> bool:
        """Owners and managers may create users, properties and contracts."""
        return self.has_role(*RECORD_MANAGER_ROLES)
