"""Request dependencies: bearer identity and role checks."""

from fastapi import Header, Request

from mhimmo.exceptions import AuthenticationError, AuthorizationError
from mhimmo.models.rental import Role, User
from mhimmo.store.rental import RentalDataStore


def get_store(request: Request) -> RentalDataStore:
    return request.app.state.store


def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
) -> User:
    """Resolve the caller from ``Authorization: Bearer <token>``.

    The role used by later checks comes from the stored user record, not
    from anything the client sends.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Unauthorized")

    token = authorization.split(" ", 1)[1].strip()
    user_id = request.app.state.tokens.resolve(token)
    if user_id is None:
        raise AuthenticationError("Unauthorized")

    user = request.app.state.store.get_user(user_id)
    if user is None:
        raise AuthenticationError("Unauthorized")
    return user


def ensure_role(user: User, roles: frozenset[Role], message: str = "Access denied") -> None:
    if user.role not in roles:
        raise AuthorizationError(message)
