"""User management endpoints."""

from fastapi import APIRouter, Depends, Request

from mhimmo.api.dependencies import ensure_role, get_current_user, get_store
from mhimmo.api.schemas import UserCreate
from mhimmo.exceptions import ValidationError
from mhimmo.models.rental import Role, User
from mhimmo.persistence.serialization import to_dict_fast
from mhimmo.store.rental import RentalDataStore

router = APIRouter(tags=["users"])


@router.post("/users")
async def create_user(
    body: UserCreate,
    request: Request,
    caller: User = Depends(get_current_user),
    store: RentalDataStore = Depends(get_store),
):
    """Create an account. Owners only."""
    ensure_role(caller, frozenset({Role.OWNER}), "Only owners can create users")

    credentials = request.app.state.credentials
    # Login resolves the first user with an email, so one account per email
    if body.email in credentials or store.find_user_by_email(body.email) is not None:
        raise ValidationError(f"Email {body.email} is already registered")

    user = store.create_user(name=body.name, email=body.email, role=body.role, phone=body.phone)
    credentials.register(body.email, body.password)
    return {"user": to_dict_fast(user)}


@router.get("/users")
async def list_users(
    caller: User = Depends(get_current_user),
    store: RentalDataStore = Depends(get_store),
):
    """All users except the caller. Owners and managers only."""
    ensure_role(caller, frozenset({Role.OWNER, Role.MANAGER}))
    return {"users": [to_dict_fast(u) for u in store.list_users() if u.id != caller.id]}
