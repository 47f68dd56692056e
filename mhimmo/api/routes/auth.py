"""Admin bootstrap and login endpoints."""

import logging

from fastapi import APIRouter, Depends, Request

from mhimmo.api.dependencies import get_store
from mhimmo.api.schemas import LoginRequest
from mhimmo.bootstrap import ADMIN_EMAIL, ADMIN_NAME, ADMIN_PASSWORD
from mhimmo.exceptions import AuthenticationError
from mhimmo.models.rental import Role
from mhimmo.persistence.serialization import to_dict_fast
from mhimmo.store.rental import RentalDataStore

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


@router.get("/init")
async def init_admin(request: Request, store: RentalDataStore = Depends(get_store)):
    """Create the default owner account unless it already exists."""
    existing = store.find_user_by_email(ADMIN_EMAIL)
    if existing is not None:
        return {"message": "Admin already exists", "admin": to_dict_fast(existing)}

    admin = store.create_user(name=ADMIN_NAME, email=ADMIN_EMAIL, role=Role.OWNER)
    request.app.state.credentials.register(ADMIN_EMAIL, ADMIN_PASSWORD)
    logger.info("Default admin %s created", admin.id)
    return {"admin": to_dict_fast(admin)}


@router.post("/login")
async def login(body: LoginRequest, request: Request, store: RentalDataStore = Depends(get_store)):
    """Exchange credentials for a bearer token."""
    user = store.find_user_by_email(body.email)
    if user is None or not request.app.state.credentials.verify(body.email, body.password):
        raise AuthenticationError("Invalid credentials")

    token = request.app.state.tokens.issue(user.id)
    return {
        "user": to_dict_fast(user),
        "session": {"access_token": token, "token_type": "bearer", "user_id": user.id},
    }
