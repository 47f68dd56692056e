"""Messaging endpoints."""

from fastapi import APIRouter, Depends, Request

from mhimmo.api.dependencies import get_current_user, get_store
from mhimmo.api.schemas import MessageCreate
from mhimmo.exceptions import AuthorizationError, EntityNotFoundError
from mhimmo.messaging import can_message
from mhimmo.models.rental import User
from mhimmo.persistence.serialization import to_dict_fast
from mhimmo.store.rental import RentalDataStore

router = APIRouter(tags=["messages"])


@router.post("/messages")
async def send_message(
    body: MessageCreate,
    request: Request,
    caller: User = Depends(get_current_user),
    store: RentalDataStore = Depends(get_store),
):
    """Send a message from the caller; the recipient must be visible to them."""
    recipient = store.get_user(body.recipient_id)
    if recipient is None:
        raise EntityNotFoundError(f"User {body.recipient_id} not found")
    if not can_message(caller, recipient):
        raise AuthorizationError("Recipient is not reachable for this role")

    message = request.app.state.messaging.send(caller, recipient.id, body.content, body.type)
    return {"message": to_dict_fast(message)}


@router.get("/messages/{user_id}")
async def get_thread(
    user_id: str,
    request: Request,
    caller: User = Depends(get_current_user),
):
    """Messages between the caller and ``user_id``, oldest first."""
    thread = request.app.state.messaging.thread(caller.id, user_id)
    return {"messages": [to_dict_fast(m) for m in thread]}
