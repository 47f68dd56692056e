"""Property endpoints."""

from fastapi import APIRouter, Depends

from mhimmo.api.dependencies import ensure_role, get_current_user, get_store
from mhimmo.api.schemas import PropertyCreate
from mhimmo.models.rental import Role, User
from mhimmo.persistence.serialization import to_dict_fast
from mhimmo.store.rental import RentalDataStore

router = APIRouter(tags=["properties"])


@router.post("/properties")
async def create_property(
    body: PropertyCreate,
    caller: User = Depends(get_current_user),
    store: RentalDataStore = Depends(get_store),
):
    """Create a vacant property. Owners and managers only."""
    ensure_role(caller, frozenset({Role.OWNER, Role.MANAGER}))
    prop = store.create_property(**body.model_dump())
    return {"property": to_dict_fast(prop)}


@router.get("/properties")
async def list_properties(
    caller: User = Depends(get_current_user),
    store: RentalDataStore = Depends(get_store),
):
    return {"properties": [to_dict_fast(p) for p in store.properties.values()]}
