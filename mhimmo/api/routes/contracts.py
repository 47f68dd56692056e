"""Contract endpoints."""

from fastapi import APIRouter, Depends

from mhimmo.api.dependencies import get_current_user, get_store
from mhimmo.api.schemas import ContractCreate
from mhimmo.models.rental import User
from mhimmo.persistence.serialization import to_dict_fast
from mhimmo.store.rental import RentalDataStore

router = APIRouter(tags=["contracts"])


@router.post("/contracts")
async def create_contract(
    body: ContractCreate,
    caller: User = Depends(get_current_user),
    store: RentalDataStore = Depends(get_store),
):
    """Create a contract; the referenced property becomes occupied."""
    contract = store.create_contract(**body.model_dump())
    return {"contract": to_dict_fast(contract)}


@router.get("/contracts")
async def list_contracts(
    caller: User = Depends(get_current_user),
    store: RentalDataStore = Depends(get_store),
):
    return {"contracts": [to_dict_fast(c) for c in store.contracts.values()]}
