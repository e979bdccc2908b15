from typing import Optional

from fastapi import APIRouter, Depends

from app.api import get_store
from app.models.schemas import PassengerStatusResponse
from app.services.passenger_locator import PassengerLocator
from app.storage.repository import InventoryStore

router = APIRouter()


def get_passenger_locator(store: InventoryStore = Depends(get_store)) -> PassengerLocator:
    return PassengerLocator(store=store)


@router.get(
    "/status",
    response_model=PassengerStatusResponse,
    response_model_exclude_none=True,
)
def passenger_status(
    name: Optional[str] = None,
    locator: PassengerLocator = Depends(get_passenger_locator),
) -> PassengerStatusResponse:
    return PassengerStatusResponse.from_domain(locator.status(name or ""))
