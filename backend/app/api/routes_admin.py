import os

from fastapi import APIRouter, Depends

from app.api import get_store
from app.api.routes_flights import get_flight_service
from app.models.schemas import ResetResponse
from app.services.flight_service import FlightService
from app.storage.repository import InventoryStore, JsonFileInventoryStore, state_to_document

router = APIRouter()
debug_router = APIRouter()


@router.post("/reset", response_model=ResetResponse)
def reset(service: FlightService = Depends(get_flight_service)) -> ResetResponse:
    service.reset()
    return ResetResponse()


@debug_router.get("/statepath")
def state_path(store: InventoryStore = Depends(get_store)) -> dict:
    path = getattr(store, "path", None)
    return {
        "stateFile": str(path) if path else None,
        "exists": isinstance(store, JsonFileInventoryStore) and store.exists(),
        "cwd": os.getcwd(),
    }


@debug_router.get("/state")
def state_dump(store: InventoryStore = Depends(get_store)) -> dict:
    document = state_to_document(store.load())
    return {"keys": list(document.keys()), "state": document}
