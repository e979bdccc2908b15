import json

from fastapi import HTTPException
from pydantic import ValidationError
from starlette.requests import Request

from app.core.errors import BadRequestError
from app.models.schemas import SeatRequest
from app.storage.catalog import FlightCatalog
from app.storage.repository import InventoryStore

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_store(request: Request) -> InventoryStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Inventory store not initialized")
    return store


def get_catalog(request: Request) -> FlightCatalog:
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        raise HTTPException(status_code=500, detail="Flight catalog not initialized")
    return catalog


async def get_seat_request(request: Request) -> SeatRequest:
    """Read ``name``/``class`` from a form post or a JSON body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        payload = {key: form.get(key) for key in ("name", "class") if key in form}
    else:
        raw = await request.body()
        try:
            payload = json.loads(raw) if raw.strip() else {}
        except ValueError:
            raise BadRequestError("Request body is not valid JSON") from None
    if not isinstance(payload, dict):
        raise BadRequestError("Request body must be an object")
    try:
        return SeatRequest.model_validate(payload)
    except ValidationError:
        raise BadRequestError("Invalid request body") from None
