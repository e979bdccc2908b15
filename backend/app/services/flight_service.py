import logging
from typing import List

from app.core.errors import BadRequestError, NotFoundError
from app.models.domain import (
    ClassView,
    Flight,
    FlightInfo,
    InventoryState,
    SeatView,
    SortKey,
    SEAT_CLASSES,
)
from app.services.flight_search import binary_search, sort_flights
from app.storage.catalog import FlightCatalog
from app.storage.repository import InventoryStore

logger = logging.getLogger(__name__)


def parse_flight_number(raw: str | None) -> int:
    if raw is None or not raw.strip():
        raise BadRequestError('Query param "flightNumber" is required')
    try:
        value = int(raw.strip())
    except ValueError:
        raise BadRequestError("Invalid flight number", {"flightNumber": raw}) from None
    if value <= 0:
        raise BadRequestError("Invalid flight number", {"flightNumber": raw})
    return value


def seed_state(catalog: FlightCatalog) -> InventoryState:
    return InventoryState(
        flights={f.flight_number: catalog.empty_inventory() for f in catalog.list_flights()}
    )


class FlightService:
    """Catalog queries, seat maps and the destructive reset."""

    def __init__(self, store: InventoryStore, catalog: FlightCatalog):
        self.store = store
        self.catalog = catalog

    def list_flights(self) -> List[Flight]:
        return self.catalog.list_flights()

    def get_flight(self, flight_number: int) -> Flight:
        flight = self.catalog.get(flight_number)
        if flight is None:
            raise NotFoundError("Flight not found", {"flightNumber": flight_number})
        return flight

    def get_flight_info(self, flight_number: int) -> FlightInfo:
        flight = self.catalog.get(flight_number)
        classes = self.store.load().flights.get(flight_number)
        if flight is None or classes is None:
            raise NotFoundError(
                "Flight not found or state missing", {"flightNumber": flight_number}
            )
        views = {}
        for seat_class in SEAT_CLASSES:
            inventory = classes.get(seat_class)
            seat_range = inventory.seat_range if inventory else self.catalog.seat_range(seat_class)
            booked = inventory.booked if inventory else {}
            views[seat_class] = ClassView(
                seats=[
                    SeatView(seat_number=n, seat_class=seat_class, passenger=booked.get(n))
                    for n in seat_range
                ],
                waitlist=list(inventory.waitlist) if inventory else [],
            )
        return FlightInfo(flight=flight, classes=views)

    def sorted_flights(self, sort_key: SortKey) -> List[Flight]:
        return sort_flights(self.catalog.list_flights(), sort_key)

    def search_flight(self, flight_number: int) -> Flight:
        ordered = sort_flights(self.catalog.list_flights(), SortKey.flight_number)
        flight = binary_search(ordered, flight_number)
        if flight is None:
            raise NotFoundError("Flight not found", {"flightNumber": flight_number})
        return flight

    def reset(self) -> InventoryState:
        state = seed_state(self.catalog)
        self.store.replace(state)
        logger.info("Inventory reset for %d flights", len(state.flights))
        return state
