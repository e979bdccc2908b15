import logging

from app.core.errors import BadRequestError, ConflictError, NotFoundError
from app.models.domain import (
    Booked,
    BookingOutcome,
    Cancelled,
    ClassInventory,
    InventoryState,
    SeatClass,
    Waitlisted,
)
from app.storage.catalog import FlightCatalog
from app.storage.repository import InventoryStore

logger = logging.getLogger(__name__)


def _require_name(passenger_name: str) -> str:
    name = (passenger_name or "").strip()
    if not name:
        raise BadRequestError("Passenger name required")
    return name


def _require_flight(catalog: FlightCatalog, flight_number: int) -> None:
    if catalog.get(flight_number) is None:
        raise NotFoundError("Flight not found", {"flightNumber": flight_number})


def book_seat(
    state: InventoryState,
    catalog: FlightCatalog,
    flight_number: int,
    seat_class: SeatClass,
    passenger_name: str,
) -> BookingOutcome:
    """Give the passenger the lowest free seat of the class, or queue them."""
    name = _require_name(passenger_name)
    _require_flight(catalog, flight_number)

    if flight_number not in state.flights:
        state.flights[flight_number] = catalog.empty_inventory()
    inventory = state.flights[flight_number].setdefault(
        seat_class, ClassInventory(seat_range=catalog.seat_range(seat_class))
    )

    if inventory.has_passenger(name):
        raise ConflictError(
            "Passenger already exists in this class",
            {"class": seat_class.value, "passenger": name},
        )

    seat_number = inventory.first_free_seat()
    if seat_number is not None:
        inventory.booked[seat_number] = name
        return Booked(seat_class=seat_class, passenger=name, seat_number=seat_number)

    inventory.waitlist.append(name)
    return Waitlisted(
        seat_class=seat_class, passenger=name, position=len(inventory.waitlist)
    )


def cancel_seat(
    state: InventoryState,
    catalog: FlightCatalog,
    flight_number: int,
    seat_class: SeatClass,
    passenger_name: str,
) -> Cancelled:
    """Free the passenger's seat and hand it to the head of the waitlist."""
    name = _require_name(passenger_name)
    _require_flight(catalog, flight_number)

    inventory = state.get_class(flight_number, seat_class)
    if inventory is None:
        raise NotFoundError(
            "Flight/class state not found",
            {"flightNumber": flight_number, "class": seat_class.value},
        )

    seat_number = inventory.seat_of(name)
    if seat_number is None:
        raise NotFoundError(
            "Passenger not found in booked list", {"class": seat_class.value}
        )

    del inventory.booked[seat_number]
    moved = None
    if inventory.waitlist:
        moved = inventory.waitlist.pop(0)
        inventory.booked[seat_number] = moved

    return Cancelled(
        seat_class=seat_class,
        cancelled_passenger=name,
        freed_seat=seat_number,
        moved_from_waitlist=moved,
    )


class SeatAllocator:
    def __init__(self, store: InventoryStore, catalog: FlightCatalog):
        self.store = store
        self.catalog = catalog

    def book(
        self, flight_number: int, seat_class: SeatClass, passenger_name: str
    ) -> BookingOutcome:
        with self.store.transaction() as state:
            outcome = book_seat(
                state, self.catalog, flight_number, seat_class, passenger_name
            )
        if isinstance(outcome, Booked):
            logger.info(
                "Booked %s on flight %s %s seat %s",
                outcome.passenger,
                flight_number,
                seat_class.value,
                outcome.seat_number,
            )
        else:
            logger.info(
                "Waitlisted %s on flight %s %s at position %s",
                outcome.passenger,
                flight_number,
                seat_class.value,
                outcome.position,
            )
        return outcome

    def cancel(
        self, flight_number: int, seat_class: SeatClass, passenger_name: str
    ) -> Cancelled:
        with self.store.transaction() as state:
            outcome = cancel_seat(
                state, self.catalog, flight_number, seat_class, passenger_name
            )
        logger.info(
            "Cancelled %s on flight %s %s seat %s (promoted: %s)",
            outcome.cancelled_passenger,
            flight_number,
            seat_class.value,
            outcome.freed_seat,
            outcome.moved_from_waitlist,
        )
        return outcome
