from typing import Optional

from app.core.errors import BadRequestError, NotFoundError
from app.models.domain import BookingStatus, InventoryState, PassengerStatus, SEAT_CLASSES
from app.storage.repository import InventoryStore


def find_status(state: InventoryState, passenger_name: str) -> PassengerStatus:
    """
    Walk flights in state order, then first/business/economy, checking booked
    seats before the waitlist. The first match wins; a name present on
    several flights is only reported once.
    """
    name = (passenger_name or "").strip()
    if not name:
        raise BadRequestError('Query param "name" is required')

    for flight_number, classes in state.flights.items():
        for seat_class in SEAT_CLASSES:
            inventory = classes.get(seat_class)
            if inventory is None:
                continue
            seat_number: Optional[int] = inventory.seat_of(name)
            if seat_number is not None:
                return PassengerStatus(
                    name=name,
                    status=BookingStatus.booked,
                    flight_number=flight_number,
                    seat_class=seat_class,
                    seat_number=seat_number,
                )
            if name in inventory.waitlist:
                return PassengerStatus(
                    name=name,
                    status=BookingStatus.waitlisted,
                    flight_number=flight_number,
                    seat_class=seat_class,
                    position=inventory.waitlist.index(name) + 1,
                )
    raise NotFoundError("Passenger not found", {"name": name, "status": "not_found"})


class PassengerLocator:
    def __init__(self, store: InventoryStore):
        self.store = store

    def status(self, passenger_name: str) -> PassengerStatus:
        return find_status(self.store.load(), passenger_name)
