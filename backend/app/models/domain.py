from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union

from app.core.errors import BadRequestError


class SeatClass(str, Enum):
    first = "first"
    business = "business"
    economy = "economy"

    @classmethod
    def parse(cls, value: str) -> "SeatClass":
        try:
            return cls(value)
        except ValueError:
            raise BadRequestError(
                "Invalid class", {"allowed": [c.value for c in cls]}
            ) from None


# Iteration order used everywhere a flight's classes are walked.
SEAT_CLASSES: Sequence[SeatClass] = (
    SeatClass.first,
    SeatClass.business,
    SeatClass.economy,
)


class SortKey(str, Enum):
    flight_number = "flightNumber"
    departure_date = "departureDate"

    @classmethod
    def parse(cls, value: str) -> "SortKey":
        try:
            return cls(value)
        except ValueError:
            raise BadRequestError(
                'Invalid "by" parameter', {"allowed": [k.value for k in cls]}
            ) from None


class BookingStatus(str, Enum):
    booked = "booked"
    waitlisted = "waitlisted"


@dataclass(frozen=True)
class Flight:
    flight_number: int
    departure_airport: str
    arrival_airport: str
    departure_date: date


@dataclass
class ClassInventory:
    """Seats of one class on one flight.

    ``booked`` maps seat number to passenger name and only ever holds seats
    from ``seat_range``. ``waitlist`` is FIFO: index 0 is promoted first.
    """

    seat_range: List[int]
    booked: Dict[int, str] = field(default_factory=dict)
    waitlist: List[str] = field(default_factory=list)

    def has_passenger(self, name: str) -> bool:
        return name in self.booked.values() or name in self.waitlist

    def first_free_seat(self) -> Optional[int]:
        for seat_number in self.seat_range:
            if seat_number not in self.booked:
                return seat_number
        return None

    def seat_of(self, name: str) -> Optional[int]:
        for seat_number, passenger in self.booked.items():
            if passenger == name:
                return seat_number
        return None


FlightInventory = Dict[SeatClass, ClassInventory]


@dataclass
class InventoryState:
    flights: Dict[int, FlightInventory] = field(default_factory=dict)

    def get_class(
        self, flight_number: int, seat_class: SeatClass
    ) -> Optional[ClassInventory]:
        return self.flights.get(flight_number, {}).get(seat_class)


@dataclass
class Booked:
    seat_class: SeatClass
    passenger: str
    seat_number: int
    status: BookingStatus = BookingStatus.booked


@dataclass
class Waitlisted:
    seat_class: SeatClass
    passenger: str
    position: int
    status: BookingStatus = BookingStatus.waitlisted


BookingOutcome = Union[Booked, Waitlisted]


@dataclass
class Cancelled:
    seat_class: SeatClass
    cancelled_passenger: str
    freed_seat: int
    moved_from_waitlist: Optional[str] = None


@dataclass
class PassengerStatus:
    name: str
    status: BookingStatus
    flight_number: int
    seat_class: SeatClass
    seat_number: Optional[int] = None
    position: Optional[int] = None


@dataclass
class SeatView:
    seat_number: int
    seat_class: SeatClass
    passenger: Optional[str]


@dataclass
class ClassView:
    seats: List[SeatView]
    waitlist: List[str]


@dataclass
class FlightInfo:
    flight: Flight
    classes: Dict[SeatClass, ClassView]
