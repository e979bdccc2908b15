from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Sequence

from app.models.domain import ClassInventory, Flight, FlightInventory, SeatClass, SEAT_CLASSES

DEFAULT_FLIGHTS: Sequence[Flight] = (
    Flight(
        flight_number=101,
        departure_airport="LHR",
        arrival_airport="JFK",
        departure_date=date(2026, 9, 1),
    ),
    Flight(
        flight_number=202,
        departure_airport="CDG",
        arrival_airport="FCO",
        departure_date=date(2026, 9, 2),
    ),
)

DEFAULT_SEAT_RANGES: Dict[SeatClass, range] = {
    SeatClass.first: range(1, 6),
    SeatClass.business: range(6, 16),
    SeatClass.economy: range(16, 36),
}


class FlightCatalog:
    """Read-only list of known flights and the seat ranges of each class."""

    def __init__(
        self,
        flights: Sequence[Flight] = DEFAULT_FLIGHTS,
        seat_ranges: Dict[SeatClass, range] | None = None,
    ) -> None:
        self._flights: List[Flight] = list(flights)
        self._seat_ranges = dict(seat_ranges or DEFAULT_SEAT_RANGES)

    def list_flights(self) -> List[Flight]:
        return list(self._flights)

    def get(self, flight_number: int) -> Optional[Flight]:
        for flight in self._flights:
            if flight.flight_number == flight_number:
                return flight
        return None

    def seat_range(self, seat_class: SeatClass) -> List[int]:
        return list(self._seat_ranges[seat_class])

    def class_for_seat(self, seat_number: int) -> Optional[SeatClass]:
        for seat_class in SEAT_CLASSES:
            if seat_number in self._seat_ranges[seat_class]:
                return seat_class
        return None

    def empty_inventory(self) -> FlightInventory:
        return {
            seat_class: ClassInventory(seat_range=self.seat_range(seat_class))
            for seat_class in SEAT_CLASSES
        }
