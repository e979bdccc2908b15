from datetime import date
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.domain import (
    Booked,
    BookingOutcome,
    BookingStatus,
    Cancelled,
    ClassView,
    Flight,
    FlightInfo,
    PassengerStatus,
    SeatClass,
    SeatView,
    SortKey,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FlightSchema(CamelModel):
    flight_number: int
    departure_airport: str
    arrival_airport: str
    departure_date: date

    @classmethod
    def from_domain(cls, obj: Flight) -> "FlightSchema":
        return cls(
            flight_number=obj.flight_number,
            departure_airport=obj.departure_airport,
            arrival_airport=obj.arrival_airport,
            departure_date=obj.departure_date,
        )


class SeatSchema(CamelModel):
    seat_number: int
    seat_class: SeatClass = Field(alias="class")
    passenger: Optional[str] = None

    @classmethod
    def from_domain(cls, obj: SeatView) -> "SeatSchema":
        return cls(
            seat_number=obj.seat_number,
            seat_class=obj.seat_class,
            passenger=obj.passenger,
        )


class ClassViewSchema(CamelModel):
    seats: List[SeatSchema]
    waitlist: List[str]

    @classmethod
    def from_domain(cls, obj: ClassView) -> "ClassViewSchema":
        return cls(
            seats=[SeatSchema.from_domain(s) for s in obj.seats],
            waitlist=list(obj.waitlist),
        )


class FlightInfoResponse(CamelModel):
    flight: FlightSchema
    classes: Dict[SeatClass, ClassViewSchema]

    @classmethod
    def from_domain(cls, obj: FlightInfo) -> "FlightInfoResponse":
        return cls(
            flight=FlightSchema.from_domain(obj.flight),
            classes={k: ClassViewSchema.from_domain(v) for k, v in obj.classes.items()},
        )


class SeatRequest(CamelModel):
    """Body of book/cancel. Kept loose so the route can answer 400, not 422."""

    name: Optional[str] = None
    seat_class: str = Field(SeatClass.economy.value, alias="class")


class BookedResponse(CamelModel):
    status: Literal[BookingStatus.booked] = BookingStatus.booked
    seat_class: SeatClass = Field(alias="class")
    passenger: str
    seat_number: int


class WaitlistedResponse(CamelModel):
    status: Literal[BookingStatus.waitlisted] = BookingStatus.waitlisted
    seat_class: SeatClass = Field(alias="class")
    passenger: str
    position: int


def booking_response(outcome: BookingOutcome) -> BookedResponse | WaitlistedResponse:
    if isinstance(outcome, Booked):
        return BookedResponse(
            seat_class=outcome.seat_class,
            passenger=outcome.passenger,
            seat_number=outcome.seat_number,
        )
    return WaitlistedResponse(
        seat_class=outcome.seat_class,
        passenger=outcome.passenger,
        position=outcome.position,
    )


class CancelResponse(CamelModel):
    status: Literal["cancelled"] = "cancelled"
    seat_class: SeatClass = Field(alias="class")
    cancelled_passenger: str
    freed_seat: int
    moved_from_waitlist: Optional[str] = None

    @classmethod
    def from_domain(cls, obj: Cancelled) -> "CancelResponse":
        return cls(
            seat_class=obj.seat_class,
            cancelled_passenger=obj.cancelled_passenger,
            freed_seat=obj.freed_seat,
            moved_from_waitlist=obj.moved_from_waitlist,
        )


class PassengerStatusResponse(CamelModel):
    name: str
    status: BookingStatus
    flight_number: int
    seat_class: SeatClass = Field(alias="class")
    seat_number: Optional[int] = None
    position: Optional[int] = None

    @classmethod
    def from_domain(cls, obj: PassengerStatus) -> "PassengerStatusResponse":
        return cls(
            name=obj.name,
            status=obj.status,
            flight_number=obj.flight_number,
            seat_class=obj.seat_class,
            seat_number=obj.seat_number,
            position=obj.position,
        )


class SortedFlightsResponse(CamelModel):
    sorted_by: SortKey
    flights: List[FlightSchema]


class SearchFlightResponse(CamelModel):
    flight: FlightSchema


class ResetResponse(CamelModel):
    status: str = "reset"
