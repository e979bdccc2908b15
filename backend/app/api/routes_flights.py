from typing import List, Optional

from fastapi import APIRouter, Depends

from app.api import get_catalog, get_seat_request, get_store
from app.models.domain import SeatClass, SortKey
from app.models.schemas import (
    BookedResponse,
    CancelResponse,
    FlightInfoResponse,
    FlightSchema,
    SearchFlightResponse,
    SeatRequest,
    SortedFlightsResponse,
    WaitlistedResponse,
    booking_response,
)
from app.services.flight_service import FlightService, parse_flight_number
from app.services.seat_allocator import SeatAllocator
from app.storage.catalog import FlightCatalog
from app.storage.repository import InventoryStore

router = APIRouter()


def get_flight_service(
    store: InventoryStore = Depends(get_store),
    catalog: FlightCatalog = Depends(get_catalog),
) -> FlightService:
    return FlightService(store=store, catalog=catalog)


def get_seat_allocator(
    store: InventoryStore = Depends(get_store),
    catalog: FlightCatalog = Depends(get_catalog),
) -> SeatAllocator:
    return SeatAllocator(store=store, catalog=catalog)


@router.get("", response_model=List[FlightSchema])
def list_flights(service: FlightService = Depends(get_flight_service)) -> List[FlightSchema]:
    return [FlightSchema.from_domain(f) for f in service.list_flights()]


@router.get("/sorted", response_model=SortedFlightsResponse)
def sorted_flights(
    by: str = SortKey.flight_number.value,
    service: FlightService = Depends(get_flight_service),
) -> SortedFlightsResponse:
    sort_key = SortKey.parse(by)
    return SortedFlightsResponse(
        sorted_by=sort_key,
        flights=[FlightSchema.from_domain(f) for f in service.sorted_flights(sort_key)],
    )


@router.get("/search", response_model=SearchFlightResponse)
def search_flight(
    flightNumber: Optional[str] = None,
    service: FlightService = Depends(get_flight_service),
) -> SearchFlightResponse:
    flight = service.search_flight(parse_flight_number(flightNumber))
    return SearchFlightResponse(flight=FlightSchema.from_domain(flight))


@router.get("/{flight_number}", response_model=FlightSchema)
def get_flight(
    flight_number: int, service: FlightService = Depends(get_flight_service)
) -> FlightSchema:
    return FlightSchema.from_domain(service.get_flight(flight_number))


@router.get("/{flight_number}/info", response_model=FlightInfoResponse)
def get_flight_info(
    flight_number: int, service: FlightService = Depends(get_flight_service)
) -> FlightInfoResponse:
    return FlightInfoResponse.from_domain(service.get_flight_info(flight_number))


@router.post("/{flight_number}/book", response_model=BookedResponse | WaitlistedResponse)
def book_seat(
    flight_number: int,
    body: SeatRequest = Depends(get_seat_request),
    allocator: SeatAllocator = Depends(get_seat_allocator),
) -> BookedResponse | WaitlistedResponse:
    outcome = allocator.book(
        flight_number, SeatClass.parse(body.seat_class), body.name or ""
    )
    return booking_response(outcome)


@router.post("/{flight_number}/cancel", response_model=CancelResponse)
def cancel_seat(
    flight_number: int,
    body: SeatRequest = Depends(get_seat_request),
    allocator: SeatAllocator = Depends(get_seat_allocator),
) -> CancelResponse:
    outcome = allocator.cancel(
        flight_number, SeatClass.parse(body.seat_class), body.name or ""
    )
    return CancelResponse.from_domain(outcome)
