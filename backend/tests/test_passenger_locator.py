import pytest

from app.core.errors import BadRequestError, NotFoundError
from app.models.domain import BookingStatus, InventoryState, SeatClass
from app.services.passenger_locator import PassengerLocator, find_status
from app.services.seat_allocator import SeatAllocator
from app.storage.catalog import FlightCatalog
from app.storage.repository import InMemoryInventoryStore


def test_status_reports_booked_seat():
    store = InMemoryInventoryStore()
    SeatAllocator(store=store, catalog=FlightCatalog()).book(202, SeatClass.business, "Alice")

    status = PassengerLocator(store=store).status("Alice")

    assert status.status == BookingStatus.booked
    assert status.flight_number == 202
    assert status.seat_class == SeatClass.business
    assert status.seat_number == 6
    assert status.position is None


def test_status_reports_waitlist_position():
    store = InMemoryInventoryStore()
    allocator = SeatAllocator(store=store, catalog=FlightCatalog())
    for i in range(5):
        allocator.book(101, SeatClass.first, f"P{i}")
    allocator.book(101, SeatClass.first, "W1")
    allocator.book(101, SeatClass.first, "W2")

    status = PassengerLocator(store=store).status("W2")

    assert status.status == BookingStatus.waitlisted
    assert status.position == 2
    assert status.seat_number is None


def test_first_match_wins_in_class_order():
    state = InventoryState()
    catalog = FlightCatalog()
    state.flights[101] = catalog.empty_inventory()
    state.flights[202] = catalog.empty_inventory()
    state.flights[101][SeatClass.economy].booked[16] = "Alice"
    state.flights[101][SeatClass.business].waitlist.append("Alice")
    state.flights[202][SeatClass.first].booked[1] = "Alice"

    status = find_status(state, "Alice")

    assert status.flight_number == 101
    assert status.seat_class == SeatClass.business
    assert status.status == BookingStatus.waitlisted


def test_unknown_and_blank_names():
    with pytest.raises(NotFoundError):
        find_status(InventoryState(), "Nobody")
    with pytest.raises(BadRequestError):
        find_status(InventoryState(), "")
