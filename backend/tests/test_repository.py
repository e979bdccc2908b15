import json
import threading
from pathlib import Path

import pytest

from app.core.errors import PersistenceError
from app.models.domain import InventoryState, SeatClass
from app.services.flight_service import FlightService
from app.services.seat_allocator import SeatAllocator
from app.storage.catalog import FlightCatalog
from app.storage.repository import InMemoryInventoryStore, JsonFileInventoryStore


def test_missing_file_loads_empty_state(tmp_path: Path):
    store = JsonFileInventoryStore(tmp_path / "data" / "state.json", FlightCatalog())
    assert store.load() == InventoryState()


def test_save_creates_directory_and_writes_current_layout(tmp_path: Path):
    path = tmp_path / "nested" / "data" / "state.json"
    store = JsonFileInventoryStore(path, FlightCatalog())
    SeatAllocator(store=store, catalog=store.catalog).book(101, SeatClass.economy, "Alice")

    document = json.loads(path.read_text(encoding="utf-8"))

    economy = document["101"]["economy"]
    assert economy["booked"] == {"16": "Alice"}
    assert economy["waitlist"] == []
    assert economy["seats"] == list(range(16, 36))
    assert set(document["101"]) == {"first", "business", "economy"}


def test_round_trip_through_file(tmp_path: Path):
    catalog = FlightCatalog()
    store = JsonFileInventoryStore(tmp_path / "state.json", catalog)
    allocator = SeatAllocator(store=store, catalog=catalog)
    for i in range(6):
        allocator.book(202, SeatClass.first, f"P{i}")

    reloaded = JsonFileInventoryStore(tmp_path / "state.json", catalog).load()

    first = reloaded.get_class(202, SeatClass.first)
    assert first.booked == {1: "P0", 2: "P1", 3: "P2", 4: "P3", 5: "P4"}
    assert first.waitlist == ["P5"]


def test_partitioned_document_without_seats(tmp_path: Path):
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps({"101": {"business": {"booked": {"7": "Bob"}, "waitlist": []}}}),
        encoding="utf-8",
    )

    state = JsonFileInventoryStore(path, FlightCatalog()).load()

    assert state.get_class(101, SeatClass.business).booked == {7: "Bob"}
    assert state.get_class(101, SeatClass.business).seat_range == list(range(6, 16))
    assert state.get_class(101, SeatClass.economy).booked == {}


def test_legacy_document_is_partitioned_by_seat(tmp_path: Path):
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps(
            {"101": {"booked": {"2": "Ann", "20": "Eve", "99": "Lost"}, "waitlist": ["Wes"]}}
        ),
        encoding="utf-8",
    )

    state = JsonFileInventoryStore(path, FlightCatalog()).load()

    assert state.get_class(101, SeatClass.first).booked == {2: "Ann"}
    assert state.get_class(101, SeatClass.economy).booked == {20: "Eve"}
    assert state.get_class(101, SeatClass.economy).waitlist == ["Wes"]


def test_malformed_document_raises(tmp_path: Path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(PersistenceError):
        JsonFileInventoryStore(path, FlightCatalog()).load()


def test_unwritable_location_raises(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    store = JsonFileInventoryStore(blocker / "state.json", FlightCatalog())

    with pytest.raises(PersistenceError):
        store.save(InventoryState())


def test_in_memory_store_returns_copies():
    store = InMemoryInventoryStore()
    state = store.load()
    state.flights[101] = FlightCatalog().empty_inventory()

    assert store.load() == InventoryState()


def test_reset_discards_bookings():
    catalog = FlightCatalog()
    store = InMemoryInventoryStore()
    SeatAllocator(store=store, catalog=catalog).book(101, SeatClass.economy, "Alice")

    FlightService(store=store, catalog=catalog).reset()

    state = store.load()
    assert set(state.flights) == {101, 202}
    for classes in state.flights.values():
        for inventory in classes.values():
            assert inventory.booked == {}
            assert inventory.waitlist == []


def test_reset_overwrites_unreadable_file(tmp_path: Path):
    path = tmp_path / "state.json"
    path.write_text("[1, 2", encoding="utf-8")
    catalog = FlightCatalog()
    store = JsonFileInventoryStore(path, catalog)

    FlightService(store=store, catalog=catalog).reset()

    assert set(store.load().flights) == {101, 202}


def test_partitioned_document_drops_entries_breaking_class_invariants(tmp_path: Path):
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps(
            {
                "101": {
                    "economy": {
                        "booked": {"99": "Ghost", "16": "Alice", "17": "Alice", "18": "Bob"},
                        "waitlist": ["Bob", "Zed", "Zed"],
                    }
                }
            }
        ),
        encoding="utf-8",
    )

    economy = JsonFileInventoryStore(path, FlightCatalog()).load().get_class(101, SeatClass.economy)

    assert economy.booked == {16: "Alice", 18: "Bob"}
    assert economy.waitlist == ["Zed"]
    assert set(economy.booked) <= set(economy.seat_range)


def test_legacy_waitlist_skips_passengers_already_booked(tmp_path: Path):
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps({"202": {"booked": {"16": "Eve"}, "waitlist": ["Eve", "Wes"]}}),
        encoding="utf-8",
    )

    economy = JsonFileInventoryStore(path, FlightCatalog()).load().get_class(202, SeatClass.economy)

    assert economy.booked == {16: "Eve"}
    assert economy.waitlist == ["Wes"]


def test_document_seats_override_configured_range(tmp_path: Path):
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps(
            {"101": {"first": {"seats": [1, 2], "booked": {"1": "Ann", "3": "Cut"}, "waitlist": []}}}
        ),
        encoding="utf-8",
    )
    catalog = FlightCatalog()
    store = JsonFileInventoryStore(path, catalog)

    first = store.load().get_class(101, SeatClass.first)
    assert first.seat_range == [1, 2]
    assert first.booked == {1: "Ann"}

    allocator = SeatAllocator(store=store, catalog=catalog)
    assert allocator.book(101, SeatClass.first, "Ben").seat_number == 2
    assert allocator.book(101, SeatClass.first, "Cal").position == 1
    assert json.loads(path.read_text(encoding="utf-8"))["101"]["first"]["seats"] == [1, 2]


def test_concurrent_bookings_against_file_store(tmp_path: Path):
    catalog = FlightCatalog()
    store = JsonFileInventoryStore(tmp_path / "state.json", catalog)
    allocator = SeatAllocator(store=store, catalog=catalog)
    names = [f"Passenger {i}" for i in range(24)]
    barrier = threading.Barrier(len(names))

    def worker(index: int, name: str) -> None:
        barrier.wait()
        allocator.book(101 if index % 2 else 202, SeatClass.business, name)

    threads = [threading.Thread(target=worker, args=(i, n)) for i, n in enumerate(names)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    state = JsonFileInventoryStore(tmp_path / "state.json", catalog).load()
    placed = []
    for flight_number in (101, 202):
        business = state.get_class(flight_number, SeatClass.business)
        assert sorted(business.booked) == list(range(6, 16))
        assert len(business.waitlist) == 2
        placed.extend(business.booked.values())
        placed.extend(business.waitlist)
    assert sorted(placed) == sorted(names)
