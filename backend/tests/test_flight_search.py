from datetime import date
from itertools import combinations

from app.models.domain import Flight, SortKey
from app.services.flight_search import binary_search, merge_sort, sort_flights
from app.storage.catalog import FlightCatalog


def flight(number: int, day: int) -> Flight:
    return Flight(
        flight_number=number,
        departure_airport="AAA",
        arrival_airport="BBB",
        departure_date=date(2026, 9, day),
    )


FLIGHTS = [flight(303, 2), flight(101, 5), flight(505, 1), flight(202, 2), flight(404, 5)]


def test_merge_sort_by_flight_number():
    ordered = sort_flights(FLIGHTS, SortKey.flight_number)
    assert [f.flight_number for f in ordered] == [101, 202, 303, 404, 505]


def test_merge_sort_by_date_is_stable():
    ordered = sort_flights(FLIGHTS, SortKey.departure_date)
    assert [f.flight_number for f in ordered] == [505, 303, 202, 101, 404]


def test_merge_sort_is_idempotent_and_leaves_input_alone():
    original = list(FLIGHTS)
    once = sort_flights(FLIGHTS, SortKey.departure_date)
    twice = sort_flights(once, SortKey.departure_date)

    assert once == twice
    assert FLIGHTS == original


def test_merge_sort_handles_trivial_inputs():
    assert merge_sort([], key=lambda x: x) == []
    assert merge_sort([3], key=lambda x: x) == [3]
    assert merge_sort([(1, "b"), (0, "a"), (1, "a")], key=lambda x: x[0]) == [
        (0, "a"),
        (1, "b"),
        (1, "a"),
    ]


def test_binary_search_over_every_subset():
    ordered = sort_flights(FLIGHTS, SortKey.flight_number)
    numbers = [f.flight_number for f in ordered]
    for size in range(len(ordered) + 1):
        for subset in combinations(ordered, size):
            present = {f.flight_number for f in subset}
            for target in numbers + [0, 150, 999]:
                found = binary_search(list(subset), target)
                if target in present:
                    assert found is not None and found.flight_number == target
                else:
                    assert found is None


def test_catalog_sorted_search():
    catalog = FlightCatalog()
    ordered = sort_flights(catalog.list_flights(), SortKey.flight_number)
    assert binary_search(ordered, 202).arrival_airport == "FCO"
