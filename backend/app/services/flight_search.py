from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, TypeVar

from app.models.domain import Flight, SortKey

T = TypeVar("T")

SORT_KEYS: dict[SortKey, Callable[[Flight], Any]] = {
    SortKey.flight_number: lambda f: f.flight_number,
    SortKey.departure_date: lambda f: f.departure_date.isoformat(),
}


def merge_sort(items: Sequence[T], key: Callable[[T], Any]) -> List[T]:
    """Stable top-down merge sort; ties keep left-before-right order."""
    if len(items) <= 1:
        return list(items)
    mid = len(items) // 2
    return _merge(merge_sort(items[:mid], key), merge_sort(items[mid:], key), key)


def _merge(left: List[T], right: List[T], key: Callable[[T], Any]) -> List[T]:
    result: List[T] = []
    i = j = 0
    while i < len(left) and j < len(right):
        if key(left[i]) <= key(right[j]):
            result.append(left[i])
            i += 1
        else:
            result.append(right[j])
            j += 1
    result.extend(left[i:])
    result.extend(right[j:])
    return result


def sort_flights(flights: Sequence[Flight], sort_key: SortKey) -> List[Flight]:
    return merge_sort(flights, SORT_KEYS[sort_key])


def binary_search(sorted_flights: Sequence[Flight], target: int) -> Optional[Flight]:
    """Closed-interval search; input must be sorted by flight number."""
    low, high = 0, len(sorted_flights) - 1
    while low <= high:
        mid = (low + high) // 2
        value = sorted_flights[mid].flight_number
        if value == target:
            return sorted_flights[mid]
        if value < target:
            low = mid + 1
        else:
            high = mid - 1
    return None
