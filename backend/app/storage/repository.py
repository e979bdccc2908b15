from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from app.core.errors import PersistenceError
from app.models.domain import ClassInventory, FlightInventory, InventoryState, SeatClass, SEAT_CLASSES
from app.storage.catalog import FlightCatalog

logger = logging.getLogger(__name__)


def state_to_document(state: InventoryState) -> Dict[str, Any]:
    document: Dict[str, Any] = {}
    for flight_number, classes in state.flights.items():
        document[str(flight_number)] = {
            seat_class.value: {
                "seats": list(inventory.seat_range),
                "booked": {
                    str(seat): name for seat, name in sorted(inventory.booked.items())
                },
                "waitlist": list(inventory.waitlist),
            }
            for seat_class, inventory in classes.items()
        }
    return document


def document_to_state(document: Any, catalog: FlightCatalog) -> InventoryState:
    """Decode a persisted document, accepting both layouts.

    Legacy documents keep one ``booked``/``waitlist`` pair per flight; the
    current layout partitions them by class and records the class seats.
    """
    if not isinstance(document, dict):
        raise PersistenceError("State document is not an object")
    state = InventoryState()
    for flight_key, raw_flight in document.items():
        try:
            flight_number = int(flight_key)
        except ValueError:
            raise PersistenceError(
                "Invalid flight key in state document", {"flightKey": flight_key}
            ) from None
        if not isinstance(raw_flight, dict):
            raise PersistenceError(
                "Invalid flight entry in state document", {"flightNumber": flight_number}
            )
        try:
            if "booked" in raw_flight or "waitlist" in raw_flight:
                classes = _decode_legacy_flight(flight_number, raw_flight, catalog)
            else:
                classes = _decode_flight(flight_number, raw_flight, catalog)
        except (AttributeError, TypeError, ValueError) as exc:
            raise PersistenceError(
                "Malformed flight entry in state document",
                {"flightNumber": flight_number},
            ) from exc
        state.flights[flight_number] = classes
    return state


def _fill_class(
    flight_number: int,
    seat_class: SeatClass,
    inventory: ClassInventory,
    raw_booked: Dict[Any, Any],
    raw_waitlist: List[Any],
) -> None:
    """Copy booked seats and waitlist, dropping entries that break class invariants."""
    for seat_key, name in raw_booked.items():
        seat_number = int(seat_key)
        if seat_number not in inventory.seat_range:
            logger.warning(
                "Dropping booking of seat %s on flight %s %s: outside the class seats",
                seat_number,
                flight_number,
                seat_class.value,
            )
            continue
        if name in inventory.booked.values():
            logger.warning(
                "Dropping duplicate booking of %s on flight %s %s",
                name,
                flight_number,
                seat_class.value,
            )
            continue
        inventory.booked[seat_number] = name
    for name in raw_waitlist:
        if inventory.has_passenger(name):
            logger.warning(
                "Dropping waitlist entry %s on flight %s %s: already present",
                name,
                flight_number,
                seat_class.value,
            )
            continue
        inventory.waitlist.append(name)


def _decode_flight(
    flight_number: int, raw_flight: Dict[str, Any], catalog: FlightCatalog
) -> FlightInventory:
    classes = catalog.empty_inventory()
    for seat_class in SEAT_CLASSES:
        raw_class = raw_flight.get(seat_class.value)
        if raw_class is None:
            continue
        seats = raw_class.get("seats")
        inventory = ClassInventory(
            seat_range=[int(s) for s in seats] if seats else catalog.seat_range(seat_class)
        )
        _fill_class(
            flight_number,
            seat_class,
            inventory,
            raw_class.get("booked") or {},
            list(raw_class.get("waitlist") or []),
        )
        classes[seat_class] = inventory
    return classes


def _decode_legacy_flight(
    flight_number: int, raw_flight: Dict[str, Any], catalog: FlightCatalog
) -> FlightInventory:
    classes = catalog.empty_inventory()
    booked_by_class: Dict[SeatClass, Dict[int, Any]] = {c: {} for c in SEAT_CLASSES}
    for seat_key, name in (raw_flight.get("booked") or {}).items():
        seat_number = int(seat_key)
        seat_class = catalog.class_for_seat(seat_number)
        if seat_class is None:
            logger.warning(
                "Dropping legacy booking of seat %s on flight %s: outside every class",
                seat_number,
                flight_number,
            )
            continue
        booked_by_class[seat_class][seat_number] = name
    # Legacy waitlists belong to economy, the default class.
    waitlists = {SeatClass.economy: list(raw_flight.get("waitlist") or [])}
    for seat_class in SEAT_CLASSES:
        _fill_class(
            flight_number,
            seat_class,
            classes[seat_class],
            booked_by_class[seat_class],
            waitlists.get(seat_class, []),
        )
    return classes


class InventoryStore:
    """Full-state load/save with a store-wide writer lock.

    ``transaction()`` serializes every read-modify-write so concurrent
    mutations cannot drop each other's updates.
    """

    def __init__(self) -> None:
        self._write_lock = threading.RLock()

    def load(self) -> InventoryState:
        raise NotImplementedError

    def save(self, state: InventoryState) -> None:
        raise NotImplementedError

    @contextmanager
    def transaction(self) -> Iterator[InventoryState]:
        with self._write_lock:
            state = self.load()
            yield state
            self.save(state)

    def replace(self, state: InventoryState) -> None:
        with self._write_lock:
            self.save(state)


class InMemoryInventoryStore(InventoryStore):
    def __init__(self, state: Optional[InventoryState] = None) -> None:
        super().__init__()
        self._state = copy.deepcopy(state) if state else InventoryState()
        self._snapshot_lock = threading.Lock()

    def load(self) -> InventoryState:
        with self._snapshot_lock:
            return copy.deepcopy(self._state)

    def save(self, state: InventoryState) -> None:
        with self._snapshot_lock:
            self._state = copy.deepcopy(state)


class JsonFileInventoryStore(InventoryStore):
    def __init__(self, path: str | Path, catalog: FlightCatalog) -> None:
        super().__init__()
        self.path = Path(path)
        self.catalog = catalog

    def exists(self) -> bool:
        return self.path.exists()

    def read_document(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Failed to read state file %s: %s", self.path, exc)
            raise PersistenceError(
                "State cannot be read", {"stateFile": str(self.path)}
            ) from exc

    def load(self) -> InventoryState:
        return document_to_state(self.read_document(), self.catalog)

    def save(self, state: InventoryState) -> None:
        payload = json.dumps(state_to_document(state), indent=4)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=".state-", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.error("Failed to write state file %s: %s", self.path, exc)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(
                "State cannot be written", {"stateFile": str(self.path)}
            ) from exc
