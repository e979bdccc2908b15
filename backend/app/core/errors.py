from typing import Any, Dict, Optional


class SchedulerError(Exception):
    """Base error for the seat inventory core. Never retried."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details or {}


class BadRequestError(SchedulerError):
    """Missing or invalid input: passenger name, class, sort key, flight number."""


class NotFoundError(SchedulerError):
    """Unknown flight, missing flight/class state or absent passenger."""


class ConflictError(SchedulerError):
    """Passenger already booked or waitlisted in the target class."""


class PersistenceError(SchedulerError):
    """Inventory state could not be read or written."""
