"""Exceptions raised by the measurement engine."""

from __future__ import annotations


class MeasurementError(Exception):
    """Base class for all measurement engine errors."""


class MeasurementValidationError(MeasurementError):
    """Raised when a measurement cannot be saved from the current drawing."""


class RecordNotFoundError(MeasurementError, LookupError):
    """Raised when a record id does not exist in the store."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Record '{record_id}' not found")
        self.record_id = record_id


class PersistenceError(MeasurementError):
    """Raised when stored data is unreadable or malformed."""
