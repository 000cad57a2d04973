"""Draw two rectangles, measure the distance between their centers, keep the result."""

from .drawing import DrawingState, DrawingStateMachine, PointerAction, PointerEvent
from .errors import MeasurementError, MeasurementValidationError, PersistenceError, RecordNotFoundError
from .filtering import DistanceFilter, SortCriterion
from .geometry import Rectangle, calculate_distance
from .history import HistoryManager
from .records import MeasurementRecord, RecordStore
from .session import MeasurementSession, Shortcut
from .storage import JSONFileStore, MemoryStore

__all__ = [
    "DistanceFilter",
    "DrawingState",
    "DrawingStateMachine",
    "HistoryManager",
    "JSONFileStore",
    "MeasurementError",
    "MeasurementRecord",
    "MeasurementSession",
    "MeasurementValidationError",
    "MemoryStore",
    "PersistenceError",
    "PointerAction",
    "PointerEvent",
    "RecordNotFoundError",
    "RecordStore",
    "Rectangle",
    "Shortcut",
    "SortCriterion",
    "calculate_distance",
]
