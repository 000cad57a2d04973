"""Sorting and distance filters for saved measurement records."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List

if TYPE_CHECKING:
    from .records import MeasurementRecord

SHORT_DISTANCE_LIMIT = 100.0
LONG_DISTANCE_LIMIT = 200.0


class SortCriterion(str, Enum):
    TIMESTAMP = "timestamp"
    DISTANCE = "distance"


class DistanceFilter(str, Enum):
    ALL = "all"
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @property
    def label(self) -> str:
        return _FILTER_LABELS[self]

    def matches(self, distance: float) -> bool:
        if self is DistanceFilter.SHORT:
            return distance < SHORT_DISTANCE_LIMIT
        if self is DistanceFilter.MEDIUM:
            return SHORT_DISTANCE_LIMIT <= distance <= LONG_DISTANCE_LIMIT
        if self is DistanceFilter.LONG:
            return distance > LONG_DISTANCE_LIMIT
        return True


_FILTER_LABELS: Dict[DistanceFilter, str] = {
    DistanceFilter.ALL: "All",
    DistanceFilter.SHORT: "Short (< 100px)",
    DistanceFilter.MEDIUM: "Medium (100-200px)",
    DistanceFilter.LONG: "Long (> 200px)",
}

_SORT_KEYS: Dict[SortCriterion, Callable[["MeasurementRecord"], object]] = {
    SortCriterion.TIMESTAMP: lambda record: record.created_at,
    SortCriterion.DISTANCE: lambda record: record.distance,
}


def sort_records(
    records: Iterable["MeasurementRecord"], criterion: SortCriterion | str
) -> List["MeasurementRecord"]:
    """Return a stably sorted copy of *records*, ascending by *criterion*."""

    key = _SORT_KEYS[SortCriterion(criterion)]
    return sorted(records, key=key)


def filter_records(
    records: Iterable["MeasurementRecord"], predicate: DistanceFilter | str
) -> List["MeasurementRecord"]:
    """Return the records whose distance falls in the *predicate* band."""

    band = DistanceFilter(predicate)
    return [record for record in records if band.matches(record.distance)]


__all__ = [
    "DistanceFilter",
    "LONG_DISTANCE_LIMIT",
    "SHORT_DISTANCE_LIMIT",
    "SortCriterion",
    "filter_records",
    "sort_records",
]
