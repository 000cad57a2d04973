"""Saved measurement records and the store that owns them."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from .errors import MeasurementValidationError, PersistenceError, RecordNotFoundError
from .filtering import DistanceFilter, SortCriterion, filter_records, sort_records
from .geometry import Rectangle, calculate_distance, dimension_text
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

RECORDS_SLOT = "measurementData"
SAVE_REQUIRES_TWO_MESSAGE = "Please draw exactly two rectangles before saving!"
NO_RECORDS_MESSAGE = "No records found."
NO_MATCHES_MESSAGE = "No records match the selected filter."


def _new_record_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MeasurementRecord(BaseModel):
    """A saved pair of rectangles and the distance between their centers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=_new_record_id)
    rectangles: Tuple[Rectangle, Rectangle]
    distance: float
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_rectangles(cls, rectangles: Sequence[Rectangle]) -> "MeasurementRecord":
        first, second = rectangles
        return cls(rectangles=(first, second), distance=calculate_distance(first, second))

    @property
    def dimensions(self) -> Tuple[str, str]:
        return dimension_text(self.rectangles[0]), dimension_text(self.rectangles[1])

    def to_storage(self) -> dict[str, Any]:
        """Return the JSON-compatible form written to the key-value store."""

        return self.model_dump(mode="json", by_alias=True)


_RECORD_LIST = TypeAdapter(List[MeasurementRecord])


def parse_records(payload: Any) -> List[MeasurementRecord]:
    """Validate a persisted record list, raising ``PersistenceError`` if malformed."""

    if payload is None:
        return []
    try:
        return _RECORD_LIST.validate_python(payload)
    except ValidationError as exc:
        raise PersistenceError(f"Stored measurements are malformed: {exc}") from exc


class RecordStore:
    """Own the canonical and displayed record lists.

    The canonical list is newest first and is the only list written to
    storage. The displayed list is whatever the last sort or filter produced.
    """

    def __init__(self, storage: KeyValueStore, slot: str = RECORDS_SLOT) -> None:
        self._storage = storage
        self._slot = slot
        self._canonical: List[MeasurementRecord] = []
        self._displayed: List[MeasurementRecord] = []
        self.selected_id: Optional[str] = None
        self.is_filtered = False

    @property
    def canonical(self) -> List[MeasurementRecord]:
        return list(self._canonical)

    @property
    def displayed(self) -> List[MeasurementRecord]:
        return list(self._displayed)

    @property
    def empty_message(self) -> Optional[str]:
        if self._displayed:
            return None
        return NO_MATCHES_MESSAGE if self.is_filtered else NO_RECORDS_MESSAGE

    def load(self) -> List[MeasurementRecord]:
        """Initialise both lists from storage, starting empty on bad data."""

        try:
            records = parse_records(self._storage.get_item(self._slot))
        except PersistenceError as exc:
            logger.warning("Ignoring stored measurements: %s", exc)
            records = []
        self._canonical = list(records)
        self._displayed = list(records)
        logger.info("Loaded %d saved measurement(s)", len(records))
        return self.canonical

    def save(self, rectangles: Sequence[Rectangle]) -> MeasurementRecord:
        if len(rectangles) != 2:
            raise MeasurementValidationError(SAVE_REQUIRES_TWO_MESSAGE)
        record = MeasurementRecord.from_rectangles(rectangles)
        self._canonical.insert(0, record)
        self._displayed.insert(0, record)
        self._sync()
        logger.info("Saved measurement %s (distance %.2f)", record.id, record.distance)
        return record

    def get(self, record_id: str) -> MeasurementRecord:
        for record in self._canonical:
            if record.id == record_id:
                return record
        raise RecordNotFoundError(record_id)

    def delete(self, record_id: str) -> bool:
        remaining = [record for record in self._canonical if record.id != record_id]
        if len(remaining) == len(self._canonical):
            logger.debug("Delete ignored, no record %s", record_id)
            return False
        self._canonical = remaining
        self._displayed = [record for record in self._displayed if record.id != record_id]
        if self.selected_id == record_id:
            self.selected_id = None
        self._sync()
        logger.info("Deleted measurement %s", record_id)
        return True

    def select(self, record_id: str) -> Optional[MeasurementRecord]:
        try:
            record = self.get(record_id)
        except RecordNotFoundError:
            logger.debug("Select ignored, no record %s", record_id)
            return None
        self.selected_id = record.id
        return record

    def sort(self, criterion: SortCriterion | str) -> List[MeasurementRecord]:
        self._displayed = sort_records(self._displayed, criterion)
        return self.displayed

    def filter(self, predicate: DistanceFilter | str) -> List[MeasurementRecord]:
        self._displayed = filter_records(self._canonical, predicate)
        self.is_filtered = True
        return self.displayed

    def _sync(self) -> None:
        self._storage.set_item(self._slot, [record.to_storage() for record in self._canonical])
