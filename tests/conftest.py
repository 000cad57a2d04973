from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from rectmeasure.geometry import Rectangle
from rectmeasure.records import MeasurementRecord, RecordStore
from rectmeasure.session import MeasurementSession
from rectmeasure.storage import MemoryStore

RECT_A = Rectangle(x=10, y=10, width=50, height=40)
RECT_B = Rectangle(x=100, y=10, width=30, height=20)

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_record(distance: float, minutes: int = 0, record_id: str | None = None) -> MeasurementRecord:
    """Build a record whose zero-size rectangles sit *distance* apart."""

    fields = {}
    if record_id is not None:
        fields["id"] = record_id
    return MeasurementRecord(
        rectangles=(Rectangle(0, 0, 0, 0), Rectangle(distance, 0, 0, 0)),
        distance=distance,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        **fields,
    )


@pytest.fixture
def storage() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def store(storage: MemoryStore) -> RecordStore:
    record_store = RecordStore(storage)
    record_store.load()
    return record_store


@pytest.fixture
def session(storage: MemoryStore) -> MeasurementSession:
    return MeasurementSession.open(storage)


def drag(target, start: tuple[float, float], end: tuple[float, float]) -> None:
    """Drive a full down/move/up drag through a session or state machine."""

    from rectmeasure.drawing import PointerAction, PointerEvent

    handler = getattr(target, "handle_pointer", None) or target.handle
    handler(PointerEvent(PointerAction.DOWN, *start))
    handler(PointerEvent(PointerAction.MOVE, *end))
    handler(PointerEvent(PointerAction.UP, *end))
