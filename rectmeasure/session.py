"""Single state container that front ends drive with commands."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from .drawing import DrawingState, DrawingStateMachine, PointerEvent
from .filtering import DistanceFilter, SortCriterion
from .geometry import Rectangle, dimension_text
from .history import HistoryManager
from .records import RECORDS_SLOT, MeasurementRecord, RecordStore
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


class Shortcut(str, Enum):
    CLEAR = "clear"
    UNDO = "undo"
    REDO = "redo"


SHORTCUT_HINTS = (
    ("Ctrl + C", "Clear"),
    ("Ctrl + Z", "Undo"),
    ("Ctrl + Shift + Z", "Redo"),
)


def resolve_shortcut(key: str, *, ctrl: bool = False, meta: bool = False, shift: bool = False) -> Optional[Shortcut]:
    """Map a key press to a shortcut; Ctrl and Meta are interchangeable."""

    if not (ctrl or meta):
        return None
    key = key.lower()
    if key == "c":
        return Shortcut.CLEAR
    if key == "z":
        return Shortcut.REDO if shift else Shortcut.UNDO
    return None


class MeasurementSession:
    """Own the drawing, the history and the saved records for one user.

    Front ends call one method per user action; each call completes its
    read-modify-write before returning.
    """

    def __init__(self, storage: KeyValueStore, slot: Optional[str] = None) -> None:
        self.history = HistoryManager()
        self.drawing = DrawingStateMachine(self.history)
        self.records = RecordStore(storage, slot or RECORDS_SLOT)
        self._has_drawn = False

    @classmethod
    def open(cls, storage: KeyValueStore, slot: Optional[str] = None) -> "MeasurementSession":
        session = cls(storage, slot)
        session.records.load()
        return session

    @property
    def rectangles(self) -> tuple[Rectangle, ...]:
        return self.drawing.rectangles

    def handle_pointer(self, event: PointerEvent) -> Optional[Rectangle]:
        result = self.drawing.handle(event)
        if self.drawing.rectangles:
            self._has_drawn = True
        return result

    def handle_shortcut(self, shortcut: Shortcut | str) -> bool:
        shortcut = Shortcut(shortcut)
        if shortcut is Shortcut.CLEAR:
            self.clear()
            return True
        if shortcut is Shortcut.UNDO:
            return self.undo()
        return self.redo()

    def handle_key(self, key: str, *, ctrl: bool = False, meta: bool = False, shift: bool = False) -> Optional[Shortcut]:
        shortcut = resolve_shortcut(key, ctrl=ctrl, meta=meta, shift=shift)
        if shortcut is not None:
            self.handle_shortcut(shortcut)
        return shortcut

    def clear(self) -> None:
        self.drawing.clear()
        logger.debug("Drawing cleared")

    def undo(self) -> bool:
        return self.drawing.undo()

    def redo(self) -> bool:
        return self.drawing.redo()

    def save(self) -> MeasurementRecord:
        """Store the current pair and return the drawing to idle."""

        record = self.records.save(self.drawing.rectangles)
        self.drawing.reset()
        return record

    def delete_record(self, record_id: str) -> bool:
        return self.records.delete(record_id)

    def select_record(self, record_id: str) -> Optional[MeasurementRecord]:
        record = self.records.select(record_id)
        if record is not None:
            self.drawing.replace(record.rectangles)
            self._has_drawn = True
        return record

    def sort(self, criterion: SortCriterion | str) -> List[MeasurementRecord]:
        return self.records.sort(criterion)

    def filter(self, predicate: DistanceFilter | str) -> List[MeasurementRecord]:
        return self.records.filter(predicate)

    def view(self) -> Dict[str, Any]:
        """Return everything a renderer needs to draw the current state."""

        rectangles = self.drawing.rectangles
        preview = self.drawing.preview
        return {
            "state": self.drawing.state.value,
            "rectangles": [rect.to_dict() for rect in rectangles],
            "preview": preview.to_dict() if preview is not None else None,
            "dimensions": [dimension_text(rect) for rect in rectangles] if len(rectangles) == 2 else [],
            "can_undo": self.history.can_undo,
            "can_redo": self.history.can_redo,
            "show_hint": not self._has_drawn,
            "records": [_record_row(record) for record in self.records.displayed],
            "selected_id": self.records.selected_id,
            "is_filtered": self.records.is_filtered,
            "empty_message": self.records.empty_message,
        }

    @property
    def state(self) -> DrawingState:
        return self.drawing.state


def _record_row(record: MeasurementRecord) -> Dict[str, Any]:
    first, second = record.dimensions
    row = record.to_storage()
    row["dimensions"] = [first, second]
    return row
