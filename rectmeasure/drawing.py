"""Pointer-driven state machine for drawing up to two rectangles."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .geometry import Rectangle
from .history import HistoryManager

logger = logging.getLogger(__name__)

MAX_RECTANGLES = 2


class DrawingState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    READY = "ready"


class PointerAction(str, Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event with coordinates relative to the drawing surface."""

    action: PointerAction
    x: float = 0.0
    y: float = 0.0

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


class DrawingStateMachine:
    """Own the committed rectangle set and the drag in progress.

    Every transition that changes the committed set outside of undo/redo
    pushes the previous set to the history manager.
    """

    def __init__(self, history: Optional[HistoryManager] = None) -> None:
        self.history = history if history is not None else HistoryManager()
        self._rectangles: Tuple[Rectangle, ...] = ()
        self._anchor: Optional[Tuple[float, float]] = None
        self._preview: Optional[Rectangle] = None

    @property
    def rectangles(self) -> Tuple[Rectangle, ...]:
        return self._rectangles

    @property
    def preview(self) -> Optional[Rectangle]:
        return self._preview

    @property
    def is_dragging(self) -> bool:
        return self._anchor is not None

    @property
    def state(self) -> DrawingState:
        if self.is_dragging:
            return DrawingState.DRAGGING
        if self._rectangles:
            return DrawingState.READY
        return DrawingState.IDLE

    @property
    def is_full(self) -> bool:
        return len(self._rectangles) >= MAX_RECTANGLES

    def handle(self, event: PointerEvent) -> Optional[Rectangle]:
        """Apply *event* and return the rectangle it produced, if any.

        The return value is the live preview for ``MOVE`` and the committed
        rectangle for ``UP``; events that do not apply return ``None``.
        """

        action = PointerAction(event.action)
        if action is PointerAction.DOWN:
            self.begin_drag(event.x, event.y)
            return None
        if action is PointerAction.MOVE:
            return self.update_drag(event.x, event.y)
        if action is PointerAction.UP:
            return self.commit_drag(event.x, event.y)
        self.cancel_drag()
        return None

    def begin_drag(self, x: float, y: float) -> bool:
        if self.is_full:
            return False
        self._anchor = (float(x), float(y))
        self._preview = Rectangle(x=float(x), y=float(y), width=0.0, height=0.0)
        return True

    def update_drag(self, x: float, y: float) -> Optional[Rectangle]:
        if self._anchor is None:
            return None
        self._preview = Rectangle.from_drag(self._anchor, (x, y))
        return self._preview

    def commit_drag(self, x: float, y: float) -> Optional[Rectangle]:
        if self._anchor is None:
            return None
        rect = Rectangle.from_drag(self._anchor, (x, y))
        self._end_drag()
        self.history.push_snapshot(self._rectangles)
        self._rectangles = self._rectangles + (rect,)
        logger.debug("Committed rectangle %d: %s", len(self._rectangles), rect)
        return rect

    def cancel_drag(self) -> bool:
        if self._anchor is None:
            return False
        self._end_drag()
        logger.debug("Drag cancelled before release")
        return True

    def clear(self) -> None:
        """Remove every rectangle; the previous set stays undoable."""

        self._end_drag()
        self.history.push_snapshot(self._rectangles)
        self._rectangles = ()

    def undo(self) -> bool:
        self._end_drag()
        restored = self.history.undo(self._rectangles)
        if restored is None:
            return False
        self._rectangles = restored
        return True

    def redo(self) -> bool:
        self._end_drag()
        restored = self.history.redo(self._rectangles)
        if restored is None:
            return False
        self._rectangles = restored
        return True

    def replace(self, rectangles: Sequence[Rectangle]) -> None:
        """Show *rectangles* without recording a history snapshot."""

        if len(rectangles) > MAX_RECTANGLES:
            raise ValueError(f"At most {MAX_RECTANGLES} rectangles can be shown.")
        self._end_drag()
        self._rectangles = tuple(rectangles)

    def reset(self) -> None:
        """Empty the set after a save; the save itself is not undoable."""

        self._end_drag()
        self._rectangles = ()
        self.history.clear_redo()

    def _end_drag(self) -> None:
        self._anchor = None
        self._preview = None
