"""Undo/redo history of full rectangle-set snapshots."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .geometry import Rectangle

Snapshot = Tuple[Rectangle, ...]


class HistoryManager:
    """Keep undo and redo stacks of rectangle sets.

    Snapshots are whole rectangle sets, not diffs. Both stacks are ordered
    oldest first.
    """

    def __init__(self) -> None:
        self._undo_stack: List[Snapshot] = []
        self._redo_stack: List[Snapshot] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def push_snapshot(self, rectangles: Sequence[Rectangle]) -> None:
        """Record the state as it was right before a mutating action."""

        self._undo_stack.append(tuple(rectangles))
        self._redo_stack.clear()

    def clear_redo(self) -> None:
        self._redo_stack.clear()

    def undo(self, current: Sequence[Rectangle]) -> Optional[Snapshot]:
        """Return the set to restore, or ``None`` when there is nothing to undo."""

        if not self._undo_stack:
            return None
        previous = self._undo_stack.pop()
        self._redo_stack.append(tuple(current))
        return previous

    def redo(self, current: Sequence[Rectangle]) -> Optional[Snapshot]:
        """Return the set to restore, or ``None`` when there is nothing to redo."""

        if not self._redo_stack:
            return None
        following = self._redo_stack.pop()
        self._undo_stack.append(tuple(current))
        return following

    def reset(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()
