from rectmeasure.history import HistoryManager

from .conftest import RECT_A, RECT_B


def test_undo_and_redo_are_noops_when_empty():
    history = HistoryManager()
    assert history.undo((RECT_A,)) is None
    assert history.redo((RECT_A,)) is None
    assert not history.can_undo
    assert not history.can_redo


def test_undo_moves_current_set_to_redo_stack():
    history = HistoryManager()
    history.push_snapshot(())
    history.push_snapshot((RECT_A,))

    restored = history.undo((RECT_A, RECT_B))

    assert restored == (RECT_A,)
    assert history.undo_depth == 1
    assert history.redo_depth == 1


def test_undo_then_redo_restores_previous_set():
    history = HistoryManager()
    history.push_snapshot(())
    current = (RECT_A,)

    current = history.undo(current)
    assert current == ()
    current = history.redo(current)
    assert current == (RECT_A,)


def test_push_snapshot_clears_redo_stack():
    history = HistoryManager()
    history.push_snapshot(())
    history.undo((RECT_A,))
    assert history.can_redo

    history.push_snapshot(())

    assert not history.can_redo
    assert history.redo(()) is None


def test_snapshots_are_copies():
    history = HistoryManager()
    working = [RECT_A]
    history.push_snapshot(working)
    working.append(RECT_B)

    assert history.undo(working) == (RECT_A,)
