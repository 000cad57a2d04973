import pytest

from rectmeasure.errors import MeasurementValidationError, RecordNotFoundError
from rectmeasure.records import (
    NO_MATCHES_MESSAGE,
    NO_RECORDS_MESSAGE,
    RECORDS_SLOT,
    MeasurementRecord,
    RecordStore,
)
from rectmeasure.storage import MemoryStore

from .conftest import RECT_A, RECT_B, make_record


def test_save_prepends_record_and_persists(store, storage):
    first = store.save((RECT_A, RECT_B))
    second = store.save((RECT_B, RECT_A))

    assert first.distance == 80.62
    assert [record.id for record in store.canonical] == [second.id, first.id]
    assert store.displayed == store.canonical
    persisted = storage.get_item(RECORDS_SLOT)
    assert [item["id"] for item in persisted] == [second.id, first.id]
    assert set(persisted[0]) == {"id", "rectangles", "distance", "createdAt"}


@pytest.mark.parametrize("rectangles", [(), (RECT_A,)])
def test_save_requires_exactly_two_rectangles(store, storage, rectangles):
    with pytest.raises(MeasurementValidationError):
        store.save(rectangles)
    assert store.canonical == []
    assert storage.get_item(RECORDS_SLOT) is None


def test_record_ids_are_unique(store):
    ids = {store.save((RECT_A, RECT_B)).id for _ in range(50)}
    assert len(ids) == 50


def test_load_round_trips_persisted_records(store, storage):
    saved = store.save((RECT_A, RECT_B))

    reloaded = RecordStore(storage)
    records = reloaded.load()

    assert records == [saved]
    assert reloaded.displayed == [saved]
    assert records[0].rectangles == (RECT_A, RECT_B)


def test_load_accepts_browser_style_timestamps():
    storage = MemoryStore(
        {
            RECORDS_SLOT: [
                {
                    "id": "abc",
                    "rectangles": [
                        {"x": 10, "y": 10, "width": 50, "height": 40},
                        {"x": 100, "y": 10, "width": 30, "height": 20},
                    ],
                    "distance": 80.62,
                    "createdAt": "2024-05-01T09:30:00.000Z",
                }
            ]
        }
    )
    store = RecordStore(storage)
    [record] = store.load()
    assert record.id == "abc"
    assert record.created_at.tzinfo is not None


@pytest.mark.parametrize(
    "payload",
    [
        "not a list",
        [{"id": "x"}],
        [{"id": "x", "rectangles": [], "distance": 1, "createdAt": "2024-01-01T00:00:00Z"}],
        {"unexpected": True},
    ],
)
def test_malformed_storage_loads_as_empty(payload):
    store = RecordStore(MemoryStore({RECORDS_SLOT: payload}))
    assert store.load() == []
    assert store.displayed == []


def test_delete_removes_from_both_lists_and_storage(store, storage):
    keep = store.save((RECT_A, RECT_B))
    drop = store.save((RECT_B, RECT_A))
    store.filter("all")

    assert store.delete(drop.id) is True

    assert store.canonical == [keep]
    assert store.displayed == [keep]
    assert [item["id"] for item in storage.get_item(RECORDS_SLOT)] == [keep.id]


def test_delete_unknown_id_is_silent(store):
    store.save((RECT_A, RECT_B))
    assert store.delete("missing") is False
    assert len(store.canonical) == 1


def test_delete_clears_selection(store):
    record = store.save((RECT_A, RECT_B))
    store.select(record.id)
    store.delete(record.id)
    assert store.selected_id is None


def test_select_marks_single_record(store):
    first = store.save((RECT_A, RECT_B))
    second = store.save((RECT_B, RECT_A))

    assert store.select(first.id) == first
    assert store.select(second.id) == second
    assert store.selected_id == second.id
    assert store.select("missing") is None
    assert store.selected_id == second.id


def test_get_raises_for_unknown_id(store):
    with pytest.raises(RecordNotFoundError):
        store.get("missing")


def test_empty_message_distinguishes_filtered_view():
    store = RecordStore(MemoryStore())
    store.load()
    assert store.empty_message == NO_RECORDS_MESSAGE

    store.filter("long")
    assert store.empty_message == NO_MATCHES_MESSAGE


def test_filter_uses_canonical_list_and_never_compounds():
    records = [make_record(250, 2), make_record(150, 1), make_record(50, 0)]
    store = RecordStore(MemoryStore({RECORDS_SLOT: [record.to_storage() for record in records]}))
    store.load()

    assert [record.distance for record in store.filter("medium")] == [150]
    assert [record.distance for record in store.filter("short")] == [50]
    assert store.is_filtered is True
    assert [record.distance for record in store.filter("all")] == [250, 150, 50]
    assert store.is_filtered is True


def test_sort_operates_on_displayed_list():
    records = [make_record(250, 0), make_record(50, 1), make_record(120, 2), make_record(180, 3)]
    store = RecordStore(MemoryStore({RECORDS_SLOT: [record.to_storage() for record in records]}))
    store.load()

    store.filter("medium")
    assert [record.distance for record in store.sort("distance")] == [120, 180]
    assert [record.distance for record in store.canonical] == [250, 50, 120, 180]


def test_record_from_rectangles_rounds_distance():
    record = MeasurementRecord.from_rectangles([RECT_A, RECT_B])
    assert record.distance == 80.62
    assert record.dimensions == ("50 x 40", "30 x 20")
