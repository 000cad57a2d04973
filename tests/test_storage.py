import json

import pytest

from rectmeasure.errors import PersistenceError
from rectmeasure.records import RECORDS_SLOT, RecordStore
from rectmeasure.storage import JSONFileStore

from .conftest import RECT_A, RECT_B


def test_json_file_store_creates_file(tmp_path):
    path = tmp_path / "nested" / "storage.json"
    store = JSONFileStore(path)
    assert path.exists()
    assert store.get_item("missing") is None


def test_json_file_store_round_trip(tmp_path):
    store = JSONFileStore(tmp_path / "storage.json")
    store.set_item("slot", [{"a": 1}])
    store.set_item("other", "value")

    reopened = JSONFileStore(tmp_path / "storage.json")
    assert reopened.get_item("slot") == [{"a": 1}]

    reopened.remove_item("other")
    assert json.loads((tmp_path / "storage.json").read_text()) == {"slot": [{"a": 1}]}


def test_unreadable_file_raises_persistence_error(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{ not json", encoding="utf-8")
    store = JSONFileStore(path)
    with pytest.raises(PersistenceError):
        store.get_item(RECORDS_SLOT)


def test_record_store_survives_corrupt_file(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    records = RecordStore(JSONFileStore(path))

    assert records.load() == []

    saved = records.save((RECT_A, RECT_B))
    reloaded = RecordStore(JSONFileStore(path))
    assert [record.id for record in reloaded.load()] == [saved.id]
