import pytest

from rectmeasure.filtering import DistanceFilter, SortCriterion, filter_records, sort_records

from .conftest import make_record


@pytest.mark.parametrize(
    "band, distance, expected",
    [
        (DistanceFilter.SHORT, 99.99, True),
        (DistanceFilter.SHORT, 100, False),
        (DistanceFilter.MEDIUM, 100, True),
        (DistanceFilter.MEDIUM, 200, True),
        (DistanceFilter.MEDIUM, 200.01, False),
        (DistanceFilter.LONG, 200, False),
        (DistanceFilter.LONG, 200.01, True),
        (DistanceFilter.ALL, 0, True),
    ],
)
def test_distance_bands(band, distance, expected):
    assert band.matches(distance) is expected


def test_filter_scenario_bands():
    records = [make_record(50), make_record(150), make_record(250)]
    assert [r.distance for r in filter_records(records, "medium")] == [150]
    assert [r.distance for r in filter_records(records, "short")] == [50]
    assert [r.distance for r in filter_records(records, "long")] == [250]
    assert filter_records(records, "all") == records


def test_sort_by_distance_is_non_decreasing_and_idempotent():
    records = [make_record(d, i) for i, d in enumerate([300, 20, 150, 20, 75])]
    once = sort_records(records, SortCriterion.DISTANCE)
    twice = sort_records(once, SortCriterion.DISTANCE)

    distances = [r.distance for r in once]
    assert distances == sorted(distances)
    assert twice == once


def test_sort_is_stable_for_equal_keys():
    first = make_record(20, 5, record_id="first")
    second = make_record(20, 1, record_id="second")
    ordered = sort_records([make_record(90), first, second], "distance")
    assert [r.id for r in ordered[:2]] == ["first", "second"]


def test_sort_by_timestamp_is_ascending():
    records = [make_record(10, 3), make_record(20, 1), make_record(30, 2)]
    ordered = sort_records(records, "timestamp")
    assert [r.distance for r in ordered] == [20, 30, 10]


def test_sort_returns_copy():
    records = [make_record(30), make_record(10)]
    sort_records(records, "distance")
    assert [r.distance for r in records] == [30, 10]


def test_unknown_options_are_rejected():
    with pytest.raises(ValueError):
        sort_records([], "colour")
    with pytest.raises(ValueError):
        filter_records([], "huge")
