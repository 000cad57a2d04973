import math
from types import SimpleNamespace

import pytest

from rectmeasure.geometry import (
    Rectangle,
    calculate_distance,
    center_distance,
    dimension_text,
    distance_between_points,
    rectangle_bounds,
    rectangle_center,
)

from .conftest import RECT_A, RECT_B


def test_center_uses_signed_size():
    assert rectangle_center(RECT_A) == (35, 30)
    assert rectangle_center(Rectangle(x=100, y=100, width=-40, height=-20)) == (80, 90)


def test_distance_between_example_rectangles():
    assert center_distance(RECT_A, RECT_B) == pytest.approx(math.hypot(80, 10))
    assert calculate_distance(RECT_A, RECT_B) == 80.62


@pytest.mark.parametrize(
    "first, second",
    [
        (RECT_A, RECT_B),
        (Rectangle(0, 0, -10, 5), Rectangle(3.5, -7, 12, -9)),
        (Rectangle(5, 5, 0, 0), Rectangle(5, 5, 0, 0)),
    ],
)
def test_distance_is_symmetric(first, second):
    assert calculate_distance(first, second) == calculate_distance(second, first)


def test_zero_size_rectangles_measure_anchor_distance():
    assert calculate_distance(Rectangle(0, 0, 0, 0), Rectangle(3, 4, 0, 0)) == 5.0


def test_from_drag_keeps_anchor_and_signed_delta():
    rect = Rectangle.from_drag((50, 60), {"x": 20, "y": 100})
    assert rect == Rectangle(x=50, y=60, width=-30, height=40)


def test_bounds_and_dimension_label_use_absolute_size():
    rect = Rectangle(x=50, y=60, width=-30, height=-12.5)
    assert rectangle_bounds(rect) == (20, 47.5, 30, 12.5)
    assert dimension_text(rect) == "30 x 12.5"


def test_distance_between_points_rejects_bad_sequences():
    with pytest.raises(ValueError):
        distance_between_points((1, 2, 3), (0, 0))
    with pytest.raises(TypeError):
        distance_between_points(42, (0, 0))


def test_points_must_be_sequences_or_mappings():
    assert distance_between_points({"x": 0, "y": 0}, [3, 4]) == 5.0
    with pytest.raises(TypeError):
        distance_between_points(SimpleNamespace(x=3, y=4), (0, 0))
