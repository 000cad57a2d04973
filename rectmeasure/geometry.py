"""Geometry utilities shared by the desktop app, the dashboard and the API."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Sequence, Tuple, Union

# Stored distances keep two decimal places.
DISTANCE_PRECISION = 2

PointLike = Union[Sequence[float], Mapping[str, float]]


def _extract_xy(point: PointLike) -> Tuple[float, float]:
    """Return a numeric (x, y) pair from an ``(x, y)`` sequence or an ``{"x", "y"}`` mapping."""

    if isinstance(point, Mapping):
        return float(point["x"]), float(point["y"])
    if isinstance(point, Sequence) and not isinstance(point, (str, bytes, bytearray)):
        if len(point) != 2:
            raise ValueError("Point sequences must contain exactly two values.")
        return float(point[0]), float(point[1])
    raise TypeError(f"Unsupported point representation: {type(point)!r}")


@dataclass(frozen=True)
class Rectangle:
    """A dragged rectangle.

    ``(x, y)`` is the anchor where the drag started and ``width``/``height``
    are the signed drag deltas, so a drag towards the top-left produces
    negative values.
    """

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_drag(cls, anchor: PointLike, release: PointLike) -> "Rectangle":
        """Build the rectangle spanned from *anchor* to *release*."""

        ax, ay = _extract_xy(anchor)
        rx, ry = _extract_xy(release)
        return cls(x=ax, y=ay, width=rx - ax, height=ry - ay)

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def rectangle_center(rect: Rectangle) -> Tuple[float, float]:
    """Return the center of *rect* using its signed width and height."""

    return rect.x + rect.width / 2, rect.y + rect.height / 2


def rectangle_bounds(rect: Rectangle) -> Tuple[float, float, float, float]:
    """Return ``(left, top, width, height)`` with a non-negative size.

    Renderers that cannot draw negative sizes use this instead of the raw
    anchor/delta representation.
    """

    left = min(rect.x, rect.x + rect.width)
    top = min(rect.y, rect.y + rect.height)
    return left, top, abs(rect.width), abs(rect.height)


def dimension_text(rect: Rectangle) -> str:
    """Return the ``"W x H"`` label shown for *rect*."""

    return f"{_format_number(abs(rect.width))} x {_format_number(abs(rect.height))}"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def distance_between_points(start: PointLike, end: PointLike) -> float:
    """Return the Euclidean distance between *start* and *end*."""

    sx, sy = _extract_xy(start)
    ex, ey = _extract_xy(end)
    return math.hypot(sx - ex, sy - ey)


def center_distance(first: Rectangle, second: Rectangle) -> float:
    """Return the unrounded distance between the centers of two rectangles."""

    return distance_between_points(rectangle_center(first), rectangle_center(second))


def calculate_distance(first: Rectangle, second: Rectangle) -> float:
    """Return the center distance rounded for storage."""

    return round(center_distance(first, second), DISTANCE_PRECISION)


__all__ = [
    "DISTANCE_PRECISION",
    "Rectangle",
    "calculate_distance",
    "center_distance",
    "dimension_text",
    "distance_between_points",
    "rectangle_bounds",
    "rectangle_center",
]
