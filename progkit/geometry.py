"""Simple plane geometry: points, paths and coloured points."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import pairwise


@dataclass
class Point:
    """A point in the plane."""

    x: float
    y: float

    def distance(self, q: Point) -> float:
        """Return the straight-line distance from this point to q."""
        return math.hypot(q.x - self.x, q.y - self.y)

    def scale_by(self, factor: float) -> None:
        """Scale both coordinates in place by factor."""
        self.x *= factor
        self.y *= factor


def distance(p: Point, q: Point) -> float:
    """Return the straight-line distance between p and q."""
    return math.hypot(q.x - p.x, q.y - p.y)


class Path(list):
    """A journey connecting its points with straight lines."""

    def distance(self) -> float:
        """Return the distance travelled along the path."""
        return sum((a.distance(b) for a, b in pairwise(self)), 0.0)


@dataclass(frozen=True)
class RGBA:
    """An 8-bit-per-channel colour with alpha."""

    r: int
    g: int
    b: int
    a: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} component {value} out of range 0..255")


@dataclass
class ColoredPoint(Point):
    """A point carrying a colour."""

    color: RGBA