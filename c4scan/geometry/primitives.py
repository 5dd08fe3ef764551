# c4scan/geometry/primitives.py
"""
Points, Hough-style lines and circles.

Lines use the normal form returned by ``cv2.HoughLines``:

    x * cos(theta) + y * sin(theta) = rho,   theta in [0, pi)

The endpoints a line exposes are only for clipping and drawing; every
geometric query works on (rho, theta).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
import math
import cv2

_PARALLEL_EPS = 1e-9
# Half-length of the segment used to draw/clip an infinite line
_DRAW_EXTENT = 10000.0


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def as_int(self) -> Tuple[int, int]:
        return int(round(self.x)), int(round(self.y))


def average_points(points: Iterable[Point]) -> Point:
    """Arithmetic mean of a non-empty collection of points."""
    sx = sy = 0.0
    n = 0
    for p in points:
        sx += p.x
        sy += p.y
        n += 1
    if n == 0:
        raise ValueError("Cannot average an empty set of points")
    return Point(sx / n, sy / n)


@dataclass(frozen=True)
class Line:
    rho: float
    theta: float

    @classmethod
    def through(cls, p: Point, q: Point) -> "Line":
        """Normal-form line through two distinct points, theta folded into [0, pi)."""
        dx, dy = q.x - p.x, q.y - p.y
        if math.hypot(dx, dy) < _PARALLEL_EPS:
            raise ValueError("Points must be distinct to define a line")
        theta = math.atan2(-dx, dy) % math.pi
        rho = p.x * math.cos(theta) + p.y * math.sin(theta)
        return cls(rho=rho, theta=theta)

    def endpoints(self, extent: float = _DRAW_EXTENT) -> Tuple[Point, Point]:
        a, b = math.cos(self.theta), math.sin(self.theta)
        x0, y0 = a * self.rho, b * self.rho
        return (Point(x0 - extent * b, y0 + extent * a),
                Point(x0 + extent * b, y0 - extent * a))

    def clip(self, width: int, height: int) -> Optional[Tuple[Point, Point]]:
        """Segment of this line inside a width×height image, or None if it misses."""
        p1, p2 = self.endpoints()
        ok, c1, c2 = cv2.clipLine((0, 0, int(width), int(height)), p1.as_int(), p2.as_int())
        if not ok:
            return None
        return Point(*c1), Point(*c2)

    def angle_to(self, other: "Line") -> float:
        """Smallest angle between the two directions, in [0, pi/2]."""
        d = abs(self.theta - other.theta) % math.pi
        return min(d, math.pi - d)

    def similar_theta(self, other: "Line", tolerance: float) -> bool:
        # theta ~ 0 and theta ~ pi are both near-vertical, hence the wrap
        return self.angle_to(other) < tolerance

    def intersection(self, other: "Line") -> Optional[Point]:
        c1, s1 = math.cos(self.theta), math.sin(self.theta)
        c2, s2 = math.cos(other.theta), math.sin(other.theta)
        det = c1 * s2 - s1 * c2
        if abs(det) < _PARALLEL_EPS:
            return None
        x = (self.rho * s2 - other.rho * s1) / det
        y = (c1 * other.rho - c2 * self.rho) / det
        return Point(x, y)


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float

    def contains(self, p: Point) -> bool:
        return math.hypot(p.x - self.center.x, p.y - self.center.y) <= self.radius

    def padded(self, pad: float) -> "Circle":
        return Circle(self.center, self.radius + pad)
