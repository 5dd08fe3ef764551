"""
Core contracts and simple data types shared across stages.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import numpy as np

# Cell marks. Red (player A) always moves first.
EMPTY = "."
RED = "R"
YELLOW = "Y"
MARKS = (RED, YELLOW)


def opponent(mark: str) -> str:
    if mark == RED:
        return YELLOW
    if mark == YELLOW:
        return RED
    raise ValueError(f"Unknown mark: {mark!r}")


@dataclass
class Corners:
    """
    The four board corners in image coordinates (pixels), ordered clockwise:
    [top-left, top-right, bottom-right, bottom-left].

    The order is fixed when the corners are estimated and the rectifier
    maps them positionally, so it must never be re-sorted.

    pts: np.ndarray with shape (4, 2), dtype float32
    """
    pts: np.ndarray

    def __post_init__(self) -> None:
        self.pts = np.asarray(self.pts, dtype=np.float32).reshape(4, 2)

    @property
    def top_left(self) -> Tuple[float, float]:
        return float(self.pts[0, 0]), float(self.pts[0, 1])

    @property
    def top_right(self) -> Tuple[float, float]:
        return float(self.pts[1, 0]), float(self.pts[1, 1])

    @property
    def bottom_right(self) -> Tuple[float, float]:
        return float(self.pts[2, 0]), float(self.pts[2, 1])

    @property
    def bottom_left(self) -> Tuple[float, float]:
        return float(self.pts[3, 0]), float(self.pts[3, 1])
