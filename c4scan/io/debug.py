# c4scan/io/debug.py
"""
Optional visual debugging.

A sink is anything with ``show(image, label)``. The pipeline only ever
calls that method, so headless runs use NullSink and nothing else changes.
"""

from __future__ import annotations
from pathlib import Path
from typing import Sequence, Tuple
import re
import cv2
import numpy as np

from c4scan.core.contracts import Corners
from c4scan.geometry.primitives import Circle, Line

BGR_RED = (0, 0, 255)
BGR_YELLOW = (0, 255, 255)
BGR_GREEN = (0, 255, 0)
BGR_BOARD = (128, 0, 0)


class NullSink:
    def show(self, image: np.ndarray, label: str) -> None:
        pass


class FileSink:
    """Writes every image as ``NN_<label>.png`` into ``out_dir``."""

    def __init__(self, out_dir: str | Path) -> None:
        self.out_dir = Path(out_dir)
        self.out_dir.mkdir(parents=True, exist_ok=True)
        self.count = 0
        self.written: list[Path] = []

    def show(self, image: np.ndarray, label: str) -> None:
        self.count += 1
        safe = re.sub(r"[^A-Za-z0-9_-]+", "_", label).strip("_") or "image"
        path = self.out_dir / f"{self.count:02d}_{safe}.png"
        cv2.imwrite(str(path), image)
        self.written.append(path)
        print(f"[debug] saved {path}")


class WindowSink:
    """Shows each image in an OpenCV window and waits for a key (0 = forever)."""

    def __init__(self, wait_ms: int = 0) -> None:
        self.wait_ms = wait_ms

    def show(self, image: np.ndarray, label: str) -> None:
        cv2.imshow(label, image)
        cv2.waitKey(self.wait_ms)


def draw_lines(img: np.ndarray, lines: Sequence[Line], color: Tuple[int, int, int] = BGR_GREEN, thickness: int = 2) -> np.ndarray:
    out = img.copy()
    h, w = out.shape[:2]
    for ln in lines:
        seg = ln.clip(w, h)
        if seg is not None:
            cv2.line(out, seg[0].as_int(), seg[1].as_int(), color, thickness)
    return out


def draw_corners(img: np.ndarray, corners: Corners, color: Tuple[int, int, int] = BGR_RED) -> np.ndarray:
    out = img.copy()
    q = np.round(corners.pts).astype(np.int32).reshape(4, 2)
    cv2.polylines(out, [q], True, color, 2, lineType=cv2.LINE_AA)
    named = (("TL", corners.top_left), ("TR", corners.top_right),
             ("BR", corners.bottom_right), ("BL", corners.bottom_left))
    for name, (x, y) in named:
        xi, yi = int(round(x)), int(round(y))
        cv2.circle(out, (xi, yi), 5, color, -1)
        cv2.putText(out, name, (xi + 6, yi - 6), cv2.FONT_HERSHEY_SIMPLEX, 0.5, color, 1, cv2.LINE_AA)
    return out


def draw_tokens(shape: Tuple[int, ...], red: Sequence[Circle], yellow: Sequence[Circle]) -> np.ndarray:
    """Board-colored canvas with every detected token painted as a filled disc."""
    canvas = np.zeros((shape[0], shape[1], 3), np.uint8)
    canvas[:] = BGR_BOARD
    for circles, color in ((red, BGR_RED), (yellow, BGR_YELLOW)):
        for c in circles:
            cv2.circle(canvas, c.center.as_int(), int(round(c.radius)), color, -1)
    return canvas
