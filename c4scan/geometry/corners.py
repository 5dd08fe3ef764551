# c4scan/geometry/corners.py
"""
Board corners from detected border lines.

Every non-similar pair of lines is intersected, the intersections are split
into four quadrants around their centroid, and each quadrant is averaged
into one corner. Image coordinates: smaller y is top, smaller x is left.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple
import math

from c4scan.core.config import merge_cfg
from c4scan.core.contracts import Corners
from c4scan.core.errors import InsufficientCornersError
from c4scan.geometry.primitives import Line, Point, average_points


def pairwise_intersections(lines: Sequence[Line], tolerance: float) -> List[Point]:
    """Intersections of all unordered line pairs whose angles differ by at least ``tolerance``."""
    points: List[Point] = []
    for i in range(len(lines)):
        for j in range(i + 1, len(lines)):
            a, b = lines[i], lines[j]
            if a.similar_theta(b, tolerance):
                continue
            p = a.intersection(b)
            if p is None or not (math.isfinite(p.x) and math.isfinite(p.y)):
                continue
            points.append(p)
    return points


def split_quadrants(points: Sequence[Point], centroid: Point) -> Tuple[List[Point], List[Point], List[Point], List[Point]]:
    """Return (top_left, top_right, bottom_right, bottom_left) point groups."""
    tl: List[Point] = []
    tr: List[Point] = []
    br: List[Point] = []
    bl: List[Point] = []
    for p in points:
        if p.x < centroid.x:
            (tl if p.y < centroid.y else bl).append(p)
        else:
            (tr if p.y < centroid.y else br).append(p)
    return tl, tr, br, bl


def estimate_corners(lines: Sequence[Line], cfg: Optional[Dict] = None) -> Corners:
    cfg = merge_cfg(cfg)
    tolerance = math.radians(float(cfg["similar_theta_deg"]))

    points = pairwise_intersections(lines, tolerance)
    if cfg.get("debug"):
        print(f"[corners] {len(lines)} lines → {len(points)} intersections")
    if not points:
        raise InsufficientCornersError("Could not identify the corners of the game board: no line intersections.")

    centroid = average_points(points)
    groups = split_quadrants(points, centroid)
    if any(len(g) == 0 for g in groups):
        if cfg.get("debug"):
            print("[corners] quadrant sizes (tl,tr,br,bl):", [len(g) for g in groups])
        raise InsufficientCornersError("Could not identify the corners of the game board.")

    pts = [average_points(g) for g in groups]
    if cfg.get("debug"):
        print("[corners] corners:", [(round(p.x, 1), round(p.y, 1)) for p in pts])
    return Corners(pts=[[p.x, p.y] for p in pts])
