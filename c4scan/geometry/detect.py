# c4scan/geometry/detect.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
import math
import cv2
import numpy as np

from c4scan.core.config import merge_cfg
from c4scan.core.errors import CalibrationFailure
from c4scan.geometry.primitives import Line


@dataclass
class BoardOutline:
    """Largest board-colored region and the border lines found on its outline."""
    contour: np.ndarray
    area_ratio: float
    outline: np.ndarray          # 1-px outline of ``contour`` (uint8 mask)
    lines: List[Line]


# ----------------------------------------------------------------------------- #
# Masks / contours                                                              #
# ----------------------------------------------------------------------------- #

def color_mask(frame: np.ndarray, ranges: Sequence) -> np.ndarray:
    """Union of ``cv2.inRange`` over HSV ``[(low, high), ...]`` ranges of a BGR frame."""
    hsv = cv2.cvtColor(frame, cv2.COLOR_BGR2HSV)
    mask = np.zeros(frame.shape[:2], np.uint8)
    for low, high in ranges:
        lo = np.array(low, dtype=np.uint8)
        hi = np.array(high, dtype=np.uint8)
        mask = cv2.bitwise_or(mask, cv2.inRange(hsv, lo, hi))
    return mask


def largest_contour(mask: np.ndarray) -> Tuple[Optional[np.ndarray], float]:
    """Return (contour, area) of the biggest contour in a binary mask, or (None, 0)."""
    cnts, _ = cv2.findContours(mask, cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE)
    best, best_area = None, 0.0
    for c in cnts:
        area = float(cv2.contourArea(c))
        if area > best_area:
            best, best_area = c, area
    return best, best_area


# ----------------------------------------------------------------------------- #
# Border lines                                                                  #
# ----------------------------------------------------------------------------- #

def hough_lines(outline: np.ndarray, cfg: Dict) -> List[Line]:
    hc = cfg["hough"]
    raw = cv2.HoughLines(outline, float(hc["rho"]), math.radians(float(hc["theta_deg"])), int(hc["threshold"]))
    if raw is None:
        return []
    return [Line(rho=float(r), theta=float(t)) for r, t in raw[:, 0, :2]]


def detect_board_lines(frame: np.ndarray, cfg: Optional[Dict] = None) -> BoardOutline:
    """
    Find the board region by color and return the candidate border lines.

    Raises CalibrationFailure when the largest board-colored contour covers
    less than ``min_board_area_ratio`` of the frame.
    """
    cfg = merge_cfg(cfg)
    H, W = frame.shape[:2]
    mask = color_mask(frame, cfg["colors"]["board"])
    contour, area = largest_contour(mask)
    ratio = area / float(H * W) if H * W else 0.0

    if cfg.get("debug"):
        print(f"[board] The board occupies {round(ratio * 100)}% of the image.")

    min_ratio = float(cfg["min_board_area_ratio"])
    if contour is None or ratio < min_ratio:
        raise CalibrationFailure(
            f"A sufficiently large board could not be detected ({ratio:.1%} < {min_ratio:.0%})."
        )

    outline = np.zeros((H, W), np.uint8)
    cv2.drawContours(outline, [contour], -1, 255, 1)
    lines = hough_lines(outline, cfg)

    # Lines are kept only if they actually cross the frame
    kept = [ln for ln in lines if ln.clip(W, H) is not None]
    if cfg.get("debug"):
        print(f"[board] There are {len(kept)} lines that were detected.")

    return BoardOutline(contour=contour, area_ratio=ratio, outline=outline, lines=kept)
