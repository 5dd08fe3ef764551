# c4scan/tokens/detect.py
from __future__ import annotations
from typing import Dict, List, Optional
import cv2
import numpy as np

from c4scan.core.config import merge_cfg
from c4scan.geometry.detect import color_mask
from c4scan.geometry.primitives import Circle, Point


def find_tokens(rectified: np.ndarray, color: str, cfg: Optional[Dict] = None) -> List[Circle]:
    """
    Enclosing circles of every ``color`` blob larger than ``min_token_area``.

    Radii are padded by ``token_radius_pad`` so a slightly blurred token still
    covers its cell center.
    """
    cfg = merge_cfg(cfg)
    if color not in cfg["colors"]:
        raise ValueError(f"No HSV ranges configured for color {color!r}")

    mask = color_mask(rectified, cfg["colors"][color])
    cnts, _ = cv2.findContours(mask, cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE)
    min_area = float(cfg["min_token_area"])
    pad = float(cfg["token_radius_pad"])

    circles: List[Circle] = []
    for c in cnts:
        if cv2.contourArea(c) <= min_area:
            continue
        (x, y), r = cv2.minEnclosingCircle(c)
        circles.append(Circle(Point(float(x), float(y)), float(int(r))).padded(pad))

    if cfg.get("debug"):
        print(f"[tokens] Found {len(circles)} {color} tokens.")
    return circles
