# c4scan/core/config.py
from __future__ import annotations
from pathlib import Path
from typing import Dict, Optional
import copy
import yaml

# HSV ranges are OpenCV's (H in 0..180). Red wraps around hue 0, hence two ranges.
DEFAULT_CFG: Dict = {
    # Photos are resized to this (W, H) before anything else; None keeps the input size.
    "work_size": (622, 457),
    "colors": {
        "board":  [[(100, 150, 50), (130, 255, 255)]],
        "red":    [[(0, 150, 80), (10, 255, 255)], [(170, 150, 80), (180, 255, 255)]],
        "yellow": [[(20, 120, 100), (35, 255, 255)]],
    },
    # Largest board-colored contour must cover at least this share of the frame
    "min_board_area_ratio": 0.20,
    "hough": {"rho": 1.0, "theta_deg": 1.0, "threshold": 75},
    # Line pairs closer than this (mod 180°) are not intersected
    "similar_theta_deg": 5.0,
    "min_token_area": 200.0,
    # Added to every enclosing-circle radius to tolerate edge blur
    "token_radius_pad": 5.0,
    # First color that claims a cell keeps it
    "color_priority": ("red", "yellow"),
    "grid": {"columns": 7, "rows": 6},
    "search": {
        "max_depth": 6,
        "win_score": 1000000,
        "weights": {"three": 5, "two": 2, "center": 3},
    },
    "debug": False,
}


def merge_cfg(cfg: Optional[Dict]) -> Dict:
    """Overlay ``cfg`` on the defaults. Nested dicts (up to two levels) are merged key by key."""
    merged = copy.deepcopy(DEFAULT_CFG)
    if not cfg:
        return merged
    for k, v in cfg.items():
        if isinstance(v, dict) and k in merged and isinstance(merged[k], dict):
            inner = dict(merged[k])
            for ik, iv in v.items():
                if isinstance(iv, dict) and isinstance(inner.get(ik), dict):
                    inner[ik] = {**inner[ik], **iv}
                else:
                    inner[ik] = iv
            merged[k] = inner
        else:
            merged[k] = v
    return merged


def load_cfg(path: str | Path) -> Dict:
    """Read a YAML config and merge it over the defaults."""
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config at {path} must be a mapping, got {type(raw).__name__}")
    return merge_cfg(raw)
