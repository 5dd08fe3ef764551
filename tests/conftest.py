"""
Synthetic Connect Four photos, generated on the fly so no test assets are needed.
"""
from __future__ import annotations
from typing import Dict, Tuple

import cv2
import numpy as np
import pytest

BLUE = (255, 0, 0)
RED_BGR = (0, 0, 255)
YELLOW_BGR = (0, 255, 255)
WHITE = (255, 255, 255)

# Board rectangle inside a 700×600 frame: 560×480 px of board → 80 px cells
FRAME_W, FRAME_H = 700, 600
BOX = (80, 60, 640, 540)


def make_board_scene(
    tokens: Dict[Tuple[int, int], str],
    frame_w: int = FRAME_W,
    frame_h: int = FRAME_H,
    box: Tuple[int, int, int, int] = BOX,
    columns: int = 7,
    rows: int = 6,
    radius: int = 30,
) -> np.ndarray:
    """Draw a blue board on white with tokens at {(col, row): 'R'|'Y'}, row 0 at the bottom."""
    frame = np.full((frame_h, frame_w, 3), 255, np.uint8)
    x0, y0, x1, y1 = box
    cv2.rectangle(frame, (x0, y0), (x1, y1), BLUE, -1)
    cell_w = (x1 - x0) / columns
    cell_h = (y1 - y0) / rows
    for (col, row), mark in tokens.items():
        cx = int(round(x0 + cell_w * col + cell_w / 2))
        cy = int(round(y1 - cell_h * row - cell_h / 2))
        cv2.circle(frame, (cx, cy), radius, RED_BGR if mark == "R" else YELLOW_BGR, -1)
    return frame


def box_corners(box: Tuple[int, int, int, int] = BOX) -> np.ndarray:
    x0, y0, x1, y1 = box
    return np.array([[x0, y0], [x1, y0], [x1, y1], [x0, y1]], dtype=np.float32)


@pytest.fixture
def board_scene():
    return make_board_scene


@pytest.fixture
def headless_cfg():
    """Config for synthetic frames: keep the frame size as drawn."""
    return {"work_size": None}


@pytest.fixture
def scene_corners():
    return box_corners()
