"""
Simple I/O helpers for reading images (BGR, as OpenCV expects).
"""

from __future__ import annotations
from typing import Optional, Sequence
import cv2
import numpy as np


def load_image(path: str) -> np.ndarray:
    """
    Load a color photo from disk (BGR).
    Raises FileNotFoundError if not found or not decodable.
    """
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None:
        raise FileNotFoundError(f"Could not read image at: {path}")
    return img


def to_work_size(img: np.ndarray, work_size: Optional[Sequence[int]]) -> np.ndarray:
    """
    Resize to the configured (W, H) working size; None leaves the image as is.
    """
    if work_size is None:
        return img
    w, h = int(work_size[0]), int(work_size[1])
    if w <= 0 or h <= 0:
        raise ValueError(f"work_size must be positive, got {w}x{h}")
    if img.shape[1] == w and img.shape[0] == h:
        return img
    return cv2.resize(img, (w, h), interpolation=cv2.INTER_AREA)
