# c4scan/geometry/rectify.py
from __future__ import annotations
from itertools import combinations
from typing import Optional, Tuple
import cv2
import numpy as np

from c4scan.core.contracts import Corners
from c4scan.core.errors import DegenerateTransformError

# Three corners spanning less than this share of the quad's bounding box area
# are treated as collinear.
_COLLINEAR_REL_EPS = 1e-3


def compute_target_size(
    image: Optional[np.ndarray] = None,
    *,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Pick (W, H) for the rectified board.

    Missing sides default to the source image's own size so the warp never
    throws pixels away. Without an image both sides must be given.
    """
    if image is not None:
        ih, iw = image.shape[:2]
        width = iw if width is None else width
        height = ih if height is None else height
    if width is None or height is None:
        raise ValueError("Target size needs an image or both width and height")
    if int(width) <= 0 or int(height) <= 0:
        raise ValueError(f"Target size must be positive, got {width}x{height}")
    return int(width), int(height)


def target_rectangle(width: int, height: int) -> np.ndarray:
    """TL, TR, BR, BL of the output frame, matching the Corners order."""
    return np.array([[0, 0],
                     [width, 0],
                     [width, height],
                     [0, height]], dtype=np.float32)


def _check_corners(src: np.ndarray) -> None:
    if not np.isfinite(src).all():
        raise DegenerateTransformError("Corners contain non-finite coordinates")
    span = np.ptp(src, axis=0)
    scale = float(span[0] * span[1])
    if scale <= 0.0:
        raise DegenerateTransformError("Corners do not span a two-dimensional region")
    for a, b, c in combinations(range(4), 3):
        ab = src[b] - src[a]
        ac = src[c] - src[a]
        twice_area = abs(float(ab[0] * ac[1] - ab[1] * ac[0]))
        if twice_area < _COLLINEAR_REL_EPS * scale:
            raise DegenerateTransformError(f"Corners {a}, {b}, {c} are collinear")


def board_transform(corners: Corners, width: int, height: int) -> np.ndarray:
    """3×3 homography sending corners[i] to the i-th corner of a width×height frame."""
    src = np.asarray(corners.pts, dtype=np.float32).reshape(4, 2)
    _check_corners(src)
    dst = target_rectangle(width, height)
    try:
        Hmat = cv2.getPerspectiveTransform(src, dst)
    except cv2.error as e:
        raise DegenerateTransformError(f"Perspective transform failed: {e}") from e
    if Hmat is None or not np.isfinite(Hmat).all() or abs(np.linalg.det(Hmat)) < 1e-12:
        raise DegenerateTransformError("Perspective transform is singular")
    return Hmat


def warp_board(
    image: np.ndarray,
    corners: Corners,
    *,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> np.ndarray:
    """
    Perspective-warp the board quad into a top-down view.

    Args:
        image: BGR (or single channel) image.
        corners: TL, TR, BR, BL in that order; used as given, never re-sorted.
        width/height: optional output size, each defaulting to the image's.

    Returns:
        Rectified image of shape (H, W[, C]).
    """
    dst_w, dst_h = compute_target_size(image, width=width, height=height)
    Hmat = board_transform(corners, dst_w, dst_h)
    return cv2.warpPerspective(image, Hmat, (dst_w, dst_h), flags=cv2.INTER_LINEAR)
