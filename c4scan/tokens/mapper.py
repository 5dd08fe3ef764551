# c4scan/tokens/mapper.py
"""
Token circles → grid marks.

On the rectified image the board fills the frame, so cell (col, row) has
its canonical center at the middle of the col-th of ``columns`` equal
strips horizontally and the row-th strip counted from the bottom edge.
"""

from __future__ import annotations
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from c4scan.core.config import merge_cfg
from c4scan.core.contracts import RED, YELLOW
from c4scan.game.board import Board
from c4scan.geometry.primitives import Circle, Point

COLOR_MARKS: Mapping[str, str] = {"red": RED, "yellow": YELLOW}


def cell_center(column: int, row: int, size: Tuple[int, int], columns: int, rows: int) -> Point:
    """Canonical center of a cell on a rectified image of ``size`` = (W, H)."""
    w, h = size
    cell_w = float(w) / columns
    cell_h = float(h) / rows
    return Point(column * cell_w + cell_w / 2.0, (rows - row - 1) * cell_h + cell_h / 2.0)


def _claims(point: Point, circles: Sequence[Circle]) -> bool:
    return any(c.contains(point) for c in circles)


def map_tokens(
    size: Tuple[int, int],
    red: Sequence[Circle],
    yellow: Sequence[Circle],
    cfg: Optional[Dict] = None,
) -> Board:
    """
    Build a Board from red/yellow token circles found on a rectified image.

    Cells are scanned bottom row first so marks can be dropped with the
    board's own gravity rule. A cell claimed by both colors goes to whichever
    comes first in ``color_priority``.
    """
    cfg = merge_cfg(cfg)
    columns = int(cfg["grid"]["columns"])
    rows = int(cfg["grid"]["rows"])
    by_color = {"red": red, "yellow": yellow}
    priority: List[str] = [c for c in cfg["color_priority"] if c in by_color]
    if sorted(priority) != sorted(by_color):
        raise ValueError(f"color_priority must name red and yellow, got {cfg['color_priority']!r}")

    board = Board(columns=columns, rows=rows)
    for row in range(rows):
        for col in range(columns):
            center = cell_center(col, row, size, columns, rows)
            hits = [color for color in priority if _claims(center, by_color[color])]
            if not hits:
                continue
            if len(hits) > 1 and cfg.get("debug"):
                print(f"[mapper] cell ({col},{row}) claimed by {hits}; keeping {hits[0]}")
            landed = board.set(col, COLOR_MARKS[hits[0]])
            if landed != row and cfg.get("debug"):
                print(f"[mapper] token at ({col},{row}) has a gap below; settled on row {landed}")
    return board
