# c4scan/pipeline.py
"""
Photo of a Connect Four board → best next move.

Stages:
  1. Board detection   – board-colored region, outline, Hough border lines
  2. Corners           – pairwise intersections averaged per quadrant
  3. Rectification     – warp the board to fill a frame of the photo's size
  4. Tokens            – red / yellow blobs → padded enclosing circles
  5. Grid              – circles → Board, turn from token-count parity
  6. Search            – minimax with alpha-beta pruning
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from c4scan.core.config import merge_cfg
from c4scan.core.contracts import RED, Corners
from c4scan.game.board import Board, turn_from_counts
from c4scan.game.search import SearchResult, best_move
from c4scan.geometry.corners import estimate_corners
from c4scan.geometry.detect import detect_board_lines
from c4scan.geometry.primitives import Circle
from c4scan.geometry.rectify import warp_board
from c4scan.io.debug import NullSink, draw_corners, draw_lines, draw_tokens
from c4scan.io.ingest import to_work_size
from c4scan.tokens.detect import find_tokens
from c4scan.tokens.mapper import map_tokens


@dataclass
class Calibration:
    corners: Corners
    rectified: np.ndarray
    board_area_ratio: float
    line_count: int


@dataclass
class MoveReport:
    column: int                  # 0-based column to play
    depth: int                   # search depth used
    score: float                 # minimax score of that column
    player: str                  # mark of the side to move
    board: Board                 # reconstructed position
    corners: Corners             # board corners in the (working-size) photo
    red_tokens: List[Circle]
    yellow_tokens: List[Circle]
    nodes: int = 0


def calibrate(image: np.ndarray, cfg: Optional[Dict] = None, sink=None) -> Calibration:
    """Locate the board in ``image`` and return its corners and top-down view."""
    cfg = merge_cfg(cfg)
    sink = sink or NullSink()

    found = detect_board_lines(image, cfg)
    sink.show(found.outline, "board_outline")
    sink.show(draw_lines(image, found.lines), "border_lines")

    corners = estimate_corners(found.lines, cfg)
    sink.show(draw_corners(image, corners), "corners")

    rectified = warp_board(image, corners)
    sink.show(rectified, "rectified")
    return Calibration(corners=corners, rectified=rectified,
                       board_area_ratio=found.area_ratio, line_count=len(found.lines))


def read_board(rectified: np.ndarray, cfg: Optional[Dict] = None, sink=None):
    """Return (board, player_to_move, red_tokens, yellow_tokens) for a rectified board image."""
    cfg = merge_cfg(cfg)
    sink = sink or NullSink()

    red = find_tokens(rectified, "red", cfg)
    yellow = find_tokens(rectified, "yellow", cfg)
    sink.show(draw_tokens(rectified.shape, red, yellow), "tokens")

    player = turn_from_counts(len(red), len(yellow))
    h, w = rectified.shape[:2]
    board = map_tokens((w, h), red, yellow, cfg)
    return board, player, red, yellow


def analyze(image: np.ndarray, cfg: Optional[Dict] = None, sink=None,
            max_depth: Optional[int] = None) -> MoveReport:
    """
    Run the whole pipeline on a BGR photo.

    Raises CalibrationFailure (or a subclass) when the board cannot be read
    and NoLegalMoveError when the reconstructed board is full.
    """
    cfg = merge_cfg(cfg)
    sink = sink or NullSink()

    img = to_work_size(image, cfg.get("work_size"))
    sink.show(img, "input")

    cal = calibrate(img, cfg, sink)
    board, player, red, yellow = read_board(cal.rectified, cfg, sink)

    if cfg.get("debug"):
        print(board.pretty())
        print(f"[pipeline] It is {'Red' if player == RED else 'Yellow'}'s turn.")

    result: SearchResult = best_move(board, player, max_depth, cfg)
    return MoveReport(column=result.column, depth=result.depth, score=result.score,
                      player=player, board=board, corners=cal.corners,
                      red_tokens=red, yellow_tokens=yellow, nodes=result.nodes)
