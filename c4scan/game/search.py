"""
Depth-limited minimax with alpha-beta pruning over a Board.

The board handed to ``best_move`` is explored in place with paired
``set``/``undo`` calls and is back in its original state when the call
returns (or raises).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from c4scan.core.config import merge_cfg
from c4scan.core.contracts import EMPTY, MARKS, opponent
from c4scan.core.errors import NoLegalMoveError
from .board import Board


@dataclass(frozen=True)
class SearchResult:
    column: int
    depth: int
    score: float
    nodes: int


def _window_score(window, mark: str, weights: Dict) -> int:
    own = window.count(mark)
    empty = window.count(EMPTY)
    if own == 3 and empty == 1:
        return weights["three"]
    if own == 2 and empty == 2:
        return weights["two"]
    return 0


def _side_score(board: Board, mark: str, weights: Dict) -> int:
    score = 0
    center = (board.columns - 1) // 2
    centers = {center, board.columns // 2}
    for c in centers:
        score += sum(1 for r in range(board.height(c)) if board.at(c, r) == mark) * weights["center"]
    for window in board.windows():
        score += _window_score(window, mark, weights)
    return score


def evaluate(board: Board, player: str, weights: Dict) -> int:
    """Static score of a non-terminal position from ``player``'s point of view."""
    return _side_score(board, player, weights) - _side_score(board, opponent(player), weights)


class _Searcher:
    def __init__(self, root: str, weights: Dict, win_score: float) -> None:
        self.root = root
        self.weights = weights
        self.win_score = win_score
        self.nodes = 0

    def score_after(self, board: Board, column: int, mover: str, depth_left: int,
                    alpha: float, beta: float) -> float:
        """Value of the position right after ``mover`` played ``column``."""
        self.nodes += 1
        if board.wins_at(column):
            # Remaining depth makes quicker wins worth more than slower ones
            value = self.win_score + depth_left
            return value if mover == self.root else -value
        if board.is_full():
            return 0
        if depth_left == 0:
            return evaluate(board, self.root, self.weights)

        to_move = opponent(mover)
        maximizing = to_move == self.root
        best = float("-inf") if maximizing else float("inf")
        for col in board.legal_moves():
            board.set(col, to_move)
            try:
                value = self.score_after(board, col, to_move, depth_left - 1, alpha, beta)
            finally:
                board.undo(col)
            if maximizing:
                best = max(best, value)
                alpha = max(alpha, best)
            else:
                best = min(best, value)
                beta = min(beta, best)
            if alpha >= beta:
                break
        return best


def best_move(board: Board, player: str, max_depth: Optional[int] = None,
              cfg: Optional[Dict] = None) -> SearchResult:
    """Pick the column that maximizes ``player``'s minimax score.

    Ties go to the first column in ``board.legal_moves()`` order, so the
    result is deterministic for a given board and depth.

    Raises:
        NoLegalMoveError: the board is full.
        ValueError: unknown player, depth below 1, or the game is already won.
    """
    cfg = merge_cfg(cfg)
    scfg = cfg["search"]
    depth = int(scfg["max_depth"] if max_depth is None else max_depth)

    if player not in MARKS:
        raise ValueError(f"Unknown player: {player!r}")
    if depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {depth}")
    moves = board.legal_moves()
    if not moves:
        raise NoLegalMoveError("The board is full; no legal move remains.")
    won = board.winner()
    if won is not None:
        raise ValueError(f"The game is already over: {won} has four in a row.")

    searcher = _Searcher(player, scfg["weights"], float(scfg["win_score"]))
    alpha, beta = float("-inf"), float("inf")
    best_col, best_score = moves[0], float("-inf")
    for col in moves:
        board.set(col, player)
        try:
            value = searcher.score_after(board, col, player, depth - 1, alpha, beta)
        finally:
            board.undo(col)
        if value > best_score:
            best_col, best_score = col, value
        alpha = max(alpha, best_score)

    if cfg.get("debug"):
        print(f"[search] player={player} depth={depth} column={best_col} "
              f"score={best_score} nodes={searcher.nodes}")
    return SearchResult(column=best_col, depth=depth, score=best_score, nodes=searcher.nodes)
