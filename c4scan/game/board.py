from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from c4scan.core.contracts import EMPTY, MARKS, RED, YELLOW
from c4scan.core.errors import ColumnFullError, TokenCountError

COLUMNS = 7
ROWS = 6
CONNECT = 4

# (d_col, d_row) for horizontal, vertical and both diagonals
_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((1, 0), (0, 1), (1, 1), (1, -1))


class Board:
    """Connect Four grid. Columns fill from the bottom (row 0) up.

    Each column is stored as the list of its marks from the bottom, so a
    cell above an empty cell can never be occupied.
    """

    def __init__(self, columns: int = COLUMNS, rows: int = ROWS) -> None:
        if columns < 1 or rows < 1:
            raise ValueError(f"Board needs at least one column and row, got {columns}x{rows}")
        self.columns = columns
        self.rows = rows
        self._stacks: List[List[str]] = [[] for _ in range(columns)]

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """Builds a board from text rows, top row first ('.', 'R', 'Y')."""
        if not rows:
            raise ValueError("No rows given")
        width = len(rows[0])
        board = cls(columns=width, rows=len(rows))
        for r, line in enumerate(reversed(rows)):
            if len(line) != width:
                raise ValueError(f"Row {r} has {len(line)} cells, expected {width}")
            for c, cell in enumerate(line):
                if cell == EMPTY:
                    continue
                if board.height(c) != r:
                    raise ValueError(f"Floating mark at column {c}, row {r}")
                board.set(c, cell)
        return board

    def copy(self) -> "Board":
        other = Board(self.columns, self.rows)
        other._stacks = [list(s) for s in self._stacks]
        return other

    def _check_column(self, column: int) -> None:
        if not 0 <= column < self.columns:
            raise ValueError(f"Column {column} outside 0..{self.columns - 1}")

    def height(self, column: int) -> int:
        self._check_column(column)
        return len(self._stacks[column])

    def at(self, column: int, row: int) -> str:
        """Mark at (column, row), row 0 being the bottom."""
        self._check_column(column)
        if not 0 <= row < self.rows:
            raise ValueError(f"Row {row} outside 0..{self.rows - 1}")
        stack = self._stacks[column]
        return stack[row] if row < len(stack) else EMPTY

    def set(self, column: int, mark: str) -> int:
        """Drops ``mark`` into ``column`` and returns the row it landed on."""
        self._check_column(column)
        if mark not in MARKS:
            raise ValueError(f"Unknown mark: {mark!r}")
        stack = self._stacks[column]
        if len(stack) >= self.rows:
            raise ColumnFullError(f"Column {column} is full")
        stack.append(mark)
        return len(stack) - 1

    def undo(self, column: int) -> str:
        """Removes and returns the top mark of ``column``."""
        self._check_column(column)
        stack = self._stacks[column]
        if not stack:
            raise ValueError(f"Column {column} is empty")
        return stack.pop()

    def is_full(self) -> bool:
        return all(len(s) >= self.rows for s in self._stacks)

    def count(self, mark: str) -> int:
        return sum(s.count(mark) for s in self._stacks)

    def legal_moves(self) -> List[int]:
        """Non-full columns, center first, then alternating outwards (left before right)."""
        order = sorted(range(self.columns), key=lambda c: (abs(2 * c - (self.columns - 1)), c))
        return [c for c in order if len(self._stacks[c]) < self.rows]

    def _run_length(self, column: int, row: int, dc: int, dr: int, mark: str) -> int:
        n = 0
        c, r = column + dc, row + dr
        while 0 <= c < self.columns and 0 <= r < self.rows and self.at(c, r) == mark:
            n += 1
            c += dc
            r += dr
        return n

    def wins_at(self, column: int) -> bool:
        """True if the top mark of ``column`` is part of a four-in-a-row."""
        row = self.height(column) - 1
        if row < 0:
            return False
        mark = self._stacks[column][row]
        for dc, dr in _DIRECTIONS:
            total = 1 + self._run_length(column, row, dc, dr, mark) + self._run_length(column, row, -dc, -dr, mark)
            if total >= CONNECT:
                return True
        return False

    def winner(self) -> Optional[str]:
        """Returns the mark owning a four-in-a-row anywhere on the board, else None."""
        for c in range(self.columns):
            for r in range(self.rows):
                mark = self.at(c, r)
                if mark == EMPTY:
                    continue
                for dc, dr in _DIRECTIONS:
                    end_c, end_r = c + dc * (CONNECT - 1), r + dr * (CONNECT - 1)
                    if not (0 <= end_c < self.columns and 0 <= end_r < self.rows):
                        continue
                    if all(self.at(c + dc * i, r + dr * i) == mark for i in range(1, CONNECT)):
                        return mark
        return None

    def windows(self) -> Iterable[List[str]]:
        """Every line of CONNECT consecutive cells, in all four directions."""
        for c in range(self.columns):
            for r in range(self.rows):
                for dc, dr in _DIRECTIONS:
                    end_c, end_r = c + dc * (CONNECT - 1), r + dr * (CONNECT - 1)
                    if 0 <= end_c < self.columns and 0 <= end_r < self.rows:
                        yield [self.at(c + dc * i, r + dr * i) for i in range(CONNECT)]

    def pretty(self) -> str:
        """Text rendering, top row first, with column numbers underneath."""
        lines = [" ".join(self.at(c, r) for c in range(self.columns)) for r in reversed(range(self.rows))]
        lines.append(" ".join(str(c + 1) for c in range(self.columns)))
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.columns, self.rows, self._stacks) == (other.columns, other.rows, other._stacks)

    def __repr__(self) -> str:
        return f"Board({self.columns}x{self.rows}, {self.count(RED)} red, {self.count(YELLOW)} yellow)"


def turn_from_counts(red: int, yellow: int) -> str:
    """Whose move it is, given the number of tokens of each color on the board.

    Red always starts, so red is to move unless red is ahead by one.
    """
    diff = red - yellow
    if abs(diff) > 1:
        raise TokenCountError(f"Invalid numbers of game pieces: {red} red, {yellow} yellow.")
    return YELLOW if diff > 0 else RED
