"""
Exceptions raised by the c4scan pipeline.

Calibration errors mean the current image cannot be used; callers decide
whether to try another frame. Nothing in the library retries on its own.
"""

from __future__ import annotations


class C4ScanError(Exception):
    """Base class for every error raised by c4scan."""


class CalibrationFailure(C4ScanError):
    """The board could not be located with sufficient confidence."""


class InsufficientCornersError(CalibrationFailure):
    """Border lines did not produce intersections in all four quadrants."""


class DegenerateTransformError(CalibrationFailure):
    """The four corners do not define a usable perspective transform."""


class TokenCountError(CalibrationFailure):
    """Red and yellow token counts differ by more than one."""


class ColumnFullError(C4ScanError, ValueError):
    """A mark was dropped into a column that is already full."""


class NoLegalMoveError(C4ScanError):
    """The board is full; there is nothing left to play."""
