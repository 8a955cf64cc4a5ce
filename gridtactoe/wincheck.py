"""
Win detection for any board size and run length.

Windows are enumerated in a fixed order: rows, then columns, then
down-right diagonals, then down-left diagonals. Within each family the
origin moves row-major. When a single move completes several runs at
once, the first one in that order is reported.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional, Tuple

from .board import Board, Mark, Move

logger = logging.getLogger(__name__)

Window = Tuple[Move, ...]


class Outcome(Enum):
    ONGOING = "ongoing"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Result:
    outcome: Outcome
    winner: Optional[Mark] = None
    cells: Tuple[Move, ...] = ()

    @property
    def is_terminal(self) -> bool:
        return self.outcome is not Outcome.ONGOING


ONGOING = Result(Outcome.ONGOING)
DRAW = Result(Outcome.DRAW)


def _run(row: int, col: int, d_row: int, d_col: int, run_length: int) -> Window:
    return tuple(Move(row + d_row * k, col + d_col * k) for k in range(run_length))


@lru_cache(maxsize=None)
def iter_windows(size: int, run_length: int) -> Tuple[Window, ...]:
    """
    every in-bounds run of `run_length` cells, in detection order
    """
    span = range(size - run_length + 1)   # origins that keep the run on the board
    windows = []
    # rows, left to right
    windows += [_run(r, c, 0, 1, run_length) for r in range(size) for c in span]
    # columns, top to bottom
    windows += [_run(r, c, 1, 0, run_length) for r in span for c in range(size)]
    # down-right
    windows += [_run(r, c, 1, 1, run_length) for r in span for c in span]
    # down-left, origin on the right side
    windows += [_run(r, c, 1, -1, run_length) for r in span
                for c in range(run_length - 1, size)]
    return tuple(windows)


def _first_run(board: Board, run_length: int) -> Optional[Window]:
    cells = board.cells
    for window in iter_windows(board.size, run_length):
        r0, c0 = window[0]
        first = cells[r0][c0]
        if first is Mark.EMPTY:
            continue
        if all(cells[r][c] is first for r, c in window[1:]):
            return window
    return None


def winner_of(board: Board, run_length: int) -> Optional[Mark]:
    """
    mark that owns a complete run, or None; used inside search
    """
    window = _first_run(board, run_length)
    if window is None:
        return None
    return board[window[0]]


def detect_win(board: Board, run_length: int) -> Result:
    """
    scan the board and report win (with its cells), draw, or ongoing
    """
    if run_length < 1 or run_length > board.size:
        raise ValueError(f"run length {run_length} does not fit a {board.size}x{board.size} board")
    window = _first_run(board, run_length)
    if window is not None:
        winner = board[window[0]]
        logger.debug("%s completed run %s", winner, list(window))
        return Result(Outcome.WIN, winner, window)
    if board.is_full():
        return DRAW
    return ONGOING


@lru_cache(maxsize=None)
def windows_through(size: int, run_length: int, row: int, col: int) -> Tuple[Window, ...]:
    """
    the windows that contain (row, col), in detection order
    """
    cell = Move(row, col)
    return tuple(w for w in iter_windows(size, run_length) if cell in w)


def winner_at(board: Board, run_length: int, row: int, col: int) -> Optional[Mark]:
    """
    Like winner_of(), but only looks at runs through (row, col).

    Enough after a single placement on a board that had no completed run.
    """
    cells = board.cells
    mark = cells[row][col]
    if mark is Mark.EMPTY:
        return None
    for window in windows_through(board.size, run_length, row, col):
        if all(cells[r][c] is mark for r, c in window):
            return mark
    return None
