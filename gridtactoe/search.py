"""
Depth-limited minimax with alpha-beta pruning for small boards.

The search works on the live board: each child is tried inside
Board.speculative(), so the grid is back to its original state when a
call returns, pruned or not.

The board handed to find_best_move() must not hold a completed run.
From there on only the runs through the cell just placed can change, so
each node checks those instead of rescanning the whole board.
"""
import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

from .board import Board, Mark, Move
from .config import depth_ceiling_for
from .evaluation import evaluate
from .wincheck import winner_at, winner_of

logger = logging.getLogger(__name__)

WIN_SCORE = 1000


@dataclass
class SearchStats:
    nodes: int = 0
    best_score: Optional[float] = None


@lru_cache(maxsize=None)
def search_order(size: int) -> List[Move]:
    """
    all cells, nearest the center first; row-major among equals
    """
    mid = size - 1
    cells = [Move(r, c) for r in range(size) for c in range(size)]
    return sorted(cells, key=lambda m: abs(2 * m.row - mid) + abs(2 * m.col - mid))


def _children(board: Board) -> List[Move]:
    cells = board.cells
    return [m for m in search_order(board.size) if cells[m.row][m.col] is Mark.EMPTY]


def minimax(board: Board, me: Mark, run_length: int, depth: int, maximizing: bool,
            alpha: float, beta: float, ceiling: int,
            stats: Optional[SearchStats] = None,
            last_move: Optional[Move] = None) -> float:
    """
    score of the position for `me`; `maximizing` means `me` is to move

    `last_move` is the cell placed to reach this position; without it the
    whole board is scanned for a winner.
    """
    if stats is not None:
        stats.nodes += 1

    if last_move is None:
        winner = winner_of(board, run_length)
    else:
        winner = winner_at(board, run_length, last_move.row, last_move.col)
    if winner is me:
        return WIN_SCORE - depth          # quicker wins score higher
    if winner is not None:
        return depth - WIN_SCORE          # slower losses score higher
    if board.is_full():
        return 0

    if depth >= ceiling:
        return evaluate(board, me, run_length)

    if maximizing:
        best = -math.inf
        for move in _children(board):
            with board.speculative(move.row, move.col, me):
                score = minimax(board, me, run_length, depth + 1, False,
                                alpha, beta, ceiling, stats, move)
            best = max(best, score)
            alpha = max(alpha, score)
            if beta <= alpha:
                break                     # prune
        return best

    best = math.inf
    for move in _children(board):
        with board.speculative(move.row, move.col, me.opponent):
            score = minimax(board, me, run_length, depth + 1, True,
                            alpha, beta, ceiling, stats, move)
        best = min(best, score)
        beta = min(beta, score)
        if beta <= alpha:
            break                         # prune
    return best


def find_best_move(board: Board, me: Mark, run_length: int,
                   ceiling: Optional[int] = None,
                   stats: Optional[SearchStats] = None) -> Optional[Move]:
    """
    Try every empty cell for `me` and keep the one with the highest
    minimax score. Ties go to the first cell in row-major order.
    Returns None on a full board.

    Each child is searched with the best score so far as its lower bound.
    A child that cannot beat it comes back at or below that bound, so it
    is never picked, and the winner's score is still exact.
    """
    if ceiling is None:
        ceiling = depth_ceiling_for(board.size)
    if stats is None:
        stats = SearchStats()

    best_score = -math.inf
    best_move = None
    for move in board.empty_cells():
        with board.speculative(move.row, move.col, me):
            score = minimax(board, me, run_length, 0, False,
                            best_score, math.inf, ceiling, stats, move)
        if score > best_score:
            best_score, best_move = score, move

    stats.best_score = best_score if best_move is not None else None
    logger.debug("minimax picked %s score=%s nodes=%d ceiling=%d",
                 best_move, best_score, stats.nodes, ceiling)
    return best_move
