"""
Rule cascade for boards too big to search: win, block, center/corner,
then any free cell at random.
"""
import logging
import random
from typing import Optional

from .board import Board, Mark, Move
from .wincheck import winner_of

logger = logging.getLogger(__name__)


def find_winning_move(board: Board, mark: Mark, run_length: int) -> Optional[Move]:
    """
    first empty cell (row-major) where `mark` would complete a run
    """
    for move in board.empty_cells():
        with board.speculative(move.row, move.col, mark):
            won = winner_of(board, run_length) is mark
        if won:
            return move
    return None


def find_strategic_move(board: Board) -> Optional[Move]:
    # center, then corners in fixed order
    for move in (board.center(),) + board.corners():
        if board.is_empty(*move):
            return move
    return None


def select_move(board: Board, me: Mark, run_length: int,
                rng: Optional[random.Random] = None) -> Optional[Move]:
    if rng is None:
        rng = random.Random()

    move = find_winning_move(board, me, run_length)
    if move is not None:
        logger.debug("heuristic: win at %s", move)
        return move

    move = find_winning_move(board, me.opponent, run_length)
    if move is not None:
        logger.debug("heuristic: block at %s", move)
        return move

    move = find_strategic_move(board)
    if move is not None:
        logger.debug("heuristic: strategic %s", move)
        return move

    free = board.empty_cells()
    if not free:
        return None
    move = rng.choice(free)
    logger.debug("heuristic: random %s", move)
    return move
