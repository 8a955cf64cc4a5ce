from .board import Board, Mark
from .wincheck import iter_windows


def score_window(mine: int, theirs: int) -> int:
    """
    value of one window given how many marks each side has in it
    """
    if mine and theirs:
        return 0                  # blocked for both sides
    if mine:
        return 10 ** mine
    if theirs:
        return -(10 ** theirs)
    return 0


def evaluate(board: Board, me: Mark, run_length: int) -> int:
    """
    Static score of a position from `me`'s point of view.

    Positive favours `me`, negative the opponent. Every window that only
    one side occupies counts 10**marks for that side. Used where the
    search stops short of a terminal position.
    """
    them = me.opponent
    cells = board.cells
    total = 0
    for window in iter_windows(board.size, run_length):
        mine = theirs = 0
        for r, c in window:
            m = cells[r][c]
            if m is me:
                mine += 1
            elif m is them:
                theirs += 1
        total += score_window(mine, theirs)
    return total
