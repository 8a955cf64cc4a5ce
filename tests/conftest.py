import random

import pytest

from gridtactoe.board import Board, Mark

_MARKS = {'X': Mark.X, 'O': Mark.O, '.': Mark.EMPTY}


@pytest.fixture
def make_board():
    """
    build a board from rows like "X.O"
    """
    def _make(*rows):
        board = Board.create(len(rows))
        for r, row in enumerate(rows):
            assert len(row) == len(rows), "board must be square"
            for c, ch in enumerate(row):
                if _MARKS[ch] is not Mark.EMPTY:
                    board.place(r, c, _MARKS[ch])
        return board
    return _make


@pytest.fixture
def rng():
    return random.Random(1234)
