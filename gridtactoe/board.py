from contextlib import contextmanager
from enum import Enum
from typing import Iterator, List, NamedTuple, Tuple

from .errors import IllegalMove


class Mark(Enum):
    """
    cell contents
    """
    EMPTY = ''
    X = 'X'
    O = 'O'

    @property
    def opponent(self) -> 'Mark':
        # EMPTY has no opponent
        if self is Mark.X:
            return Mark.O
        if self is Mark.O:
            return Mark.X
        raise ValueError("empty cell has no opponent")

    def __str__(self):
        return self.value


class Move(NamedTuple):
    row: int
    col: int


class Board:
    """
    N x N grid of marks, row-major: cells[row][col]

    place() is the only permanent mutation; speculative() places a mark
    for the duration of a with-block and always puts EMPTY back.
    """

    def __init__(self, size: int):
        self.size = size
        self.cells: List[List[Mark]] = [[Mark.EMPTY for _ in range(size)]
                                        for _ in range(size)]

    @classmethod
    def create(cls, size: int) -> 'Board':
        return cls(size)

    def __getitem__(self, pos: Tuple[int, int]) -> Mark:
        row, col = pos
        return self.cells[row][col]

    def __repr__(self):
        rows = ['|'.join(m.value or '.' for m in row) for row in self.cells]
        return f"Board({self.size}: {' / '.join(rows)})"

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_empty(self, row: int, col: int) -> bool:
        """
        true if coords valid and cell blank
        """
        return self.in_bounds(row, col) and self.cells[row][col] is Mark.EMPTY

    def _check_placeable(self, row, col, mark):
        # validate everything before touching the grid
        if mark is Mark.EMPTY:
            raise IllegalMove("cannot place an empty mark")
        if not self.in_bounds(row, col):
            raise IllegalMove(f"cell ({row}, {col}) is off the {self.size}x{self.size} board")
        if self.cells[row][col] is not Mark.EMPTY:
            raise IllegalMove(f"cell ({row}, {col}) is already taken")

    def place(self, row: int, col: int, mark: Mark) -> None:
        self._check_placeable(row, col, mark)
        self.cells[row][col] = mark

    @contextmanager
    def speculative(self, row: int, col: int, mark: Mark) -> Iterator['Board']:
        """
        try a mark on (row, col) and retract it when the block exits,
        whichever way it exits
        """
        self._check_placeable(row, col, mark)
        self.cells[row][col] = mark
        try:
            yield self
        finally:
            self.cells[row][col] = Mark.EMPTY

    def is_full(self) -> bool:
        return all(m is not Mark.EMPTY for row in self.cells for m in row)

    def empty_cells(self) -> List[Move]:
        # row-major, search and tie-breaks depend on this order
        return [Move(r, c) for r in range(self.size) for c in range(self.size)
                if self.cells[r][c] is Mark.EMPTY]

    def center(self) -> Move:
        c = self.size // 2
        return Move(c, c)

    def corners(self) -> Tuple[Move, Move, Move, Move]:
        """
        top-left, top-right, bottom-left, bottom-right
        """
        last = self.size - 1
        return Move(0, 0), Move(0, last), Move(last, 0), Move(last, last)

    def snapshot(self) -> Tuple[Tuple[Mark, ...], ...]:
        return tuple(tuple(row) for row in self.cells)
