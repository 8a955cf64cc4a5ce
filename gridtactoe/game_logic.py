import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .board import Board, Mark, Move
from .config import GameConfig, GameMode
from .errors import IllegalMove
from .heuristic import select_move
from .search import SearchStats, find_best_move
from .wincheck import ONGOING, Result, detect_win

logger = logging.getLogger(__name__)

FIRST_PLAYER = Mark.X
COMPUTER_PLAYER = Mark.O


@dataclass(frozen=True)
class Status:
    current_player: Mark
    result: Result


class GameSession:
    """
    generalized tic-tac-toe rules and state for one game
    """
    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None):
        """
        init board and turn state; never reconfigured afterwards
        """
        self.config = config
        self.board = Board.create(config.size)   # empty grid
        self.current_player = FIRST_PLAYER        # X always starts
        self.result = ONGOING                     # last move's result
        self.move_count = 0                       # how many moves done
        self.rng = rng if rng is not None else random.Random()
        self.last_search: Optional[SearchStats] = None

    @property
    def board_size(self) -> int:
        return self.config.size

    @property
    def run_length(self) -> int:
        return self.config.run_length

    @property
    def active(self) -> bool:
        return not self.result.is_terminal

    @property
    def computer_player(self) -> Optional[Mark]:
        if self.config.mode is GameMode.COMPUTER:
            return COMPUTER_PLAYER
        return None

    def is_computer_turn(self) -> bool:
        return self.active and self.current_player is self.computer_player

    def _apply(self, row: int, col: int) -> Result:
        """
        place current player's mark, check result, pass the turn
        """
        player = self.current_player
        self.board.place(row, col, player)      # raises before any change
        self.move_count += 1
        self.result = detect_win(self.board, self.run_length)
        if self.result.is_terminal:
            logger.debug("game over after %d moves: %s %s", self.move_count,
                         self.result.outcome.value, self.result.winner)
        else:
            self.current_player = player.opponent
        return self.result

    def play(self, row: int, col: int) -> Result:
        """
        human move for whoever's turn it is
        """
        if not self.active:
            raise IllegalMove("game is already over")
        if self.is_computer_turn():
            raise IllegalMove("it is the computer's turn")
        return self._apply(row, col)

    def best_move(self) -> Move:
        """
        pick the computer's move without playing it
        """
        if not self.active:
            raise IllegalMove("game is already over")
        if not self.is_computer_turn():
            raise IllegalMove("it is not the computer's turn")

        me = self.current_player
        if self.config.uses_search:
            stats = SearchStats()
            move = find_best_move(self.board, me, self.run_length,
                                  self.config.depth_ceiling, stats)
            self.last_search = stats
        else:
            move = select_move(self.board, me, self.run_length, self.rng)
        # an active game always has a free cell, so a move exists
        return move

    def play_computer(self) -> Tuple[Move, Result]:
        move = self.best_move()
        return move, self._apply(move.row, move.col)

    def status(self) -> Status:
        return Status(self.current_player, self.result)


def new_session(size: int, mode=GameMode.HUMAN,
                rng: Optional[random.Random] = None) -> GameSession:
    """
    validate config and start a fresh game; a reset is just another call
    """
    return GameSession(GameConfig(size=size, mode=mode), rng=rng)


def apply_human_move(session: GameSession, row: int, col: int) -> Result:
    return session.play(row, col)


def compute_move(session: GameSession) -> Move:
    return session.best_move()


def apply_computer_move(session: GameSession) -> Tuple[Move, Result]:
    return session.play_computer()


def status(session: GameSession) -> Status:
    return session.status()
