import logging
import os
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# BOARD LIMITS
# -----------------------------------------------------------------------------

MIN_BOARD_SIZE = 3
MAX_BOARD_SIZE = 8
DEFAULT_BOARD_SIZE = 3
LONG_RUN_MIN_SIZE = 7             # from 7x7 up you need 4 in a row
SHORT_RUN_LENGTH = 3
LONG_RUN_LENGTH = 4

# -----------------------------------------------------------------------------
# COMPUTER PLAYER
# -----------------------------------------------------------------------------

MINIMAX_MAX_SIZE = 5              # bigger boards use the rule cascade

# search depth per board size; anything not listed gets the default.
# first reply on 4x4 and 5x5 must stay under a second
DEPTH_CEILINGS = {
    3: 9,
    4: 5,
    5: 3,
}
DEFAULT_DEPTH_CEILING = 3

# pause before the computer answers, purely cosmetic
COMPUTER_MOVE_DELAY_MS = 500
AI_DELAY_ENV = "GRIDTACTOE_AI_DELAY_MS"

LOG_LEVEL = "WARNING"
LOG_LEVEL_ENV = "GRIDTACTOE_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GameMode(Enum):
    HUMAN = "human"               # human vs human
    COMPUTER = "computer"         # human (X) vs computer (O)


def run_length_for(size: int) -> int:
    """
    marks in a row needed to win on a size x size board
    """
    return LONG_RUN_LENGTH if size >= LONG_RUN_MIN_SIZE else SHORT_RUN_LENGTH


def depth_ceiling_for(size: int) -> int:
    return DEPTH_CEILINGS.get(size, DEFAULT_DEPTH_CEILING)


def computer_move_delay_ms() -> int:
    """
    delay from the environment; a bad value falls back to the default
    """
    raw = os.environ.get(AI_DELAY_ENV)
    if raw is None:
        return COMPUTER_MOVE_DELAY_MS
    try:
        delay = int(raw)
    except ValueError:
        delay = -1
    if delay < 0:
        logger.warning("ignoring %s=%r, using %d ms", AI_DELAY_ENV, raw, COMPUTER_MOVE_DELAY_MS)
        return COMPUTER_MOVE_DELAY_MS
    return delay


def log_level() -> str:
    level = os.environ.get(LOG_LEVEL_ENV, LOG_LEVEL).strip().upper()
    if level not in LOG_LEVELS:
        logger.warning("ignoring %s=%r, using %s", LOG_LEVEL_ENV, level, LOG_LEVEL)
        return LOG_LEVEL
    return level


@dataclass(frozen=True)
class GameConfig:
    """
    settings for one game; a change means a new session
    """
    size: int = DEFAULT_BOARD_SIZE
    mode: GameMode = GameMode.HUMAN

    def __post_init__(self):
        # bool is an int subclass, reject it explicitly
        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise InvalidConfiguration(f"board size must be an integer, got {self.size!r}")
        if self.size < MIN_BOARD_SIZE:
            raise InvalidConfiguration(
                f"board size must be at least {MIN_BOARD_SIZE}, got {self.size}")
        if self.size > MAX_BOARD_SIZE:
            raise InvalidConfiguration(
                f"board size must be at most {MAX_BOARD_SIZE}, got {self.size}")
        if not isinstance(self.mode, GameMode):
            try:
                object.__setattr__(self, "mode", GameMode(self.mode))
            except ValueError:
                raise InvalidConfiguration(f"unknown game mode {self.mode!r}") from None

    @property
    def run_length(self) -> int:
        return run_length_for(self.size)

    @property
    def uses_search(self) -> bool:
        return self.size <= MINIMAX_MAX_SIZE

    @property
    def depth_ceiling(self) -> int:
        return depth_ceiling_for(self.size)
