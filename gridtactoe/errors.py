class GameError(Exception):
    """
    base for everything the engine rejects
    """


class InvalidConfiguration(GameError):
    """
    bad board size or game mode
    """


class IllegalMove(GameError):
    """
    occupied cell, off-board coords, wrong turn, or game already over
    """
