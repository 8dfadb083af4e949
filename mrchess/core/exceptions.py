"""
Custom exceptions. Only raised at the boundaries of the application (requests, FEN strings, persistence).

Inside the rules engine and the search, failure is communicated through return values instead:
an illegal move is simply not applied (False), and a position without legal moves is a finished game, not an error.
"""


class GameError(Exception):
    """Top-level exception: anything going wrong around a chess game"""


class InvalidRequestError(GameError):
    """The request coming in from outside could not be interpreted (ex. a square that is not on the board)"""


class InvalidFENError(GameError):
    """String could not be parsed as FEN"""


class GameStateError(GameError):
    """Requested action does not fit the current state of the game (ex. moving after checkmate)"""


class NotYourTurnError(GameStateError):
    """A side tried to act while the other side is to move"""


class RepositoryError(GameError):
    """Persistence layer could not find / store the requested record"""
