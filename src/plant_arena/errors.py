"""Exception types raised by the arena engine."""

from __future__ import annotations


class ArenaError(Exception):
    """Base class for recoverable arena errors."""


class InvalidMoveSelection(ArenaError):
    """A move was submitted that cannot be played right now.

    Raised when the move index or name does not exist, or when the battle
    is not in the ``ACTIVE`` phase.  The battle state is left untouched.
    """


class BattleBusy(InvalidMoveSelection):
    """A move was submitted while the previous exchange is still resolving."""


class MissingOpponentData(ArenaError):
    """A challenge was requested against an empty opponent roster."""


class PersistenceFailure(ArenaError):
    """A store call failed while reporting a battle result.

    The reporter never raises this; it is logged and collected in the
    report summary so callers can surface stale leaderboard data.
    """

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause
