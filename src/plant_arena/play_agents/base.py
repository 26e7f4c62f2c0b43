"""Base class for move-selection strategies.

The battle controller asks a strategy for the opponent's move after every
player action.  Strategies only *choose*; resolving the move (including
failing an unaffordable attack) is the turn resolver's job.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plant_arena.core.entities import Combatant, Move


class MoveStrategy(ABC):
    """Base class for anything that picks moves for a combatant."""

    @abstractmethod
    def choose_move(
        self,
        combatant: Combatant,
        opponent: Combatant | None = None,
    ) -> Move:
        """Choose one of *combatant*'s moves.

        Parameters
        ----------
        combatant:
            The combatant about to act.  Its ``moves`` tuple is never empty.
        opponent:
            The combatant being acted against, for strategies that want to
            look at the board.  Simple strategies may ignore it.

        Returns
        -------
        Move
            One of ``combatant.moves``.  It does not have to be affordable.
        """
