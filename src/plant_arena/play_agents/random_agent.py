"""Uniform random strategy -- the default opponent AI.

Picks any of the combatant's moves with equal probability, without
checking whether it can pay for it.  An unaffordable attack simply fails
and wastes the turn, which is what keeps a random opponent beatable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from plant_arena.core.rng import GameRNG
from plant_arena.play_agents.base import MoveStrategy

if TYPE_CHECKING:
    from plant_arena.core.entities import Combatant, Move


class RandomStrategy(MoveStrategy):
    """Strategy that picks a move uniformly at random.

    Parameters
    ----------
    rng:
        Seeded RNG for deterministic randomness.  If ``None``, an unseeded
        ``GameRNG`` is created.
    """

    def __init__(self, rng: GameRNG | None = None) -> None:
        self._rng = rng or GameRNG()

    def choose_move(
        self,
        combatant: Combatant,
        opponent: Combatant | None = None,
    ) -> Move:
        return self._rng.random_choice(combatant.moves)
