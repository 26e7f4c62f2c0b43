"""Heuristic strategy -- a simple priority list used for balance runs.

Priorities:
    1. Heal when health is below ``heal_threshold`` of max and the heal
       would restore something.
    2. Finish the opponent with the cheapest affordable attack that kills.
    3. Play the strongest affordable attack.
    4. Nothing affordable: defend to regenerate energy (heal if there is
       no defense move).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from plant_arena.core.entities import MoveType
from plant_arena.mechanics.damage import calculate_damage
from plant_arena.play_agents.base import MoveStrategy

if TYPE_CHECKING:
    from plant_arena.core.entities import Combatant, Move


class HeuristicStrategy(MoveStrategy):
    """Strategy that plays by a fixed set of priorities."""

    def __init__(self, heal_threshold: float = 0.35) -> None:
        self._heal_threshold = heal_threshold

    def choose_move(
        self,
        combatant: Combatant,
        opponent: Combatant | None = None,
    ) -> Move:
        heals = _of_type(combatant, MoveType.HEAL)
        defenses = _of_type(combatant, MoveType.DEFENSE)
        attacks = [m for m in _of_type(combatant, MoveType.ATTACK) if combatant.can_afford(m)]

        # --- Priority 1: Heal when low ---
        missing = combatant.max_health - combatant.health
        if heals and missing > 0 and combatant.health < combatant.max_health * self._heal_threshold:
            return max(heals, key=lambda m: m.power)

        # --- Priority 2: Lethal ---
        if attacks and opponent is not None:
            lethal = [
                m for m in attacks
                if calculate_damage(m.power, combatant, opponent) >= opponent.health
            ]
            if lethal:
                return min(lethal, key=lambda m: m.cost)

        # --- Priority 3: Best attack ---
        if attacks:
            return max(attacks, key=lambda m: m.power)

        # --- Priority 4: Recover energy ---
        if defenses:
            return defenses[0]
        if heals:
            return heals[0]
        return combatant.moves[0]


def _of_type(combatant: Combatant, move_type: MoveType) -> list[Move]:
    return [m for m in combatant.moves if m.type == move_type]
