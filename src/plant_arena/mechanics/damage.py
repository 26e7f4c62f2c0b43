"""Damage calculation.

Implements the arena damage pipeline:
    power -> attacker bonus (cap 20%) -> defender reduction (cap 20%) -> floor 1

Both modifiers are capped so that very large stats cannot run away with
the fight.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from plant_arena.mechanics.rounding import round_half_up

if TYPE_CHECKING:
    from plant_arena.core.entities import Combatant

MAX_ATTACK_BONUS = 0.2
MAX_DEFENSE_REDUCTION = 0.2


def attack_bonus(attacker: Combatant) -> float:
    """Fractional bonus from the attacker's attack stat and remaining health."""
    health_ratio = attacker.health / attacker.max_health if attacker.max_health else 0
    return min(MAX_ATTACK_BONUS, attacker.attack_stat / 100 + health_ratio * 0.1)


def defense_reduction(defender: Combatant) -> float:
    """Fractional reduction from the defender's defense stat and active buff."""
    return min(MAX_DEFENSE_REDUCTION, defender.defense_stat / 100 + defender.defense_buff)


def calculate_damage(power: float, attacker: Combatant, defender: Combatant) -> int:
    """Calculate final damage after all modifiers.

    Pipeline (order matters):
        1. Scale power by ``1 + attack_bonus`` and round
        2. Scale by ``1 - defense_reduction`` and round
        3. Floor at 1
    """
    damage = round_half_up(power * (1 + attack_bonus(attacker)))
    damage = round_half_up(damage * (1 - defense_reduction(defender)))
    return max(1, damage)
