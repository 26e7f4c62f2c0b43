"""Energy system -- spend and regenerate.

Arena energy rules:
    - Every combatant starts a battle with 100 energy.
    - Attack moves spend their cost; an attack that cannot be paid for
      fails without spending anything.
    - Defense and heal moves are free and regenerate energy.
    - Energy always stays within ``[0, MAX_ENERGY]``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plant_arena.core.entities import Combatant

MAX_ENERGY = 100
DEFENSE_ENERGY_GAIN = 15
MAX_HEAL_ENERGY_GAIN = 20


def clamp_energy(value: int) -> int:
    return max(0, min(MAX_ENERGY, value))


def spend_energy(combatant: Combatant, amount: int) -> Combatant:
    """Return a copy of *combatant* with *amount* energy removed (floor 0)."""
    return combatant.model_copy(update={"energy": clamp_energy(combatant.energy - amount)})


def gain_energy(combatant: Combatant, amount: int) -> Combatant:
    """Return a copy of *combatant* with *amount* energy added (cap 100)."""
    return combatant.model_copy(update={"energy": clamp_energy(combatant.energy + amount)})
