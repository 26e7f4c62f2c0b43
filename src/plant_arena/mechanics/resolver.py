"""Turn resolution -- apply one move from an acting combatant to a target.

:func:`apply_move` is a pure function over combatant snapshots: it never
mutates its inputs and always returns fresh copies alongside a
human-readable log line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from plant_arena.core.entities import Combatant, Move, MoveType
from plant_arena.mechanics.damage import calculate_damage
from plant_arena.mechanics.energy import (
    DEFENSE_ENERGY_GAIN,
    MAX_HEAL_ENERGY_GAIN,
    gain_energy,
    spend_energy,
)
from plant_arena.mechanics.rounding import round_half_up

logger = logging.getLogger(__name__)

MAX_DEFENSE_BUFF = 0.75


@dataclass(frozen=True)
class TurnResult:
    """Outcome of a single move."""

    attacker: Combatant
    defender: Combatant
    log: str
    move: Move
    damage: int = 0
    healed: int = 0
    failed: bool = False
    """True when an attack could not be paid for and did nothing."""


def apply_move(attacker: Combatant, defender: Combatant, move: Move) -> TurnResult:
    """Resolve *move* played by *attacker* against *defender*."""
    if move.type == MoveType.ATTACK:
        result = _resolve_attack(attacker, defender, move)
    elif move.type == MoveType.DEFENSE:
        result = _resolve_defense(attacker, defender, move)
    else:
        result = _resolve_heal(attacker, defender, move)

    logger.debug("%s", result.log)
    return result


# ---------------------------------------------------------------------------
# Per-type handlers
# ---------------------------------------------------------------------------

def _resolve_attack(attacker: Combatant, defender: Combatant, move: Move) -> TurnResult:
    if not attacker.can_afford(move):
        return TurnResult(
            attacker=attacker,
            defender=defender,
            log=(
                f"{attacker.name} doesn't have enough energy for {move.name}! "
                "It must defend or heal."
            ),
            move=move,
            failed=True,
        )

    damage = calculate_damage(move.power, attacker, defender)
    new_defender = defender.model_copy(
        update={"health": max(0, defender.health - damage)}
    )
    new_attacker = spend_energy(attacker, move.cost)
    return TurnResult(
        attacker=new_attacker,
        defender=new_defender,
        log=f"{attacker.name} uses {move.name}! -{damage} HP",
        move=move,
        damage=damage,
    )


def _resolve_defense(attacker: Combatant, defender: Combatant, move: Move) -> TurnResult:
    buff = max(0.0, min(MAX_DEFENSE_BUFF, move.power))
    new_attacker = gain_energy(
        attacker.model_copy(update={"defense_buff": buff}), DEFENSE_ENERGY_GAIN
    )
    return TurnResult(
        attacker=new_attacker,
        defender=defender,
        log=(
            f"{attacker.name} shields with {move.name}! "
            f"Energy +{new_attacker.energy - attacker.energy}"
        ),
        move=move,
    )


def _resolve_heal(attacker: Combatant, defender: Combatant, move: Move) -> TurnResult:
    missing = max(0, attacker.max_health - attacker.health)
    restore = max(0, min(missing, round_half_up(move.power)))
    energy_gain = min(MAX_HEAL_ENERGY_GAIN, round_half_up(restore / 2))

    new_attacker = gain_energy(
        attacker.model_copy(update={"health": attacker.health + restore}), energy_gain
    )
    return TurnResult(
        attacker=new_attacker,
        defender=defender,
        log=f"{attacker.name} uses {move.name} and recovers {restore} HP!",
        move=move,
        healed=restore,
    )
