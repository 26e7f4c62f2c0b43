"""Combat stat derivation from a plant's persistent attributes.

Stats are re-rolled on every call: two plants with identical attributes
(or the same plant fighting twice) get different attack/defense values.
Pass a seeded :class:`GameRNG` for reproducible results.
"""

from __future__ import annotations

from typing import NamedTuple

from plant_arena.core.entities import PlantEntity
from plant_arena.core.rng import GameRNG
from plant_arena.mechanics.rounding import round_half_up

ATTACK_BASE_RANGE = (15, 24)
DEFENSE_BASE_RANGE = (8, 13)

MIN_BATTLES_FOR_BONUS = 10


class CombatStats(NamedTuple):
    attack: int
    defense: int


def win_rate_bonus(victories: int, defeats: int) -> int:
    """Return the additive bonus earned from a plant's battle record.

    Records with fewer than ten battles earn nothing.  A perfect record is
    worth +10, 75% or better +5, and 25% or worse costs 5.
    """
    total = victories + defeats
    if total < MIN_BATTLES_FOR_BONUS:
        return 0

    rate = victories / total
    if rate >= 1:
        return 10
    if rate >= 0.75:
        return 5
    if rate <= 0.25:
        return -5
    return 0


def age_attack_multiplier(age_days: float) -> float:
    """Attack multiplier from age: +1% per 3 days, capped at +30%."""
    return 1 + min(age_days / 300, 0.3)


def derive_stats(entity: PlantEntity, rng: GameRNG) -> CombatStats:
    """Roll attack and defense for *entity*.

    Parameters
    ----------
    entity:
        The plant entering battle.
    rng:
        Source of the two baseline rolls.

    Returns
    -------
    CombatStats
        Final ``(attack, defense)``.  A losing record can push either
        value below zero.
    """
    attack_base = rng.random_int(*ATTACK_BASE_RANGE)
    defense_base = rng.random_int(*DEFENSE_BASE_RANGE)
    bonus = win_rate_bonus(entity.victories, entity.defeats)

    attack = round_half_up(
        attack_base
        * age_attack_multiplier(entity.age_days)
        * entity.robustness
        * (entity.health / 100)
    ) + bonus
    defense = round_half_up(
        defense_base * entity.robustness + entity.age_days / 50
    ) + bonus

    return CombatStats(attack=attack, defense=defense)
