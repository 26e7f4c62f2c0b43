"""Per-combatant move generation.

Each combatant gets its own scaled copy of its category's template moves:

    scale = 1 + age bonus + robustness bonus + health bonus
    power = max(1, round(template power * scale + win-rate bonus))

Defense templates carry a damage-reduction fraction rather than a flat
amount, so by default they are copied unscaled.  ``scale_defense=True``
runs them through the same formula; the 0.75 buff cap applied by the
turn resolver is authoritative either way.
"""

from __future__ import annotations

from typing import Mapping

from plant_arena.content.catalog import base_moves
from plant_arena.core.entities import Category, Move, MoveType, PlantEntity
from plant_arena.mechanics.rounding import round_half_up
from plant_arena.mechanics.stats import win_rate_bonus


def move_scale(entity: PlantEntity) -> float:
    """Return the power multiplier for *entity*'s moves."""
    age_bonus = min(entity.age_days / 600, 0.2)
    robustness_bonus = (entity.robustness - 1) * 0.15
    health_bonus = (entity.health / 100 - 1) * 0.05
    return 1 + age_bonus + robustness_bonus + health_bonus


def scale_move(template: Move, scale: float, bonus: int) -> Move:
    power = max(1, round_half_up(template.power * scale + bonus))
    return template.model_copy(update={"power": power})


def generate_moves(
    entity: PlantEntity,
    scale_defense: bool = False,
    catalog: Mapping[Category, tuple[Move, ...]] | None = None,
) -> tuple[Move, ...]:
    """Build *entity*'s scaled move list from its category templates."""
    scale = move_scale(entity)
    bonus = win_rate_bonus(entity.victories, entity.defeats)

    moves: list[Move] = []
    for template in base_moves(entity.category, catalog):
        if template.type == MoveType.DEFENSE and not scale_defense:
            moves.append(template.model_copy())
        else:
            moves.append(scale_move(template, scale, bonus))
    return tuple(moves)
