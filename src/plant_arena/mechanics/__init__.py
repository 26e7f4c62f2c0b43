"""Core combat mechanics for the arena engine.

Re-exports the primary functions from each mechanics module for convenience.

Usage::

    from plant_arena.mechanics import (
        derive_stats, win_rate_bonus,
        generate_moves,
        calculate_damage,
        spend_energy, gain_energy,
        apply_move,
    )
"""

# -- stats -------------------------------------------------------------------
from .stats import CombatStats, derive_stats, win_rate_bonus

# -- moves -------------------------------------------------------------------
from .moves import generate_moves, move_scale

# -- damage ------------------------------------------------------------------
from .damage import attack_bonus, calculate_damage, defense_reduction

# -- energy ------------------------------------------------------------------
from .energy import gain_energy, spend_energy

# -- resolution --------------------------------------------------------------
from .resolver import TurnResult, apply_move

__all__ = [
    # stats
    "CombatStats",
    "derive_stats",
    "win_rate_bonus",
    # moves
    "generate_moves",
    "move_scale",
    # damage
    "attack_bonus",
    "defense_reduction",
    "calculate_damage",
    # energy
    "spend_energy",
    "gain_energy",
    # resolution
    "TurnResult",
    "apply_move",
]
