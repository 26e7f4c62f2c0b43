"""Core primitives for the plant arena battle engine."""

from plant_arena.core.battle_state import BattlePhase, BattleState, MatchUp
from plant_arena.core.entities import (
    Category,
    Combatant,
    Move,
    MoveType,
    PlantEntity,
)
from plant_arena.core.rng import GameRNG

__all__ = [
    # rng
    "GameRNG",
    # entities
    "Category",
    "MoveType",
    "PlantEntity",
    "Move",
    "Combatant",
    # battle_state
    "BattlePhase",
    "BattleState",
    "MatchUp",
]
