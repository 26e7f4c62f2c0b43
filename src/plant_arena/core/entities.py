"""Entity models for the plant arena battle engine.

All data classes use Pydantic v2 BaseModel for validation and
serialization.  Every model here is *frozen*: the engine never mutates a
snapshot in place, it returns a new one via ``model_copy(update=...)``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class Category(str, Enum):
    """Fixed plant categories; each maps to its own base move list."""

    HERBS = "herbs"
    SUCCULENTS = "succulents"
    FLOWERS = "flowers"
    VEGETABLES = "vegetables"
    INDOOR = "indoor"
    AQUATIC = "aquatic"
    ORNAMENTAL = "ornamental"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> Category:
        """Return the matching category, falling back to ``HERBS``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.HERBS


class MoveType(str, Enum):
    ATTACK = "attack"
    DEFENSE = "defense"
    HEAL = "heal"


# ---------------------------------------------------------------------------
# PlantEntity (external, read-only)
# ---------------------------------------------------------------------------

class PlantEntity(BaseModel):
    """A user-owned plant as stored by the surrounding application.

    Only the fields the combat engine reads are modelled.  Missing or
    ``None`` values are replaced with defaults rather than rejected.
    """

    model_config = {"frozen": True}

    id: str
    name: str
    icon: str = ""
    category: Category = Category.HERBS
    health: float = 100
    """Current care health, 0-100."""

    age_days: float = 0
    robustness: float = 1.0
    """Toughness multiplier, typically 0.9-1.5."""

    victories: int = 0
    defeats: int = 0
    owner_id: str | None = None
    """Account owning the plant, or ``None`` when not backed by a user."""

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> Category:
        return Category.parse(value)

    @field_validator("health", "age_days", "robustness", "victories", "defeats", mode="before")
    @classmethod
    def _default_missing(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    # Clamping runs after pydantic has coerced the raw value to a number.

    @field_validator("health")
    @classmethod
    def _clamp_health(cls, value: float) -> float:
        return min(100, max(0, value))

    @field_validator("age_days", "robustness")
    @classmethod
    def _clamp_non_negative(cls, value: float) -> float:
        return max(0.0, value)

    @field_validator("victories", "defeats")
    @classmethod
    def _clamp_count(cls, value: int) -> int:
        return max(0, value)


# ---------------------------------------------------------------------------
# Move
# ---------------------------------------------------------------------------

class Move(BaseModel):
    """A single battle action.

    ``power`` is overloaded by move type: flat damage for attacks, flat HP
    restored for heals, and a damage-reduction fraction for defense moves.
    """

    model_config = {"frozen": True}

    name: str
    type: MoveType
    power: float
    cost: int = 0
    """Energy required to use the move.  Only attacks have a cost."""


# ---------------------------------------------------------------------------
# Combatant
# ---------------------------------------------------------------------------

class Combatant(BaseModel):
    """Ephemeral per-battle state derived from a :class:`PlantEntity`."""

    model_config = {"frozen": True}

    id: str
    name: str
    icon: str = ""
    category: Category = Category.HERBS
    health: int
    max_health: int
    attack_stat: int
    defense_stat: int
    energy: int = 100
    defense_buff: float = 0.0
    """Damage-reduction fraction granted by a defense move, 0-0.75."""

    moves: tuple[Move, ...] = Field(default_factory=tuple)
    entity_id: str | None = None
    """Id of the backing plant, ``None`` for synthetic opponents."""

    owner_id: str | None = None

    # -- queries -------------------------------------------------------------

    @property
    def is_knocked_out(self) -> bool:
        return self.health <= 0

    @property
    def is_synthetic(self) -> bool:
        return self.entity_id is None

    def can_afford(self, move: Move) -> bool:
        return self.energy >= move.cost
