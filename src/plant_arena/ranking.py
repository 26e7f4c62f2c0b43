"""Arena rank tiers derived from a plant's battle record."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from plant_arena.core.entities import PlantEntity
from plant_arena.mechanics.rounding import round_half_up


class Rank(str, Enum):
    SEED = "seed"
    WOOD = "wood"
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"


# Minimum win-rate percentage per tier, best first.
_RANK_THRESHOLDS: tuple[tuple[int, Rank], ...] = (
    (75, Rank.GOLD),
    (60, Rank.SILVER),
    (40, Rank.BRONZE),
    (20, Rank.WOOD),
)


class BattleRecordSummary(BaseModel):
    """A plant's arena record as shown on its stats page."""

    victories: int
    defeats: int
    total: int
    win_rate: int
    """Win rate as a whole percentage."""

    rank: Rank


def win_rate_percent(victories: int, defeats: int) -> int:
    total = victories + defeats
    if total <= 0:
        return 0
    return round_half_up(victories / total * 100)


def rank_for(win_rate: int) -> Rank:
    """Return the tier for a win-rate percentage."""
    for threshold, rank in _RANK_THRESHOLDS:
        if win_rate >= threshold:
            return rank
    return Rank.SEED


def plant_record(entity: PlantEntity) -> BattleRecordSummary:
    rate = win_rate_percent(entity.victories, entity.defeats)
    return BattleRecordSummary(
        victories=entity.victories,
        defeats=entity.defeats,
        total=entity.victories + entity.defeats,
        win_rate=rate,
        rank=rank_for(rate),
    )
