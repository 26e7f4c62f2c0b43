"""Pydantic v2 models for battle outcomes and persisted records.

``BattleOutcome`` is produced in memory by the controller the moment a
battle ends.  ``BattleRecord`` and ``LeaderboardRow`` are the shapes the
record store persists and serves back.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from plant_arena.core.entities import Combatant


class TrackedStat(str, Enum):
    """Counters the entity store must be able to increment atomically."""

    VICTORIES = "victories"
    DEFEATS = "defeats"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BattleOutcome(BaseModel):
    """Final in-memory result of a battle."""

    model_config = {"frozen": True}

    battle_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    player: Combatant
    opponent: Combatant
    winner_side: Literal["player", "opponent"]
    exchanges: int = 0
    finished_at: datetime = Field(default_factory=_utcnow)

    @property
    def winner(self) -> Combatant:
        return self.player if self.winner_side == "player" else self.opponent

    @property
    def loser(self) -> Combatant:
        return self.opponent if self.winner_side == "player" else self.player

    @property
    def between_real_accounts(self) -> bool:
        """True when both sides are plants owned by real users."""
        return (
            not self.player.is_synthetic
            and not self.opponent.is_synthetic
            and self.player.owner_id is not None
            and self.opponent.owner_id is not None
        )


class BattleRecord(BaseModel):
    """Immutable record of a battle between two accounts."""

    model_config = {"frozen": True}

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    participant_a: str
    """User id of the challenger."""

    participant_b: str
    """User id of the defender."""

    combatant_a_id: str
    """Plant id the challenger fought with."""

    combatant_b_id: str
    winner_id: str
    """User id of the winning account."""

    timestamp: datetime = Field(default_factory=_utcnow)

    def involves(self, user_id: str) -> bool:
        return user_id in (self.participant_a, self.participant_b)


class LeaderboardRow(BaseModel):
    """Aggregated win/loss totals for one account."""

    user_id: str
    name: str
    wins: int = 0
    losses: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        return self.wins / self.total if self.total else 0.0
