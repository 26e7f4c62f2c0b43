"""Battle-level state snapshots.

``BattleState`` is what the controller hands to a UI layer: both combatant
snapshots, the latest log line and, once the match is over, the winner.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from plant_arena.core.entities import Combatant


class BattlePhase(str, Enum):
    IDLE = "idle"
    PREPARING = "preparing"
    ACTIVE = "active"
    FINISHED = "finished"


class MatchUp(BaseModel):
    """The pair of combatants produced at preparation time."""

    model_config = {"frozen": True}

    player: Combatant
    opponent: Combatant


class BattleState(BaseModel):
    """Immutable view of a battle at one point in time."""

    model_config = {"frozen": True}

    phase: BattlePhase = BattlePhase.IDLE
    player: Combatant | None = None
    opponent: Combatant | None = None
    log: str = ""
    """Description of the most recent action."""

    history: tuple[str, ...] = ()
    """Every log line of the battle, oldest first."""

    winner_id: str | None = None
    exchanges: int = 0

    @property
    def is_over(self) -> bool:
        return self.phase == BattlePhase.FINISHED
