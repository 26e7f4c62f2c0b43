"""Telemetry data model for per-battle statistics.

A lightweight dataclass filled in by the battle controller as moves
resolve.  Used by the batch runner and balance scripts to compare
strategies without storing every intermediate snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BattleTelemetry:
    """Stats from a single battle.

    Attributes
    ----------
    player_name / opponent_name:
        Display names of both sides.
    result:
        ``"win"`` or ``"loss"`` from the player's point of view, or
        ``"abandoned"`` if the battle was reset before it finished.
    exchanges:
        Player moves resolved (each usually followed by a reply).
    damage_dealt / damage_taken:
        HP removed from the opponent / from the player.
    healing_done:
        HP the player restored.
    failed_moves:
        Attacks either side attempted without enough energy.
    moves_played_by_name:
        Breakdown of player moves: ``move name -> play count``.
    """

    player_name: str
    opponent_name: str
    result: str = "abandoned"
    exchanges: int = 0
    player_hp_start: int = 0
    player_hp_end: int = 0
    opponent_hp_start: int = 0
    opponent_hp_end: int = 0
    damage_dealt: int = 0
    damage_taken: int = 0
    healing_done: int = 0
    failed_moves: int = 0
    moves_played_by_name: dict[str, int] = field(default_factory=dict)
