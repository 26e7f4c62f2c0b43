"""Battle result reporting: outcome models, stores and the reporter."""

from plant_arena.reporting.models import (
    BattleOutcome,
    BattleRecord,
    LeaderboardRow,
    TrackedStat,
)
from plant_arena.reporting.reporter import ReportSummary, ResultReporter
from plant_arena.reporting.stores import (
    BattleRecordStore,
    EntityStore,
    InMemoryBattleRecordStore,
    InMemoryEntityStore,
    JsonBattleRecordStore,
    build_leaderboard,
)

__all__ = [
    "BattleOutcome",
    "BattleRecord",
    "LeaderboardRow",
    "TrackedStat",
    "ReportSummary",
    "ResultReporter",
    "EntityStore",
    "BattleRecordStore",
    "InMemoryEntityStore",
    "InMemoryBattleRecordStore",
    "JsonBattleRecordStore",
    "build_leaderboard",
]
