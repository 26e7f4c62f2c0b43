"""Result reporter -- persists a finished battle.

Reporting runs strictly after the in-memory outcome is final.  Every
store call is awaited in sequence and isolated: a failure is logged and
recorded in the returned :class:`ReportSummary`, never raised, and never
undoes a step that already succeeded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from plant_arena.errors import PersistenceFailure
from plant_arena.reporting.models import BattleOutcome, BattleRecord, TrackedStat
from plant_arena.reporting.stores import BattleRecordStore, EntityStore

logger = logging.getLogger(__name__)


@dataclass
class ReportSummary:
    """What the reporter managed to persist for one battle.

    Attributes
    ----------
    battle_id:
        Id of the reported :class:`BattleOutcome`.
    counters_updated:
        ``(entity_id, stat)`` pairs that were incremented successfully.
    record:
        The battle record stored, or ``None`` if none was due or the
        insert failed.
    failures:
        One entry per failed store call.
    skipped:
        True when the battle had already been reported and nothing was
        written this time.
    """

    battle_id: str
    counters_updated: list[tuple[str, TrackedStat]] = field(default_factory=list)
    record: BattleRecord | None = None
    failures: list[PersistenceFailure] = field(default_factory=list)
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return not self.failures


class ResultReporter:
    """Updates win/loss counters and stores battle records.

    Parameters
    ----------
    entity_store:
        Store holding the plants' durable victory/defeat counters.
    record_store:
        Optional store for battles between two real accounts.
    """

    def __init__(
        self,
        entity_store: EntityStore,
        record_store: BattleRecordStore | None = None,
    ) -> None:
        self.entity_store = entity_store
        self.record_store = record_store
        self._reported: set[str] = set()

    async def report(self, outcome: BattleOutcome) -> ReportSummary:
        """Persist *outcome*.  Calling again for the same battle is a no-op."""
        if outcome.battle_id in self._reported:
            logger.warning("Battle %s already reported, skipping", outcome.battle_id)
            return ReportSummary(battle_id=outcome.battle_id, skipped=True)

        self._reported.add(outcome.battle_id)
        summary = ReportSummary(battle_id=outcome.battle_id)

        # Winner first, then loser; never concurrently.
        for combatant, stat in (
            (outcome.winner, TrackedStat.VICTORIES),
            (outcome.loser, TrackedStat.DEFEATS),
        ):
            if combatant.entity_id is None:
                continue
            try:
                await self.entity_store.increment_stat(combatant.entity_id, stat)
            except Exception as exc:
                self._fail(summary, f"increment {stat.value} for {combatant.entity_id}", exc)
            else:
                summary.counters_updated.append((combatant.entity_id, stat))

        if self.record_store is not None and outcome.between_real_accounts:
            record = BattleRecord(
                participant_a=outcome.player.owner_id,
                participant_b=outcome.opponent.owner_id,
                combatant_a_id=outcome.player.entity_id,
                combatant_b_id=outcome.opponent.entity_id,
                winner_id=outcome.winner.owner_id,
                timestamp=outcome.finished_at,
            )
            try:
                await self.record_store.insert_battle_record(record)
            except Exception as exc:
                self._fail(summary, f"insert battle record {record.id}", exc)
            else:
                summary.record = record

        logger.info(
            "Reported battle %s: winner=%s counters=%d record=%s failures=%d",
            outcome.battle_id, outcome.winner.name, len(summary.counters_updated),
            summary.record is not None, len(summary.failures),
        )
        return summary

    @staticmethod
    def _fail(summary: ReportSummary, operation: str, exc: Exception) -> None:
        failure = PersistenceFailure(operation, exc)
        logger.exception("Persistence failure: %s", failure)
        summary.failures.append(failure)
