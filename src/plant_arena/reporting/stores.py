"""Storage collaborators used by the result reporter.

The engine only depends on the two abstract stores below.  The in-memory
implementations back tests and scripts; ``JsonBattleRecordStore`` keeps
battle history on disk between runs.
"""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Mapping

from plant_arena.core.entities import PlantEntity
from plant_arena.reporting.models import BattleRecord, LeaderboardRow, TrackedStat

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------

class EntityStore(ABC):
    """Read plants and atomically bump their battle counters."""

    @abstractmethod
    async def get_by_id(self, entity_id: str) -> PlantEntity | None:
        """Return the plant with *entity_id*, or ``None`` if unknown."""

    @abstractmethod
    async def get_many(self, entity_ids: Iterable[str]) -> list[PlantEntity]:
        """Return every known plant among *entity_ids*, in request order."""

    @abstractmethod
    async def increment_stat(self, entity_id: str, stat: TrackedStat) -> PlantEntity:
        """Atomically add one to *stat* and return the updated plant.

        Raises
        ------
        KeyError
            If no plant with *entity_id* exists.
        """


class BattleRecordStore(ABC):
    """Persist battles between accounts and serve history/leaderboards."""

    @abstractmethod
    async def insert_battle_record(self, record: BattleRecord) -> None:
        ...

    @abstractmethod
    async def list_battles_for_user(self, user_id: str) -> list[BattleRecord]:
        """Return every battle *user_id* took part in, newest first."""

    @abstractmethod
    async def list_leaderboard(self) -> list[LeaderboardRow]:
        """Return per-account totals, best first."""


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def build_leaderboard(
    records: Iterable[BattleRecord],
    names: Mapping[str, str] | None = None,
) -> list[LeaderboardRow]:
    """Aggregate *records* into leaderboard rows.

    Rows are sorted by wins, then win rate, then user id.  Accounts with
    no entry in *names* are listed under their user id.
    """
    names = names or {}
    rows: dict[str, LeaderboardRow] = {}

    def row_for(user_id: str) -> LeaderboardRow:
        if user_id not in rows:
            rows[user_id] = LeaderboardRow(user_id=user_id, name=names.get(user_id, user_id))
        return rows[user_id]

    for record in records:
        for user_id in (record.participant_a, record.participant_b):
            row = row_for(user_id)
            if user_id == record.winner_id:
                row.wins += 1
            else:
                row.losses += 1

    return sorted(rows.values(), key=lambda r: (-r.wins, -r.win_rate, r.user_id))


# ---------------------------------------------------------------------------
# In-memory implementations
# ---------------------------------------------------------------------------

class InMemoryEntityStore(EntityStore):
    """Dict-backed entity store.  Increments are serialised by a lock."""

    def __init__(self, entities: Iterable[PlantEntity] = ()) -> None:
        self._entities: dict[str, PlantEntity] = {e.id: e for e in entities}
        self._lock = asyncio.Lock()

    def add(self, entity: PlantEntity) -> None:
        self._entities[entity.id] = entity

    async def get_by_id(self, entity_id: str) -> PlantEntity | None:
        return self._entities.get(entity_id)

    async def get_many(self, entity_ids: Iterable[str]) -> list[PlantEntity]:
        return [self._entities[i] for i in entity_ids if i in self._entities]

    async def increment_stat(self, entity_id: str, stat: TrackedStat) -> PlantEntity:
        async with self._lock:
            entity = self._entities[entity_id]
            field = TrackedStat(stat).value
            updated = entity.model_copy(update={field: getattr(entity, field) + 1})
            self._entities[entity_id] = updated
            return updated


class InMemoryBattleRecordStore(BattleRecordStore):
    """List-backed record store."""

    def __init__(
        self,
        records: Iterable[BattleRecord] = (),
        user_names: Mapping[str, str] | None = None,
    ) -> None:
        self._records: list[BattleRecord] = list(records)
        self._names = dict(user_names or {})
        self._lock = asyncio.Lock()

    async def insert_battle_record(self, record: BattleRecord) -> None:
        async with self._lock:
            self._records.append(record)

    async def list_battles_for_user(self, user_id: str) -> list[BattleRecord]:
        matches = [r for r in self._records if r.involves(user_id)]
        return sorted(matches, key=lambda r: r.timestamp, reverse=True)

    async def list_leaderboard(self) -> list[LeaderboardRow]:
        return build_leaderboard(self._records, self._names)


# ---------------------------------------------------------------------------
# JSON file implementation
# ---------------------------------------------------------------------------

class JsonBattleRecordStore(InMemoryBattleRecordStore):
    """Record store that mirrors its contents to a JSON file.

    The file holds a list of records.  It is read once at construction and
    rewritten in full after every insert, through a temporary file that
    replaces the old one.  A failed write leaves both the file and the
    in-memory records as they were.
    """

    def __init__(self, path: Path, user_names: Mapping[str, str] | None = None) -> None:
        self.path = Path(path)
        super().__init__(self._load(self.path), user_names)

    @staticmethod
    def _load(path: Path) -> list[BattleRecord]:
        if not path.exists():
            return []
        raw = json.loads(path.read_text(encoding="utf-8"))
        return [BattleRecord.model_validate(item) for item in raw]

    async def insert_battle_record(self, record: BattleRecord) -> None:
        async with self._lock:
            records = [*self._records, record]
            await asyncio.to_thread(self._save, records)
            self._records = records
        logger.debug("Saved battle record %s to %s", record.id, self.path)

    def _save(self, records: list[BattleRecord]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [r.model_dump(mode="json") for r in records]
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        tmp.replace(self.path)
