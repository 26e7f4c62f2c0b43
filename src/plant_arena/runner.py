"""Headless battle simulation for balance checks.

``BatchRunner`` plays many seeded battles with a strategy standing in for
the player and collects one :class:`BattleTelemetry` per battle.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Sequence

from plant_arena.config import ArenaSettings
from plant_arena.controller import BattleController
from plant_arena.core.battle_state import BattlePhase
from plant_arena.core.entities import PlantEntity
from plant_arena.core.rng import GameRNG
from plant_arena.play_agents.base import MoveStrategy
from plant_arena.play_agents.random_agent import RandomStrategy
from plant_arena.telemetry import BattleTelemetry

logger = logging.getLogger(__name__)


class BatchRunner:
    """Runs many battles between a player strategy and an opponent strategy.

    Parameters
    ----------
    settings:
        Base settings.  The response delay is forced to 0 and the seed is
        replaced per battle.
    player_strategy_class / opponent_strategy_class:
        Strategy types, instantiated per battle.  Classes accepting an
        ``rng`` keyword get a forked, seeded RNG.
    """

    def __init__(
        self,
        settings: ArenaSettings | None = None,
        player_strategy_class: type[MoveStrategy] = RandomStrategy,
        opponent_strategy_class: type[MoveStrategy] = RandomStrategy,
    ) -> None:
        base = settings or ArenaSettings()
        self.settings = base.model_copy(update={"response_delay": 0.0})
        self.player_strategy_class = player_strategy_class
        self.opponent_strategy_class = opponent_strategy_class

    def run_batch(
        self,
        n_battles: int,
        player_entity: PlantEntity,
        opponents: PlantEntity | Sequence[PlantEntity] | None = None,
        base_seed: int = 42,
    ) -> list[BattleTelemetry]:
        """Run *n_battles* battles with seeds ``base_seed .. base_seed+n-1``."""
        seeds = [base_seed + i for i in range(n_battles)]
        return asyncio.run(self._run_sequential(seeds, player_entity, opponents))

    async def _run_sequential(
        self,
        seeds: list[int],
        player_entity: PlantEntity,
        opponents: PlantEntity | Sequence[PlantEntity] | None,
    ) -> list[BattleTelemetry]:
        results: list[BattleTelemetry] = []
        for seed in seeds:
            results.append(await self.run_single(seed, player_entity, opponents))
        return results

    async def run_single(
        self,
        seed: int,
        player_entity: PlantEntity,
        opponents: PlantEntity | Sequence[PlantEntity] | None = None,
    ) -> BattleTelemetry:
        rng = GameRNG(seed)
        controller = BattleController(
            settings=self.settings,
            strategy=_make_strategy(self.opponent_strategy_class, rng.fork("opponent_agent")),
            rng=rng,
        )
        player_agent = _make_strategy(self.player_strategy_class, rng.fork("player_agent"))

        controller.prepare(player_entity, opponents)
        controller.confirm()
        telemetry = controller.telemetry

        while controller.phase == BattlePhase.ACTIVE:
            if controller.state.exchanges >= self.settings.max_exchanges:
                logger.warning(
                    "Seed %d hit the %d exchange cap, abandoning",
                    seed, self.settings.max_exchanges,
                )
                controller.reset()
                break
            state = controller.state
            move = player_agent.choose_move(state.player, state.opponent)
            await controller.submit_move(move.name)

        return telemetry


def _make_strategy(strategy_class: type[MoveStrategy], rng: GameRNG) -> MoveStrategy:
    if "rng" in inspect.signature(strategy_class).parameters:
        return strategy_class(rng=rng)  # type: ignore[call-arg]
    return strategy_class()
