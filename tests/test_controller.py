"""Tests for the BattleController state machine."""

from __future__ import annotations

import asyncio

import pytest

from plant_arena.config import ArenaSettings
from plant_arena.controller import BattleController
from plant_arena.core.battle_state import BattlePhase
from plant_arena.core.entities import Combatant, Move, MoveType, PlantEntity
from plant_arena.core.rng import GameRNG
from plant_arena.errors import ArenaError, BattleBusy, InvalidMoveSelection, MissingOpponentData
from plant_arena.play_agents.base import MoveStrategy
from plant_arena.play_agents.heuristic_agent import HeuristicStrategy
from plant_arena.play_agents.random_agent import RandomStrategy
from plant_arena.reporting import InMemoryEntityStore, ResultReporter, TrackedStat


# ======================================================================
# Helpers
# ======================================================================


class _FixedStrategy(MoveStrategy):
    """Always plays the move at *index*."""

    def __init__(self, index: int = 0) -> None:
        self.index = index
        self.calls = 0

    def choose_move(self, combatant, opponent=None):
        self.calls += 1
        return combatant.moves[self.index]


def _make_plant(**kwargs) -> PlantEntity:
    defaults = dict(id="p1", name="Basil", category="herbs", owner_id="user-1")
    defaults.update(kwargs)
    return PlantEntity(**defaults)


def _make_controller(strategy=None, reporter=None, delay=0.0, seed=42) -> BattleController:
    return BattleController(
        settings=ArenaSettings(response_delay=delay),
        strategy=strategy or _FixedStrategy(2),
        reporter=reporter,
        rng=GameRNG(seed),
    )


def _start(controller: BattleController, opponents=None) -> None:
    controller.prepare(_make_plant(), opponents)
    controller.confirm()


def _replace(controller: BattleController, **sides: Combatant) -> None:
    """Swap combatant snapshots to set up a specific board."""
    controller._state = controller.state.model_copy(update=sides)


def _glass_cannon(name: str, health: int) -> Combatant:
    return Combatant(
        id=name.lower(), name=name, health=health, max_health=100,
        attack_stat=0, defense_stat=0, entity_id=name.lower(),
        moves=(
            Move(name="Smash", type=MoveType.ATTACK, power=40, cost=10),
            Move(name="Tap", type=MoveType.ATTACK, power=1, cost=500),
            Move(name="Guard", type=MoveType.DEFENSE, power=0.5),
            Move(name="Mend", type=MoveType.HEAL, power=20),
        ),
    )


# ======================================================================
# Transitions
# ======================================================================


class TestTransitions:
    def test_starts_idle(self):
        assert _make_controller().phase == BattlePhase.IDLE

    def test_prepare_then_confirm(self):
        controller = _make_controller()
        match = controller.prepare(_make_plant())

        assert controller.phase == BattlePhase.PREPARING
        assert controller.pending_match == match

        state = controller.confirm()
        assert state.phase == BattlePhase.ACTIVE
        assert match.player.name in state.log
        assert match.opponent.name in state.log
        assert state.history == (state.log,)

    def test_empty_roster_rejected_before_preparing(self):
        controller = _make_controller()
        with pytest.raises(MissingOpponentData):
            controller.prepare(_make_plant(), [])
        assert controller.phase == BattlePhase.IDLE

    def test_confirm_without_prepare(self):
        with pytest.raises(ArenaError):
            _make_controller().confirm()

    def test_cannot_prepare_mid_battle(self):
        controller = _make_controller()
        _start(controller)
        with pytest.raises(ArenaError):
            controller.prepare(_make_plant())

    def test_reset_returns_to_idle(self):
        controller = _make_controller()
        _start(controller)
        state = controller.reset()

        assert state.phase == BattlePhase.IDLE
        assert state.player is None and state.opponent is None


# ======================================================================
# Move selection
# ======================================================================


class TestMoveSelection:
    def test_rejected_when_not_active(self):
        controller = _make_controller()
        with pytest.raises(InvalidMoveSelection):
            asyncio.run(controller.submit_move(0))

    def test_index_out_of_range(self):
        controller = _make_controller()
        _start(controller)
        before = controller.state
        with pytest.raises(InvalidMoveSelection):
            asyncio.run(controller.submit_move(4))
        with pytest.raises(InvalidMoveSelection):
            asyncio.run(controller.submit_move(-1))
        assert controller.state == before

    def test_unknown_name(self):
        controller = _make_controller()
        _start(controller)
        with pytest.raises(InvalidMoveSelection):
            asyncio.run(controller.submit_move("Not A Move"))

    def test_select_by_name(self):
        controller = _make_controller()
        _start(controller)
        name = controller.state.player.moves[3].name
        assert controller.resolve_selection(name) == controller.state.player.moves[3]


# ======================================================================
# Exchanges
# ======================================================================


class TestExchange:
    def test_full_exchange(self):
        strategy = _FixedStrategy(2)  # opponent defends
        controller = _make_controller(strategy=strategy)
        _start(controller)
        opponent_before = controller.state.opponent

        state = asyncio.run(controller.submit_move(0))

        assert strategy.calls == 1
        assert state.exchanges == 1
        assert state.opponent.health < opponent_before.health
        assert state.player.energy < 100
        assert len(state.history) == 3
        assert state.log.startswith(opponent_before.name)

    def test_buffs_reset_after_reply(self):
        controller = _make_controller(strategy=_FixedStrategy(2))
        _start(controller)

        state = asyncio.run(controller.submit_move(2))  # both defend

        assert state.player.defense_buff == 0
        assert state.opponent.defense_buff == 0

    def test_player_buff_applies_to_reply(self):
        controller = _make_controller(strategy=_FixedStrategy(0))
        _start(controller)
        _replace(
            controller,
            player=_glass_cannon("Basil", 100),
            opponent=_glass_cannon("Moss", 100),
        )

        asyncio.run(controller.submit_move("Guard"))

        # round(40 * 1.1) = 44, reduced by 20% -> round(35.2) = 35
        assert controller.state.player.health == 65

    def test_unaffordable_reply_fails(self):
        controller = _make_controller(strategy=_FixedStrategy(1))
        _start(controller)
        _replace(
            controller,
            player=_glass_cannon("Basil", 100),
            opponent=_glass_cannon("Moss", 100),
        )

        state = asyncio.run(controller.submit_move("Mend"))

        assert state.player.health == 100
        assert "doesn't have enough energy" in state.log
        assert controller.telemetry.failed_moves == 1

    def test_player_knockout_skips_reply(self):
        strategy = _FixedStrategy(0)
        controller = _make_controller(strategy=strategy)
        _start(controller)
        _replace(
            controller,
            player=_glass_cannon("Basil", 1),
            opponent=_glass_cannon("Moss", 10),
        )

        state = asyncio.run(controller.submit_move("Smash"))

        assert strategy.calls == 0
        assert state.phase == BattlePhase.FINISHED
        assert state.winner_id == "basil"
        assert state.player.health == 1
        assert state.opponent.health == 0

    def test_opponent_knockout(self):
        controller = _make_controller(strategy=_FixedStrategy(0))
        _start(controller)
        _replace(
            controller,
            player=_glass_cannon("Basil", 10),
            opponent=_glass_cannon("Moss", 100),
        )

        state = asyncio.run(controller.submit_move("Mend"))

        assert state.phase == BattlePhase.FINISHED
        assert state.winner_id == "moss"
        assert state.player.health == 0
        assert controller.outcome.winner_side == "opponent"
        assert controller.telemetry.result == "loss"

    def test_finished_battle_rejects_moves(self):
        controller = _make_controller(strategy=_FixedStrategy(0))
        _start(controller)
        _replace(controller, opponent=_glass_cannon("Moss", 1))
        asyncio.run(controller.submit_move(0))

        with pytest.raises(InvalidMoveSelection):
            asyncio.run(controller.submit_move(0))

    def test_snapshots_are_not_aliased(self):
        controller = _make_controller()
        _start(controller)
        before = controller.state

        asyncio.run(controller.submit_move(0))

        assert before.exchanges == 0
        assert before.opponent.health == before.opponent.max_health


# ======================================================================
# Concurrency
# ======================================================================


class TestConcurrency:
    def test_second_move_rejected_while_pending(self):
        controller = _make_controller(delay=0.05)
        _start(controller)

        async def scenario():
            first = asyncio.create_task(controller.submit_move(2))
            await asyncio.sleep(0)
            assert controller.is_processing
            with pytest.raises(BattleBusy):
                await controller.submit_move(2)
            return await first

        state = asyncio.run(scenario())
        assert state.exchanges == 1
        assert not controller.is_processing

    def test_reset_during_delay_drops_reply(self):
        strategy = _FixedStrategy(0)
        controller = _make_controller(strategy=strategy, delay=0.05)
        _start(controller)

        async def scenario():
            task = asyncio.create_task(controller.submit_move(2))
            await asyncio.sleep(0)
            controller.reset()
            return await task

        state = asyncio.run(scenario())
        assert state.phase == BattlePhase.IDLE
        assert strategy.calls == 0


# ======================================================================
# Termination and reporting
# ======================================================================


class TestTermination:
    @pytest.mark.parametrize("seed", range(20))
    def test_battles_end_with_one_knockout(self, seed):
        rng = GameRNG(seed)
        controller = BattleController(
            settings=ArenaSettings(response_delay=0),
            strategy=RandomStrategy(rng.fork("opponent")),
            rng=rng,
        )
        player_agent = HeuristicStrategy()
        _start(controller)

        async def play():
            for _ in range(2000):
                if controller.phase == BattlePhase.FINISHED:
                    break
                state = controller.state
                move = player_agent.choose_move(state.player, state.opponent)
                await controller.submit_move(move.name)

        asyncio.run(play())

        state = controller.state
        assert state.phase == BattlePhase.FINISHED
        assert [state.player.health, state.opponent.health].count(0) == 1

    def test_reporter_invoked_once(self):
        store = InMemoryEntityStore([_make_plant()])
        controller = _make_controller(
            strategy=_FixedStrategy(0), reporter=ResultReporter(store),
        )
        _start(controller)
        _replace(controller, opponent=_glass_cannon("Moss", 1).model_copy(update={"entity_id": None}))

        asyncio.run(controller.submit_move(0))

        assert controller.report is not None
        assert controller.report.counters_updated == [("p1", TrackedStat.VICTORIES)]
        plant = asyncio.run(store.get_by_id("p1"))
        assert plant.victories == 1

    def test_abandoned_battle_not_reported(self):
        store = InMemoryEntityStore([_make_plant()])
        controller = _make_controller(reporter=ResultReporter(store))
        _start(controller)
        asyncio.run(controller.submit_move(2))
        controller.reset()

        plant = asyncio.run(store.get_by_id("p1"))
        assert plant.victories == 0 and plant.defeats == 0
        assert controller.report is None
