"""Tests for the random and heuristic move strategies."""

from __future__ import annotations

import pytest

from plant_arena.core.entities import Combatant, Move, MoveType
from plant_arena.core.rng import GameRNG
from plant_arena.play_agents.heuristic_agent import HeuristicStrategy
from plant_arena.play_agents.random_agent import RandomStrategy


# ======================================================================
# Helpers
# ======================================================================

_MOVES = (
    Move(name="Solar Lash", type=MoveType.ATTACK, power=15, cost=25),
    Move(name="Aromatic Burst", type=MoveType.ATTACK, power=20, cost=35),
    Move(name="Leaf Shield", type=MoveType.DEFENSE, power=0.5),
    Move(name="Sap Regeneration", type=MoveType.HEAL, power=20),
)


def _make_combatant(**kwargs) -> Combatant:
    defaults = dict(
        id="c", name="Basil", health=100, max_health=100,
        attack_stat=0, defense_stat=0, moves=_MOVES,
    )
    defaults.update(kwargs)
    return Combatant(**defaults)


@pytest.fixture
def heuristic() -> HeuristicStrategy:
    return HeuristicStrategy()


# ======================================================================
# RandomStrategy
# ======================================================================


class TestRandomStrategy:
    def test_picks_own_moves(self):
        strategy = RandomStrategy(GameRNG(5))
        combatant = _make_combatant()
        picks = {strategy.choose_move(combatant).name for _ in range(200)}
        assert picks == {m.name for m in _MOVES}

    def test_ignores_energy(self):
        strategy = RandomStrategy(GameRNG(5))
        broke = _make_combatant(energy=0)
        picks = [strategy.choose_move(broke) for _ in range(100)]
        assert any(m.type == MoveType.ATTACK for m in picks)

    def test_seeded_sequence_repeats(self):
        combatant = _make_combatant()
        first, second = RandomStrategy(GameRNG(11)), RandomStrategy(GameRNG(11))
        a = [first.choose_move(combatant) for _ in range(20)]
        b = [second.choose_move(combatant) for _ in range(20)]
        assert a == b


# ======================================================================
# HeuristicStrategy
# ======================================================================


class TestHeuristicStrategy:
    def test_heals_when_low(self, heuristic):
        move = heuristic.choose_move(_make_combatant(health=20), _make_combatant(id="o"))
        assert move.type == MoveType.HEAL

    def test_finishes_with_cheapest_lethal(self, heuristic):
        # Solar Lash deals round(15 * 1.1) = 17
        move = heuristic.choose_move(_make_combatant(), _make_combatant(id="o", health=15))
        assert move.name == "Solar Lash"

    def test_prefers_strongest_attack(self, heuristic):
        move = heuristic.choose_move(_make_combatant(), _make_combatant(id="o"))
        assert move.name == "Aromatic Burst"

    def test_only_affordable_attacks(self, heuristic):
        move = heuristic.choose_move(_make_combatant(energy=30), _make_combatant(id="o"))
        assert move.name == "Solar Lash"

    def test_defends_when_broke(self, heuristic):
        move = heuristic.choose_move(_make_combatant(energy=10), _make_combatant(id="o"))
        assert move.type == MoveType.DEFENSE

    def test_no_heal_at_full_health(self):
        strategy = HeuristicStrategy(heal_threshold=1.5)
        move = strategy.choose_move(_make_combatant(), _make_combatant(id="o"))
        assert move.type == MoveType.ATTACK
