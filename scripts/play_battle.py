"""Play an arena battle in the terminal against a synthetic opponent.

Usage:
    python scripts/play_battle.py --name Basil --category herbs --age 120
    python scripts/play_battle.py --auto --seed 7 --delay 0
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from plant_arena.config import ArenaSettings
from plant_arena.controller import BattleController
from plant_arena.core.battle_state import BattlePhase
from plant_arena.core.entities import Category, Combatant, PlantEntity
from plant_arena.errors import InvalidMoveSelection
from plant_arena.play_agents.heuristic_agent import HeuristicStrategy
from plant_arena.ranking import plant_record
from plant_arena.reporting import InMemoryEntityStore, ResultReporter


def bar(value: int, maximum: int, width: int = 20) -> str:
    filled = round(width * value / maximum) if maximum else 0
    return "#" * filled + "." * (width - filled)


def show(combatant: Combatant) -> None:
    print(
        f"  {combatant.icon} {combatant.name:<18} "
        f"HP [{bar(combatant.health, combatant.max_health)}] {combatant.health}/{combatant.max_health}  "
        f"EN [{bar(combatant.energy, 100, 10)}] {combatant.energy}%"
    )


def ask_move(combatant: Combatant) -> int:
    for i, move in enumerate(combatant.moves):
        cost = f" (cost {move.cost})" if move.cost else ""
        print(f"    [{i}] {move.name} -- {move.type.value} {move.power}{cost}")
    raw = input("  Move: ").strip()
    return int(raw) if raw.isdigit() else -1


async def play(args: argparse.Namespace) -> None:
    settings = ArenaSettings.from_env().model_copy(update={
        "response_delay": args.delay,
        "seed": args.seed,
    })
    plant = PlantEntity(
        id="local-plant",
        name=args.name,
        category=args.category,
        age_days=args.age,
        robustness=args.robustness,
        health=args.health,
    )
    store = InMemoryEntityStore([plant])
    controller = BattleController(settings=settings, reporter=ResultReporter(store))
    autopilot = HeuristicStrategy() if args.auto else None

    match = controller.prepare(plant)
    print(f"\n{match.player.name} vs {match.opponent.name}\n")
    controller.confirm()

    while controller.phase == BattlePhase.ACTIVE:
        state = controller.state
        show(state.opponent)
        show(state.player)
        print(f"\n  > {state.log}\n")
        if autopilot is not None:
            selection = autopilot.choose_move(state.player, state.opponent).name
        else:
            selection = ask_move(state.player)
        try:
            await controller.submit_move(selection)
        except InvalidMoveSelection as exc:
            print(f"  ! {exc}")

    state = controller.state
    print(f"\n  > {state.log}")
    winner = state.player if state.winner_id == state.player.id else state.opponent
    print(f"\n{winner.name} wins after {state.exchanges} exchanges!")

    updated = await store.get_by_id(plant.id)
    record = plant_record(updated)
    print(f"Record: {record.victories}W / {record.defeats}L  rank: {record.rank.value}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--name", default="Basil")
    parser.add_argument("--category", default="herbs", choices=[c.value for c in Category])
    parser.add_argument("--age", type=float, default=60)
    parser.add_argument("--robustness", type=float, default=1.0)
    parser.add_argument("--health", type=float, default=100)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--delay", type=float, default=1.2)
    parser.add_argument("--auto", action="store_true", help="Let a heuristic play for you")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(play(args))


if __name__ == "__main__":
    main()
