"""Compare RandomStrategy vs HeuristicStrategy over many arena battles.

Both strategies play the same plant against random synthetic opponents
(which always use RandomStrategy).  Writes ``strategy_comparison.png``.

Usage:
    python scripts/compare_strategies.py [--battles N]
"""

from __future__ import annotations

import argparse
import logging
import time

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from plant_arena.core.entities import PlantEntity
from plant_arena.play_agents.heuristic_agent import HeuristicStrategy
from plant_arena.play_agents.random_agent import RandomStrategy
from plant_arena.runner import BatchRunner


def run_comparison(n_battles: int, plant: PlantEntity, output: str) -> None:
    results = {}
    for label, strategy_class in [("RandomStrategy", RandomStrategy), ("HeuristicStrategy", HeuristicStrategy)]:
        print(f"\nRunning {n_battles} battles with {label}...")
        runner = BatchRunner(player_strategy_class=strategy_class)
        t0 = time.time()
        telemetry = runner.run_batch(n_battles, plant, base_seed=0)
        elapsed = time.time() - t0

        wins = sum(1 for t in telemetry if t.result == "win")
        exchanges = [t.exchanges for t in telemetry]
        hp_left = [t.player_hp_end for t in telemetry if t.result == "win"]
        results[label] = {
            "wins": wins,
            "win_rate": wins / n_battles * 100,
            "exchanges": exchanges,
            "hp_left": hp_left,
        }

        print(f"  Time: {elapsed:.1f}s ({elapsed / n_battles * 1000:.1f}ms/battle)")
        print(f"  Win rate: {wins}/{n_battles} ({wins / n_battles * 100:.1f}%)")
        print(f"  Avg exchanges: {np.mean(exchanges):.1f} (median {np.median(exchanges):.0f})")
        if hp_left:
            print(f"  Avg HP left on wins: {np.mean(hp_left):.1f}")

    generate_charts(results, n_battles, output)


def generate_charts(results: dict, n_battles: int, output: str) -> None:
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    fig.suptitle(f"RandomStrategy vs HeuristicStrategy: {n_battles} battles", fontsize=14, fontweight="bold")
    colors = {"RandomStrategy": "#e74c3c", "HeuristicStrategy": "#2ecc71"}
    labels = list(results.keys())

    ax = axes[0]
    win_rates = [results[l]["win_rate"] for l in labels]
    bars = ax.bar(labels, win_rates, color=[colors[l] for l in labels], edgecolor="black", linewidth=0.5)
    for b, rate in zip(bars, win_rates):
        ax.text(b.get_x() + b.get_width() / 2, b.get_height() + 0.5, f"{rate:.1f}%",
                ha="center", va="bottom", fontsize=11, fontweight="bold")
    ax.set_ylabel("Win Rate (%)")
    ax.set_title("Win Rate")
    ax.set_ylim(0, 110)

    ax = axes[1]
    max_ex = max(max(results[l]["exchanges"]) for l in labels)
    bins = np.arange(0.5, max_ex + 1.5, 1)
    for label in labels:
        ex = results[label]["exchanges"]
        ax.hist(ex, bins=bins, alpha=0.6, label=f"{label} (avg={np.mean(ex):.1f})",
                color=colors[label], edgecolor="black", linewidth=0.3)
    ax.set_xlabel("Exchanges")
    ax.set_ylabel("Count")
    ax.set_title("Battle Length")
    ax.legend()

    fig.tight_layout()
    fig.savefig(output, dpi=120)
    print(f"\nChart saved to {output}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Compare arena strategies")
    parser.add_argument("--battles", type=int, default=500)
    parser.add_argument("--age", type=float, default=90)
    parser.add_argument("--category", default="herbs")
    parser.add_argument("--output", default="strategy_comparison.png")
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)
    plant = PlantEntity(id="bench", name="Bench Plant", category=args.category, age_days=args.age)
    run_comparison(args.battles, plant, args.output)


if __name__ == "__main__":
    main()
