"""Move-selection strategies for opponents and headless simulation.

Re-exports the base class and all concrete strategies so consumers can do::

    from plant_arena.play_agents import MoveStrategy, RandomStrategy
"""

from .base import MoveStrategy
from .heuristic_agent import HeuristicStrategy
from .random_agent import RandomStrategy

__all__ = ["MoveStrategy", "HeuristicStrategy", "RandomStrategy"]
