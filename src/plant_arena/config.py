"""Runtime settings for the arena engine.

Settings are a plain Pydantic model so they can be built in code (tests,
scripts) or resolved from ``PLANT_ARENA_*`` environment variables.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

DEFAULT_SYNTHETIC_NAMES: tuple[str, ...] = (
    "Wild Cactus",
    "Shadow Plant",
    "Wicked Moss",
    "Thorny Bloom",
)


class ArenaSettings(BaseModel):
    """Tunable knobs for a battle controller and its factory."""

    response_delay: float = Field(default=1.2, ge=0)
    """Seconds to wait before the opponent's counter-move.  Pacing only."""

    synthetic_names: tuple[str, ...] = DEFAULT_SYNTHETIC_NAMES
    scale_defense_moves: bool = False
    """Scale defense-move reduction fractions like flat attack/heal power."""

    max_exchanges: int = Field(default=500, gt=0)
    """Exchange cap for headless batch runs; a capped battle is abandoned."""

    seed: int | None = None

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ArenaSettings:
        """Build settings from ``PLANT_ARENA_*`` variables, keeping defaults
        for anything unset."""
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        delay = env.get("PLANT_ARENA_RESPONSE_DELAY")
        if delay:
            values["response_delay"] = float(delay)

        scale = env.get("PLANT_ARENA_SCALE_DEFENSE")
        if scale:
            values["scale_defense_moves"] = scale.strip().lower() in ("1", "true", "yes", "on")

        max_exchanges = env.get("PLANT_ARENA_MAX_EXCHANGES")
        if max_exchanges:
            values["max_exchanges"] = int(max_exchanges)

        seed = env.get("PLANT_ARENA_SEED")
        if seed:
            values["seed"] = int(seed)

        return cls(**values)
