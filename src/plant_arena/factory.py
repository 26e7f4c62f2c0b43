"""Combatant factory -- turns plants into battle-ready combatants.

Builds the player's combatant from their plant and picks the opponent:
either one of a friend's plants (chosen at random when several are
offered) or a synthetic plant rolled from scratch.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from plant_arena.config import ArenaSettings
from plant_arena.core.battle_state import MatchUp
from plant_arena.core.entities import Category, Combatant, Move, PlantEntity
from plant_arena.core.rng import GameRNG
from plant_arena.errors import MissingOpponentData
from plant_arena.mechanics.moves import generate_moves
from plant_arena.mechanics.rounding import round_half_up
from plant_arena.mechanics.stats import derive_stats

logger = logging.getLogger(__name__)

SYNTHETIC_ID = "enemy"
MIN_MAX_HEALTH = 10

SYNTHETIC_AGE_MAX = 200
SYNTHETIC_ROBUSTNESS_RANGE = (0.9, 1.4)

CATEGORY_ICONS: dict[Category, str] = {
    Category.HERBS: "🌿",
    Category.SUCCULENTS: "🌵",
    Category.FLOWERS: "🌺",
    Category.VEGETABLES: "🥕",
    Category.INDOOR: "🪴",
    Category.AQUATIC: "🪷",
    Category.ORNAMENTAL: "🌸",
    Category.OTHER: "🌱",
}


class CombatantFactory:
    """Builds combatants for one or more battles.

    Parameters
    ----------
    settings:
        Arena settings; supplies the synthetic name pool and whether
        defense moves are scaled.
    rng:
        Master RNG.  Forked into ``"stats"`` and ``"opponent"`` streams.
    catalog:
        Optional replacement move catalog (defaults to the packaged one).
    """

    def __init__(
        self,
        settings: ArenaSettings | None = None,
        rng: GameRNG | None = None,
        catalog: Mapping[Category, tuple[Move, ...]] | None = None,
    ) -> None:
        self.settings = settings or ArenaSettings()
        rng = rng or GameRNG(self.settings.seed)
        self._stats_rng = rng.fork("stats")
        self._opponent_rng = rng.fork("opponent")
        self._catalog = catalog

    # ------------------------------------------------------------------
    # Combatants
    # ------------------------------------------------------------------

    def build_combatant(self, entity: PlantEntity) -> Combatant:
        """Derive a fresh combatant from *entity* (stats are re-rolled)."""
        max_health = max(MIN_MAX_HEALTH, round_half_up(entity.health))
        stats = derive_stats(entity, self._stats_rng)
        moves = generate_moves(
            entity,
            scale_defense=self.settings.scale_defense_moves,
            catalog=self._catalog,
        )
        return Combatant(
            id=entity.id,
            name=entity.name,
            icon=entity.icon,
            category=entity.category,
            health=max_health,
            max_health=max_health,
            attack_stat=stats.attack,
            defense_stat=stats.defense,
            moves=moves,
            entity_id=entity.id,
            owner_id=entity.owner_id,
        )

    def build_synthetic_opponent(self) -> Combatant:
        """Roll a random practice opponent not backed by a stored plant."""
        rng = self._opponent_rng
        category = rng.random_choice(list(Category))
        entity = PlantEntity(
            id=SYNTHETIC_ID,
            name=rng.random_choice(self.settings.synthetic_names),
            icon=CATEGORY_ICONS[category],
            category=category,
            health=100,
            age_days=rng.random_float() * SYNTHETIC_AGE_MAX,
            robustness=rng.random_uniform(*SYNTHETIC_ROBUSTNESS_RANGE),
        )
        combatant = self.build_combatant(entity)
        return combatant.model_copy(update={"entity_id": None, "owner_id": None})

    # ------------------------------------------------------------------
    # Match preparation
    # ------------------------------------------------------------------

    def prepare_battle(
        self,
        player_entity: PlantEntity,
        opponents: PlantEntity | Sequence[PlantEntity] | None = None,
    ) -> MatchUp:
        """Build both sides of a match without starting it.

        Parameters
        ----------
        player_entity:
            The plant the player fights with.
        opponents:
            ``None`` for a synthetic opponent, a single plant, or a roster
            from which one plant is picked uniformly at random.

        Raises
        ------
        MissingOpponentData
            If *opponents* is an empty roster.
        """
        if isinstance(opponents, PlantEntity):
            opponents = [opponents]

        if opponents is None:
            opponent = self.build_synthetic_opponent()
        else:
            roster = list(opponents)
            if not roster:
                raise MissingOpponentData("Opponent has no plants to fight with")
            opponent = self.build_combatant(self._opponent_rng.random_choice(roster))

        player = self.build_combatant(player_entity)
        logger.info(
            "Prepared match %s (atk=%d def=%d) vs %s (atk=%d def=%d)",
            player.name, player.attack_stat, player.defense_stat,
            opponent.name, opponent.attack_stat, opponent.defense_stat,
        )
        return MatchUp(player=player, opponent=opponent)
