"""Battle controller -- the state machine that runs a single match.

Phases::

    IDLE --prepare()--> PREPARING --confirm()--> ACTIVE --submit_move()*--> FINISHED
      ^                                                                        |
      +--------------------------------- reset() ------------------------------+

Each :meth:`BattleController.submit_move` call is one exchange: the
player's move resolves immediately, then (unless the opponent was knocked
out) the opponent replies after ``response_delay`` seconds.  Only one
exchange may be in flight at a time.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from plant_arena.config import ArenaSettings
from plant_arena.core.battle_state import BattlePhase, BattleState, MatchUp
from plant_arena.core.entities import Combatant, Move, PlantEntity
from plant_arena.core.rng import GameRNG
from plant_arena.errors import ArenaError, BattleBusy, InvalidMoveSelection
from plant_arena.factory import CombatantFactory
from plant_arena.mechanics.resolver import TurnResult, apply_move
from plant_arena.play_agents.base import MoveStrategy
from plant_arena.play_agents.random_agent import RandomStrategy
from plant_arena.reporting.models import BattleOutcome
from plant_arena.reporting.reporter import ReportSummary, ResultReporter
from plant_arena.telemetry import BattleTelemetry

logger = logging.getLogger(__name__)


class BattleController:
    """Owns one battle's combatants and drives it to completion.

    Parameters
    ----------
    settings:
        Arena settings (response delay, seed, ...).
    factory:
        Combatant factory; built from *settings* and *rng* if omitted.
    strategy:
        Opponent move-selection strategy.  Defaults to uniform random.
    reporter:
        Optional result reporter, invoked once when the battle finishes.
    rng:
        Master RNG, forked for the factory and default strategy.
    """

    def __init__(
        self,
        settings: ArenaSettings | None = None,
        factory: CombatantFactory | None = None,
        strategy: MoveStrategy | None = None,
        reporter: ResultReporter | None = None,
        rng: GameRNG | None = None,
    ) -> None:
        self.settings = settings or ArenaSettings()
        rng = rng or GameRNG(self.settings.seed)
        self.factory = factory or CombatantFactory(self.settings, rng.fork("factory"))
        self.strategy = strategy or RandomStrategy(rng.fork("strategy"))
        self.reporter = reporter

        self._state = BattleState()
        self._pending: MatchUp | None = None
        self._busy = False
        self._generation = 0
        self._outcome: BattleOutcome | None = None
        self._report: ReportSummary | None = None
        self.telemetry: BattleTelemetry | None = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> BattleState:
        return self._state

    @property
    def phase(self) -> BattlePhase:
        return self._state.phase

    @property
    def pending_match(self) -> MatchUp | None:
        """The match awaiting confirmation while in ``PREPARING``."""
        return self._pending

    @property
    def is_processing(self) -> bool:
        """True while an exchange is waiting on the opponent's reply."""
        return self._busy

    @property
    def outcome(self) -> BattleOutcome | None:
        return self._outcome

    @property
    def report(self) -> ReportSummary | None:
        return self._report

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def prepare(
        self,
        player_entity: PlantEntity,
        opponents: PlantEntity | Sequence[PlantEntity] | None = None,
    ) -> MatchUp:
        """Build both combatants and wait for confirmation.

        Raises
        ------
        MissingOpponentData
            If *opponents* is an empty roster.  The phase is unchanged.
        ArenaError
            If a battle is already running or finished; ``reset()`` first.
        """
        if self.phase not in (BattlePhase.IDLE, BattlePhase.PREPARING):
            raise ArenaError(f"Cannot prepare a battle while {self.phase.value}")

        match = self.factory.prepare_battle(player_entity, opponents)
        self._pending = match
        self._state = BattleState(
            phase=BattlePhase.PREPARING,
            player=match.player,
            opponent=match.opponent,
        )
        return match

    def confirm(self) -> BattleState:
        """Start the prepared battle."""
        if self.phase != BattlePhase.PREPARING or self._pending is None:
            raise ArenaError(f"No prepared battle to confirm (phase {self.phase.value})")

        player, opponent = self._pending.player, self._pending.opponent
        self._pending = None
        self._outcome = None
        self._report = None
        log = f"🌱 {player.name} enters the battle! 🌿 {opponent.name} appeared!"
        self._state = BattleState(
            phase=BattlePhase.ACTIVE,
            player=player,
            opponent=opponent,
            log=log,
            history=(log,),
        )
        self.telemetry = BattleTelemetry(
            player_name=player.name,
            opponent_name=opponent.name,
            player_hp_start=player.health,
            opponent_hp_start=opponent.health,
        )
        logger.info("Battle started: %s vs %s", player.name, opponent.name)
        return self._state

    def reset(self) -> BattleState:
        """Abandon or clear the current battle and return to ``IDLE``.

        An unfinished battle is discarded without reporting a result.  A
        reply still waiting on its delay is dropped.
        """
        if self.phase == BattlePhase.ACTIVE:
            logger.info("Battle abandoned after %d exchanges", self._state.exchanges)
        self._generation += 1
        self._pending = None
        self._outcome = None
        self._report = None
        self._state = BattleState()
        return self._state

    # ------------------------------------------------------------------
    # Exchanges
    # ------------------------------------------------------------------

    def resolve_selection(self, selection: int | str) -> Move:
        """Map a move index or name to one of the player's moves."""
        if self.phase != BattlePhase.ACTIVE or self._state.player is None:
            raise InvalidMoveSelection(f"Battle is not active (phase {self.phase.value})")

        moves = self._state.player.moves
        if isinstance(selection, int) and not isinstance(selection, bool):
            if 0 <= selection < len(moves):
                return moves[selection]
            raise InvalidMoveSelection(
                f"Move index {selection} out of range (0-{len(moves) - 1})"
            )
        if isinstance(selection, str):
            for move in moves:
                if move.name == selection:
                    return move
        raise InvalidMoveSelection(f"Unknown move {selection!r}")

    async def submit_move(self, selection: int | str) -> BattleState:
        """Play one exchange: the player's move, then the opponent's reply.

        Raises
        ------
        BattleBusy
            If the previous exchange has not finished yet.
        InvalidMoveSelection
            If the battle is not active or *selection* names no move.
        """
        if self._busy:
            raise BattleBusy("Wait for the opponent to finish its move")
        move = self.resolve_selection(selection)

        self._busy = True
        generation = self._generation
        try:
            player_turn = apply_move(self._state.player, self._state.opponent, move)
            self._record_turn(player_turn, by_player=True)
            self._state = self._advance(
                player=player_turn.attacker,
                opponent=player_turn.defender,
                log=player_turn.log,
                exchanges=self._state.exchanges + 1,
            )

            if player_turn.defender.is_knocked_out:
                return await self._finish("player")

            if self.settings.response_delay > 0:
                await asyncio.sleep(self.settings.response_delay)
            if generation != self._generation:
                return self._state

            opponent = self._state.opponent
            player = self._state.player
            reply = self.strategy.choose_move(opponent, player)
            opponent_turn = apply_move(opponent, player, reply)
            self._record_turn(opponent_turn, by_player=False)

            # Buffs last until the opponent's next action resolves.
            self._state = self._advance(
                player=opponent_turn.defender.model_copy(update={"defense_buff": 0.0}),
                opponent=opponent_turn.attacker.model_copy(update={"defense_buff": 0.0}),
                log=opponent_turn.log,
            )

            if opponent_turn.defender.is_knocked_out:
                return await self._finish("opponent")
            return self._state
        finally:
            self._busy = False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _advance(
        self,
        player: Combatant,
        opponent: Combatant,
        log: str,
        exchanges: int | None = None,
    ) -> BattleState:
        return self._state.model_copy(update={
            "player": player,
            "opponent": opponent,
            "log": log,
            "history": self._state.history + (log,),
            "exchanges": self._state.exchanges if exchanges is None else exchanges,
        })

    def _record_turn(self, turn: TurnResult, by_player: bool) -> None:
        tel = self.telemetry
        if tel is None:
            return
        if turn.failed:
            tel.failed_moves += 1
        if by_player:
            tel.exchanges += 1
            tel.damage_dealt += turn.damage
            tel.healing_done += turn.healed
            name = turn.move.name
            tel.moves_played_by_name[name] = tel.moves_played_by_name.get(name, 0) + 1
        else:
            tel.damage_taken += turn.damage

    async def _finish(self, winner_side: str) -> BattleState:
        """Finalize the outcome in memory, then hand it to the reporter."""
        state = self._state
        winner = state.player if winner_side == "player" else state.opponent
        self._state = state.model_copy(update={
            "phase": BattlePhase.FINISHED,
            "winner_id": winner.id,
        })
        self._outcome = BattleOutcome(
            player=state.player,
            opponent=state.opponent,
            winner_side=winner_side,
            exchanges=state.exchanges,
        )

        if self.telemetry is not None:
            self.telemetry.result = "win" if winner_side == "player" else "loss"
            self.telemetry.player_hp_end = state.player.health
            self.telemetry.opponent_hp_end = state.opponent.health

        logger.info(
            "Battle finished after %d exchanges: %s wins",
            state.exchanges, winner.name,
        )

        if self.reporter is not None and self._report is None:
            self._report = await self.reporter.report(self._outcome)
        return self._state
