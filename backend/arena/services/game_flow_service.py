"""
Game flow orchestration.

Wraps one ArenaStateMachine with its collaborators (narration, visual
stream, battle history, rate limiter). Input is rejected here, before
the state machine sees it; collaborator calls are bounded and never
prevent a transition from completing.
"""
from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, Optional

from arena.battle.commentary import classify_victory, hype_callout
from arena.battle.evolution import (
    evaluate_post_battle_evolution,
    generate_transformation_narration,
)
from arena.battle.models.arena_state import ArenaState, GamePhase
from arena.battle.models.event import EventEntry
from arena.battle.models.evolution_result import EvolutionResult
from arena.battle.prompts import build_action_prompt, build_evolved_battle_prompt
from arena.battle.scoring import calculate_stat_changes, create_event_entry
from arena.battle.state_machine import ArenaStateMachine, get_active_player, get_opponent
from arena.battle.stats import compute_battle_stats
from arena.battle.transitions import (
    CompleteSetup,
    Connect,
    ConnectionFailed,
    DeclareWinner,
    Disconnect,
    EndStream,
    EvolvePlayer,
    Rematch,
    ResetGame,
    ResolveAction,
    SetCharacter,
    SetPlayerName,
    SetProcessing,
    StartStream,
    SwitchActivePlayer,
)
from arena.battle.victory import check_victory_condition
from arena.config import settings
from arena.services.battle_history_store import (
    BattleHistoryStore,
    BattleRecord,
    SavedCharacter,
    SavedCharacters,
)
from arena.services.narration_service import NarrationService
from arena.services.visual_stream import NullVisualStream, VisualStreamClient
from arena.utils.rate_limiter import RateLimiter
from arena.utils.sanitize import (
    sanitize_input,
    validate_character_input,
    validate_prompt,
    validate_world_input,
)

logger = logging.getLogger(__name__)


class ActionRejectedError(RuntimeError):
    """Input refused before reaching the state machine."""

    WRONG_PHASE = "wrong_phase"
    PROCESSING = "processing"
    RATE_LIMITED = "rate_limited"
    INVALID_INPUT = "invalid_input"

    def __init__(
        self,
        reason: str,
        message: str,
        *,
        phase: Optional[str] = None,
        retry_after: Optional[float] = None,
    ) -> None:
        self.reason = reason
        self.message = message
        self.phase = phase
        self.retry_after = retry_after
        super().__init__(message)

    def to_http_detail(self) -> Dict[str, Any]:
        detail: Dict[str, Any] = {
            "error_type": "action_rejected",
            "reason": self.reason,
            "message": self.message,
        }
        if self.phase is not None:
            detail["phase"] = self.phase
        if self.retry_after is not None:
            detail["retry_after"] = round(self.retry_after, 2)
        return detail


@dataclass
class SetupOutcome:
    """Result of one character submission."""

    player: int
    battle_started: bool
    commentary: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player": self.player,
            "battle_started": self.battle_started,
            "commentary": self.commentary,
        }


@dataclass
class ActionOutcome:
    """Everything one resolved action produced."""

    event: EventEntry
    winner: Optional[int] = None
    evolution: Optional[EvolutionResult] = None
    commentary: Optional[str] = None
    callout: Optional[str] = None
    transformations: Dict[int, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.event.to_dict(),
            "winner": self.winner,
            "evolution": self.evolution.to_dict() if self.evolution else None,
            "commentary": self.commentary,
            "callout": self.callout,
            "transformations": {f"player{k}": v for k, v in self.transformations.items()},
        }


class GameFlowService:
    """One match: state machine plus best-effort collaborators."""

    def __init__(
        self,
        *,
        narration: Optional[NarrationService] = None,
        visual: Optional[VisualStreamClient] = None,
        history: Optional[BattleHistoryStore] = None,
        rate_limiter: Optional[RateLimiter] = None,
        rng: Optional[random.Random] = None,
        stalemate_turn_limit: Optional[int] = None,
        visual_timeout_seconds: Optional[float] = None,
        narration_timeout_seconds: Optional[float] = None,
    ) -> None:
        self.machine = ArenaStateMachine()
        self.narration = narration or NarrationService()
        self.visual = visual or NullVisualStream()
        self.history = history or BattleHistoryStore()
        self.rate_limiter = rate_limiter or RateLimiter(
            settings.action_rate_limit_max,
            settings.action_rate_limit_window_seconds,
        )
        self.rng = rng or random.Random()
        self.stalemate_turn_limit = (
            stalemate_turn_limit if stalemate_turn_limit is not None else settings.stalemate_turn_limit
        )
        self.visual_timeout_seconds = (
            visual_timeout_seconds if visual_timeout_seconds is not None else settings.visual_timeout_seconds
        )
        self.narration_timeout_seconds = (
            narration_timeout_seconds
            if narration_timeout_seconds is not None
            else settings.narration_timeout_seconds
        )
        self.opening_commentary: Optional[str] = None

    @property
    def state(self) -> ArenaState:
        return self.machine.state

    # ------------------------------------------------------------------
    # Collaborator helpers
    # ------------------------------------------------------------------

    async def _best_effort(self, awaitable: Awaitable[Any], timeout: float, purpose: str) -> Any:
        """Await a collaborator call; any failure or timeout yields None."""
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("%s timed out after %.1fs", purpose, timeout)
        except Exception as exc:
            logger.warning("%s failed: %s", purpose, exc, exc_info=True)
        return None

    async def _visual(self, awaitable: Awaitable[Any], purpose: str) -> Any:
        return await self._best_effort(awaitable, self.visual_timeout_seconds, purpose)

    async def _narrate(self, awaitable: Awaitable[Any], purpose: str) -> Optional[str]:
        text = await self._best_effort(awaitable, self.narration_timeout_seconds, purpose)
        return text if isinstance(text, str) and text.strip() else None

    def _require_phase(self, *phases: GamePhase) -> None:
        if self.state.phase not in phases:
            expected = "/".join(p.value for p in phases)
            raise ActionRejectedError(
                ActionRejectedError.WRONG_PHASE,
                f"expected phase {expected}, current phase is {self.state.phase.value}",
                phase=self.state.phase.value,
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start_game(self) -> ArenaState:
        """Connect the visual stream (best-effort) and open setup."""
        self._require_phase(GamePhase.IDLE)
        try:
            await asyncio.wait_for(self.visual.connect(), timeout=self.visual_timeout_seconds)
        except Exception as exc:
            error = str(exc) or type(exc).__name__
            logger.warning("visual connect failed, continuing without visuals: %s", error)
            self.machine.dispatch(ConnectionFailed(error=error))
        self.machine.dispatch(Connect())
        logger.info("game started: phase=%s", self.state.phase.value)
        return self.state

    async def submit_character(
        self,
        player: int,
        character: str,
        world: str,
        name: Optional[str] = None,
    ) -> SetupOutcome:
        """Validate and store one player's character, then mark them ready."""
        self._require_phase(GamePhase.SETUP)
        if player not in (1, 2):
            raise ActionRejectedError(
                ActionRejectedError.INVALID_INPUT, f"player must be 1 or 2, got {player!r}"
            )

        character = sanitize_input(character, settings.max_character_length)
        world = sanitize_input(world, settings.max_world_length)
        for result in (validate_character_input(character), validate_world_input(world)):
            if not result.valid:
                raise ActionRejectedError(ActionRejectedError.INVALID_INPUT, result.error or "invalid input")

        if name:
            cleaned_name = sanitize_input(name, settings.max_character_length)
            if cleaned_name:
                self.machine.dispatch(SetPlayerName(player=player, name=cleaned_name))
        self.machine.dispatch(SetCharacter(player=player, character=character, world=world))

        # setup 预览流
        prompt = self.state.get_player(player).character_prompt
        stream_id = await self._visual(self.visual.start_stream(prompt), "character preview stream")
        if stream_id:
            self.machine.dispatch(StartStream(player=player, stream_id=stream_id))
            await self._visual(self.visual.end_stream(), "end preview stream")
            self.machine.dispatch(EndStream(player=player))

        self.machine.dispatch(CompleteSetup(player=player))
        battle_started = self.state.phase == GamePhase.BATTLE
        outcome = SetupOutcome(player=player, battle_started=battle_started)

        if battle_started:
            logger.info("both players ready, battle begins")
            await self._start_battle_stream()
            self._save_last_characters()
            p1, p2 = self.state.players
            outcome.commentary = await self._narrate(
                self.narration.opening_commentary(p1.display_name, p2.display_name, p1.world),
                "opening commentary",
            )
            self.opening_commentary = outcome.commentary
        return outcome

    async def _start_battle_stream(self) -> None:
        p1, p2 = self.state.players
        prompt = build_evolved_battle_prompt(
            p1.character, p2.character, p1.evolution_level, p2.evolution_level, arena=p1.world
        )
        stream_id = await self._visual(self.visual.start_stream(prompt), "battle stream")
        if stream_id:
            for player in self.state.players:
                self.machine.dispatch(StartStream(player=player.id, stream_id=stream_id))

    def _save_last_characters(self) -> None:
        p1, p2 = self.state.players
        try:
            self.history.save_last_characters(
                SavedCharacters(
                    player1=SavedCharacter(name=p1.name, character=p1.character, world=p1.world),
                    player2=SavedCharacter(name=p2.name, character=p2.character, world=p2.world),
                )
            )
        except Exception as exc:
            logger.error("saving last characters failed: %s", exc, exc_info=True)

    # ------------------------------------------------------------------
    # Battle
    # ------------------------------------------------------------------

    def _check_can_submit(self, text: str) -> str:
        state = self.state
        if state.phase != GamePhase.BATTLE or state.winner is not None:
            raise ActionRejectedError(
                ActionRejectedError.WRONG_PHASE,
                f"actions are only accepted during battle, current phase is {state.phase.value}",
                phase=state.phase.value,
            )
        if state.is_processing:
            raise ActionRejectedError(
                ActionRejectedError.PROCESSING, "another action is still being resolved"
            )

        cleaned = sanitize_input(text, settings.max_action_length)
        validation = validate_prompt(cleaned)
        if not validation.valid:
            raise ActionRejectedError(ActionRejectedError.INVALID_INPUT, validation.error or "invalid action")

        if not self.rate_limiter.can_make_request():
            wait = self.rate_limiter.get_wait_time()
            raise ActionRejectedError(
                ActionRejectedError.RATE_LIMITED,
                f"too many actions, try again in {wait:.1f}s",
                retry_after=wait,
            )
        return cleaned

    async def submit_action(self, text: str) -> ActionOutcome:
        """Resolve one action for the active player."""
        action = self._check_can_submit(text)
        self.rate_limiter.record_request()
        self.machine.dispatch(SetProcessing(processing=True))

        try:
            return await self._resolve(action)
        finally:
            if self.state.is_processing:
                self.machine.dispatch(SetProcessing(processing=False))

    async def _resolve(self, action: str) -> ActionOutcome:
        state = self.state
        actor_id = state.active_player
        actor = get_active_player(state)
        opponent = get_opponent(state)

        changes = calculate_stat_changes(action, state, self.rng)
        narrative = await self._narrate(self.narration.narrate_action(action, state), "action narration")
        event = create_event_entry(actor_id, action, changes, state.event_log, narrative=narrative)

        await self._visual(
            self.visual.interact(build_action_prompt(actor.display_name, action, opponent.display_name)),
            "visual interact",
        )

        self.machine.dispatch(ResolveAction(event=event))
        logger.debug(
            "resolved player=%s type=%s impact=%s turn=%s",
            actor_id,
            changes.analysis.action_type.value,
            changes.impact_type.value,
            self.state.turn_count,
        )

        outcome = ActionOutcome(event=event, callout=hype_callout(self.state))
        winner = check_victory_condition(self.state, self.stalemate_turn_limit)
        if winner is None:
            self.machine.dispatch(SwitchActivePlayer())
            return outcome

        await self._finish_battle(winner, outcome)
        return outcome

    async def _finish_battle(self, winner: int, outcome: ActionOutcome) -> None:
        self.machine.dispatch(DeclareWinner(winner=winner))
        state = self.state
        winner_state = state.get_player(winner)
        loser_state = state.get_player(2 if winner == 1 else 1)
        logger.info("battle over: winner=%s turns=%s", winner, state.turn_count)

        previous = {p.id: p.evolution_level for p in state.players}
        evolution = evaluate_post_battle_evolution(winner_state, loser_state, state.turn_count)
        self.machine.dispatch(
            EvolvePlayer(player=evolution.winner_id, level=evolution.winner_new_level, trigger=evolution.winner_trigger)
        )
        self.machine.dispatch(
            EvolvePlayer(player=evolution.loser_id, level=evolution.loser_new_level, trigger=evolution.loser_trigger)
        )
        for player in state.players:
            text = generate_transformation_narration(
                player.display_name, previous[player.id], player.evolution_level, self.rng
            )
            if text:
                outcome.transformations[player.id] = text

        self._persist_battle()

        victory_type = classify_victory(state.turn_count, winner_state.stats.momentum)
        outcome.winner = winner
        outcome.evolution = evolution
        outcome.commentary = await self._narrate(
            self.narration.closing_commentary(
                winner_state.display_name,
                loser_state.display_name,
                state.turn_count,
                victory_type.value,
            ),
            "closing commentary",
        )

    def _persist_battle(self) -> None:
        try:
            self.history.save_battle_record(BattleRecord.from_state(self.state))
            self.history.update_game_stats(self.state.winner)
        except Exception as exc:
            logger.error("persisting battle failed: %s", exc, exc_info=True)

    # ------------------------------------------------------------------
    # Rematch / reset
    # ------------------------------------------------------------------

    async def rematch(self) -> ArenaState:
        """Same characters, same evolution levels, fresh stats."""
        self._require_phase(GamePhase.VICTORY)
        self.machine.dispatch(Rematch())
        self.rate_limiter.reset()
        self.opening_commentary = None
        await self._start_battle_stream()
        return self.state

    async def reset_game(self) -> ArenaState:
        await self._visual(self.visual.end_stream(), "end stream")
        await self._visual(self.visual.disconnect(), "visual disconnect")
        self.machine.dispatch(Disconnect())
        self.machine.dispatch(ResetGame())
        self.rate_limiter.reset()
        self.opening_commentary = None
        logger.info("game reset")
        return self.state

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def battle_stats(self) -> Dict[str, Any]:
        return compute_battle_stats(self.state.event_log).to_dict()
