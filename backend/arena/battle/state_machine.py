"""
对战状态机

持有唯一的 ArenaState，按转换类型查表分派（单写者、原地修改）。

阶段：idle → setup → battle → victory，reset 可从任意阶段回到 idle。
不符合当前阶段的转换一律忽略（no-op），不抛异常。
"""
import logging
from typing import Callable, Dict, Optional, Type

from .models.arena_state import ArenaState, GamePhase, create_initial_state
from .models.player import PlayerState, clamp_evolution_level, create_default_stats
from .prompts import build_character_prompt
from .transitions import (
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
    StartBattle,
    StartStream,
    SwitchActivePlayer,
    Transition,
)

logger = logging.getLogger(__name__)

PRE_BATTLE_PHASES = (GamePhase.IDLE, GamePhase.SETUP)
VALID_PLAYERS = (1, 2)


class ArenaStateMachine:
    """
    对战状态机

    职责：
    - 持有并只通过转换修改 ArenaState
    - 在对战中应用属性增量（夹取到 [0, 100]）
    - 维护阶段、行动方、胜者与事件日志
    """

    def __init__(self, state: Optional[ArenaState] = None):
        self.state = state or create_initial_state()
        self._handlers: Dict[Type, Callable] = {
            Connect: self._on_connect,
            Disconnect: self._on_disconnect,
            ConnectionFailed: self._on_connection_failed,
            SetPlayerName: self._on_set_player_name,
            SetCharacter: self._on_set_character,
            StartStream: self._on_start_stream,
            EndStream: self._on_end_stream,
            CompleteSetup: self._on_complete_setup,
            StartBattle: self._on_start_battle,
            SetProcessing: self._on_set_processing,
            ResolveAction: self._on_resolve_action,
            SwitchActivePlayer: self._on_switch_active_player,
            DeclareWinner: self._on_declare_winner,
            EvolvePlayer: self._on_evolve_player,
            Rematch: self._on_rematch,
            ResetGame: self._on_reset_game,
        }

    # ============================================
    # 公共接口
    # ============================================

    def dispatch(self, transition: Transition) -> ArenaState:
        """
        应用一次转换

        Args:
            transition: 转换请求

        Returns:
            ArenaState: 当前状态（可能未变）

        Raises:
            TypeError: 未知的转换类型
        """
        handler = self._handlers.get(type(transition))
        if handler is None:
            raise TypeError(f"Unknown transition: {type(transition).__name__}")
        handler(transition)
        return self.state

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    # ============================================
    # 私有方法 - 守卫
    # ============================================

    def _ignore(self, transition: Transition, reason: str) -> None:
        logger.debug(
            "ignored %s in phase=%s: %s",
            type(transition).__name__,
            self.state.phase.value,
            reason,
        )

    def _player_or_none(self, transition: Transition, player_id: int) -> Optional[PlayerState]:
        if player_id not in VALID_PLAYERS:
            self._ignore(transition, f"invalid player {player_id!r}")
            return None
        return self.state.get_player(player_id)

    # ============================================
    # 私有方法 - 连接
    # ============================================

    def _on_connect(self, transition: Connect) -> None:
        self.state.is_connected = True
        if self.state.phase == GamePhase.IDLE:
            self.state.phase = GamePhase.SETUP

    def _on_disconnect(self, transition: Disconnect) -> None:
        self.state.is_connected = False
        for player in self.state.players:
            player.is_streaming = False
            player.stream_id = None

    def _on_connection_failed(self, transition: ConnectionFailed) -> None:
        self.state.is_connected = False
        self.state.connection_error = transition.error

    def _on_start_stream(self, transition: StartStream) -> None:
        player = self._player_or_none(transition, transition.player)
        if player is None:
            return
        player.stream_id = transition.stream_id
        player.is_streaming = True

    def _on_end_stream(self, transition: EndStream) -> None:
        player = self._player_or_none(transition, transition.player)
        if player is None:
            return
        player.is_streaming = False

    # ============================================
    # 私有方法 - 设定
    # ============================================

    def _on_set_player_name(self, transition: SetPlayerName) -> None:
        if self.state.phase not in PRE_BATTLE_PHASES:
            self._ignore(transition, "names are fixed once battle starts")
            return
        player = self._player_or_none(transition, transition.player)
        if player is None:
            return
        player.name = transition.name

    def _on_set_character(self, transition: SetCharacter) -> None:
        if self.state.phase not in PRE_BATTLE_PHASES:
            self._ignore(transition, "characters are fixed once battle starts")
            return
        player = self._player_or_none(transition, transition.player)
        if player is None:
            return
        player.character = transition.character
        player.world = transition.world
        player.character_prompt = build_character_prompt(transition.character, transition.world)

    def _on_complete_setup(self, transition: CompleteSetup) -> None:
        if self.state.phase not in PRE_BATTLE_PHASES:
            self._ignore(transition, "setup already finished")
            return
        player = self._player_or_none(transition, transition.player)
        if player is None:
            return
        player.is_setup_complete = True

        # 双方都准备完毕才进入对战；无论谁第二个完成，行动方都重置为 1
        if all(p.is_setup_complete for p in self.state.players):
            self.state.phase = GamePhase.BATTLE
            self.state.active_player = 1
        else:
            self.state.setup_player = 2 if transition.player == 1 else 1

    def _on_start_battle(self, transition: StartBattle) -> None:
        if self.state.phase != GamePhase.SETUP:
            self._ignore(transition, "battle can only start from setup")
            return
        self.state.phase = GamePhase.BATTLE
        self.state.active_player = 1

    # ============================================
    # 私有方法 - 对战
    # ============================================

    def _on_set_processing(self, transition: SetProcessing) -> None:
        self.state.is_processing = bool(transition.processing)

    def _on_resolve_action(self, transition: ResolveAction) -> None:
        if self.state.phase != GamePhase.BATTLE or self.state.winner is not None:
            self._ignore(transition, "actions resolve only during an undecided battle")
            return
        event = transition.event
        if event.player not in VALID_PLAYERS:
            self._ignore(transition, f"invalid player {event.player!r}")
            return

        self.state.event_log.append(event)
        for player in self.state.players:
            player.stats.apply_delta(event.changes_for(player.id))
        self.state.turn_count += 1
        self.state.is_processing = False

    def _on_switch_active_player(self, transition: SwitchActivePlayer) -> None:
        if self.state.phase != GamePhase.BATTLE:
            self._ignore(transition, "turns only switch during battle")
            return
        self.state.active_player = 2 if self.state.active_player == 1 else 1

    def _on_declare_winner(self, transition: DeclareWinner) -> None:
        if self.state.phase != GamePhase.BATTLE:
            self._ignore(transition, "winner can only be declared during battle")
            return
        if transition.winner not in VALID_PLAYERS:
            self._ignore(transition, f"invalid winner {transition.winner!r}")
            return
        self.state.phase = GamePhase.VICTORY
        self.state.winner = transition.winner
        self.state.is_processing = False

    def _on_evolve_player(self, transition: EvolvePlayer) -> None:
        if self.state.phase != GamePhase.VICTORY:
            self._ignore(transition, "evolution is applied after a winner is declared")
            return
        player = self._player_or_none(transition, transition.player)
        if player is None:
            return
        player.evolution_level = clamp_evolution_level(transition.level)

    # ============================================
    # 私有方法 - 再战与重置
    # ============================================

    def _on_rematch(self, transition: Rematch) -> None:
        if self.state.phase != GamePhase.VICTORY:
            self._ignore(transition, "rematch is only available after victory")
            return
        for player in self.state.players:
            player.stats = create_default_stats()
        self.state.phase = GamePhase.BATTLE
        self.state.event_log = []
        self.state.active_player = 1
        self.state.winner = None
        self.state.turn_count = 0
        self.state.is_processing = False

    def _on_reset_game(self, transition: ResetGame) -> None:
        self.state = create_initial_state()


# ============================================
# 查询
# ============================================

def get_active_player(state: ArenaState) -> PlayerState:
    return state.get_player(state.active_player)


def get_opponent(state: ArenaState) -> PlayerState:
    return state.get_player(2 if state.active_player == 1 else 1)


def can_player_act(state: ArenaState) -> bool:
    """对战中、已连接、未在结算、行动方仍有能量"""
    return (
        state.phase == GamePhase.BATTLE
        and state.is_connected
        and not state.is_processing
        and get_active_player(state).stats.energy > 0
    )


def get_recent_events(state: ArenaState, count: int = 10) -> list:
    return state.event_log[-count:] if count > 0 else []