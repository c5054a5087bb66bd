"""
对战全局状态数据模型
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .event import EventEntry
from .player import PlayerState, create_player_state


class GamePhase(str, Enum):
    """对战阶段"""

    IDLE = "idle"  # 空闲（未连接）
    SETUP = "setup"  # 角色设定
    BATTLE = "battle"  # 对战中
    VICTORY = "victory"  # 已分胜负


@dataclass
class BattleStats:
    """
    派生对战统计（可由事件日志完整重算）
    """

    total_damage_dealt: Dict[int, int] = field(default_factory=lambda: {1: 0, 2: 0})
    critical_hits: Dict[int, int] = field(default_factory=lambda: {1: 0, 2: 0})
    max_combo: Dict[int, int] = field(default_factory=lambda: {1: 0, 2: 0})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_damage_dealt": {f"player{k}": v for k, v in self.total_damage_dealt.items()},
            "critical_hits": {f"player{k}": v for k, v in self.critical_hits.items()},
            "max_combo": {f"player{k}": v for k, v in self.max_combo.items()},
        }


@dataclass
class ArenaState:
    """
    对战全局状态

    每场对战只有一个实例，只能由状态机通过转换修改。
    """

    # ===== 阶段 =====
    phase: GamePhase = GamePhase.IDLE

    # ===== 双方玩家 =====
    players: Tuple[PlayerState, PlayerState] = field(
        default_factory=lambda: (create_player_state(1), create_player_state(2))
    )

    # ===== 事件日志（只追加） =====
    event_log: List[EventEntry] = field(default_factory=list)

    # ===== 回合 =====
    active_player: int = 1
    setup_player: int = 1
    winner: Optional[int] = None
    turn_count: int = 0

    # ===== 外部集成记录（不影响规则） =====
    is_connected: bool = False
    connection_error: Optional[str] = None
    is_processing: bool = False

    # ===== 便捷方法 =====

    def get_player(self, player_id: int) -> PlayerState:
        """根据ID获取玩家"""
        return self.players[0] if player_id == 1 else self.players[1]

    def to_dict(self, recent_events: Optional[int] = None) -> Dict[str, Any]:
        """转换为字典"""
        events = self.event_log if recent_events is None else self.event_log[-recent_events:]
        return {
            "phase": self.phase.value,
            "players": [player.to_dict() for player in self.players],
            "event_log": [event.to_dict() for event in events],
            "active_player": self.active_player,
            "setup_player": self.setup_player,
            "winner": self.winner,
            "turn_count": self.turn_count,
            "is_connected": self.is_connected,
            "connection_error": self.connection_error,
            "is_processing": self.is_processing,
        }


def create_initial_state() -> ArenaState:
    """默认初始状态"""
    return ArenaState()
