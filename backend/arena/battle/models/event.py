"""
对战事件数据模型
"""
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .action import ActionType
from .player import StatDelta


class ImpactType(str, Enum):
    """冲击等级（用于旁白与表现强调）"""

    CRITICAL = "critical"
    STRONG = "strong"
    NORMAL = "normal"
    WEAK = "weak"
    MISS = "miss"


def _new_event_id() -> str:
    return uuid.uuid4().hex


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class EventEntry:
    """
    一次已结算行动的不可变记录

    事件日志只追加，是重新计算对战统计（最大连击、总伤害、暴击数）的唯一来源。
    """

    player: int  # 行动方 1 或 2
    action: str  # 原始行动文本
    result: str  # 旁白文本
    player1_changes: StatDelta = field(default_factory=StatDelta)
    player2_changes: StatDelta = field(default_factory=StatDelta)
    impact_type: ImpactType = ImpactType.NORMAL

    action_type: Optional[ActionType] = None
    combo_count: int = 1

    id: str = field(default_factory=_new_event_id)
    timestamp: int = field(default_factory=_now_ms)

    @property
    def opponent(self) -> int:
        return 2 if self.player == 1 else 1

    def changes_for(self, player_id: int) -> StatDelta:
        """获取某一方的属性增量"""
        return self.player1_changes if player_id == 1 else self.player2_changes

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "player": self.player,
            "action": self.action,
            "result": self.result,
            "stat_changes": {
                "player1": self.player1_changes.to_dict(),
                "player2": self.player2_changes.to_dict(),
            },
            "impact_type": self.impact_type.value,
            "action_type": self.action_type.value if self.action_type else None,
            "combo_count": self.combo_count,
        }
