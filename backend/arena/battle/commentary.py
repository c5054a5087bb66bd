"""
本地解说

不依赖外部模型的即时提示语，以及胜利类型判定（供收官解说使用）。
"""
from enum import Enum
from typing import Optional

from .models.arena_state import ArenaState, GamePhase
from .models.event import ImpactType
from .rules import DOMINATION_TURN_LIMIT, FLAWLESS_MOMENTUM

ON_THE_ROPES_MOMENTUM = 20
COMEBACK_MOMENTUM = 30
CLOSE_BATTLE_MOMENTUM = 40
UNSTOPPABLE_COMBO = 3
LEGENDARY_COMBO = 5


class VictoryType(str, Enum):
    FLAWLESS = "flawless"
    DOMINATION = "domination"
    STANDARD = "standard"


def classify_victory(turns: int, winner_momentum: int) -> VictoryType:
    """flawless（胜者动量 ≥80）优先于 domination（≤5 回合）"""
    if winner_momentum >= FLAWLESS_MOMENTUM:
        return VictoryType.FLAWLESS
    if turns <= DOMINATION_TURN_LIMIT:
        return VictoryType.DOMINATION
    return VictoryType.STANDARD


def hype_callout(state: ArenaState) -> Optional[str]:
    """
    根据最新事件给出一句提示语，没有值得强调的时刻时返回 None

    优先级：对手濒危 > 逆境暴击 > 势均力敌 > 连击
    """
    if state.phase != GamePhase.BATTLE or not state.event_log:
        return None

    latest = state.event_log[-1]
    active = state.get_player(latest.player)
    opponent = state.get_player(latest.opponent)
    p1, p2 = (player.stats.momentum for player in state.players)

    if 0 < opponent.stats.momentum <= ON_THE_ROPES_MOMENTUM:
        return f"{opponent.display_name} is on the ropes!"

    if active.stats.momentum <= COMEBACK_MOMENTUM and latest.impact_type == ImpactType.CRITICAL:
        return "Against all odds!"

    if 0 < p1 <= CLOSE_BATTLE_MOMENTUM and 0 < p2 <= CLOSE_BATTLE_MOMENTUM:
        return "It's anyone's game!"

    if latest.combo_count >= LEGENDARY_COMBO:
        return "LEGENDARY STREAK!"
    if latest.combo_count == UNSTOPPABLE_COMBO:
        return "UNSTOPPABLE!"

    return None
