"""
对战统计（由事件日志重算）
"""
from typing import Iterable

from .models.arena_state import BattleStats
from .models.event import EventEntry, ImpactType


def compute_battle_stats(event_log: Iterable[EventEntry]) -> BattleStats:
    """
    从事件日志重算每位玩家的统计

    - total_damage_dealt: 对手动量损失之和（只计负增量）
    - critical_hits: critical 冲击次数
    - max_combo: 出现过的最大连击数
    """
    stats = BattleStats()
    for event in event_log:
        player = event.player
        opponent_momentum = event.changes_for(event.opponent).momentum
        if opponent_momentum < 0:
            stats.total_damage_dealt[player] += -opponent_momentum
        if event.impact_type == ImpactType.CRITICAL:
            stats.critical_hits[player] += 1
        stats.max_combo[player] = max(stats.max_combo[player], event.combo_count)
    return stats
