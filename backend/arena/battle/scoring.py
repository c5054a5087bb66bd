"""
计分与旁白

分类结果 → 数值增量 → 冲击等级 → 旁白文本 → EventEntry

随机源通过参数注入（random.Random 或任何提供 random()/choice() 的对象），
测试可以固定它来得到确定结果。
"""
import math
import random
from dataclasses import dataclass
from typing import List, Optional

from .classifier import analyze_action
from .models.action import ActionAnalysis, ActionType, MomentumDeltas
from .models.arena_state import ArenaState
from .models.event import EventEntry, ImpactType
from .models.player import PlayerStats, StatDelta
from .rules import (
    BASE_MOMENTUM,
    DEFENDER_LOSS_FACTOR,
    ENERGY_COST,
    ENERGY_COST_MULTIPLIER,
    IMPACT_NARRATIVES,
    IMPACT_THRESHOLDS,
    MOMENTUM_VARIANCE,
    STAT_BASELINE,
    TYPE_MULTIPLIER,
    TYPED_NARRATIVES,
)


def round_half_up(value: float) -> int:
    """四舍五入（.5 向正无穷方向），与内置 round 的银行家舍入不同"""
    return int(math.floor(value + 0.5))


def _stat_modifier(stat: int) -> float:
    return 1 + (stat - STAT_BASELINE) / 100


# ============================================
# 数值计算
# ============================================

def calc_base_momentum(analysis: ActionAnalysis, rng) -> int:
    """
    基础动量：强度查表 × 类别倍率 + 基础值的 ±20% 均匀扰动
    """
    base = BASE_MOMENTUM[analysis.intensity]
    type_mod = TYPE_MULTIPLIER[analysis.action_type]
    variance = base * (MOMENTUM_VARIANCE * 2) * (rng.random() - 0.5)
    return round_half_up(base * type_mod + variance)


def calc_energy_cost(analysis: ActionAnalysis) -> int:
    """能量消耗：强度查表 × 类别倍率（special 1.5 / defensive 0.7）"""
    base = ENERGY_COST[analysis.intensity]
    return round_half_up(base * ENERGY_COST_MULTIPLIER[analysis.action_type])


def calculate_deltas(
    analysis: ActionAnalysis,
    attacker: PlayerStats,
    defender: PlayerStats,
    rng=None,
) -> MomentumDeltas:
    """
    计算双方动量增量与行动方能量消耗

    Args:
        analysis: 分类结果
        attacker: 行动方当前属性
        defender: 对手当前属性
        rng: 随机源

    Returns:
        MomentumDeltas: 未夹取的增量（夹取只在应用到属性时进行）
    """
    rng = rng or random.Random()
    base_momentum = calc_base_momentum(analysis, rng)

    attacker_momentum = round_half_up(base_momentum * _stat_modifier(attacker.power))
    defender_momentum = round_half_up(
        -DEFENDER_LOSS_FACTOR * base_momentum / _stat_modifier(defender.defense)
    )

    return MomentumDeltas(
        base_momentum=base_momentum,
        attacker_momentum=attacker_momentum,
        defender_momentum=defender_momentum,
        energy_cost=calc_energy_cost(analysis),
    )


# ============================================
# 冲击等级与旁白
# ============================================

def determine_impact(momentum: int) -> ImpactType:
    """按阈值自上而下判定冲击等级"""
    for threshold, impact in IMPACT_THRESHOLDS:
        if momentum >= threshold:
            return impact
    return ImpactType.MISS


def narrative_pool(action_type: Optional[ActionType], impact: ImpactType) -> List[str]:
    """优先取 (类别, 等级) 专属文本，否则退回等级通用文本"""
    if action_type is not None:
        typed = TYPED_NARRATIVES.get((action_type, impact))
        if typed:
            return typed
    return IMPACT_NARRATIVES[impact]


def generate_narrative(
    action_type: Optional[ActionType], impact: ImpactType, rng=None
) -> str:
    """从文本池中均匀随机选一句"""
    rng = rng or random.Random()
    return rng.choice(narrative_pool(action_type, impact))


# ============================================
# 组合
# ============================================

@dataclass(frozen=True)
class StatChangeResult:
    """一次行动的完整计分结果"""

    analysis: ActionAnalysis
    deltas: MomentumDeltas
    player1: StatDelta
    player2: StatDelta
    impact_type: ImpactType
    narrative: str


def calculate_stat_changes(action: str, state: ArenaState, rng=None) -> StatChangeResult:
    """
    为当前行动方计算本次行动的属性增量

    Args:
        action: 行动文本
        state: 当前对战状态（只读）
        rng: 随机源

    Returns:
        StatChangeResult: 双方增量、冲击等级与旁白
    """
    rng = rng or random.Random()
    active_id = state.active_player
    attacker = state.get_player(active_id)
    defender = state.get_player(2 if active_id == 1 else 1)

    analysis = analyze_action(action)
    deltas = calculate_deltas(analysis, attacker.stats, defender.stats, rng)
    impact = determine_impact(deltas.attacker_momentum)

    attacker_delta = StatDelta(momentum=deltas.attacker_momentum, energy=-deltas.energy_cost)
    defender_delta = StatDelta(momentum=deltas.defender_momentum)

    return StatChangeResult(
        analysis=analysis,
        deltas=deltas,
        player1=attacker_delta if active_id == 1 else defender_delta,
        player2=defender_delta if active_id == 1 else attacker_delta,
        impact_type=impact,
        narrative=generate_narrative(analysis.action_type, impact, rng),
    )


def compute_combo_count(
    event_log: List[EventEntry], player: int, action_type: Optional[ActionType]
) -> int:
    """
    连击数：该玩家自己最近连续同类别行动的次数（含本次）
    """
    if action_type is None:
        return 1
    count = 1
    for event in reversed(event_log):
        if event.player != player:
            continue
        if event.action_type != action_type:
            break
        count += 1
    return count


def create_event_entry(
    player: int,
    action: str,
    changes: StatChangeResult,
    event_log: Optional[List[EventEntry]] = None,
    narrative: Optional[str] = None,
) -> EventEntry:
    """
    构建事件条目

    Args:
        player: 行动方
        action: 原始行动文本
        changes: 计分结果
        event_log: 当前日志（用于计算连击）
        narrative: 外部旁白（为空时使用本地文本池）
    """
    action_type = changes.analysis.action_type
    return EventEntry(
        player=player,
        action=action,
        result=narrative or changes.narrative,
        player1_changes=changes.player1,
        player2_changes=changes.player2,
        impact_type=changes.impact_type,
        action_type=action_type,
        combo_count=compute_combo_count(event_log or [], player, action_type),
    )
