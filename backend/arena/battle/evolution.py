"""
进化系统

五个进化等级：-2（濒危）→ -1（虚弱）→ 0（基础）→ +1（强化）→ +2（超越）

每场对战结束后本地确定性结算：胜者进化，败者退化。
"""
import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from .models.evolution_result import EvolutionResult
from .models.player import EVOLUTION_MAX, EVOLUTION_MIN, PlayerState, clamp_evolution_level
from .rules import (
    DEVASTATING_DEFEAT_MOMENTUM,
    DOMINATION_TURN_LIMIT,
    FLAWLESS_MOMENTUM,
    TRIGGER_DEFEAT,
    TRIGGER_DEVASTATING_DEFEAT,
    TRIGGER_DOMINATION,
    TRIGGER_FLAWLESS,
    TRIGGER_VICTORY,
)


# ============================================
# 等级元数据
# ============================================

@dataclass(frozen=True)
class EvolutionMeta:
    """进化等级的展示信息"""

    name: str
    indicator: str


EVOLUTION_META: Dict[int, EvolutionMeta] = {
    -2: EvolutionMeta(name="Critical", indicator="💀"),
    -1: EvolutionMeta(name="Weakened", indicator="🩸"),
    0: EvolutionMeta(name="Base Form", indicator="⚔️"),
    1: EvolutionMeta(name="Empowered", indicator="⚡"),
    2: EvolutionMeta(name="Transcendent", indicator="✨"),
}


def get_evolution_meta(level: int) -> EvolutionMeta:
    """获取等级元数据（未知等级按基础形态处理）"""
    return EVOLUTION_META.get(level, EVOLUTION_META[0])


# ============================================
# 赛后结算
# ============================================

def evaluate_post_battle_evolution(
    winner: PlayerState,
    loser: PlayerState,
    turn_count: int,
) -> EvolutionResult:
    """
    计算一场对战结束后的进化变化

    Args:
        winner: 胜者（使用其最终属性与当前进化等级）
        loser: 败者
        turn_count: 本场已结算的行动总数

    Returns:
        EvolutionResult: 双方新等级、最后生效的触发标签、是否实际变化

    规则（可叠加，最终夹取到 [-2, 2]）：
    - 胜者 +1（Victory）
    - ≤5 回合且未到 +2 → 再 +1（Domination victory）
    - 最终动量 ≥80 且未到 +2 → 再 +1（Flawless victory）
    - 败者 -1（Defeat）
    - 最终动量 ≤10 且未到 -2 → 再 -1（Devastating defeat）
    """
    winner_new = winner.evolution_level
    loser_new = loser.evolution_level
    winner_trigger = ""
    loser_trigger = ""

    # 胜者进化
    if winner_new < EVOLUTION_MAX:
        winner_new += 1
        winner_trigger = TRIGGER_VICTORY

    if turn_count <= DOMINATION_TURN_LIMIT and winner_new < EVOLUTION_MAX:
        winner_new += 1
        winner_trigger = TRIGGER_DOMINATION

    if winner.stats.momentum >= FLAWLESS_MOMENTUM and winner_new < EVOLUTION_MAX:
        winner_new += 1
        winner_trigger = TRIGGER_FLAWLESS

    # 败者退化
    if loser_new > EVOLUTION_MIN:
        loser_new -= 1
        loser_trigger = TRIGGER_DEFEAT

    if loser.stats.momentum <= DEVASTATING_DEFEAT_MOMENTUM and loser_new > EVOLUTION_MIN:
        loser_new -= 1
        loser_trigger = TRIGGER_DEVASTATING_DEFEAT

    winner_new = clamp_evolution_level(winner_new)
    loser_new = clamp_evolution_level(loser_new)

    return EvolutionResult(
        winner_id=winner.id,
        loser_id=loser.id,
        winner_new_level=winner_new,
        loser_new_level=loser_new,
        winner_trigger=winner_trigger or TRIGGER_VICTORY,
        loser_trigger=loser_trigger or TRIGGER_DEFEAT,
        winner_changed=winner_new != winner.evolution_level,
        loser_changed=loser_new != loser.evolution_level,
    )


# ============================================
# 变身旁白
# ============================================

EVOLUTION_NARRATIONS: Dict[str, List[str]] = {
    "evolution-1": [
        "{name} channels newfound power and evolves!",
        "Energy surges through {name} as their form shifts, becoming more powerful!",
        "{name} ascends to a higher state!",
    ],
    "evolution-2": [
        "{name} TRANSCENDS to their ultimate form!",
        "{name} achieves PERFECTION. Ultimate power unleashed!",
        "{name} ascends beyond mortal limits!",
    ],
    "devolution-1": [
        "{name} weakens, struggling to maintain form...",
        "The battle's toll shows on {name}'s fading form...",
        "{name}'s power wanes as defeat takes its toll...",
    ],
    "devolution-2": [
        "{name} is critically damaged and barely holding on!",
        "{name}'s form crumbles under the weight of defeat!",
        "{name} is on the brink of collapse!",
    ],
}


def generate_transformation_narration(
    character_name: str,
    from_level: int,
    to_level: int,
    rng: Optional[random.Random] = None,
) -> str:
    """生成等级变化的旁白；等级未变时返回空串"""
    if from_level == to_level:
        return ""
    rng = rng or random.Random()
    direction = "evolution" if to_level > from_level else "devolution"
    steps = min(abs(to_level - from_level), 2)
    templates = EVOLUTION_NARRATIONS.get(f"{direction}-{steps}") or ["{name} transforms!"]
    return rng.choice(templates).replace("{name}", character_name)
