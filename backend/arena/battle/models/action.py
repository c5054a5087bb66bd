"""
行动分类数据模型
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class ActionType(str, Enum):
    """行动类别"""

    OFFENSIVE = "offensive"
    DEFENSIVE = "defensive"
    SPECIAL = "special"
    NEUTRAL = "neutral"


class Intensity(str, Enum):
    """行动强度"""

    WEAK = "weak"
    NORMAL = "normal"
    STRONG = "strong"
    DEVASTATING = "devastating"


@dataclass(frozen=True)
class ActionAnalysis:
    """
    分类器输出

    keywords 按 进攻/防御/特殊/强度 词表顺序记录命中的词
    """

    action_type: ActionType
    intensity: Intensity
    keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.action_type.value,
            "intensity": self.intensity.value,
            "keywords": list(self.keywords),
        }


@dataclass(frozen=True)
class MomentumDeltas:
    """
    数值计算器输出

    attacker_momentum / defender_momentum 均为带符号增量，
    energy_cost 为正数（只从行动方扣除）。
    """

    base_momentum: int
    attacker_momentum: int
    defender_momentum: int
    energy_cost: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "base_momentum": self.base_momentum,
            "attacker_momentum": self.attacker_momentum,
            "defender_momentum": self.defender_momentum,
            "energy_cost": self.energy_cost,
        }
