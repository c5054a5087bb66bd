"""
对战规则

定义所有对战相关的常量和查表数据
"""
from typing import Dict, List, Tuple

from .models.action import ActionType, Intensity
from .models.event import ImpactType


# ============================================
# 行动分类词表（小写，子串匹配）
# ============================================

OFFENSIVE_WORDS: Tuple[str, ...] = (
    "attack", "strike", "blast", "slash", "crush", "destroy", "smash",
    "unleash", "fire", "shoot", "punch", "kick", "throws", "launches",
    "hits", "charge", "swing", "cleave", "pierce", "slam",
)

DEFENSIVE_WORDS: Tuple[str, ...] = (
    "defend", "block", "shield", "protect", "guard", "counter", "parry",
    "evade", "dodge", "heal", "recover", "brace", "fortif", "absorb",
)

SPECIAL_WORDS: Tuple[str, ...] = (
    "ultimate", "final", "supreme", "devastating", "legendary", "ancient",
    "forbidden", "divine", "cosmic", "infinite", "signature", "unleashes",
)

INTENSITY_WORDS: Tuple[str, ...] = (
    "devastating", "powerful", "massive", "incredible", "overwhelming",
    "unstoppable", "furious", "raging", "tremendous", "cataclysmic",
)

# 少于该词数的输入在无其他信号时判为 weak
SHORT_ACTION_WORD_COUNT = 3


# ============================================
# 数值计算表
# ============================================

BASE_MOMENTUM: Dict[Intensity, int] = {
    Intensity.WEAK: 4,
    Intensity.NORMAL: 8,
    Intensity.STRONG: 13,
    Intensity.DEVASTATING: 20,
}

TYPE_MULTIPLIER: Dict[ActionType, float] = {
    ActionType.OFFENSIVE: 1.2,
    ActionType.DEFENSIVE: 0.5,
    ActionType.SPECIAL: 1.5,
    ActionType.NEUTRAL: 1.0,
}

# 随机扰动：基础值的 ±20%
MOMENTUM_VARIANCE = 0.2

# 防守方损失系数
DEFENDER_LOSS_FACTOR = 0.6

# 属性基准线（power/defense 高于此值放大，低于此值削弱）
STAT_BASELINE = 50

ENERGY_COST: Dict[Intensity, int] = {
    Intensity.WEAK: 5,
    Intensity.NORMAL: 10,
    Intensity.STRONG: 15,
    Intensity.DEVASTATING: 25,
}

ENERGY_COST_MULTIPLIER: Dict[ActionType, float] = {
    ActionType.OFFENSIVE: 1.0,
    ActionType.DEFENSIVE: 0.7,
    ActionType.SPECIAL: 1.5,
    ActionType.NEUTRAL: 1.0,
}


# ============================================
# 冲击等级阈值（自上而下，首个命中生效）
# ============================================

IMPACT_THRESHOLDS: List[Tuple[int, ImpactType]] = [
    (18, ImpactType.CRITICAL),
    (12, ImpactType.STRONG),
    (6, ImpactType.NORMAL),
    (3, ImpactType.WEAK),
]


# ============================================
# 胜负阈值
# ============================================

MOMENTUM_WIN = 100
MOMENTUM_LOSS = 0


# ============================================
# 进化规则
# ============================================

DOMINATION_TURN_LIMIT = 5
FLAWLESS_MOMENTUM = 80
DEVASTATING_DEFEAT_MOMENTUM = 10

TRIGGER_VICTORY = "Victory"
TRIGGER_DOMINATION = "Domination victory"
TRIGGER_FLAWLESS = "Flawless victory"
TRIGGER_DEFEAT = "Defeat"
TRIGGER_DEVASTATING_DEFEAT = "Devastating defeat"


# ============================================
# 旁白文本池
# ============================================

# 按 (类别, 冲击等级) 的专属文本
TYPED_NARRATIVES: Dict[Tuple[ActionType, ImpactType], List[str]] = {
    (ActionType.OFFENSIVE, ImpactType.CRITICAL): [
        "A devastating blow lands with thunderous force!",
        "An overwhelming display of power shakes the arena!",
        "The attack connects with earth-shattering intensity!",
        "A legendary strike! The crowd goes wild!",
    ],
    (ActionType.OFFENSIVE, ImpactType.STRONG): [
        "A solid hit finds its mark!",
        "The strike lands with impressive force!",
        "A powerful connection sends shockwaves!",
    ],
    (ActionType.OFFENSIVE, ImpactType.NORMAL): [
        "The action takes effect.",
        "A clean exchange of blows.",
        "The move connects.",
    ],
    (ActionType.OFFENSIVE, ImpactType.WEAK): [
        "A glancing blow, barely any effect.",
        "Minimal impact from the attempt.",
        "A weak effort, easily absorbed.",
    ],
    (ActionType.OFFENSIVE, ImpactType.MISS): [
        "The attack misses entirely!",
        "Evaded with ease!",
        "No effect. The opponent is unfazed.",
    ],
    (ActionType.DEFENSIVE, ImpactType.STRONG): [
        "An impenetrable defense! Armor gleams with power!",
        "Shields raised, an unbreakable wall of defense!",
        "A masterful defensive stance, practically invulnerable!",
    ],
    (ActionType.DEFENSIVE, ImpactType.NORMAL): [
        "A solid defensive stance is established.",
        "Guard raised, ready for anything.",
        "Defense fortified, energy steadies.",
    ],
    (ActionType.DEFENSIVE, ImpactType.WEAK): [
        "A hasty guard, better than nothing.",
        "Minimal defensive positioning.",
        "A brief moment of recovery.",
    ],
    (ActionType.SPECIAL, ImpactType.CRITICAL): [
        "ULTIMATE POWER UNLEASHED! The arena trembles!",
        "A divine strike of unimaginable force!",
        "The signature move connects, absolutely devastating!",
    ],
    (ActionType.SPECIAL, ImpactType.STRONG): [
        "Signature power surges in a fearsome display!",
        "Ancient energy erupts with fearsome intensity!",
    ],
    (ActionType.SPECIAL, ImpactType.NORMAL): [
        "Special power activates, channeling energy.",
        "A focused burst of signature ability.",
    ],
    (ActionType.SPECIAL, ImpactType.WEAK): [
        "The special ability fizzles... not enough energy!",
        "Power surges but dissipates before connecting.",
    ],
    (ActionType.SPECIAL, ImpactType.MISS): [
        "The ultimate attack whiffs completely!",
        "All that energy... wasted!",
    ],
    (ActionType.NEUTRAL, ImpactType.NORMAL): [
        "An unconventional move takes effect.",
        "Something unexpected happens in the arena.",
    ],
    (ActionType.NEUTRAL, ImpactType.WEAK): [
        "A confused gesture... not much happens.",
        "The arena barely registers the action.",
    ],
}

# 按冲击等级的通用文本（兜底，每个等级都必须非空）
IMPACT_NARRATIVES: Dict[ImpactType, List[str]] = {
    ImpactType.CRITICAL: [
        "A critical hit! The arena shakes to its foundations!",
        "Overwhelming force crashes through every defense!",
    ],
    ImpactType.STRONG: [
        "A strong move shifts the balance of the fight!",
        "The blow lands hard and the momentum swings!",
    ],
    ImpactType.NORMAL: [
        "The move takes effect.",
        "A steady exchange keeps the battle moving.",
    ],
    ImpactType.WEAK: [
        "A faint effort with little effect.",
        "The move barely registers.",
    ],
    ImpactType.MISS: [
        "Nothing connects. A complete miss!",
        "The effort fades into the arena air.",
    ],
}
