"""
行动分类器

把自由文本行动映射为粗粒度类别与强度（纯函数，无依赖）
"""
from typing import List, Sequence

from .models.action import ActionAnalysis, ActionType, Intensity
from .rules import (
    DEFENSIVE_WORDS,
    INTENSITY_WORDS,
    OFFENSIVE_WORDS,
    SHORT_ACTION_WORD_COUNT,
    SPECIAL_WORDS,
)


def _matches(text: str, vocabulary: Sequence[str]) -> List[str]:
    return [word for word in vocabulary if word in text]


def analyze_action(action: str) -> ActionAnalysis:
    """
    分类一条行动文本

    Args:
        action: 已清洗的行动文本（任何字符串都可分类，包括空串）

    Returns:
        ActionAnalysis: 类别、强度与命中关键词

    类别判定顺序：
    1. 命中任一特殊词 → special
    2. 进攻词数 > 防御词数 → offensive
    3. 有防御词 → defensive
    4. 否则 → neutral

    强度判定顺序：
    1. 强度词 ≥2 或命中特殊词 → devastating
    2. 强度词恰好 1 个或进攻词 ≥2 → strong
    3. 少于 3 个词 → weak
    4. 否则 → normal
    """
    lower = (action or "").lower()
    word_count = len(lower.split())

    found_offensive = _matches(lower, OFFENSIVE_WORDS)
    found_defensive = _matches(lower, DEFENSIVE_WORDS)
    found_special = _matches(lower, SPECIAL_WORDS)
    found_intensity = _matches(lower, INTENSITY_WORDS)

    if found_special:
        action_type = ActionType.SPECIAL
    elif len(found_offensive) > len(found_defensive):
        action_type = ActionType.OFFENSIVE
    elif found_defensive:
        action_type = ActionType.DEFENSIVE
    else:
        action_type = ActionType.NEUTRAL

    if len(found_intensity) >= 2 or found_special:
        intensity = Intensity.DEVASTATING
    elif len(found_intensity) == 1 or len(found_offensive) >= 2:
        intensity = Intensity.STRONG
    elif word_count < SHORT_ACTION_WORD_COUNT:
        intensity = Intensity.WEAK
    else:
        intensity = Intensity.NORMAL

    return ActionAnalysis(
        action_type=action_type,
        intensity=intensity,
        keywords=found_offensive + found_defensive + found_special + found_intensity,
    )
