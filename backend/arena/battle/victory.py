"""
胜负判定

纯谓词：按固定顺序检查动量阈值，首个命中的规则生效
"""
from typing import Optional

from .models.arena_state import ArenaState
from .models.player import PlayerStats
from .rules import MOMENTUM_LOSS, MOMENTUM_WIN


def evaluate_victory(p1: PlayerStats, p2: PlayerStats) -> Optional[int]:
    """
    根据双方动量判定胜者

    顺序：p1 到 100 → 1；p2 到 100 → 2；p1 到 0 → 2；p2 到 0 → 1；否则无胜者
    """
    if p1.momentum >= MOMENTUM_WIN:
        return 1
    if p2.momentum >= MOMENTUM_WIN:
        return 2
    if p1.momentum <= MOMENTUM_LOSS:
        return 2
    if p2.momentum <= MOMENTUM_LOSS:
        return 1
    return None


def check_victory_condition(
    state: ArenaState, stalemate_turn_limit: Optional[int] = None
) -> Optional[int]:
    """
    检查对战状态是否产生胜者

    Args:
        state: 对战状态
        stalemate_turn_limit: 僵局回合上限（None 或 0 表示关闭）。
            达到上限且动量规则未命中时，动量高者获胜，平局判给玩家1。
    """
    p1, p2 = state.players
    winner = evaluate_victory(p1.stats, p2.stats)
    if winner is not None:
        return winner

    if stalemate_turn_limit and state.turn_count >= stalemate_turn_limit:
        return 1 if p1.stats.momentum >= p2.stats.momentum else 2

    return None
