"""
进化结算结果数据模型
"""
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class EvolutionResult:
    """
    一场对战结束后双方的进化/退化结果

    trigger 只保留最后一次生效的触发标签。
    """

    winner_id: int
    loser_id: int
    winner_new_level: int
    loser_new_level: int
    winner_trigger: str
    loser_trigger: str
    winner_changed: bool
    loser_changed: bool

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "winner": {
                "id": self.winner_id,
                "new_level": self.winner_new_level,
                "trigger": self.winner_trigger,
                "changed": self.winner_changed,
            },
            "loser": {
                "id": self.loser_id,
                "new_level": self.loser_new_level,
                "trigger": self.loser_trigger,
                "changed": self.loser_changed,
            },
        }
