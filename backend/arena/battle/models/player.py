"""
对战玩家数据模型
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

STAT_MIN = 0
STAT_MAX = 100

EVOLUTION_MIN = -2
EVOLUTION_MAX = 2

STAT_FIELDS = ("momentum", "power", "defense", "energy")


def clamp(value: float, low: float, high: float):
    """把数值夹在 [low, high] 之内"""
    return min(max(value, low), high)


def clamp_evolution_level(level: int) -> int:
    """进化等级只能是 -2..2 之间的整数"""
    return int(clamp(int(level), EVOLUTION_MIN, EVOLUTION_MAX))


@dataclass(frozen=True)
class StatDelta:
    """
    一次行动对某一方属性的增量（可能越界，应用时再夹取）
    """

    momentum: int = 0
    power: int = 0
    defense: int = 0
    energy: int = 0

    def to_dict(self) -> Dict[str, int]:
        """只输出非零字段（部分增量）"""
        return {name: getattr(self, name) for name in STAT_FIELDS if getattr(self, name)}


@dataclass
class PlayerStats:
    """
    玩家属性

    四项属性始终位于 [0, 100]：
    - momentum: 主胜负轴（到 100 胜，到 0 负）
    - power: 进攻倍率
    - defense: 减伤倍率
    - energy: 行动资源（只有上下限，不是失败条件）
    """

    momentum: int = 50
    power: int = 50
    defense: int = 50
    energy: int = 100

    def __post_init__(self):
        for name in STAT_FIELDS:
            setattr(self, name, int(clamp(getattr(self, name), STAT_MIN, STAT_MAX)))

    def apply_delta(self, delta: Optional[StatDelta]) -> "PlayerStats":
        """
        应用增量（原地修改，所有字段夹取到 [0, 100]）

        Returns:
            PlayerStats: self，便于链式调用
        """
        if delta is None:
            return self
        for name in STAT_FIELDS:
            current = getattr(self, name)
            setattr(self, name, int(clamp(current + getattr(delta, name), STAT_MIN, STAT_MAX)))
        return self

    def copy(self) -> "PlayerStats":
        return PlayerStats(
            momentum=self.momentum,
            power=self.power,
            defense=self.defense,
            energy=self.energy,
        )

    def to_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in STAT_FIELDS}


def create_default_stats() -> PlayerStats:
    """默认开局属性"""
    return PlayerStats(momentum=50, power=50, defense=50, energy=100)


@dataclass
class PlayerState:
    """
    玩家状态

    生命周期：
    - idle 时创建为空
    - setup 阶段写入角色/世界描述
    - 对战中每次结算修改 stats
    - 每场结束后修改 evolution_level
    - reset 全部重置；rematch 保留角色、世界与进化等级
    """

    # ===== 身份 =====
    id: int  # 1 或 2
    name: str = ""

    # ===== 角色设定（setup 阶段写入，对战中不可变） =====
    character: str = ""
    world: str = ""
    character_prompt: str = ""

    # ===== 属性 =====
    stats: PlayerStats = field(default_factory=create_default_stats)
    evolution_level: int = 0

    # ===== setup 记录 =====
    is_setup_complete: bool = False

    # ===== 画面流记录（外部协作方所有，不影响规则） =====
    stream_id: Optional[str] = None
    is_streaming: bool = False

    def __post_init__(self):
        if not self.name:
            self.name = f"Player {self.id}"
        self.evolution_level = clamp_evolution_level(self.evolution_level)

    @property
    def display_name(self) -> str:
        """优先使用角色描述作为显示名"""
        return self.character or self.name

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "id": self.id,
            "name": self.name,
            "character": self.character,
            "world": self.world,
            "character_prompt": self.character_prompt,
            "stats": self.stats.to_dict(),
            "evolution_level": self.evolution_level,
            "is_setup_complete": self.is_setup_complete,
            "stream_id": self.stream_id,
            "is_streaming": self.is_streaming,
        }


def create_player_state(player_id: int) -> PlayerState:
    """创建空白玩家"""
    return PlayerState(id=player_id, name=f"Player {player_id}")
