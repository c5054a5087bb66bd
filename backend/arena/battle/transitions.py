"""
状态转换请求

每种转换是一个不可变 dataclass，由 ArenaStateMachine.dispatch 按类型分派。
"""
from dataclasses import dataclass
from typing import Optional, Union

from .models.event import EventEntry


@dataclass(frozen=True)
class Connect:
    """连接建立（idle → setup）"""


@dataclass(frozen=True)
class Disconnect:
    """连接断开（清空画面流记录）"""


@dataclass(frozen=True)
class ConnectionFailed:
    """连接失败"""

    error: str


@dataclass(frozen=True)
class SetPlayerName:
    player: int
    name: str


@dataclass(frozen=True)
class SetCharacter:
    """写入角色与世界描述（仅对战前有效）"""

    player: int
    character: str
    world: str


@dataclass(frozen=True)
class StartStream:
    player: int
    stream_id: str


@dataclass(frozen=True)
class EndStream:
    player: int


@dataclass(frozen=True)
class CompleteSetup:
    """一方准备完毕；双方都完成时进入对战"""

    player: int


@dataclass(frozen=True)
class StartBattle:
    """强制进入对战（setup → battle）"""


@dataclass(frozen=True)
class SetProcessing:
    processing: bool


@dataclass(frozen=True)
class ResolveAction:
    """结算一次行动（对战中唯一修改属性的转换）"""

    event: EventEntry


@dataclass(frozen=True)
class SwitchActivePlayer:
    """交换行动方"""


@dataclass(frozen=True)
class DeclareWinner:
    """宣布胜者（battle → victory）"""

    winner: int


@dataclass(frozen=True)
class EvolvePlayer:
    """写入赛后进化等级（仅 victory 阶段）"""

    player: int
    level: int
    trigger: Optional[str] = None


@dataclass(frozen=True)
class Rematch:
    """再战（victory → battle），保留角色、世界与进化等级"""


@dataclass(frozen=True)
class ResetGame:
    """任意阶段 → idle，完全清空"""


Transition = Union[
    Connect,
    Disconnect,
    ConnectionFailed,
    SetPlayerName,
    SetCharacter,
    StartStream,
    EndStream,
    CompleteSetup,
    StartBattle,
    SetProcessing,
    ResolveAction,
    SwitchActivePlayer,
    DeclareWinner,
    EvolvePlayer,
    Rematch,
    ResetGame,
]
