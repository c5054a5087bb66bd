"""
Arena HTTP request/response models.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class CharacterRequest(BaseModel):
    """角色设定请求"""
    character: str
    world: str
    name: Optional[str] = None


class ActionRequest(BaseModel):
    """对战行动请求（由当前行动方提交）"""
    action: str


class ArenaStateResponse(BaseModel):
    """对战状态快照"""
    state: Dict[str, Any]
    battle_stats: Dict[str, Any] = Field(default_factory=dict)
    can_act: bool = False
    visual_status: str = "disconnected"
    opening_commentary: Optional[str] = None


class CharacterResponse(BaseModel):
    player: int
    battle_started: bool
    commentary: Optional[str] = None
    state: Dict[str, Any]


class ActionResponse(BaseModel):
    """一次行动的结算结果"""
    event: Dict[str, Any]
    winner: Optional[int] = None
    evolution: Optional[Dict[str, Any]] = None
    commentary: Optional[str] = None
    callout: Optional[str] = None
    transformations: Dict[str, str] = Field(default_factory=dict)
    state: Dict[str, Any]


class HistoryResponse(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)


class StatsResponse(BaseModel):
    total_battles: int = 0
    player1_wins: int = 0
    player2_wins: int = 0
    draws: int = 0
    last_played: int = 0


class ArchetypeListResponse(BaseModel):
    archetypes: List[Dict[str, Any]] = Field(default_factory=list)
    arenas: List[Dict[str, str]] = Field(default_factory=list)


class NarrationHealthResponse(BaseModel):
    enabled: bool
    model: str
    timeout_seconds: float
