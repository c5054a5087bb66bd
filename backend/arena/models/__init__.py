"""
API 数据模型
"""
from .api import (
    ActionRequest,
    ActionResponse,
    ArchetypeListResponse,
    ArenaStateResponse,
    CharacterRequest,
    CharacterResponse,
    HistoryResponse,
    NarrationHealthResponse,
    StatsResponse,
)

__all__ = [
    "ActionRequest",
    "ActionResponse",
    "ArchetypeListResponse",
    "ArenaStateResponse",
    "CharacterRequest",
    "CharacterResponse",
    "HistoryResponse",
    "NarrationHealthResponse",
    "StatsResponse",
]
