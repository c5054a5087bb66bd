"""
业务逻辑服务包
"""
from .battle_history_store import BattleHistoryStore, BattleRecord, GameStats, SavedCharacters
from .game_flow_service import ActionOutcome, ActionRejectedError, GameFlowService, SetupOutcome
from .narration_service import NarrationService
from .visual_stream import ConnectionStatus, NullVisualStream, VisualStreamClient, VisualStreamError

__all__ = [
    "BattleHistoryStore",
    "BattleRecord",
    "GameStats",
    "SavedCharacters",
    "ActionOutcome",
    "ActionRejectedError",
    "GameFlowService",
    "SetupOutcome",
    "NarrationService",
    "ConnectionStatus",
    "NullVisualStream",
    "VisualStreamClient",
    "VisualStreamError",
]
