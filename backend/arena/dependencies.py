"""
FastAPI dependencies.
"""
from functools import lru_cache

from arena.services.game_flow_service import GameFlowService


@lru_cache()
def get_game_flow() -> GameFlowService:
    return GameFlowService()
