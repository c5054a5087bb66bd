"""
Arena API routes (one in-process match per app).
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from arena.battle.character_library import ARENA_PRESETS, CHARACTER_ARCHETYPES
from arena.battle.state_machine import can_player_act
from arena.dependencies import get_game_flow
from arena.models.api import (
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
from arena.services.game_flow_service import ActionRejectedError, GameFlowService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/arena", tags=["Arena"])

RECENT_EVENT_COUNT = 10


def _map_exception_to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, ActionRejectedError):
        if exc.reason == ActionRejectedError.RATE_LIMITED:
            status_code = 429
        elif exc.reason == ActionRejectedError.INVALID_INPUT:
            status_code = 422
        else:
            status_code = 409
        return HTTPException(status_code=status_code, detail=exc.to_http_detail())
    logger.error("arena request failed: %s", exc, exc_info=True)
    return HTTPException(status_code=500, detail=str(exc))


def _snapshot(flow: GameFlowService) -> ArenaStateResponse:
    state = flow.state
    return ArenaStateResponse(
        state=state.to_dict(recent_events=RECENT_EVENT_COUNT),
        battle_stats=flow.battle_stats(),
        can_act=can_player_act(state),
        visual_status=flow.visual.status.value,
        opening_commentary=flow.opening_commentary,
    )


@router.get("/state", response_model=ArenaStateResponse)
async def get_state(flow: GameFlowService = Depends(get_game_flow)):
    """当前对战状态（事件日志只返回最近 10 条）"""
    return _snapshot(flow)


@router.post("/start", response_model=ArenaStateResponse)
async def start_game(flow: GameFlowService = Depends(get_game_flow)):
    try:
        await flow.start_game()
    except Exception as exc:
        raise _map_exception_to_http(exc) from exc
    return _snapshot(flow)


@router.post("/players/{player}/character", response_model=CharacterResponse)
async def submit_character(
    player: int,
    payload: CharacterRequest,
    flow: GameFlowService = Depends(get_game_flow),
):
    """提交一方的角色与世界描述"""
    try:
        outcome = await flow.submit_character(player, payload.character, payload.world, payload.name)
    except Exception as exc:
        raise _map_exception_to_http(exc) from exc
    return CharacterResponse(**outcome.to_dict(), state=flow.state.to_dict(recent_events=RECENT_EVENT_COUNT))


@router.post("/actions", response_model=ActionResponse)
async def submit_action(payload: ActionRequest, flow: GameFlowService = Depends(get_game_flow)):
    """当前行动方提交一次行动"""
    try:
        outcome = await flow.submit_action(payload.action)
    except Exception as exc:
        raise _map_exception_to_http(exc) from exc
    return ActionResponse(**outcome.to_dict(), state=flow.state.to_dict(recent_events=RECENT_EVENT_COUNT))


@router.post("/rematch", response_model=ArenaStateResponse)
async def rematch(flow: GameFlowService = Depends(get_game_flow)):
    try:
        await flow.rematch()
    except Exception as exc:
        raise _map_exception_to_http(exc) from exc
    return _snapshot(flow)


@router.post("/reset", response_model=ArenaStateResponse)
async def reset_game(flow: GameFlowService = Depends(get_game_flow)):
    try:
        await flow.reset_game()
    except Exception as exc:
        raise _map_exception_to_http(exc) from exc
    return _snapshot(flow)


@router.get("/history", response_model=HistoryResponse)
async def get_history(flow: GameFlowService = Depends(get_game_flow)):
    records = flow.history.get_battle_history()
    return HistoryResponse(records=[record.model_dump() for record in records])


@router.get("/stats", response_model=StatsResponse)
async def get_stats(flow: GameFlowService = Depends(get_game_flow)):
    return StatsResponse(**flow.history.get_game_stats().model_dump())


@router.get("/archetypes", response_model=ArchetypeListResponse)
async def list_archetypes():
    """预置角色与场地"""
    return ArchetypeListResponse(
        archetypes=[archetype.to_dict() for archetype in CHARACTER_ARCHETYPES],
        arenas=[{"name": preset.name, "description": preset.description} for preset in ARENA_PRESETS],
    )


@router.get("/narration/health", response_model=NarrationHealthResponse)
async def narration_health(flow: GameFlowService = Depends(get_game_flow)):
    return NarrationHealthResponse(**flow.narration.health())
