import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from arena.dependencies import get_game_flow
from arena.main import app
from arena.models.api import ActionRequest, CharacterRequest
from arena.routers.arena import get_state, submit_action, submit_character
from arena.services.battle_history_store import BattleHistoryStore
from arena.services.game_flow_service import ActionRejectedError, GameFlowService
from arena.services.visual_stream import NullVisualStream
from arena.utils.rate_limiter import RateLimiter


class _FixedRng:
    def random(self):
        return 0.5

    def choice(self, items):
        return items[0]


class _QuietNarration:
    async def narrate_action(self, action, state):
        return None

    async def opening_commentary(self, character1, character2, world=None):
        return None

    async def closing_commentary(self, winner, loser, turns, victory_type="standard"):
        return None

    def health(self):
        return {"enabled": False, "model": "gemini-test", "timeout_seconds": 2.0}


class _FlowRaises:
    def __init__(self, exc):
        self.exc = exc

    async def submit_action(self, text):
        raise self.exc

    async def submit_character(self, player, character, world, name=None):
        raise self.exc


def _make_flow(tmp_path):
    return GameFlowService(
        narration=_QuietNarration(),
        visual=NullVisualStream(),
        history=BattleHistoryStore(path=str(tmp_path / "history.json")),
        rate_limiter=RateLimiter(100, 60),
        rng=_FixedRng(),
        stalemate_turn_limit=0,
    )


@pytest.mark.asyncio
async def test_submit_action_maps_wrong_phase_to_409():
    flow = _FlowRaises(
        ActionRejectedError(ActionRejectedError.WRONG_PHASE, "not in battle", phase="setup")
    )
    with pytest.raises(HTTPException) as exc_info:
        await submit_action(payload=ActionRequest(action="I attack"), flow=flow)
    assert exc_info.value.status_code == 409
    assert exc_info.value.detail["reason"] == "wrong_phase"
    assert exc_info.value.detail["phase"] == "setup"


@pytest.mark.asyncio
async def test_submit_action_maps_rate_limit_to_429():
    flow = _FlowRaises(
        ActionRejectedError(ActionRejectedError.RATE_LIMITED, "slow down", retry_after=7.5)
    )
    with pytest.raises(HTTPException) as exc_info:
        await submit_action(payload=ActionRequest(action="I attack"), flow=flow)
    assert exc_info.value.status_code == 429
    assert exc_info.value.detail["retry_after"] == 7.5


@pytest.mark.asyncio
async def test_submit_character_maps_invalid_input_to_422():
    flow = _FlowRaises(ActionRejectedError(ActionRejectedError.INVALID_INPUT, "Max 200 characters"))
    with pytest.raises(HTTPException) as exc_info:
        await submit_character(
            player=1,
            payload=CharacterRequest(character="x" * 300, world="Ruins"),
            flow=flow,
        )
    assert exc_info.value.status_code == 422
    assert exc_info.value.detail["message"] == "Max 200 characters"


@pytest.mark.asyncio
async def test_unexpected_error_maps_to_500():
    flow = _FlowRaises(RuntimeError("boom"))
    with pytest.raises(HTTPException) as exc_info:
        await submit_action(payload=ActionRequest(action="I attack"), flow=flow)
    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "boom"


@pytest.mark.asyncio
async def test_get_state_reports_snapshot(tmp_path):
    flow = _make_flow(tmp_path)
    response = await get_state(flow=flow)
    assert response.state["phase"] == "idle"
    assert response.can_act is False
    assert response.visual_status == "disconnected"
    assert response.battle_stats["critical_hits"] == {"player1": 0, "player2": 0}


def test_http_match_flow(tmp_path):
    flow = _make_flow(tmp_path)
    app.dependency_overrides[get_game_flow] = lambda: flow
    try:
        client = TestClient(app)

        early = client.post("/api/arena/actions", json={"action": "I attack him now"})
        assert early.status_code == 409
        assert early.json()["detail"]["reason"] == "wrong_phase"

        started = client.post("/api/arena/start")
        assert started.status_code == 200
        assert started.json()["state"]["phase"] == "setup"

        for player, character in ((1, "A flame knight"), (2, "A frost witch")):
            resp = client.post(
                f"/api/arena/players/{player}/character",
                json={"character": character, "world": "Volcanic arena"},
            )
            assert resp.status_code == 200
        assert resp.json()["battle_started"] is True

        action = client.post("/api/arena/actions", json={"action": "I attack him now"})
        assert action.status_code == 200
        body = action.json()
        assert body["event"]["player"] == 1
        assert body["state"]["turn_count"] == 1
        assert body["state"]["active_player"] == 2

        state = client.get("/api/arena/state").json()
        assert state["can_act"] is True
        assert state["visual_status"] == "streaming"

        stats = client.get("/api/arena/stats").json()
        assert stats["total_battles"] == 0

        health = client.get("/api/arena/narration/health").json()
        assert health == {"enabled": False, "model": "gemini-test", "timeout_seconds": 2.0}
    finally:
        app.dependency_overrides.clear()


def test_archetypes_endpoint_lists_library():
    client = TestClient(app)
    body = client.get("/api/arena/archetypes").json()
    assert len(body["archetypes"]) == 10
    assert len(body["arenas"]) == 5
    assert body["archetypes"][0]["name"] == "Solar Knight"
