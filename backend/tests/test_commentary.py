from arena.battle.commentary import VictoryType, classify_victory, hype_callout
from arena.battle.models.action import ActionType
from arena.battle.models.arena_state import GamePhase, create_initial_state
from arena.battle.models.event import EventEntry, ImpactType
from arena.battle.models.player import StatDelta
from arena.battle.stats import compute_battle_stats


def _battle_state(p1_momentum=50, p2_momentum=50):
    state = create_initial_state()
    state.phase = GamePhase.BATTLE
    state.players[0].stats.momentum = p1_momentum
    state.players[1].stats.momentum = p2_momentum
    return state


def test_classify_victory():
    assert classify_victory(3, 85) == VictoryType.FLAWLESS
    assert classify_victory(12, 80) == VictoryType.FLAWLESS
    assert classify_victory(5, 60) == VictoryType.DOMINATION
    assert classify_victory(6, 79) == VictoryType.STANDARD


def test_no_callout_without_events_or_outside_battle():
    state = _battle_state()
    assert hype_callout(state) is None
    state.event_log.append(EventEntry(player=1, action="a", result="b"))
    state.phase = GamePhase.VICTORY
    assert hype_callout(state) is None


def test_opponent_on_the_ropes():
    state = _battle_state(p1_momentum=70, p2_momentum=15)
    state.event_log.append(EventEntry(player=1, action="a", result="b"))
    assert hype_callout(state) == "Player 2 is on the ropes!"
    state.players[1].character = "A frost witch"
    assert hype_callout(state) == "A frost witch is on the ropes!"


def test_comeback_critical():
    state = _battle_state(p1_momentum=25, p2_momentum=60)
    state.event_log.append(EventEntry(player=1, action="a", result="b", impact_type=ImpactType.CRITICAL))
    assert hype_callout(state) == "Against all odds!"


def test_close_battle():
    state = _battle_state(p1_momentum=35, p2_momentum=38)
    state.event_log.append(EventEntry(player=2, action="a", result="b"))
    assert hype_callout(state) == "It's anyone's game!"


def test_combo_banners():
    state = _battle_state()
    state.event_log.append(EventEntry(player=1, action="a", result="b", combo_count=3))
    assert hype_callout(state) == "UNSTOPPABLE!"
    state.event_log.append(EventEntry(player=1, action="a", result="b", combo_count=4))
    assert hype_callout(state) is None
    state.event_log.append(EventEntry(player=1, action="a", result="b", combo_count=6))
    assert hype_callout(state) == "LEGENDARY STREAK!"


def test_battle_stats_from_event_log():
    log = [
        EventEntry(
            player=1,
            action="a",
            result="b",
            player1_changes=StatDelta(momentum=12, energy=-10),
            player2_changes=StatDelta(momentum=-7),
            impact_type=ImpactType.STRONG,
            action_type=ActionType.OFFENSIVE,
        ),
        EventEntry(
            player=2,
            action="a",
            result="b",
            player1_changes=StatDelta(momentum=-18),
            player2_changes=StatDelta(momentum=30, energy=-38),
            impact_type=ImpactType.CRITICAL,
            action_type=ActionType.SPECIAL,
        ),
        EventEntry(
            player=1,
            action="a",
            result="b",
            player1_changes=StatDelta(momentum=15),
            player2_changes=StatDelta(momentum=-9),
            impact_type=ImpactType.STRONG,
            action_type=ActionType.OFFENSIVE,
            combo_count=2,
        ),
    ]
    stats = compute_battle_stats(log)
    assert stats.total_damage_dealt == {1: 16, 2: 18}
    assert stats.critical_hits == {1: 0, 2: 1}
    assert stats.max_combo == {1: 2, 2: 1}
    assert compute_battle_stats([]).to_dict()["max_combo"] == {"player1": 0, "player2": 0}
