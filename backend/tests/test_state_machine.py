import pytest

from arena.battle.models.arena_state import GamePhase, create_initial_state
from arena.battle.models.event import EventEntry
from arena.battle.models.player import PlayerStats, StatDelta
from arena.battle.evolution import evaluate_post_battle_evolution
from arena.battle.state_machine import (
    ArenaStateMachine,
    can_player_act,
    get_active_player,
    get_opponent,
    get_recent_events,
)
from arena.battle.transitions import (
    CompleteSetup,
    Connect,
    ConnectionFailed,
    DeclareWinner,
    EvolvePlayer,
    Rematch,
    ResetGame,
    ResolveAction,
    SetCharacter,
    SetPlayerName,
    SetProcessing,
    StartBattle,
    SwitchActivePlayer,
)
from arena.battle.victory import check_victory_condition


def _event(player, p1=None, p2=None):
    return EventEntry(
        player=player,
        action="test action",
        result="test result",
        player1_changes=p1 or StatDelta(),
        player2_changes=p2 or StatDelta(),
    )


def _battle_machine():
    machine = ArenaStateMachine()
    machine.dispatch(Connect())
    machine.dispatch(SetCharacter(player=1, character="A flame knight", world="Volcano"))
    machine.dispatch(SetCharacter(player=2, character="A frost witch", world="Glacier"))
    machine.dispatch(CompleteSetup(player=1))
    machine.dispatch(CompleteSetup(player=2))
    return machine


def test_connect_moves_idle_to_setup():
    machine = ArenaStateMachine()
    machine.dispatch(Connect())
    assert machine.phase == GamePhase.SETUP
    assert machine.state.is_connected is True


def test_connection_failure_is_recorded_but_not_blocking():
    machine = ArenaStateMachine()
    machine.dispatch(ConnectionFailed(error="stream offline"))
    machine.dispatch(Connect())
    assert machine.phase == GamePhase.SETUP
    assert machine.state.connection_error == "stream offline"


def test_set_character_derives_prompt():
    machine = ArenaStateMachine()
    machine.dispatch(Connect())
    machine.dispatch(SetCharacter(player=1, character="A flame knight", world="Volcano"))
    player = machine.state.get_player(1)
    assert player.character == "A flame knight"
    assert "A flame knight" in player.character_prompt
    assert "Volcano" in player.character_prompt


def test_setup_join_waits_for_both_players():
    machine = ArenaStateMachine()
    machine.dispatch(Connect())
    machine.dispatch(CompleteSetup(player=2))
    assert machine.phase == GamePhase.SETUP
    assert machine.state.setup_player == 1

    machine.dispatch(CompleteSetup(player=1))
    assert machine.phase == GamePhase.BATTLE
    assert machine.state.active_player == 1


def test_setup_player_flips_after_first_completion():
    machine = ArenaStateMachine()
    machine.dispatch(Connect())
    machine.dispatch(CompleteSetup(player=1))
    assert machine.state.setup_player == 2


def test_start_battle_only_from_setup():
    machine = ArenaStateMachine()
    machine.dispatch(StartBattle())
    assert machine.phase == GamePhase.IDLE
    machine.dispatch(Connect())
    machine.dispatch(StartBattle())
    assert machine.phase == GamePhase.BATTLE


def test_characters_are_frozen_once_battle_starts():
    machine = _battle_machine()
    machine.dispatch(SetCharacter(player=1, character="Someone else", world="Elsewhere"))
    machine.dispatch(SetPlayerName(player=1, name="Renamed"))
    player = machine.state.get_player(1)
    assert player.character == "A flame knight"
    assert player.name == "Player 1"


def test_resolve_action_applies_clamped_deltas():
    machine = _battle_machine()
    machine.dispatch(SetProcessing(processing=True))
    machine.dispatch(
        ResolveAction(event=_event(1, p1=StatDelta(momentum=500, energy=-500), p2=StatDelta(momentum=-500)))
    )
    p1, p2 = machine.state.players
    assert p1.stats.momentum == 100
    assert p1.stats.energy == 0
    assert p2.stats.momentum == 0
    assert machine.state.turn_count == 1
    assert machine.state.is_processing is False
    assert len(machine.state.event_log) == 1


def test_stats_stay_in_bounds_over_many_actions():
    machine = _battle_machine()
    deltas = [37, -81, 12, 64, -5, -99, 100, 3]
    for i, value in enumerate(deltas):
        player = 1 if i % 2 == 0 else 2
        machine.dispatch(
            ResolveAction(
                event=_event(
                    player,
                    p1=StatDelta(momentum=value, power=value, energy=-value),
                    p2=StatDelta(momentum=-value, defense=value),
                )
            )
        )
        for p in machine.state.players:
            for stat in p.stats.to_dict().values():
                assert 0 <= stat <= 100


def test_switch_active_player():
    machine = _battle_machine()
    machine.dispatch(SwitchActivePlayer())
    assert machine.state.active_player == 2
    assert get_active_player(machine.state).id == 2
    assert get_opponent(machine.state).id == 1
    machine.dispatch(SwitchActivePlayer())
    assert machine.state.active_player == 1


def test_momentum_push_declares_winner_and_evolves():
    machine = _battle_machine()
    for _ in range(2):
        machine.dispatch(ResolveAction(event=_event(1, p1=StatDelta(momentum=25), p2=StatDelta(momentum=-10))))
        assert machine.state.winner is None

    winner = check_victory_condition(machine.state)
    assert winner == 1
    machine.dispatch(DeclareWinner(winner=winner))
    assert machine.phase == GamePhase.VICTORY

    state = machine.state
    result = evaluate_post_battle_evolution(state.get_player(1), state.get_player(2), state.turn_count)
    machine.dispatch(EvolvePlayer(player=1, level=result.winner_new_level, trigger=result.winner_trigger))
    machine.dispatch(EvolvePlayer(player=2, level=result.loser_new_level, trigger=result.loser_trigger))
    assert machine.state.get_player(1).evolution_level >= 1
    assert machine.state.get_player(2).evolution_level == -1


def test_no_stat_changes_after_winner():
    machine = _battle_machine()
    machine.dispatch(DeclareWinner(winner=2))
    before = [p.stats.copy() for p in machine.state.players]
    machine.dispatch(ResolveAction(event=_event(1, p1=StatDelta(momentum=30))))
    assert [p.stats for p in machine.state.players] == before
    assert machine.state.event_log == []


def test_evolve_player_is_clamped_and_victory_only():
    machine = _battle_machine()
    machine.dispatch(EvolvePlayer(player=1, level=2))
    assert machine.state.get_player(1).evolution_level == 0

    machine.dispatch(DeclareWinner(winner=1))
    machine.dispatch(EvolvePlayer(player=1, level=7))
    machine.dispatch(EvolvePlayer(player=2, level=-9))
    assert machine.state.get_player(1).evolution_level == 2
    assert machine.state.get_player(2).evolution_level == -2


def test_rematch_keeps_identity_and_resets_stats():
    machine = _battle_machine()
    machine.dispatch(ResolveAction(event=_event(1, p1=StatDelta(momentum=50))))
    machine.dispatch(DeclareWinner(winner=1))
    machine.dispatch(EvolvePlayer(player=1, level=1))
    machine.dispatch(EvolvePlayer(player=2, level=-1))

    machine.dispatch(Rematch())
    state = machine.state
    assert state.phase == GamePhase.BATTLE
    assert state.event_log == []
    assert state.winner is None
    assert state.active_player == 1
    assert state.turn_count == 0
    p1, p2 = state.players
    assert (p1.character, p1.world, p1.evolution_level) == ("A flame knight", "Volcano", 1)
    assert (p2.character, p2.world, p2.evolution_level) == ("A frost witch", "Glacier", -1)
    assert p1.stats == PlayerStats(momentum=50, power=50, defense=50, energy=100)
    assert p2.stats == PlayerStats(momentum=50, power=50, defense=50, energy=100)


def test_rematch_outside_victory_is_ignored():
    machine = _battle_machine()
    machine.dispatch(ResolveAction(event=_event(1, p1=StatDelta(momentum=10))))
    machine.dispatch(Rematch())
    assert machine.state.turn_count == 1


@pytest.mark.parametrize("phase_steps", [0, 1, 2, 3])
def test_reset_from_any_phase_yields_initial_state(phase_steps):
    machine = ArenaStateMachine()
    if phase_steps >= 1:
        machine.dispatch(Connect())
        machine.dispatch(SetCharacter(player=1, character="A flame knight", world="Volcano"))
    if phase_steps >= 2:
        machine.dispatch(CompleteSetup(player=1))
        machine.dispatch(CompleteSetup(player=2))
        machine.dispatch(ResolveAction(event=_event(1, p1=StatDelta(momentum=20))))
    if phase_steps >= 3:
        machine.dispatch(DeclareWinner(winner=1))
        machine.dispatch(EvolvePlayer(player=1, level=2))

    machine.dispatch(ResetGame())
    assert machine.state == create_initial_state()
    machine.dispatch(ResetGame())
    assert machine.state == create_initial_state()


def test_unknown_transition_raises_type_error():
    machine = ArenaStateMachine()
    with pytest.raises(TypeError):
        machine.dispatch(object())


def test_selectors():
    machine = _battle_machine()
    assert can_player_act(machine.state) is True

    machine.dispatch(SetProcessing(processing=True))
    assert can_player_act(machine.state) is False
    machine.dispatch(SetProcessing(processing=False))

    for _ in range(12):
        machine.dispatch(ResolveAction(event=_event(1, p1=StatDelta(energy=-10))))
    assert can_player_act(machine.state) is False
    assert len(get_recent_events(machine.state)) == 10
    assert len(get_recent_events(machine.state, 3)) == 3
    assert get_recent_events(machine.state, 0) == []
