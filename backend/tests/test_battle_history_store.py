from arena.battle.models.arena_state import create_initial_state
from arena.services.battle_history_store import (
    BattleHistoryStore,
    BattleRecord,
    SavedCharacter,
    SavedCharacters,
)


def _record(winner=1, turns=5):
    state = create_initial_state()
    state.winner = winner
    state.turn_count = turns
    state.players[0].stats.momentum = 100
    return BattleRecord.from_state(state)


def test_record_from_state_summarises_final_stats():
    record = _record(winner=2, turns=7)
    assert record.winner == 2
    assert record.turns == 7
    assert record.events == 0
    assert record.player1.final_stats.momentum == 100
    assert record.player2.name == "Player 2"
    assert record.player2.character is None


def test_history_is_newest_first_and_capped(tmp_path):
    store = BattleHistoryStore(path=str(tmp_path / "history.json"), limit=3)
    saved = [_record(turns=i) for i in range(5)]
    for record in saved:
        assert store.save_battle_record(record) is True

    history = store.get_battle_history()
    assert [r.turns for r in history] == [4, 3, 2]

    store.clear_battle_history()
    assert store.get_battle_history() == []


def test_game_stats_totals(tmp_path):
    store = BattleHistoryStore(path=str(tmp_path / "history.json"))
    store.update_game_stats(1)
    store.update_game_stats(2)
    stats = store.update_game_stats(None)
    assert (stats.total_battles, stats.player1_wins, stats.player2_wins, stats.draws) == (3, 1, 1, 1)
    assert store.get_game_stats().last_played > 0

    store.reset_game_stats()
    assert store.get_game_stats().total_battles == 0


def test_last_characters_round_trip(tmp_path):
    store = BattleHistoryStore(path=str(tmp_path / "nested" / "history.json"))
    assert store.get_last_characters() is None
    store.save_last_characters(
        SavedCharacters(player1=SavedCharacter(name="P1", character="A knight", world="Ruins"))
    )
    loaded = store.get_last_characters()
    assert loaded.player1.character == "A knight"
    assert loaded.player2 is None


def test_sections_are_independent(tmp_path):
    store = BattleHistoryStore(path=str(tmp_path / "history.json"))
    store.save_battle_record(_record())
    store.update_game_stats(1)
    store.clear_battle_history()
    assert store.get_game_stats().player1_wins == 1


def test_unwritable_path_is_swallowed(tmp_path):
    store = BattleHistoryStore(path=str(tmp_path))
    assert store.save_battle_record(_record()) is False
    assert store.get_battle_history() == []
    assert store.update_game_stats(1).total_battles == 1


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")
    store = BattleHistoryStore(path=str(path))
    assert store.get_battle_history() == []
    assert store.get_game_stats().total_battles == 0
