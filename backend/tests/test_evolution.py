import random

import pytest

from arena.battle.evolution import (
    evaluate_post_battle_evolution,
    generate_transformation_narration,
    get_evolution_meta,
)
from arena.battle.models.player import PlayerState, PlayerStats


def _player(pid, level=0, momentum=50):
    return PlayerState(id=pid, evolution_level=level, stats=PlayerStats(momentum=momentum))


def test_plain_victory_and_defeat():
    result = evaluate_post_battle_evolution(_player(1, momentum=100), _player(2, momentum=30), turn_count=12)
    assert result.winner_new_level == 1
    assert result.winner_trigger == "Victory"
    assert result.loser_new_level == -1
    assert result.loser_trigger == "Defeat"
    assert result.winner_changed and result.loser_changed


@pytest.mark.parametrize("start_level, expected_trigger", [(0, "Domination victory"), (1, "Victory")])
def test_short_dominant_win_lands_on_cap(start_level, expected_trigger):
    winner = _player(1, level=start_level, momentum=85)
    result = evaluate_post_battle_evolution(winner, _player(2), turn_count=3)
    assert result.winner_new_level == 2
    assert result.winner_trigger == expected_trigger


def test_already_at_cap_does_not_move():
    result = evaluate_post_battle_evolution(_player(1, level=2, momentum=85), _player(2), turn_count=3)
    assert result.winner_new_level == 2
    assert result.winner_changed is False
    assert result.winner_trigger == "Victory"


def test_all_three_bonuses_stack_from_below():
    result = evaluate_post_battle_evolution(_player(1, level=-2, momentum=90), _player(2), turn_count=4)
    assert result.winner_new_level == 1
    assert result.winner_trigger == "Flawless victory"


def test_devastating_defeat_stacks_and_respects_floor():
    result = evaluate_post_battle_evolution(_player(1, momentum=100), _player(2, momentum=5), turn_count=10)
    assert result.loser_new_level == -2
    assert result.loser_trigger == "Devastating defeat"

    floored = evaluate_post_battle_evolution(_player(1, momentum=100), _player(2, level=-2, momentum=0), turn_count=10)
    assert floored.loser_new_level == -2
    assert floored.loser_changed is False
    assert floored.loser_trigger == "Defeat"


def test_meta_for_every_level():
    assert get_evolution_meta(2).name == "Transcendent"
    assert get_evolution_meta(-2).name == "Critical"
    assert get_evolution_meta(0).name == "Base Form"
    assert get_evolution_meta(99).name == "Base Form"


def test_transformation_narration():
    rng = random.Random(0)
    assert generate_transformation_narration("Nyx", 1, 1, rng) == ""
    up = generate_transformation_narration("Nyx", 0, 2, rng)
    down = generate_transformation_narration("Nyx", 0, -1, rng)
    assert "Nyx" in up and "{name}" not in up
    assert "Nyx" in down
