"""Arena battle core: classification, scoring, state machine and evolution."""

from .classifier import analyze_action
from .scoring import calculate_stat_changes, create_event_entry, determine_impact
from .state_machine import (
    ArenaStateMachine,
    can_player_act,
    get_active_player,
    get_opponent,
    get_recent_events,
)
from .victory import check_victory_condition
from .evolution import evaluate_post_battle_evolution, get_evolution_meta
from .stats import compute_battle_stats
from .commentary import VictoryType, classify_victory, hype_callout

__all__ = [
    "analyze_action",
    "calculate_stat_changes",
    "create_event_entry",
    "determine_impact",
    "ArenaStateMachine",
    "can_player_act",
    "get_active_player",
    "get_opponent",
    "get_recent_events",
    "check_victory_condition",
    "evaluate_post_battle_evolution",
    "get_evolution_meta",
    "compute_battle_stats",
    "VictoryType",
    "classify_victory",
    "hype_callout",
]
