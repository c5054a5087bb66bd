"""Data models for the arena battle core."""

from .player import (
    EVOLUTION_MAX,
    EVOLUTION_MIN,
    PlayerState,
    PlayerStats,
    StatDelta,
    clamp,
    clamp_evolution_level,
    create_default_stats,
    create_player_state,
)
from .action import ActionAnalysis, ActionType, Intensity, MomentumDeltas
from .event import EventEntry, ImpactType
from .arena_state import ArenaState, BattleStats, GamePhase, create_initial_state
from .evolution_result import EvolutionResult

__all__ = [
    "EVOLUTION_MAX",
    "EVOLUTION_MIN",
    "PlayerState",
    "PlayerStats",
    "StatDelta",
    "clamp",
    "clamp_evolution_level",
    "create_default_stats",
    "create_player_state",
    "ActionAnalysis",
    "ActionType",
    "Intensity",
    "MomentumDeltas",
    "EventEntry",
    "ImpactType",
    "ArenaState",
    "BattleStats",
    "GamePhase",
    "create_initial_state",
    "EvolutionResult",
]
