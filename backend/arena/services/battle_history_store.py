"""
Battle history persistence (single JSON file).

Stores finished-battle summaries, win totals, and the last characters used.
Writes never raise: a broken disk must not affect the match in memory.
"""
from __future__ import annotations

import json
import logging
import time
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from arena.battle.models.arena_state import ArenaState
from arena.config import settings

logger = logging.getLogger(__name__)


class FinalStats(BaseModel):
    momentum: int
    power: int
    defense: int
    energy: int


class BattleParticipant(BaseModel):
    name: str
    character: Optional[str] = None
    final_stats: FinalStats


class BattleRecord(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: int = Field(default_factory=lambda: int(time.time() * 1000))
    player1: BattleParticipant
    player2: BattleParticipant
    winner: Optional[int] = None
    turns: int = 0
    events: int = 0

    @classmethod
    def from_state(cls, state: ArenaState) -> "BattleRecord":
        participants = [
            BattleParticipant(
                name=player.name,
                character=player.character or None,
                final_stats=FinalStats(**player.stats.to_dict()),
            )
            for player in state.players
        ]
        return cls(
            player1=participants[0],
            player2=participants[1],
            winner=state.winner,
            turns=state.turn_count,
            events=len(state.event_log),
        )


class GameStats(BaseModel):
    total_battles: int = 0
    player1_wins: int = 0
    player2_wins: int = 0
    draws: int = 0
    last_played: int = 0


class SavedCharacter(BaseModel):
    name: str
    character: str
    world: str


class SavedCharacters(BaseModel):
    player1: Optional[SavedCharacter] = None
    player2: Optional[SavedCharacter] = None


class BattleHistoryStore:
    """JSON-file store for battle records, totals and last characters."""

    HISTORY_KEY = "battle_history"
    STATS_KEY = "game_stats"
    CHARACTERS_KEY = "last_characters"

    def __init__(self, path: Optional[str] = None, limit: Optional[int] = None) -> None:
        self.path = Path(path or settings.battle_history_path)
        self.limit = limit if limit is not None else settings.battle_history_limit

    # ----- file io -----

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("failed to read battle history %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("failed to write battle history %s: %s", self.path, exc)
            return False
        return True

    def _update(self, key: str, value: Any) -> bool:
        data = self._load()
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value
        return self._write(data)

    # ----- battle history -----

    def save_battle_record(self, record: BattleRecord) -> bool:
        """Prepend a record and keep only the newest ``limit`` entries."""
        history = [item.model_dump() for item in self.get_battle_history()]
        history.insert(0, record.model_dump())
        saved = self._update(self.HISTORY_KEY, history[: self.limit])
        if saved:
            logger.info("battle record saved: id=%s winner=%s", record.id, record.winner)
        return saved

    def get_battle_history(self) -> List[BattleRecord]:
        records = []
        for item in self._load().get(self.HISTORY_KEY) or []:
            try:
                records.append(BattleRecord.model_validate(item))
            except ValidationError as exc:
                logger.warning("skipping malformed battle record: %s", exc)
        return records

    def clear_battle_history(self) -> bool:
        return self._update(self.HISTORY_KEY, None)

    # ----- totals -----

    def update_game_stats(self, winner: Optional[int]) -> GameStats:
        stats = self.get_game_stats()
        stats.total_battles += 1
        stats.last_played = int(time.time() * 1000)
        if winner == 1:
            stats.player1_wins += 1
        elif winner == 2:
            stats.player2_wins += 1
        else:
            stats.draws += 1
        self._update(self.STATS_KEY, stats.model_dump())
        return stats

    def get_game_stats(self) -> GameStats:
        raw = self._load().get(self.STATS_KEY)
        if not raw:
            return GameStats()
        try:
            return GameStats.model_validate(raw)
        except ValidationError as exc:
            logger.warning("malformed game stats, using defaults: %s", exc)
            return GameStats()

    def reset_game_stats(self) -> bool:
        return self._update(self.STATS_KEY, None)

    # ----- last characters -----

    def save_last_characters(self, characters: SavedCharacters) -> bool:
        return self._update(self.CHARACTERS_KEY, characters.model_dump(exclude_none=True))

    def get_last_characters(self) -> Optional[SavedCharacters]:
        raw = self._load().get(self.CHARACTERS_KEY)
        if not raw:
            return None
        try:
            return SavedCharacters.model_validate(raw)
        except ValidationError as exc:
            logger.warning("malformed last characters: %s", exc)
            return None
