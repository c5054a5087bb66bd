"""
Battle narration and announcer commentary backed by Gemini.

Every call is best-effort: failures, timeouts and missing configuration
return None so the caller falls back to the local narrative pools.
"""
from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Optional

from google import genai
from google.genai import types

from arena.battle.models.arena_state import ArenaState
from arena.battle.models.player import PlayerState
from arena.config import settings

logger = logging.getLogger(__name__)

_QUOTES = re.compile(r"^[\"']+|[\"']+$")
MAX_NARRATION_CHARS = 400
NARRATION_TEMPERATURE = 0.9


def _strip_quotes(text: str) -> str:
    return _QUOTES.sub("", text.strip()).strip()


def _describe(player: PlayerState) -> str:
    stats = player.stats
    return (
        f"{player.character or player.name} ({player.name})\n"
        f"  Momentum {stats.momentum}/100, Power {stats.power}, "
        f"Defense {stats.defense}, Energy {stats.energy}/100"
    )


class NarrationService:
    """Generate display text for actions, openings and finishes."""

    def __init__(
        self,
        client: Optional[Any] = None,
        *,
        enabled: Optional[bool] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        if enabled is None:
            enabled = settings.narration_enabled and bool(settings.gemini_api_key)
        self.enabled = enabled
        self.model = settings.gemini_flash_model
        self.temperature = NARRATION_TEMPERATURE
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.narration_timeout_seconds
        )
        if client is None and self.enabled:
            client = genai.Client(api_key=settings.gemini_api_key)
        self.client = client

    async def _generate(self, prompt: str, purpose: str) -> Optional[str]:
        if not self.enabled or self.client is None:
            return None
        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.model,
                    contents=[prompt],
                    config=types.GenerateContentConfig(temperature=self.temperature),
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("%s timed out after %.1fs", purpose, self.timeout_seconds)
            return None
        except Exception as exc:
            logger.error("%s failed: %s", purpose, exc, exc_info=True)
            return None

        text = _strip_quotes(getattr(response, "text", None) or "")
        if not text:
            logger.warning("%s returned empty text: model=%s", purpose, self.model)
            return None
        return text[:MAX_NARRATION_CHARS]

    async def narrate_action(self, action: str, state: ArenaState) -> Optional[str]:
        """1-2 sentence narration of the active player's action."""
        attacker = state.get_player(state.active_player)
        defender = state.get_player(2 if state.active_player == 1 else 1)
        prompt = (
            "You are a dramatic battle narrator for an AI arena game. "
            "Be concise and vivid. No emojis.\n\n"
            f"Attacker: {_describe(attacker)}\n\n"
            f"Defender: {_describe(defender)}\n\n"
            f'ACTION: "{action}"\n\n'
            "Describe the result of the action in 1-2 vivid sentences. "
            "Reply with the narration only, no quotes, no prefix."
        )
        return await self._generate(prompt, "action narration")

    async def opening_commentary(
        self, character1: str, character2: str, world: Optional[str] = None
    ) -> Optional[str]:
        where = f" in {world}" if world else ""
        prompt = (
            "You are a legendary sports announcer for an epic AI battle arena. "
            f'Generate ONE electrifying opening line (max 25 words) for a battle between "{character1}" '
            f'and "{character2}"{where}.\n\n'
            "Style: MAXIMUM HYPE. Think UFC announcer meets anime narrator. "
            "Make the audience feel the tension.\n\n"
            "Generate ONE opening line NOW (just the line, no quotes, no prefix):"
        )
        return await self._generate(prompt, "opening commentary")

    async def closing_commentary(
        self, winner: str, loser: str, turns: int, victory_type: str = "standard"
    ) -> Optional[str]:
        emphasis = []
        if victory_type == "flawless":
            emphasis.append("This was a FLAWLESS VICTORY - emphasize total domination!")
        elif victory_type == "domination":
            emphasis.append("This was a DOMINATION - emphasize how one-sided it was!")
        if turns <= 4:
            emphasis.append("This was a QUICK battle - emphasize the speed and power!")
        prompt = (
            "You are a legendary sports announcer calling the end of an epic AI battle.\n\n"
            f'Winner: "{winner}"\n'
            f'Defeated: "{loser}"\n'
            f"Battle Length: {turns} turns\n"
            f"Victory Type: {victory_type}\n\n"
            "Generate ONE dramatic closing line (max 25 words). Make the audience ROAR.\n"
            + "\n".join(emphasis)
            + "\n\nGenerate closing line NOW (just the line, no quotes):"
        )
        return await self._generate(prompt, "closing commentary")

    def health(self) -> dict:
        return {
            "enabled": self.enabled,
            "model": self.model,
            "timeout_seconds": self.timeout_seconds,
        }
