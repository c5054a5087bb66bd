#!/usr/bin/env python3
"""
Odyssey Arena - 本地双人对战 CLI

直接调用 GameFlowService 的热座（hot-seat）命令行工具，无需启动HTTP服务器。

功能：
- 双方依次设定角色与世界（可输入预置角色名快速选择）
- 轮流输入行动，查看动量/能量变化与事件日志
- 胜负判定后显示进化结果，可再战或重置

使用方式:
    cd backend
    python play_cli.py
    python play_cli.py --seed 42
"""
import asyncio
import random
import sys
from pathlib import Path
from typing import Optional

# 添加项目根目录到路径
sys.path.insert(0, str(Path(__file__).parent))

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from arena.battle.character_library import CHARACTER_ARCHETYPES, get_archetype
from arena.battle.evolution import get_evolution_meta
from arena.battle.models.arena_state import ArenaState, GamePhase
from arena.battle.state_machine import get_recent_events
from arena.services.game_flow_service import ActionOutcome, ActionRejectedError, GameFlowService


# ==================== 配置 ====================

COLORS = {
    1: "bright_cyan",
    2: "bright_magenta",
    "system": "bright_yellow",
    "error": "bright_red",
    "hint": "dim",
    "critical": "bold red",
    "strong": "bold yellow",
    "normal": "white",
    "weak": "dim white",
    "miss": "dim",
}

EVENT_LOG_LINES = 6


# ==================== 显示渲染 ====================

class ArenaRenderer:
    """对战界面渲染器"""

    def __init__(self):
        self.console = Console()

    def print_banner(self):
        self.console.print(
            Panel.fit(
                "[bold]ODYSSEY ARENA[/bold]\n[dim]describe your move, win the momentum[/dim]",
                border_style="bright_blue",
            )
        )

    def print_help(self):
        self.console.print(
            "[bold]命令:[/bold]\n"
            "  /rematch   胜负已分后再战（保留角色与进化等级）\n"
            "  /reset     完全重置\n"
            "  /history   最近的对战记录\n"
            "  /log       最近的事件日志\n"
            "  /quit      退出\n"
            "其余输入作为当前行动方的行动。",
            style=COLORS["hint"],
        )

    def print_system(self, message: str):
        self.console.print(f"[{COLORS['system']}]{message}[/{COLORS['system']}]")

    def print_error(self, message: str):
        self.console.print(f"[{COLORS['error']}]✗ {message}[/{COLORS['error']}]")

    def print_hint(self, message: str):
        self.console.print(f"[dim]{message}[/dim]")

    def print_archetypes(self):
        table = Table(title="预置角色", show_lines=False)
        table.add_column("名称", style="bold")
        table.add_column("类别", style="dim")
        table.add_column("角色")
        for archetype in CHARACTER_ARCHETYPES:
            table.add_row(archetype.name, archetype.category.value, archetype.character[:60] + "...")
        self.console.print(table)

    def print_stats(self, state: ArenaState):
        table = Table(show_header=True, header_style="bold")
        table.add_column("")
        for stat in ("momentum", "power", "defense", "energy"):
            table.add_column(stat, justify="right")
        table.add_column("form")
        for player in state.players:
            meta = get_evolution_meta(player.evolution_level)
            marker = "▶ " if state.phase == GamePhase.BATTLE and state.active_player == player.id else "  "
            stats = player.stats
            table.add_row(
                f"[{COLORS[player.id]}]{marker}{player.name}[/{COLORS[player.id]}]",
                str(stats.momentum),
                str(stats.power),
                str(stats.defense),
                str(stats.energy),
                f"{meta.indicator} {meta.name}",
            )
        self.console.print(table)

    def print_event_log(self, state: ArenaState):
        for event in get_recent_events(state, EVENT_LOG_LINES):
            color = COLORS.get(event.impact_type.value, "white")
            combo = f" x{event.combo_count}" if event.combo_count > 1 else ""
            self.console.print(
                f"[{COLORS[event.player]}]P{event.player}[/{COLORS[event.player]}] "
                f"{event.action} → [{color}]{event.result}[/{color}]"
                f"[dim] ({event.impact_type.value}{combo})[/dim]"
            )

    def print_outcome(self, outcome: ActionOutcome, state: ArenaState):
        event = outcome.event
        color = COLORS.get(event.impact_type.value, "white")
        self.console.print(
            Panel(
                f"[{color}]{event.result}[/{color}]",
                title=f"{event.impact_type.value.upper()}",
                border_style=COLORS[event.player],
            )
        )
        if outcome.callout:
            self.console.print(f"[bold]{outcome.callout}[/bold]")
        if outcome.winner is None:
            return

        winner = state.get_player(outcome.winner)
        self.console.print(
            Panel(
                f"[bold]{winner.name} WINS![/bold]\n{outcome.commentary or ''}".rstrip(),
                title="VICTORY",
                border_style="bold green",
            )
        )
        if outcome.evolution:
            evo = outcome.evolution
            self.print_system(
                f"P{evo.winner_id}: {evo.winner_trigger} → level {evo.winner_new_level}   "
                f"P{evo.loser_id}: {evo.loser_trigger} → level {evo.loser_new_level}"
            )
        for text in outcome.transformations.values():
            self.console.print(f"[italic]{text}[/italic]")

    def get_input(self, prompt: str) -> str:
        try:
            return Prompt.ask(prompt)
        except (KeyboardInterrupt, EOFError):
            return "/quit"


# ==================== 对战主类 ====================

class ArenaCLI:
    """热座对战 CLI"""

    def __init__(self, seed: Optional[int] = None):
        rng = random.Random(seed) if seed is not None else None
        self.flow = GameFlowService(rng=rng)
        self.renderer = ArenaRenderer()
        self.running = True

    async def start(self):
        self.renderer.print_banner()
        await self.flow.start_game()
        if self.flow.state.connection_error:
            self.renderer.print_hint(f"visual stream unavailable: {self.flow.state.connection_error}")
        await self.setup_players()
        self.renderer.print_help()
        await self.main_loop()

    async def setup_players(self):
        self.renderer.print_archetypes()
        last = self.flow.history.get_last_characters()
        for player_id in (1, 2):
            while True:
                previous = getattr(last, f"player{player_id}", None) if last else None
                default = previous.character if previous else ""
                character = self.renderer.get_input(
                    f"[{COLORS[player_id]}]P{player_id} character (or archetype name)[/{COLORS[player_id]}]"
                    + (f" [dim](enter = last)[/dim]" if default else "")
                )
                if character == "/quit":
                    self.running = False
                    return
                if not character.strip() and previous:
                    character, world = previous.character, previous.world
                else:
                    archetype = get_archetype(character)
                    if archetype:
                        character, world = archetype.character, archetype.world
                    else:
                        world = self.renderer.get_input(f"[{COLORS[player_id]}]P{player_id} world[/{COLORS[player_id]}]")
                try:
                    outcome = await self.flow.submit_character(player_id, character, world)
                except ActionRejectedError as exc:
                    self.renderer.print_error(exc.message)
                    continue
                break
        if outcome.commentary:
            self.renderer.print_system(outcome.commentary)
        self.renderer.print_stats(self.flow.state)

    async def main_loop(self):
        while self.running:
            state = self.flow.state
            if state.phase == GamePhase.BATTLE:
                active = state.get_player(state.active_player)
                prompt = f"[{COLORS[active.id]}]{active.name}[/{COLORS[active.id]}] action"
            else:
                prompt = "[dim]/rematch /reset /history /quit[/dim]"
            user_input = self.renderer.get_input(prompt).strip()
            if not user_input:
                continue
            try:
                await self.handle_input(user_input)
            except ActionRejectedError as exc:
                self.renderer.print_error(f"{exc.reason}: {exc.message}")

    async def handle_input(self, user_input: str):
        if user_input.startswith("/"):
            await self._handle_slash_command(user_input.lower())
            return
        outcome = await self.flow.submit_action(user_input)
        self.renderer.print_outcome(outcome, self.flow.state)
        self.renderer.print_stats(self.flow.state)

    async def _handle_slash_command(self, command: str):
        if command in ("/quit", "/exit"):
            self.running = False
        elif command == "/rematch":
            await self.flow.rematch()
            self.renderer.print_system("Rematch! Same fighters, fresh momentum.")
            self.renderer.print_stats(self.flow.state)
        elif command == "/reset":
            await self.flow.reset_game()
            await self.flow.start_game()
            await self.setup_players()
        elif command == "/history":
            self.cmd_history()
        elif command == "/log":
            self.renderer.print_event_log(self.flow.state)
        else:
            self.renderer.print_help()

    def cmd_history(self):
        records = self.flow.history.get_battle_history()
        stats = self.flow.history.get_game_stats()
        table = Table(title=f"battles {stats.total_battles}  P1 {stats.player1_wins}  P2 {stats.player2_wins}")
        table.add_column("winner")
        table.add_column("turns", justify="right")
        table.add_column("P1")
        table.add_column("P2")
        for record in records[:10]:
            table.add_row(
                f"P{record.winner}" if record.winner else "-",
                str(record.turns),
                record.player1.name,
                record.player2.name,
            )
        self.renderer.console.print(table)


# ==================== 入口 ====================

async def main():
    """主入口"""
    import argparse

    parser = argparse.ArgumentParser(description="Odyssey Arena - 本地双人对战 CLI")
    parser.add_argument("--seed", type=int, default=None, help="固定随机种子")
    args = parser.parse_args()

    cli = ArenaCLI(seed=args.seed)
    await cli.start()


if __name__ == "__main__":
    asyncio.run(main())
