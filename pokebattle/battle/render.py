"""Rich views of a battle for the terminal demo.

Builders return renderables so callers (and tests) decide where they go.
"""
from __future__ import annotations
from typing import List, Optional

from rich.align import Align
from rich.box import ROUNDED
from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pokebattle.core.types import rich_type_markup, type_label
from .models import Battle, BattlePokemon, BattleStatus, BattleTurn, Team

console = Console()

_RESULT_TEXT = {
    BattleStatus.WON: "[bold green]You won the battle![/bold green]",
    BattleStatus.LOST: "[bold red]You lost the battle...[/bold red]",
    BattleStatus.FORFEIT: "[bold yellow]You forfeited the battle.[/bold yellow]",
}


def hp_bar(current: int, max_hp: int, width: int = 20) -> str:
    """HP bar in Rich markup; green above 50%, yellow above 25%, red below."""
    if max_hp <= 0 or current <= 0:
        return "[red]FAINTED[/red]"
    percent = current / max_hp
    filled = int(percent * width)
    if percent > 0.5:
        color = "green"
    elif percent > 0.25:
        color = "yellow"
    else:
        color = "red"
    bar = "█" * filled + "░" * (width - filled)
    return f"[{color}]{bar}[/{color}]"


def type_badges(p: BattlePokemon) -> str:
    return type_label(p.types)


def participant_panel(p: BattlePokemon, title: str) -> Panel:
    body = (
        f"[bold bright_white]{p.name}[/bold bright_white]\n"
        f"{type_badges(p)}\n"
        f"HP: {p.current_hp}/{p.max_hp}\n"
        f"{hp_bar(p.current_hp, p.max_hp)}"
    )
    return Panel(body, title=f"[bold]{title}[/bold]", box=ROUNDED, width=40, padding=(0, 1))


def battle_hud(battle: Battle) -> Columns:
    return Columns([
        participant_panel(battle.opponent_team.active(), "OPPONENT"),
        participant_panel(battle.player_team.active(), "YOUR POKEMON"),
    ], equal=True, expand=False, padding=(0, 4))


def team_table(team: Team, title: str = "Team") -> Table:
    table = Table(title=title, box=ROUNDED)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("HP", justify="right")
    for i, m in enumerate(team.members):
        marker = "▶ " if i == team.active_index else ""
        hp = "[red]fainted[/red]" if m.is_fainted else f"{m.current_hp}/{m.max_hp}"
        table.add_row(str(i), f"{marker}{m.name}", type_badges(m), hp)
    return table


def moves_table(p: BattlePokemon) -> Table:
    table = Table(title=f"{p.name}'s moves", box=ROUNDED)
    table.add_column("#", justify="right")
    table.add_column("Move")
    table.add_column("Type")
    table.add_column("Power", justify="right")
    table.add_column("Acc", justify="right")
    for i, m in enumerate(p.moves):
        table.add_row(str(i), m.name, rich_type_markup(m.type, m.type.upper()), str(m.power), f"{m.accuracy}%")
    return table


def turn_lines(turn: BattleTurn) -> List[str]:
    return [f"[dim]T{turn.number}[/dim] {msg}" for msg in turn.messages]


def result_text(battle: Battle) -> Optional[str]:
    return _RESULT_TEXT.get(battle.status)


def print_battle(battle: Battle, out: Optional[Console] = None):
    out = out or console
    out.print(Align.center(battle_hud(battle)))
    if battle.turns:
        for line in turn_lines(battle.turns[-1]):
            out.print(line)
    text = result_text(battle)
    if text:
        out.print(Panel(Align.center(text), box=ROUNDED))


__all__ = [
    "hp_bar", "type_badges", "participant_panel", "battle_hud", "team_table",
    "moves_table", "turn_lines", "result_text", "print_battle", "console",
]
