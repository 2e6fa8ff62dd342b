"""Terminal demo: pick (or generate) a team and battle a trainer."""
from __future__ import annotations
import argparse
import random
from typing import List, Optional, Sequence

from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from pokebattle.battle.ai import best_move_index
from pokebattle.battle.engine import BattleEngine
from pokebattle.battle.history import BattleHistory
from pokebattle.battle.models import Action, Attack, Battle, Forfeit, Species, Switch
from pokebattle.battle.render import moves_table, print_battle, team_table
from pokebattle.battle.teams import generate_team, generate_team_from_trainer
from pokebattle.core.errors import InvalidActionError, PokebattleError
from pokebattle.core.logging import logger
from pokebattle.core.rng import make_rng
from pokebattle.data.catalog import get_species, load_catalog
from pokebattle.data.trainers import TrainerProfile, get_trainer, load_trainers
from pokebattle.system.settings import Settings

DEFAULT_MAX_TURNS = 200


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pokebattle", description="Turn-based battle demo")
    parser.add_argument("--trainer", help="Opponent trainer name (default: random)")
    parser.add_argument("--team", help="Comma-separated species names or ids for your team")
    parser.add_argument("--auto", action="store_true", help="Let the computer play your side")
    parser.add_argument("--seed", type=int, help="RNG seed (overrides settings)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARN", "ERROR"], help="Logger threshold")
    parser.add_argument("--max-turns", type=int, default=DEFAULT_MAX_TURNS)
    parser.add_argument("--list-trainers", action="store_true", help="Show available trainers and exit")
    parser.add_argument("--team-size", type=int, help="Size of a generated player team (1-6)")
    parser.add_argument("--save-settings", action="store_true",
                        help="Store --seed, --log-level and --team-size as defaults and exit")
    return parser


def auto_action(battle: Battle, engine: BattleEngine) -> Action:
    team = battle.player_team
    if team.active().is_fainted:
        return Switch(team.first_available())
    return Attack(best_move_index(team.active(), battle.opponent_team.active(), engine.chart))


def prompt_action(battle: Battle, console: Console) -> Action:
    team = battle.player_team
    if team.active().is_fainted:
        console.print(f"[yellow]{team.active().name} fainted. Choose a replacement.[/yellow]")
        choice = "s"
    else:
        choice = Prompt.ask("[f]ight, [s]witch or [q]uit", choices=["f", "s", "q"], default="f", console=console)
    if choice == "q":
        return Forfeit()
    if choice == "s":
        console.print(team_table(team, "Your team"))
        return Switch(IntPrompt.ask("Switch to #", console=console))
    console.print(moves_table(team.active()))
    return Attack(IntPrompt.ask("Move #", default=0, console=console))


def _player_roster(names: Optional[str], catalog: Sequence[Species], size: int, rng: random.Random) -> List[Species]:
    if names:
        return [get_species(part, catalog) for part in names.split(",") if part.strip()]
    return generate_team(catalog, size, "random", rng=rng)


def _pick_trainer(name: Optional[str], rng: random.Random) -> TrainerProfile:
    if name:
        return get_trainer(name)
    return rng.choice(load_trainers())


def play(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    seed = args.seed if args.seed is not None else settings.data.seed
    rng = make_rng(seed)
    catalog = load_catalog()
    trainer = _pick_trainer(args.trainer, rng)
    opponent = generate_team_from_trainer(catalog, trainer, rng=rng)
    team_size = max(1, min(6, args.team_size or settings.data.team_size))
    player = _player_roster(args.team, catalog, team_size, rng)

    echo = console.print if settings.data.debug else None
    engine = BattleEngine(rng=rng, message_cb=echo)
    battle = engine.initialize_battle(player, opponent)
    logger.info("BattleStart", trainer=trainer.display_name, seed=seed)
    console.print(f"[bold]{trainer.display_name}[/bold] wants to battle!")
    console.print(team_table(battle.opponent_team, f"{trainer.name}'s team"))
    console.print(team_table(battle.player_team, "Your team"))

    while battle.is_ongoing and len(battle.turns) < args.max_turns:
        print_battle(battle, console)
        action = auto_action(battle, engine) if args.auto else prompt_action(battle, console)
        try:
            engine.submit_action(battle, action)
        except InvalidActionError as e:
            console.print(f"[red]{e.reason}[/red]")
    print_battle(battle, console)

    if battle.is_ongoing:
        logger.warn("TurnLimitReached", turns=len(battle.turns))
        console.print("[yellow]Stalemate: turn limit reached.[/yellow]")
        return 1
    history = BattleHistory()
    history.record(battle)
    stats = history.stats()
    logger.info("BattleEnd", status=battle.status.value, turns=len(battle.turns), win_rate=stats["win_rate"])
    return 0


def save_settings(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    changes = {
        key: value for key, value in
        (("seed", args.seed), ("log_level", args.log_level), ("team_size", args.team_size))
        if value is not None
    }
    settings.update(**changes)
    settings.save()
    console.print(f"Settings saved to {settings.path}")
    return 0


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.load()
    settings.apply()
    if args.log_level:
        logger.set_level(args.log_level)
    console = Console()
    if args.save_settings:
        return save_settings(args, settings, console)
    if args.list_trainers:
        for t in load_trainers():
            console.print(f"{t.display_name:<24} {t.strategy.value:<13} {t.difficulty.value:<7} {t.team_size}")
        return 0
    try:
        return play(args, settings, console)
    except PokebattleError as e:
        logger.error("DemoFailed", error=str(e))
        return 2


if __name__ == "__main__":
    raise SystemExit(run())
