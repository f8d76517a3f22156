from __future__ import annotations
import argparse
import random
from typing import List, Optional

from rich.box import ROUNDED
from rich.table import Table

from pokerus.battle.matchup import attacking_effectiveness, parse_profile
from pokerus.battle.models import AttackMove
from pokerus.battle.session import Duel
from pokerus.core.errors import PokerusError
from pokerus.core.logging import logger
from pokerus.data.loader import all_moves, all_species, build_combatant
from pokerus.system.settings import Settings
from pokerus.ui import battle as ui

def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{text!r} is not an integer")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pokerus", description="Affinity-based duel simulator")
    parser.add_argument("--settings", help="path to a settings JSON file")
    parser.add_argument("--log-level", choices=["TRACE","DEBUG","INFO","WARN","ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    duel = sub.add_parser("duel", help="run an automatic duel between two roster species")
    duel.add_argument("first")
    duel.add_argument("second")
    duel.add_argument("--seed", type=int)
    duel.add_argument("--max-turns", type=_positive_int)

    matchup = sub.add_parser("matchup", help="show effectiveness of one profile against another")
    matchup.add_argument("attack", help="e.g. fire or fire/water")
    matchup.add_argument("defend", help="e.g. grass or ghost/normal")

    sub.add_parser("roster", help="list species and moves")
    return parser

def run_duel(settings: Settings, first: str, second: str, seed: Optional[int], max_turns: Optional[int]) -> int:
    a = build_combatant(first)
    b = build_combatant(second)
    a_max, b_max = a.stats.hp.value, b.stats.hp.value
    seed = seed if seed is not None else settings.data.seed
    duel = Duel(a, b, rng=random.Random(seed), log=logger)
    ui.console.print(ui.combatant_panel(a, a_max))
    ui.console.print(ui.combatant_panel(b, b_max))
    result = duel.run_auto(max_turns if max_turns is not None else settings.data.max_turns)
    ui.console.print(ui.turn_table(duel.log))
    ui.console.print(ui.combatant_panel(a, a_max))
    ui.console.print(ui.combatant_panel(b, b_max))
    ui.console.print(f"Result: [bold]{result}[/bold] after {duel.turn_counter} turns")
    return 0

def show_matchup(attack: str, defend: str) -> int:
    try:
        atk = parse_profile(attack)
        dfn = parse_profile(defend)
    except ValueError as e:
        ui.console.print(f"[red]{e}[/red]")
        return 2
    verdict = attacking_effectiveness(atk, dfn)
    ui.console.print(f"{ui.profile_markup(atk.affinities)} -> {ui.profile_markup(dfn.affinities)}: "
                     f"{ui.describe_effectiveness(verdict)}")
    return 0

def show_roster() -> int:
    species = Table(title="Species", box=ROUNDED)
    for col in ("Id", "Name", "Type", "HP", "Lv", "Moves"):
        species.add_column(col)
    for slug, sp in sorted(all_species().items()):
        species.add_row(slug, sp["display_name"], ui.profile_markup(parse_profile("/".join(sp["types"])).affinities),
                        str(sp["hp"]), str(sp.get("level", "-")), ", ".join(sp["moves"]))
    ui.console.print(species)
    moves = Table(title="Moves", box=ROUNDED)
    for col in ("Id", "Name", "Type", "Power", "Accuracy"):
        moves.add_column(col)
    for slug, mv in sorted(all_moves().items()):
        if isinstance(mv, AttackMove):
            power = str(mv.power.value)
            acc_txt = f"{mv.accuracy.fraction():.0%}" if mv.accuracy is not None else "always"
        else:
            power, acc_txt = "-", "-"
        moves.add_row(slug, mv.name, ui.profile_markup([mv.affinity]), power, acc_txt)
    ui.console.print(moves)
    return 0

def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = Settings.load(args.settings)
    if args.log_level:
        settings.data.log_level = args.log_level
    settings.apply_logging()
    try:
        if args.command == "duel":
            return run_duel(settings, args.first, args.second, args.seed, args.max_turns)
        if args.command == "matchup":
            return show_matchup(args.attack, args.defend)
        return show_roster()
    except PokerusError as e:
        logger.error("CommandFailed", command=args.command, error=str(e))
        ui.console.print(f"[red]{e}[/red]")
        return 2

def run():
    raise SystemExit(main())

if __name__ == "__main__":
    run()
