"""Terminal rendering for duels (rich).

Pure formatting helpers: they read combatant state and outcomes and build
rich renderables; nothing here touches battle state.
"""
from __future__ import annotations
from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.box import ROUNDED

from pokerus.battle.matchup import Affinity, TypeMatchup
from pokerus.battle.models import AttackOutcome, Combatant, DidNotAffect, Hit, Missed
from pokerus.battle.session import TurnRecord
from pokerus.core.types import affinity_abbreviation, rich_affinity_markup

console = Console()

def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t

def _mix(c1: tuple, c2: tuple, t: float) -> str:
    r, g, b = (int(_lerp(x, y, t)) for x, y in zip(c1, c2))
    return f"#{r:02x}{g:02x}{b:02x}"

def hp_bar(cur: int, max_hp: int, width: int = 24) -> Text:
    """HP bar with green→yellow→red gradient by remaining ratio."""
    if max_hp <= 0:
        max_hp = 1
    cur = max(0, min(cur, max_hp))
    ratio = cur / max_hp
    filled = max(0, min(width, int(round(ratio * width))))
    GREEN, YELLOW, RED = (46, 204, 113), (241, 196, 15), (231, 76, 60)
    if ratio >= 0.5:
        color = _mix(YELLOW, GREEN, (ratio - 0.5) / 0.5)
    else:
        color = _mix(RED, YELLOW, ratio / 0.5)
    bar = Text("[")
    bar.append("█" * filled, style=color)
    bar.append("░" * (width - filled), style="grey50")
    bar.append(f"] {cur}/{max_hp}")
    return bar

def exp_bar(combatant: Combatant, width: int = 24) -> Optional[Text]:
    """Thin EXP bar; None when the threshold bookkeeping is inconsistent."""
    pct = combatant.stats.exp.as_percentage()
    if pct is None:
        return None
    filled = max(0, min(width, int(pct.fraction() * width)))
    bar = Text("[")
    bar.append("━" * filled, style="#50a0ff")
    bar.append("-" * (width - filled))
    bar.append("]")
    return bar

def profile_markup(affinities: Iterable[Affinity]) -> str:
    return "/".join(rich_affinity_markup(a, affinity_abbreviation(a)) for a in affinities)

def combatant_panel(combatant: Combatant, max_hp: int) -> Panel:
    body = Table.grid(padding=(0, 1))
    body.add_row("Type", Text.from_markup(profile_markup(combatant.profile.affinities)))
    body.add_row("HP", hp_bar(combatant.stats.hp.value, max_hp))
    xp = exp_bar(combatant)
    if xp is not None:
        body.add_row("EXP", xp)
    moves = ", ".join(m.name for m in combatant.known_moves) or "-"
    body.add_row("Moves", moves)
    title = f"{combatant.name}  Lv{combatant.stats.lvl.number}"
    return Panel(body, title=title, box=ROUNDED, expand=False)

def describe_outcome(outcome: Optional[AttackOutcome], defender: str) -> str:
    if outcome is None:
        return "But nothing happened!"
    if isinstance(outcome, Missed):
        return "The attack missed!"
    if isinstance(outcome, DidNotAffect):
        return f"It doesn't affect {defender}..."
    if isinstance(outcome, Hit):
        return f"{defender} took {outcome.damage.value} damage."
    return str(outcome)

def describe_effectiveness(matchup: TypeMatchup) -> str:
    if not matchup:
        return "no effect"
    mult = float(matchup.value)
    if mult > 1.0:
        return f"{mult:g}x (super effective)"
    if mult < 1.0:
        return f"{mult:g}x (not very effective)"
    return f"{mult:g}x (neutral)"

def turn_table(records: Iterable[TurnRecord]) -> Table:
    table = Table(title="Turn log", box=ROUNDED)
    table.add_column("Turn", justify="right")
    table.add_column("Attacker")
    table.add_column("Move")
    table.add_column("Result")
    table.add_column("Target HP", justify="right")
    for rec in records:
        table.add_row(str(rec.turn), rec.attacker, rec.move,
                      describe_outcome(rec.outcome, rec.defender), str(rec.defender_hp))
    return table

__all__ = [
    "console","hp_bar","exp_bar","profile_markup","combatant_panel","describe_outcome",
    "describe_effectiveness","turn_table",
]
