"""Global affinity metadata: colors & abbreviations.

Provides:
  AFFINITY_COLORS_HEX: mapping affinity -> hex color string (#RRGGBB)
  AFFINITY_ABBREVIATIONS: mapping affinity -> 3-letter abbreviation (upper)
  ABBREVIATION_AFFINITIES: reverse mapping
  helper functions for colorized terminal output.

Accepts plain names ("fire") or anything exposing the name as ``.value``
(the ``Affinity`` enum does).
"""
from __future__ import annotations
from typing import Dict, Iterable, Tuple
import os, re

from colorama import Fore, Style

AFFINITY_COLORS_HEX: Dict[str, str] = {
    "normal": "#A8A77A",
    "fire": "#EE8130",
    "water": "#6390F0",
    "grass": "#7AC74C",
    "lightning": "#F7D02C",
    "ghost": "#735797",
    "fighting": "#C22E28",
}

AFFINITY_ABBREVIATIONS: Dict[str, str] = {
    "normal": "NRM",
    "fire": "FIR",
    "water": "WTR",
    "grass": "GRS",
    "lightning": "LTN",
    "ghost": "GHO",
    "fighting": "FGT",
}

ABBREVIATION_AFFINITIES: Dict[str, str] = {abbr: t for t, abbr in AFFINITY_ABBREVIATIONS.items()}

_TRUECOLOR = "truecolor" in os.environ.get("COLORTERM", "").lower()

_FALLBACK_FORE: Dict[str,str] = {
    "normal": Fore.WHITE,
    "fire": Fore.RED,
    "water": Fore.CYAN,
    "grass": Fore.GREEN,
    "lightning": Fore.YELLOW,
    "ghost": Fore.MAGENTA,
    "fighting": Fore.MAGENTA,
}

RESET = Style.RESET_ALL

def _name(affinity) -> str:
    return str(getattr(affinity, "value", affinity)).lower()

def _hex_to_rgb(h: str) -> Tuple[int,int,int]:
    h = h.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def color_code(affinity) -> str:
    t = _name(affinity)
    hex_val = AFFINITY_COLORS_HEX.get(t)
    if not hex_val:
        return ''
    if _TRUECOLOR:
        r,g,b = _hex_to_rgb(hex_val)
        return f"\033[38;2;{r};{g};{b}m"
    return _FALLBACK_FORE.get(t,'')

def colorize_affinity_text(affinity, text: str) -> str:
    code = color_code(affinity)
    if not code:
        return text
    return f"{code}{text}{RESET}"

def affinity_abbreviation(affinity) -> str:
    t = _name(affinity)
    return AFFINITY_ABBREVIATIONS.get(t, t[:3].upper())

def format_affinities(affinities: Iterable) -> str:
    parts = [colorize_affinity_text(t, affinity_abbreviation(t)) for t in affinities]
    return '/'.join(parts)

def rich_affinity_markup(affinity, text: str) -> str:
    """Wrap text in rich markup using the affinity's hex color."""
    hex_color = AFFINITY_COLORS_HEX.get(_name(affinity))
    if not hex_color:
        return text
    return f"[{hex_color}]{text}[/{hex_color}]"

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")

def strip_ansi(s: str) -> str:
    return ANSI_ESCAPE_RE.sub('', s)

__all__ = [
    'AFFINITY_COLORS_HEX','AFFINITY_ABBREVIATIONS','ABBREVIATION_AFFINITIES',
    'colorize_affinity_text','affinity_abbreviation','format_affinities',
    'rich_affinity_markup','strip_ansi'
]
