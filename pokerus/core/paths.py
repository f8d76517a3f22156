"""
Centralized path helpers (works with the current flat layout).
"""
from __future__ import annotations
from pathlib import Path

# This file lives at pokerus/core/paths.py
ROOT = Path(__file__).resolve().parents[2]   # project root (one up from 'pokerus')
ASSETS = ROOT / "assets"
DATA = ASSETS / "data"
SCHEMA = ROOT / "schema"
SPECIES_FILE = DATA / "species.json"
MOVES_FILE = DATA / "moves.json"
