"""Runtime loader for the species & move roster.

Both tables are JSON documents under ``assets/data`` validated against the
schemas in ``schema/``. Documents are cached per path; call
``clear_cache()`` after editing them in place.
"""
from __future__ import annotations
import copy
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import jsonschema

from pokerus.battle.experience import Experience, Level
from pokerus.battle.matchup import Affinity, profile_of
from pokerus.battle.models import AttackMove, Combatant, EffectMove, Health, Move, MoveInner, Power, Stats
from pokerus.battle.num import BoundedPercentage
from pokerus.core.errors import DataLoadError, UnknownEntryError
from pokerus.core.logging import logger
from pokerus.core.paths import MOVES_FILE, SCHEMA, SPECIES_FILE

DEFAULT_LEVEL = 5

@lru_cache(maxsize=None)
def _schema(name: str) -> Dict[str, Any]:
    path = SCHEMA / name
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DataLoadError(str(path), str(e)) from e

@lru_cache(maxsize=None)
def _document(path: Path, schema_name: str) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DataLoadError(str(path), str(e)) from e
    try:
        jsonschema.validate(data, _schema(schema_name))
    except jsonschema.ValidationError as e:
        raise DataLoadError(str(path), f"schema: {e.message}") from e
    logger.debug("RosterDocumentLoaded", path=str(path), entries=len(data))
    return data

def clear_cache():
    _document.cache_clear()
    _schema.cache_clear()

def _move_from_raw(raw: Dict[str, Any]) -> Move:
    inner = MoveInner(
        name=raw["display_name"],
        affinity=Affinity.parse(raw["type"]),
        description=raw.get("description", ""),
        max_uses=raw.get("max_uses", 0),
    )
    if raw["kind"] == "effect":
        return EffectMove(inner)
    acc = raw.get("accuracy")
    return AttackMove(
        inner=inner,
        power=Power(raw["power"]),
        accuracy=BoundedPercentage.from_full_scale(acc) if acc is not None else None,
    )

def all_moves(path: Optional[Path] = None) -> Dict[str, Move]:
    raw = _document(Path(path or MOVES_FILE), "moves.schema.json")
    return {slug: _move_from_raw(entry) for slug, entry in raw.items()}

def get_move(slug: str, path: Optional[Path] = None) -> Move:
    moves = all_moves(path)
    key = slug.lower()
    if key not in moves:
        raise UnknownEntryError("move", slug)
    return moves[key]

def all_species(path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    # Callers get their own copy; the cached document stays untouched
    return copy.deepcopy(_document(Path(path or SPECIES_FILE), "species.schema.json"))

def species_names(path: Optional[Path] = None) -> Tuple[str, ...]:
    return tuple(sorted(all_species(path)))

def get_species(name: str, path: Optional[Path] = None) -> Dict[str, Any]:
    species = all_species(path)
    key = name.lower()
    if key not in species:
        raise UnknownEntryError("species", name)
    return species[key]

def build_combatant(name: str, *, level: Optional[int] = None, nickname: Optional[str] = None,
                    species_path: Optional[Path] = None, moves_path: Optional[Path] = None) -> Combatant:
    """Fresh combatant at full health for a roster species."""
    sp = get_species(name, species_path)
    moves = all_moves(moves_path)
    known = []
    for slug in sp["moves"]:
        if slug not in moves:
            raise DataLoadError(str(species_path or SPECIES_FILE), f"{name} references unknown move '{slug}'")
        known.append(moves[slug])
    lvl = Level(level if level is not None else sp.get("level", DEFAULT_LEVEL))
    return Combatant(
        name=nickname or sp["display_name"],
        profile=profile_of(*sp["types"]),
        stats=Stats(hp=Health(sp["hp"]), exp=Experience.at_level(lvl), lvl=lvl),
        known_moves=known,
    )

__all__ = [
    "all_moves","get_move","all_species","species_names","get_species","build_combatant","clear_cache",
]
