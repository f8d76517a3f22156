"""Affinity matchups.

``TypeMatchup`` is the effectiveness verdict of one attack facet against one
defending facet: ``Affected(Percentage)`` or ``Unaffected`` (no effect).
``Unaffected`` absorbs under ``and_then``; ``map`` keeps the variant.

Dual affinities are resolved facet by facet and the multipliers are summed.
A dual defender is ``Unaffected`` only when both its facets are
(``TypeMatchup.merge``); a dual attacker is ``Unaffected`` as soon as one of
its facets is (``and_then``). Summing (rather than multiplying) is
the house rule, so a dual-affinity defender can take more than 2.0x.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar, Union

from .num import Percentage

T = TypeVar("T")
U = TypeVar("U")


class TypeMatchup(Generic[T]):
    __slots__ = ()

    @property
    def is_affected(self) -> bool:
        return isinstance(self, Affected)

    def map(self, f: Callable[[T], U]) -> "TypeMatchup[U]":
        if isinstance(self, Affected):
            return Affected(f(self.value))
        return Unaffected

    def and_then(self, f: Callable[[T], "TypeMatchup[U]"]) -> "TypeMatchup[U]":
        if isinstance(self, Affected):
            return f(self.value)
        return Unaffected

    def merge(self, other: "TypeMatchup[T]") -> "TypeMatchup[T]":
        """Sum with another facet's verdict; no effect only if both have none."""
        if not self:
            return other
        return self.and_then(lambda mine: other.map(lambda theirs: mine + theirs) if other else Affected(mine))

    def value_or(self, default: T) -> T:
        return self.value if isinstance(self, Affected) else default

    @staticmethod
    def default() -> "TypeMatchup[Any]":
        return Unaffected

    @staticmethod
    def of(value) -> "TypeMatchup[Any]":
        """Always ``Affected``; bare int/float payloads become a ``Percentage``."""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = Percentage(value)
        return Affected(value)

    @staticmethod
    def from_optional(value: Optional[Any]) -> "TypeMatchup[Any]":
        return Unaffected if value is None else TypeMatchup.of(value)


@dataclass(frozen=True)
class Affected(TypeMatchup[T]):
    value: T

    def __bool__(self) -> bool:
        return True


class _Unaffected(TypeMatchup[Any]):
    __slots__ = ()
    _instance: Optional["_Unaffected"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Unaffected"

Unaffected = _Unaffected()


class Affinity(Enum):
    NORMAL = "normal"
    FIRE = "fire"
    GRASS = "grass"
    WATER = "water"
    LIGHTNING = "lightning"
    GHOST = "ghost"
    FIGHTING = "fighting"

    @classmethod
    def parse(cls, name: str) -> "Affinity":
        return cls(name.strip().lower())


@dataclass(frozen=True)
class Single:
    affinity: Affinity

    @property
    def affinities(self) -> Tuple[Affinity, ...]:
        return (self.affinity,)


@dataclass(frozen=True)
class Mixed:
    primary: Affinity
    secondary: Affinity

    @property
    def affinities(self) -> Tuple[Affinity, ...]:
        return (self.primary, self.secondary)


AffinityProfile = Union[Single, Mixed]

def profile_of(*affinities: Union[Affinity, str]) -> AffinityProfile:
    """Build a profile from one or two affinities (names accepted)."""
    parsed = [a if isinstance(a, Affinity) else Affinity.parse(a) for a in affinities]
    if len(parsed) == 1:
        return Single(parsed[0])
    if len(parsed) == 2:
        return Mixed(parsed[0], parsed[1])
    raise ValueError(f"A profile has one or two affinities, got {len(parsed)}")

def parse_profile(text: str) -> AffinityProfile:
    """``"fire"`` -> Single, ``"fire/water"`` -> Mixed."""
    return profile_of(*[p for p in text.split("/") if p.strip()])


IMMUNE = 0.0
SUPER_EFFECTIVE = 2.0
NOT_VERY_EFFECTIVE = 0.5
NEUTRAL = 1.0

A = Affinity
_AFFINITY_CHART: Dict[Affinity, Dict[Affinity, float]] = {
    A.NORMAL:    {A.GHOST: IMMUNE},
    A.FIRE:      {A.FIRE: 0.5, A.WATER: 0.5, A.GRASS: 2.0},
    A.WATER:     {A.WATER: 0.5, A.GRASS: 0.5, A.LIGHTNING: 0.5, A.FIRE: 2.0},
    A.GRASS:     {A.GRASS: 0.5, A.FIRE: 0.5, A.LIGHTNING: 0.5, A.WATER: 2.0},
    A.LIGHTNING: {A.LIGHTNING: 0.5, A.GRASS: 0.5, A.WATER: 2.0},
    A.FIGHTING:  {A.GHOST: IMMUNE, A.FIGHTING: 2.0, A.NORMAL: 2.0},
}
del A

def chart_multiplier(attacker: Affinity, defender: Affinity) -> float:
    return _AFFINITY_CHART.get(attacker, {}).get(defender, NEUTRAL)

def attacking(attacker: Affinity, defender: Affinity) -> TypeMatchup[Percentage]:
    mult = chart_multiplier(attacker, defender)
    if mult == IMMUNE:
        return Unaffected
    return TypeMatchup.of(mult)

def defending(defender: Affinity, attacker: Affinity) -> TypeMatchup[Percentage]:
    return attacking(attacker, defender)

Side = Union[Affinity, Single, Mixed]

def attacking_effectiveness(attacker: Side, defender: Side) -> TypeMatchup[Percentage]:
    """Resolve any attacking side against any defending side.

    Mixed attackers resolve each facet against the whole defender and are
    ``Unaffected`` if either facet is; mixed defenders resolve the attacking
    affinity against each facet and are ``Unaffected`` only if both are.
    """
    if isinstance(attacker, Mixed):
        # Strict on the attacking side: one immune facet voids the attack
        return attacking_effectiveness(attacker.primary, defender).and_then(
            lambda p: attacking_effectiveness(attacker.secondary, defender).map(lambda s: p + s))
    if isinstance(attacker, Single):
        attacker = attacker.affinity
    if isinstance(defender, Mixed):
        return attacking(attacker, defender.primary).merge(attacking(attacker, defender.secondary))
    if isinstance(defender, Single):
        defender = defender.affinity
    return attacking(attacker, defender)

def defending_effectiveness(defender: Side, attacker: Side) -> TypeMatchup[Percentage]:
    return attacking_effectiveness(attacker, defender)

__all__ = [
    "TypeMatchup","Affected","Unaffected","Affinity","Single","Mixed","AffinityProfile",
    "profile_of","parse_profile","attacking","defending","attacking_effectiveness",
    "defending_effectiveness","chart_multiplier","IMMUNE","SUPER_EFFECTIVE",
    "NOT_VERY_EFFECTIVE","NEUTRAL",
]
