from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Union
import math

from pokerus.core.errors import RangeConstructionError, ValidationError
from pokerus.core.logging import Logger, logger
from .experience import Experience, ExperienceThreshold, Level, can_level_up
from .matchup import Affinity, AffinityProfile
from .num import BoundedPercentage, Percentage, U8_MAX

HEALTH_MAX = 0xFFFF
MAX_KNOWN_MOVES = 4


@dataclass(frozen=True)
class Health:
    value: int

    def __post_init__(self):
        if not 0 <= self.value <= HEALTH_MAX:
            raise RangeConstructionError(self.value, 0, HEALTH_MAX)

    def after(self, damage: "Health") -> "Health":
        """Health left after taking ``damage``; saturates at zero."""
        return Health(max(0, self.value - damage.value))

    def is_zero(self) -> bool:
        return self.value == 0


@dataclass(frozen=True)
class Damage:
    power: "Power"
    effectiveness: Optional[Percentage] = None

    def calculate(self) -> Health:
        mult = float(self.effectiveness) if self.effectiveness is not None else 1.0
        return Health(math.floor(mult * self.power.value))


@dataclass(frozen=True)
class Power:
    value: int

    def __post_init__(self):
        if not 0 <= self.value <= U8_MAX:
            raise RangeConstructionError(self.value, 0, U8_MAX)

    def into_damage(self) -> Damage:
        return Damage(self)

    def into_damage_at(self, effectiveness: Percentage) -> Damage:
        return Damage(self, effectiveness)


@dataclass(frozen=True)
class MoveInner:
    name: str
    affinity: Affinity
    description: str = ""
    max_uses: int = 0


@dataclass(frozen=True)
class AttackMove:
    inner: MoveInner
    power: Power
    accuracy: Optional[BoundedPercentage] = None  # None -> never misses

    @property
    def name(self) -> str:
        return self.inner.name

    @property
    def affinity(self) -> Affinity:
        return self.inner.affinity

    def is_stab_for(self, profile: AffinityProfile) -> bool:
        return self.inner.affinity in profile.affinities

    def damage_at_effectiveness(self, effectiveness: Percentage) -> Health:
        return self.power.into_damage_at(effectiveness).calculate()


@dataclass(frozen=True)
class EffectMove:
    # Effects themselves are not modelled yet
    inner: MoveInner

    @property
    def name(self) -> str:
        return self.inner.name

    @property
    def affinity(self) -> Affinity:
        return self.inner.affinity

Move = Union[AttackMove, EffectMove]


class AttackOutcome:
    """Terminal result of resolving one attack."""
    __slots__ = ()

@dataclass(frozen=True)
class Missed(AttackOutcome):
    pass

@dataclass(frozen=True)
class DidNotAffect(AttackOutcome):
    pass

@dataclass(frozen=True)
class Hit(AttackOutcome):
    damage: Health


@dataclass
class Stats:
    hp: Health
    exp: Experience
    lvl: Level


@dataclass
class Combatant:
    name: str
    profile: AffinityProfile
    stats: Stats
    known_moves: List[Move] = field(default_factory=list)

    def __post_init__(self):
        if len(self.known_moves) > MAX_KNOWN_MOVES:
            raise ValidationError(f"{self.name} knows {len(self.known_moves)} moves; at most {MAX_KNOWN_MOVES} allowed")

    def attack_moves(self) -> List[AttackMove]:
        return [m for m in self.known_moves if isinstance(m, AttackMove)]

    def is_fainted(self) -> bool:
        return self.stats.hp.is_zero()

    def can_level_up(self) -> bool:
        return can_level_up(self.stats.lvl, self.stats.exp)

    def damage_on_attack(self, attack: AttackMove, other: "Combatant", rng=None, log: Optional[Logger] = None) -> AttackOutcome:
        """Outcome of ``attack`` against ``other``. Does not touch either combatant."""
        from .mechanics import damage_on_attack
        return damage_on_attack(self, attack, other, rng=rng, log=log)

    def defend_against(self, outcome: AttackOutcome, log: Optional[Logger] = None):
        log = log or logger
        if isinstance(outcome, Missed):
            log.trace("AttackMissed", target=self.name)
        elif isinstance(outcome, DidNotAffect):
            log.trace("AttackDidNotAffect", target=self.name)
        elif isinstance(outcome, Hit):
            before = self.stats.hp
            self.stats.hp = before.after(outcome.damage)
            log.trace("AttackHit", target=self.name, damage=outcome.damage.value,
                      hp_before=before.value, hp_after=self.stats.hp.value)
        else:
            raise ValidationError(f"Unknown attack outcome {outcome!r}")

    def gain_experience(self, amount: int) -> int:
        """Add experience up to the next threshold; returns the unapplied overflow."""
        self.stats.exp, overflow = self.stats.exp.gain(amount)
        return overflow

    def level_up(self) -> bool:
        if not self.can_level_up():
            return False
        new_level = self.stats.lvl.next()
        if new_level is None:
            return False
        self.stats.lvl = new_level
        self.stats.exp = Experience(self.stats.exp.value, ExperienceThreshold.for_level(new_level))
        return True


__all__ = [
    "Health","Damage","Power","MoveInner","AttackMove","EffectMove","Move",
    "AttackOutcome","Missed","DidNotAffect","Hit","Stats","Combatant",
    "HEALTH_MAX","MAX_KNOWN_MOVES",
]
