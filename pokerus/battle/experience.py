"""Experience & level progression.

Levels are bytes ranged to ``MIN_LEVEL..=MAX_LEVEL``; experience tracks a
total against the ``(current, next)`` thresholds of the level it sits in.
Experience reaching ``threshold.next`` exactly is the level-up signal, so
gains stop at the threshold until the level actually advances.

Growth curve is medium-fast (``level ** 3``).
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from pokerus.core.errors import ValidationError
from .num import BoundedPercentage, Percentage, RangedU8

MIN_LEVEL = 1
MAX_LEVEL = 100

LevelValue = RangedU8.between(MIN_LEVEL, MAX_LEVEL)


def required_exp_for_level(level: int) -> int:
    """Total EXP required to be at ``level``; 0 at level 1."""
    if level <= MIN_LEVEL:
        return 0
    return level ** 3


@dataclass(frozen=True)
class Level:
    value: RangedU8

    def __post_init__(self):
        # Accept a plain int; out-of-range raises RangeConstructionError
        if not isinstance(self.value, LevelValue):
            raw = self.value.value if isinstance(self.value, RangedU8) else self.value
            object.__setattr__(self, "value", LevelValue(raw))

    @property
    def number(self) -> int:
        return self.value.value

    def not_at_max(self) -> bool:
        return self.value.is_bounded_above_exclusive()

    def next(self) -> Optional["Level"]:
        bumped = self.value.checked_add(1)
        return None if bumped is None else Level(bumped)


@dataclass(frozen=True)
class ExperienceThreshold:
    current: int
    next: int

    def __post_init__(self):
        if self.current < 0 or self.next < 0:
            raise ValidationError(f"Experience thresholds must be non-negative: {self.current}..{self.next}")

    @classmethod
    def for_level(cls, level: Union[int, Level]) -> "ExperienceThreshold":
        lvl = level.number if isinstance(level, Level) else int(level)
        return cls(required_exp_for_level(lvl), required_exp_for_level(lvl + 1))

    def difference(self) -> int:
        return self.next - self.current


@dataclass(frozen=True)
class Experience:
    value: int
    threshold: ExperienceThreshold

    @classmethod
    def at_level(cls, level: Union[int, Level]) -> "Experience":
        threshold = ExperienceThreshold.for_level(level)
        return cls(threshold.current, threshold)

    def progress(self) -> int:
        return self.value - self.threshold.current

    def remainder(self) -> int:
        return self.threshold.difference() - self.progress()

    def as_percentage(self) -> Optional[BoundedPercentage]:
        """Progress through the current level; ``None`` if bookkeeping is broken."""
        difference = self.threshold.difference()
        if difference == 0:
            return None
        return Percentage(self.progress() / difference).bound()

    def is_at_next_threshold(self) -> bool:
        return self.value == self.threshold.next

    def gain(self, amount: int) -> Tuple["Experience", int]:
        """Return the new experience and the part of ``amount`` past the threshold."""
        if amount < 0:
            raise ValidationError(f"Experience gain must be non-negative, got {amount}")
        room = max(0, self.threshold.next - self.value)
        applied = min(amount, room)
        return Experience(self.value + applied, self.threshold), amount - applied


def can_level_up(level: Level, exp: Experience) -> bool:
    return level.not_at_max() and exp.is_at_next_threshold()


__all__ = [
    "MIN_LEVEL","MAX_LEVEL","LevelValue","Level","ExperienceThreshold","Experience",
    "required_exp_for_level","can_level_up",
]
