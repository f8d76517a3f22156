"""Bounded numeric primitives.

- ``Percentage``: transparent wrapper over an int/float scalar (unbounded).
- ``BoundedPercentage``: a percentage guaranteed to sit on its ``FullScale``
  (``0.0..=1.0`` for floats, ``0..=255`` for the byte accuracy encoding).
- ``RangedU8``: a byte bounded to an inclusive ``[LOWER, UPPER]`` range.

Bounding a computed value is fallible and returns ``None``; building a ranged
value from an out-of-range literal raises ``RangeConstructionError``.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Dict, Optional, Tuple, Type, TypeVar, Union

from pokerus.core.errors import RangeConstructionError

Scalar = Union[int, float]
U8_MAX = 255

def _is_scalar(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)

@dataclass(frozen=True)
class FullScale:
    origin: Scalar
    unity: Scalar

    def contains(self, value: Scalar) -> bool:
        # NaN compares False on both sides
        return self.origin <= value <= self.unity

    def fraction(self, value: Scalar) -> float:
        return (value - self.origin) / (self.unity - self.origin)

    @staticmethod
    def for_value(value: Scalar) -> "FullScale":
        if not _is_scalar(value):
            raise TypeError(f"No full scale for {type(value).__name__}")
        if isinstance(value, int):
            return BYTE_SCALE
        return UNIT_SCALE

UNIT_SCALE = FullScale(0.0, 1.0)
BYTE_SCALE = FullScale(0, U8_MAX)


def _raw(other):
    if isinstance(other, (Percentage, BoundedPercentage)):
        return other.value
    if _is_scalar(other):
        return other
    return NotImplemented


@dataclass(frozen=True, eq=False)
class Percentage:
    value: Scalar

    def bound(self) -> Optional["BoundedPercentage"]:
        return BoundedPercentage.from_full_scale(self.value)

    def __add__(self, other):
        if not isinstance(other, Percentage):
            return NotImplemented
        return Percentage(self.value + other.value)

    def __mul__(self, other):
        if not isinstance(other, Percentage):
            return NotImplemented
        return Percentage(self.value * other.value)

    def __float__(self) -> float:
        return float(self.value)

    # Comparable with other percentages and with bare scalars of the same unit
    def __eq__(self, other):
        rhs = _raw(other)
        return NotImplemented if rhs is NotImplemented else self.value == rhs

    def __lt__(self, other):
        rhs = _raw(other)
        return NotImplemented if rhs is NotImplemented else self.value < rhs

    def __le__(self, other):
        rhs = _raw(other)
        return NotImplemented if rhs is NotImplemented else self.value <= rhs

    def __gt__(self, other):
        rhs = _raw(other)
        return NotImplemented if rhs is NotImplemented else self.value > rhs

    def __ge__(self, other):
        rhs = _raw(other)
        return NotImplemented if rhs is NotImplemented else self.value >= rhs

    def __hash__(self):
        return hash(self.value)


@dataclass(frozen=True, eq=False)
class BoundedPercentage:
    """Percentage sitting on ``scale`` (inferred from the value type).

    Use :meth:`from_full_scale` or :meth:`Percentage.bound`; calling the
    class directly with an out-of-range value is a programming error.
    """
    value: Scalar
    scale: Optional[FullScale] = None

    def __post_init__(self):
        if self.scale is None:
            object.__setattr__(self, "scale", FullScale.for_value(self.value))
        if not self.scale.contains(self.value):
            raise RangeConstructionError(self.value, self.scale.origin, self.scale.unity)

    @classmethod
    def from_full_scale(cls, value: Scalar, scale: Optional[FullScale] = None) -> Optional["BoundedPercentage"]:
        if not _is_scalar(value):
            return None
        scale = scale or FullScale.for_value(value)
        if not scale.contains(value):
            return None
        return cls(value, scale)

    def fraction(self) -> float:
        return self.scale.fraction(self.value)

    def unbound(self) -> Percentage:
        return Percentage(self.value)

    def __eq__(self, other):
        if isinstance(other, BoundedPercentage):
            return self.value == other.value and self.scale == other.scale
        rhs = _raw(other)
        return NotImplemented if rhs is NotImplemented else self.value == rhs

    def __lt__(self, other):
        rhs = _raw(other)
        return NotImplemented if rhs is NotImplemented else self.value < rhs

    def __gt__(self, other):
        rhs = _raw(other)
        return NotImplemented if rhs is NotImplemented else self.value > rhs

    def __hash__(self):
        return hash((self.value, self.scale))


R = TypeVar("R", bound="RangedU8")

class RangedU8:
    """Byte restricted to ``[LOWER, UPPER]`` inclusive.

    ``RangedU8.between(1, 100)`` returns the subclass for that range (cached,
    so the same bounds always give the same class).
    """
    LOWER: ClassVar[int] = 0
    UPPER: ClassVar[int] = U8_MAX
    __slots__ = ("_value",)
    _ranges: ClassVar[Dict[Tuple[int, int], type]] = {}

    @classmethod
    def between(cls, lower: int, upper: int) -> Type["RangedU8"]:
        for bound in (lower, upper):
            if isinstance(bound, bool) or not isinstance(bound, int) or not 0 <= bound <= U8_MAX:
                raise RangeConstructionError(bound, 0, U8_MAX, f"range bound {bound!r} is not a byte")
        if lower >= upper:
            raise RangeConstructionError(lower, lower, upper, f"lower bound {lower} must be below upper bound {upper}")
        key = (lower, upper)
        if key not in RangedU8._ranges:
            RangedU8._ranges[key] = type(
                f"RangedU8_{lower}_{upper}", (RangedU8,),
                {"LOWER": lower, "UPPER": upper, "__slots__": ()},
            )
        return RangedU8._ranges[key]

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{type(self).__name__} needs an int, got {type(value).__name__}")
        if value < self.LOWER:
            raise RangeConstructionError(value, self.LOWER, self.UPPER, f"value {value} cannot be lower than {self.LOWER}")
        if value > self.UPPER:
            raise RangeConstructionError(value, self.LOWER, self.UPPER, f"value {value} cannot be greater than {self.UPPER}")
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def value(self) -> int:
        return self._value

    def is_bounded_below_exclusive(self) -> bool:
        return self._value > self.LOWER

    def is_bounded_below_inclusive(self) -> bool:
        return self._value >= self.LOWER

    def is_bounded_above_exclusive(self) -> bool:
        return self._value < self.UPPER

    def is_bounded_above_inclusive(self) -> bool:
        return self._value <= self.UPPER

    def _operand(self, other) -> int:
        if isinstance(other, RangedU8):
            if type(other) is not type(self):
                raise TypeError(f"Cannot combine {type(self).__name__} with {type(other).__name__}")
            return other.value
        if isinstance(other, bool) or not isinstance(other, int):
            raise TypeError(f"Cannot combine {type(self).__name__} with {type(other).__name__}")
        return other

    def _checked(self: R, result: int) -> Optional[R]:
        if self.LOWER <= result <= self.UPPER:
            return type(self)(result)
        return None

    def checked_add(self: R, other) -> Optional[R]:
        return self._checked(self._value + self._operand(other))

    def checked_sub(self: R, other) -> Optional[R]:
        return self._checked(self._value - self._operand(other))

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other):
        if isinstance(other, RangedU8):
            return type(other) is type(self) and other.value == self._value
        return NotImplemented

    def __hash__(self):
        return hash((type(self).LOWER, type(self).UPPER, self._value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"


__all__ = [
    "FullScale","UNIT_SCALE","BYTE_SCALE","Percentage","BoundedPercentage","RangedU8","U8_MAX"
]
