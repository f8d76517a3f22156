"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class PokerusError(Exception):
    """Base for internal errors."""

class RangeConstructionError(PokerusError, ValueError):
    """A ranged value was built outside its declared bounds (programming/config defect)."""
    def __init__(self, value, lower, upper, detail: str = ""):
        msg = detail or f"{value!r} is outside [{lower}, {upper}]"
        super().__init__(msg)
        self.value = value
        self.lower = lower
        self.upper = upper

class ValidationError(PokerusError):
    pass

class DataLoadError(PokerusError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed loading '{path}': {detail}")
        self.path = path
        self.detail = detail

class UnknownEntryError(PokerusError, KeyError):
    def __init__(self, kind: str, name: str):
        super().__init__(f"Unknown {kind} '{name}'")
        self.kind = kind
        self.name = name

    def __str__(self) -> str:
        return self.args[0]
