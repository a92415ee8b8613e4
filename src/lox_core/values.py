"""Runtime value types for Lox Core."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class VNumber:
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def __str__(self) -> str:
        v = self.value
        if math.isnan(v):
            return "NaN"
        if math.isinf(v):
            return "Infinity" if v > 0 else "-Infinity"
        if v.is_integer():
            if v == 0 and math.copysign(1.0, v) < 0:
                return "-0"
            return str(int(v))
        return repr(v)


@dataclass(frozen=True, slots=True)
class VString:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class VBool:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


class _Nil:
    """Singleton for the nil value."""

    _instance: _Nil | None = None

    def __new__(cls) -> _Nil:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Nil"

    def __str__(self) -> str:
        return "nil"


Nil = _Nil()

TRUE = VBool(True)
FALSE = VBool(False)

Value = Union[VNumber, VString, VBool, _Nil]


def from_literal(literal: float | str | bool | None) -> Value:
    """Wrap a decoded token literal (or Python constant) as a Value."""
    if literal is None:
        return Nil
    if isinstance(literal, bool):
        return VBool(literal)
    if isinstance(literal, (int, float)):
        return VNumber(float(literal))
    if isinstance(literal, str):
        return VString(literal)
    raise TypeError(f"no Lox value for {literal!r}")


def is_truthy(value: Value) -> bool:
    """Only nil and false are falsey."""
    if value is Nil:
        return False
    if isinstance(value, VBool):
        return value.value
    return True


def is_equal(a: Value, b: Value) -> bool:
    """Structural equality; values of different kinds are never equal."""
    if type(a) is not type(b):
        return False
    if isinstance(a, VNumber):
        x, y = a.value, b.value
        # NaN equals NaN; 0 and -0 differ
        if math.isnan(x) or math.isnan(y):
            return math.isnan(x) and math.isnan(y)
        return x == y and math.copysign(1.0, x) == math.copysign(1.0, y)
    return a == b


def stringify(value: Value) -> str:
    return str(value)
