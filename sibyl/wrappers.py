"""
Absence-tolerant wrappers: Optional, Nullable and Nullish.

None of them add a path segment or touch child errors. Defaults are deep
copied on every use, so a caller mutating one result never affects the next.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any

from .core import Validator, ensure_validator
from .undefined import UNDEFINED


@dataclass(frozen=True, slots=True)
class OptionalV(Validator[Any]):
    inner: Validator[Any]
    default: Any = UNDEFINED

    def judge(self, value: Any) -> Any:
        if value is UNDEFINED:
            return copy.deepcopy(self.default)
        return self.inner.judge(value)


@dataclass(frozen=True, slots=True)
class NullableV(Validator[Any]):
    inner: Validator[Any]

    def judge(self, value: Any) -> Any:
        if value is None:
            return None
        return self.inner.judge(value)


@dataclass(frozen=True, slots=True)
class NullishV(Validator[Any]):
    inner: Validator[Any]
    default: Any = UNDEFINED

    def judge(self, value: Any) -> Any:
        if value is None or value is UNDEFINED:
            return value if self.default is UNDEFINED else copy.deepcopy(self.default)
        return self.inner.judge(value)


def Optional(v: Validator[Any], default: Any = UNDEFINED) -> OptionalV:
    """
    Allow the value to be absent (UNDEFINED); None still goes to `v`.

    Usage:
        Optional(Str())              # absent field stays absent
        Optional(Num(), default=0)   # absent field becomes 0
    """
    return OptionalV(inner=ensure_validator(v, "Optional target"), default=default)


def Nullable(v: Validator[Any]) -> NullableV:
    """Allow None; an absent value still goes to `v`."""
    return NullableV(inner=ensure_validator(v, "Nullable target"))


def Nullish(v: Validator[Any], default: Any = UNDEFINED) -> NullishV:
    """
    Allow None or absence, optionally replacing either with `default`.

    Usage:
        Nullish(Str())
        Nullish(Str(), default="n/a")
    """
    return NullishV(inner=ensure_validator(v, "Nullish target"), default=default)
