"""
Value classifier used for human-readable error messages.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any

from .undefined import UNDEFINED


class ValueType(str, Enum):
    """Closed vocabulary of runtime shapes reported in messages."""

    UNDEFINED = "undefined"
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    DATE = "date"
    ARRAY = "array"
    OBJECT = "object"
    BYTES = "bytes"
    SET = "set"
    FUNCTION = "function"
    INSTANCE = "instance"

    def __str__(self) -> str:
        return self.value


def classify(value: Any) -> ValueType:
    """
    Classify an arbitrary value.

    Order matters: bool is an int subclass and datetime is a date subclass,
    so the narrower checks run first. Anything that is not a builtin shape
    is an INSTANCE.

    Usage:
        classify("x")          # ValueType.STRING
        classify([1, 2])       # ValueType.ARRAY
        classify(None)         # ValueType.NULL
        classify(UNDEFINED)    # ValueType.UNDEFINED
    """
    if value is UNDEFINED:
        return ValueType.UNDEFINED
    if value is None:
        return ValueType.NULL
    if isinstance(value, bool):
        return ValueType.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueType.NUMBER
    if isinstance(value, str):
        return ValueType.STRING
    if isinstance(value, date):
        return ValueType.DATE
    if isinstance(value, (list, tuple)):
        return ValueType.ARRAY
    if isinstance(value, Mapping):
        return ValueType.OBJECT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ValueType.BYTES
    if isinstance(value, (set, frozenset)):
        return ValueType.SET
    if callable(value):
        return ValueType.FUNCTION
    return ValueType.INSTANCE


def is_object(value: Any) -> bool:
    """True for values the object-shaped combinators accept."""
    return classify(value) is ValueType.OBJECT


def is_array(value: Any) -> bool:
    return classify(value) is ValueType.ARRAY
