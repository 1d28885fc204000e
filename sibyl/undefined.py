"""
UNDEFINED sentinel marking a value that was never supplied.
"""

from enum import Enum


class Undefined(Enum):
    """
    Singleton standing for "no value at all", as opposed to an explicit None.

    Object validators hand UNDEFINED to a field's validator when the key is
    missing from the input, so a bare field reports the absence while an
    Optional(...) field lets it through.

    UNDEFINED is falsy and only ever equal to itself.

    Examples:
        Obj({"a": Str()}).judge({})            # fails: Value is undefined, expected string
        Optional(Str()).judge(UNDEFINED)       # UNDEFINED
        Nullable(Str()).judge(UNDEFINED)       # fails, only None is tolerated
    """

    UNDEFINED = "undefined"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __str__(self) -> str:
        return "undefined"


UNDEFINED = Undefined.UNDEFINED


def is_undefined(value: object) -> bool:
    return value is UNDEFINED
