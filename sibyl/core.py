"""
Core validator contract for sibyl.

Every leaf and combinator subclasses Validator and writes only `judge`.
`try_judge`, direct calls and the `|` / `&` operators come from the base.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from .error import JudgmentError
from .types import Err, Ok, Result

T = TypeVar("T")


class Validator(ABC, Generic[T]):
    """
    Immutable, reusable judge of untyped values.

    Subclasses are frozen dataclasses holding construction-time options only,
    so one instance can be shared across threads and calls.
    """

    __slots__ = ()

    @abstractmethod
    def judge(self, value: Any) -> T:
        """
        Check (and possibly coerce) a value.

        Returns:
            The conforming value.

        Raises:
            JudgmentError: with every violation found, paths relative to `value`.
        """

    def try_judge(self, value: Any) -> Result[T]:
        """
        Non-raising form of `judge`.

        Returns:
            Ok(data) if the value conforms
            Err(issues) if it does not

        Anything other than a JudgmentError is a bug, not a verdict, and
        propagates.
        """
        try:
            return Ok(self.judge(value))
        except JudgmentError as exc:
            return Err(exc.issues)

    def __call__(self, value: Any) -> Result[T]:
        return self.try_judge(value)

    def is_valid(self, value: Any) -> bool:
        return self.try_judge(value).is_ok()

    def __or__(self, other: Any) -> Validator[Any]:
        """
        First-match union.

        Usage:
            Str() | Num()
            Str() | int
        """
        from .compose import UnionV
        from .schema import to_validator

        return UnionV.of(self, to_validator(other))

    def __ror__(self, other: Any) -> Validator[Any]:
        """Support `str | Num()` where the plain type comes first."""
        from .compose import UnionV
        from .schema import to_validator

        return UnionV.of(to_validator(other), self)

    def __and__(self, other: Any) -> Validator[Any]:
        """
        Intersection: both must accept, results are deep-merged.

        Usage:
            Obj({"a": Str()}) & Obj({"b": Num()})
        """
        from .compose import IntersectionV
        from .schema import to_validator

        return IntersectionV.of(self, to_validator(other))

    def __rand__(self, other: Any) -> Validator[Any]:
        from .compose import IntersectionV
        from .schema import to_validator

        return IntersectionV.of(to_validator(other), self)


def ensure_validator(v: Any, role: str = "child") -> Validator[Any]:
    """Reject non-validators at construction time."""
    if not isinstance(v, Validator):
        raise TypeError(
            f"Expected a Validator as {role}, got {type(v).__name__}; "
            "use to_validator() for shorthand schemas"
        )
    return v
