"""
Type definitions for sibyl.

Provides the Ok/Err result pair returned by `try_judge`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar, Union

from .error import JudgmentIssue

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result carrying the judged (possibly coerced) value."""

    data: T

    @property
    def type(self) -> Literal["success"]:
        return "success"

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Err:
    """Error result carrying every issue found."""

    issues: tuple[JudgmentIssue, ...]

    @property
    def type(self) -> Literal["error"]:
        return "error"

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    @property
    def paths(self) -> list[str]:
        return [issue.path for issue in self.issues]


Result = Union[Ok[T], Err]
