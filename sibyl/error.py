"""
Judgment error model.

A JudgmentError carries one or more JudgmentIssues. Each issue knows where in
the input it happened through `loc`, a tuple of segments:
- str: object key, rendered "a.b"
- int: array or tuple index, rendered "[0]"
- RecordKey: a record key that failed its key validator, rendered "<key: k>"

Combinators prepend their own segment as errors propagate outward, so a leaf
only ever reports an empty location.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .classify import classify
from .undefined import UNDEFINED


class IssueCode(str, Enum):
    """Structured kind of an issue, independent of its message text."""

    MISSING = "missing"
    INVALID_TYPE = "invalid_type"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    INVALID_LENGTH = "invalid_length"
    INVALID_STRING = "invalid_string"
    INVALID_LITERAL = "invalid_literal"
    INVALID_ENUM = "invalid_enum"
    INVALID_UNION = "invalid_union"
    INVALID_DATE = "invalid_date"
    INVALID_KEY = "invalid_key"
    UNRECOGNIZED_KEY = "unrecognized_key"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class RecordKey:
    """Location segment for a record key that failed validation."""

    key: Any

    def __str__(self) -> str:
        return f"<key: {self.key}>"


Segment = str | int | RecordKey
Loc = tuple[Segment, ...]


def format_segment(segment: Segment, first: bool) -> str:
    if isinstance(segment, int) and not isinstance(segment, bool):
        return f"[{segment}]"
    return str(segment) if first else f".{segment}"


def format_path(loc: Iterable[Segment]) -> str:
    """
    Render a location as a path string.

    Index segments are always bracketed; key segments are dot-joined except at
    the start or right after nothing at all.

    Usage:
        format_path(())                     # ""
        format_path(("users", 1, "name"))   # "users[1].name"
        format_path((0, "id"))              # "[0].id"
    """
    return "".join(format_segment(seg, i == 0) for i, seg in enumerate(loc))


def join_path(segment: Segment, path: str) -> str:
    """Prefix an already rendered path with one more outer segment."""
    head = format_segment(segment, first=True)
    if not path:
        return head
    if path.startswith("["):
        return f"{head}{path}"
    return f"{head}.{path}"


@dataclass(frozen=True, slots=True)
class JudgmentIssue:
    """A single violation: what went wrong and where."""

    message: str
    loc: Loc = ()
    code: IssueCode = IssueCode.CUSTOM

    @property
    def path(self) -> str:
        return format_path(self.loc)

    def with_path(self, segment: Segment) -> JudgmentIssue:
        return JudgmentIssue(self.message, (segment, *self.loc), self.code)

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message, "path": self.path, "code": self.code.value}


class JudgmentError(Exception):
    """
    Raised by `judge` when a value does not conform.

    Always holds at least one issue. Constructing it without any is a bug in
    the calling validator and raises ValueError.
    """

    def __init__(self, issues: Iterable[JudgmentIssue]):
        self.issues: tuple[JudgmentIssue, ...] = tuple(issues)
        if not self.issues:
            raise ValueError("JudgmentError requires at least one issue")
        super().__init__(self._summary())

    def _summary(self) -> str:
        if len(self.issues) == 1:
            issue = self.issues[0]
            return issue.message + (f" at path: {issue.path}" if issue.path else "")
        return f"Judgment failed with {len(self.issues)} error(s)"

    def __iter__(self) -> Iterator[JudgmentIssue]:
        return iter(self.issues)

    def __len__(self) -> int:
        return len(self.issues)

    def with_path(self, segment: Segment) -> JudgmentError:
        """Return a copy whose issues all start with `segment`."""
        return JudgmentError(issue.with_path(segment) for issue in self.issues)

    @classmethod
    def single(
        cls, message: str, code: IssueCode = IssueCode.CUSTOM
    ) -> JudgmentError:
        return cls([JudgmentIssue(message, (), code)])


def type_issue(
    value: Any, expected: str, code: IssueCode = IssueCode.INVALID_TYPE
) -> JudgmentIssue:
    """
    Issue for a value of the wrong kind.

    An UNDEFINED value is tagged MISSING so wrappers like Partial can tell an
    absent field from a present-but-wrong one without reading the message.
    """
    if value is UNDEFINED:
        code = IssueCode.MISSING
    return JudgmentIssue(f"Value is {classify(value)}, expected {expected}", (), code)


def type_error(
    value: Any, expected: str, code: IssueCode = IssueCode.INVALID_TYPE
) -> JudgmentError:
    return JudgmentError([type_issue(value, expected, code)])


@contextmanager
def path_context(segment: Segment) -> Iterator[None]:
    """
    Prefix any JudgmentError escaping the block with `segment`.

    Other exceptions pass through untouched.

    Usage:
        with path_context("address"):
            street = street_validator.judge(raw["street"])
    """
    try:
        yield
    except JudgmentError as exc:
        raise exc.with_path(segment) from None
