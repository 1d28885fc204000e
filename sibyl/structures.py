"""
Structural combinators: objects, arrays, tuples and records.

All of them judge every child, never stopping at the first failure, and
re-raise one JudgmentError holding every issue with its full path.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .classify import is_array, is_object
from .context import is_strict
from .core import Validator, ensure_validator
from .error import (
    IssueCode,
    JudgmentError,
    JudgmentIssue,
    RecordKey,
    path_context,
    type_error,
)
from .undefined import UNDEFINED


@dataclass(frozen=True, slots=True)
class ObjectV(Validator[dict[str, Any]]):
    """
    Fixed-shape object validator.

    A projection: keys outside `fields` are dropped from the result unless
    strict mode is on, in which case each one is an issue. Missing keys are
    judged as UNDEFINED, so only Optional/Nullish fields tolerate them.
    """

    fields: Mapping[str, Validator[Any]]
    strict: bool | None = None

    def _strict(self) -> bool:
        return is_strict() if self.strict is None else self.strict

    def judge(self, value: Any) -> dict[str, Any]:
        if not is_object(value):
            raise type_error(value, "object")

        result: dict[str, Any] = {}
        issues: list[JudgmentIssue] = []

        for key, validator in self.fields.items():
            try:
                with path_context(key):
                    parsed = validator.judge(value.get(key, UNDEFINED))
            except JudgmentError as exc:
                issues.extend(exc.issues)
                continue
            if parsed is not UNDEFINED:
                result[key] = parsed

        if self._strict():
            issues.extend(
                JudgmentIssue(
                    f"Unrecognized key: {key!r}", (str(key),), IssueCode.UNRECOGNIZED_KEY
                )
                for key in value
                if key not in self.fields
            )

        if issues:
            raise JudgmentError(issues)
        return result


@dataclass(frozen=True, slots=True)
class ArrayV(Validator[list[Any]]):
    item: Validator[Any]
    min_len: int | None = None
    max_len: int | None = None

    def judge(self, value: Any) -> list[Any]:
        if not is_array(value):
            raise type_error(value, "array")

        # Length problems are reported alone, before any element is looked at
        if self.min_len is not None and len(value) < self.min_len:
            raise JudgmentError.single(
                f"Value is too short, expected at least {self.min_len} elements",
                IssueCode.TOO_SMALL,
            )
        if self.max_len is not None and len(value) > self.max_len:
            raise JudgmentError.single(
                f"Value is too long, expected at most {self.max_len} elements",
                IssueCode.TOO_BIG,
            )

        result: list[Any] = []
        issues: list[JudgmentIssue] = []
        for index, element in enumerate(value):
            try:
                with path_context(index):
                    result.append(self.item.judge(element))
            except JudgmentError as exc:
                issues.extend(exc.issues)

        if issues:
            raise JudgmentError(issues)
        return result


@dataclass(frozen=True, slots=True)
class TupleV(Validator[tuple[Any, ...]]):
    items: tuple[Validator[Any], ...]

    def judge(self, value: Any) -> tuple[Any, ...]:
        if not is_array(value):
            raise type_error(value, "array")
        if len(value) != len(self.items):
            raise JudgmentError.single(
                f"Expected {len(self.items)} elements, got {len(value)}",
                IssueCode.INVALID_LENGTH,
            )

        result: list[Any] = []
        issues: list[JudgmentIssue] = []
        for index, (validator, element) in enumerate(zip(self.items, value)):
            try:
                with path_context(index):
                    result.append(validator.judge(element))
            except JudgmentError as exc:
                issues.extend(exc.issues)

        if issues:
            raise JudgmentError(issues)
        return tuple(result)


@dataclass(frozen=True, slots=True)
class RecordV(Validator[dict[Any, Any]]):
    """
    Open mapping with typed keys and values.

    A key that fails its validator is reported at "<key: k>" and its value is
    not judged. Values are reported under their key, like object fields.
    """

    keys: Validator[Any]
    values: Validator[Any]

    def judge(self, value: Any) -> dict[Any, Any]:
        if not is_object(value):
            raise type_error(value, "object")

        result: dict[Any, Any] = {}
        issues: list[JudgmentIssue] = []

        for raw_key, raw_value in value.items():
            try:
                key = self.keys.judge(raw_key)
            except JudgmentError as exc:
                issues.extend(
                    JudgmentIssue(issue.message, (RecordKey(raw_key),), IssueCode.INVALID_KEY)
                    for issue in exc.issues
                )
                continue

            try:
                with path_context(str(raw_key)):
                    result[key] = self.values.judge(raw_value)
            except JudgmentError as exc:
                issues.extend(exc.issues)

        if issues:
            raise JudgmentError(issues)
        return result


def Obj(fields: Mapping[str, Validator[Any]], strict: bool | None = None) -> ObjectV:
    """
    Object validator from a field -> validator mapping.

    Usage:
        Obj({
            "name": Str(min_len=2),
            "email": Optional(Email()),
            "tags": Arr(Str()),
        })
        Obj({"id": Num()}, strict=True)   # extra keys are violations
    """
    checked = {key: ensure_validator(v, f"field {key!r}") for key, v in fields.items()}
    return ObjectV(fields=MappingProxyType(checked), strict=strict)


def Arr(
    item: Validator[Any], min_len: int | None = None, max_len: int | None = None
) -> ArrayV:
    """
    Homogeneous list validator.

    Usage:
        Arr(Str())
        Arr(Num(), min_len=1, max_len=10)
    """
    for bound in (min_len, max_len):
        if bound is not None and bound < 0:
            raise ValueError(f"Arr() length bounds must be non-negative, got {bound}")
    if min_len is not None and max_len is not None and min_len > max_len:
        raise ValueError(f"Arr(): min_len {min_len} exceeds max_len {max_len}")
    return ArrayV(item=ensure_validator(item, "array item"), min_len=min_len, max_len=max_len)


def Tuple(items: Sequence[Validator[Any]]) -> TupleV:
    """Fixed-length positional validator: Tuple([Str(), Num()])."""
    return TupleV(items=tuple(ensure_validator(v, "tuple item") for v in items))


def Record(keys: Validator[Any], values: Validator[Any]) -> RecordV:
    """Mapping validator: Record(Str(pattern=r"^[a-z]+$"), Num())."""
    return RecordV(
        keys=ensure_validator(keys, "record key"),
        values=ensure_validator(values, "record value"),
    )
