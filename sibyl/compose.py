"""
Union and intersection combinators, plus the deep merge intersections use.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from functools import reduce
from typing import Any

from .classify import is_object
from .core import Validator, ensure_validator
from .error import IssueCode, JudgmentError, JudgmentIssue, type_error

logger = logging.getLogger(__name__)


def deep_merge(target: Any, source: Any) -> Any:
    """
    Merge two judged values, `source` winning on conflict.

    Two mappings merge key by key, recursing where both sides hold the key.
    Any other pair resolves to `source`. Neither argument is mutated.

    Examples:
        deep_merge({"a": {"x": 1}}, {"a": {"y": 2}})   # {"a": {"x": 1, "y": 2}}
        deep_merge({"a": 1}, {"a": "one"})              # {"a": "one"}
        deep_merge("text", "foo")                       # "foo"
    """
    if not (is_object(target) and is_object(source)):
        return source

    merged = dict(target)
    for key, value in source.items():
        merged[key] = deep_merge(merged[key], value) if key in merged else value
    return merged


def _at_least_two(validators: Sequence[Any], name: str) -> tuple[Validator[Any], ...]:
    checked = tuple(ensure_validator(v, f"{name} member") for v in validators)
    if len(checked) < 2:
        raise ValueError(f"{name}() needs at least two validators, got {len(checked)}")
    return checked


@dataclass(frozen=True, slots=True)
class UnionV(Validator[Any]):
    """
    Ordered first-match union.

    The first option that accepts the value wins, even if a later one would
    have matched more precisely. When none does, a single issue is reported;
    the options' own issues are discarded.
    """

    options: tuple[Validator[Any], ...]

    def judge(self, value: Any) -> Any:
        for index, option in enumerate(self.options):
            try:
                result = option.judge(value)
            except JudgmentError:
                continue
            logger.debug("union matched option %d of %d", index, len(self.options))
            return result

        logger.debug("union: none of %d options matched", len(self.options))
        raise type_error(value, "one of the union values", IssueCode.INVALID_UNION)

    @classmethod
    def of(cls, left: Validator[Any], right: Validator[Any]) -> UnionV:
        """Join two validators, flattening nested unions (a | b | c)."""
        options = left.options if isinstance(left, UnionV) else (left,)
        return cls(options=(*options, right))


@dataclass(frozen=True, slots=True)
class IntersectionV(Validator[Any]):
    """
    Every member judges the original value; successes are deep-merged in
    order. Any failure fails the whole intersection with all members' issues.
    """

    members: tuple[Validator[Any], ...]

    def judge(self, value: Any) -> Any:
        results: list[Any] = []
        issues: list[JudgmentIssue] = []

        for member in self.members:
            try:
                results.append(member.judge(value))
            except JudgmentError as exc:
                issues.extend(exc.issues)

        if issues:
            logger.debug(
                "intersection: %d of %d members failed",
                len(self.members) - len(results),
                len(self.members),
            )
            raise JudgmentError(issues)
        return reduce(deep_merge, results)

    @classmethod
    def of(cls, left: Validator[Any], right: Validator[Any]) -> IntersectionV:
        members = left.members if isinstance(left, IntersectionV) else (left,)
        return cls(members=(*members, right))


def Union(validators: Sequence[Validator[Any]]) -> UnionV:
    """
    First-match union of two or more validators.

    Usage:
        Union([Str(), Num()])
        Union([Lit("pending"), Lit("approved"), Lit("rejected")])
    """
    return UnionV(options=_at_least_two(validators, "Union"))


def Intersection(validators: Sequence[Validator[Any]]) -> IntersectionV:
    """
    Intersection of two or more validators.

    Usage:
        Intersection([Obj({"a": Str()}), Obj({"b": Num()})])
        Intersection([Str(), Lit("foo")])     # degenerates to the literal
    """
    return IntersectionV(members=_at_least_two(validators, "Intersection"))
