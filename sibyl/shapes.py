"""
Shape-changing wrappers around object validators: Partial and Omit.

Both delegate to the inner validator's `try_judge` and then decide which of
its issues still count.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .classify import is_object
from .core import Validator, ensure_validator
from .error import IssueCode, JudgmentError, type_error
from .types import Ok

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PartialV(Validator[dict[str, Any]]):
    """
    Accept any subset of the inner object's fields.

    Issues tagged MISSING are dropped; anything else (a present field of the
    wrong type) still fails. If only MISSING issues were found, the input
    itself is returned unchanged.
    """

    inner: Validator[Any]

    def judge(self, value: Any) -> Any:
        if not is_object(value):
            raise type_error(value, "object")

        result = self.inner.try_judge(value)
        if isinstance(result, Ok):
            return result.data

        remaining = [i for i in result.issues if i.code is not IssueCode.MISSING]
        if remaining:
            raise JudgmentError(remaining)

        logger.debug("partial: ignored %d missing-field issue(s)", len(result.issues))
        return value


def _without(data: Mapping[Any, Any], keys: frozenset[str]) -> dict[Any, Any]:
    return {k: v for k, v in data.items() if k not in keys}


@dataclass(frozen=True, slots=True)
class OmitV(Validator[dict[str, Any]]):
    """
    The inner object validator minus some fields.

    Omitted fields are never validated, only dropped: issues rooted at an
    omitted key are discarded. If nothing else failed, the raw input is
    filtered and returned.
    """

    inner: Validator[Any]
    omitted: frozenset[str]

    def judge(self, value: Any) -> dict[str, Any]:
        if not is_object(value):
            raise type_error(value, "object")

        result = self.inner.try_judge(value)
        if isinstance(result, Ok):
            return _without(result.data, self.omitted)

        remaining = [
            issue
            for issue in result.issues
            if not (issue.loc and issue.loc[0] in self.omitted)
        ]
        if remaining:
            raise JudgmentError(remaining)

        logger.debug(
            "omit: every issue belonged to omitted keys %s", sorted(self.omitted)
        )
        return _without(value, self.omitted)


def Partial(validator: Validator[Any]) -> PartialV:
    """
    Make every field of an object validator optional.

    Usage:
        Partial(Obj({"name": Str(), "age": Num()})).judge({})   # {}
    """
    return PartialV(inner=ensure_validator(validator, "Partial target"))


def Omit(validator: Validator[Any], keys: Iterable[str]) -> OmitV:
    """
    Drop fields from an object validator.

    Usage:
        Omit(Obj({"id": Num(), "password": Str()}), ["password"])
    """
    if isinstance(keys, str):
        raise TypeError("Omit() takes an iterable of keys, not a single string")
    return OmitV(
        inner=ensure_validator(validator, "Omit target"), omitted=frozenset(keys)
    )
