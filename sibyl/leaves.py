"""
Built-in leaf validators for sibyl.

Each leaf checks one primitive kind and fails with a single issue at the root
path; combinators add the location. Factories return frozen validator
instances.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum as _Enum
from typing import Any
from urllib.parse import urlsplit

from .classify import classify
from .core import Validator
from .error import IssueCode, JudgmentError, type_error
from .undefined import UNDEFINED


def _check_bounds(lower: Any, upper: Any, what: str) -> None:
    if lower is not None and upper is not None and lower > upper:
        raise ValueError(f"{what}: lower bound {lower} exceeds upper bound {upper}")


@dataclass(frozen=True, slots=True)
class StringV(Validator[str]):
    min_len: int | None = None
    max_len: int | None = None
    pattern: str | None = None
    coerce: bool = False

    def judge(self, value: Any) -> str:
        if value is UNDEFINED:
            raise type_error(value, "string")
        val = str(value) if self.coerce else value

        if not isinstance(val, str):
            raise type_error(val, "string")

        if self.min_len is not None and len(val) < self.min_len:
            raise JudgmentError.single(
                f"Value is too short, expected at least {self.min_len} characters",
                IssueCode.TOO_SMALL,
            )
        if self.max_len is not None and len(val) > self.max_len:
            raise JudgmentError.single(
                f"Value is too long, expected at most {self.max_len} characters",
                IssueCode.TOO_BIG,
            )
        if self.pattern is not None and re.search(self.pattern, val) is None:
            raise JudgmentError.single(
                "Value does not match the pattern", IssueCode.INVALID_STRING
            )
        return val


def _coerce_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        coerced: int | float = value
    elif value is None:
        coerced = 0
    elif isinstance(value, str):
        text = value.strip()
        try:
            coerced = int(text) if text else 0
        except ValueError:
            try:
                coerced = float(text)
            except ValueError:
                coerced = math.nan
    else:
        coerced = math.nan

    if isinstance(coerced, float) and math.isnan(coerced):
        raise JudgmentError.single(
            "Value cannot be coerced to a number", IssueCode.INVALID_TYPE
        )
    return coerced


@dataclass(frozen=True, slots=True)
class NumberV(Validator[Any]):
    min: float | None = None
    max: float | None = None
    coerce: bool = False
    integer: bool = False

    def judge(self, value: Any) -> int | float:
        if value is UNDEFINED:
            raise type_error(value, "number")
        val = _coerce_number(value) if self.coerce else value

        if isinstance(val, bool) or not isinstance(val, (int, float)):
            raise type_error(val, "number")
        if self.integer and not isinstance(val, int):
            raise JudgmentError.single(
                "Value is number, expected integer", IssueCode.INVALID_TYPE
            )

        if self.min is not None and val < self.min:
            raise JudgmentError.single(
                f"Value is too small, expected at least {self.min}", IssueCode.TOO_SMALL
            )
        if self.max is not None and val > self.max:
            raise JudgmentError.single(
                f"Value is too big, expected at most {self.max}", IssueCode.TOO_BIG
            )
        return val


_FALSE_STRINGS = frozenset({"false", "0", ""})


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value not in _FALSE_STRINGS
    if value is None:
        return False
    return bool(value)


@dataclass(frozen=True, slots=True)
class BooleanV(Validator[bool]):
    coerce: bool = False

    def judge(self, value: Any) -> bool:
        if value is UNDEFINED:
            raise type_error(value, "boolean")
        if self.coerce:
            return _coerce_bool(value)
        if not isinstance(value, bool):
            raise type_error(value, "boolean")
        return value


def _parse_iso(text: str) -> datetime:
    text = text.strip()
    # fromisoformat only learned the "Z" suffix in 3.11
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _as_utc(moment: datetime) -> datetime:
    # Naive datetimes are read as UTC so they compare with aware ones
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass(frozen=True, slots=True)
class DateV(Validator[datetime]):
    min: datetime | None = None
    max: datetime | None = None

    def judge(self, value: Any) -> datetime:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime.combine(value, time())
        elif isinstance(value, str):
            try:
                parsed = _parse_iso(value)
            except ValueError:
                raise JudgmentError.single(
                    "Invalid date", IssueCode.INVALID_DATE
                ) from None
        else:
            raise type_error(value, "string or date")

        moment = _as_utc(parsed)
        if self.min is not None and moment < _as_utc(self.min):
            raise JudgmentError.single(
                f"Date is before {self.min.isoformat()}", IssueCode.TOO_SMALL
            )
        if self.max is not None and moment > _as_utc(self.max):
            raise JudgmentError.single(
                f"Date is after {self.max.isoformat()}", IssueCode.TOO_BIG
            )
        return parsed


def _same_value(a: Any, b: Any) -> bool:
    # 1 == True in Python, but a literal 1 must not accept True
    return classify(a) is classify(b) and a == b


@dataclass(frozen=True, slots=True)
class LiteralV(Validator[Any]):
    value: Any

    def judge(self, value: Any) -> Any:
        if not _same_value(value, self.value):
            raise type_error(value, "literal", IssueCode.INVALID_LITERAL)
        return self.value


@dataclass(frozen=True, slots=True)
class EnumV(Validator[Any]):
    """Membership in a fixed set; returns the matching member."""

    values: tuple[Any, ...]
    enum_cls: type[_Enum] | None = None

    def judge(self, value: Any) -> Any:
        if self.enum_cls is not None:
            for member in self.enum_cls:
                if value is member or _same_value(value, member.value):
                    return member
        else:
            for allowed in self.values:
                if _same_value(value, allowed):
                    return allowed
        raise type_error(value, "value from enum", IssueCode.INVALID_ENUM)


@dataclass(frozen=True, slots=True)
class NilV(Validator[None]):
    def judge(self, value: Any) -> None:
        if value is None:
            return None
        raise type_error(value, "null")


@dataclass(frozen=True, slots=True)
class UndefV(Validator[Any]):
    def judge(self, value: Any) -> Any:
        if value is UNDEFINED:
            return UNDEFINED
        raise type_error(value, "undefined")


@dataclass(frozen=True, slots=True)
class UnknownV(Validator[Any]):
    def judge(self, value: Any) -> Any:
        return value


_EMAIL_RE = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@"
    r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)

# Schemes that are meaningless without a host
_NETLOC_SCHEMES = frozenset({"http", "https", "ftp", "ftps", "ws", "wss"})


@dataclass(frozen=True, slots=True)
class EmailV(Validator[str]):
    def judge(self, value: Any) -> str:
        if not isinstance(value, str):
            raise type_error(value, "string")
        if not _EMAIL_RE.match(value):
            raise JudgmentError.single("Invalid email address", IssueCode.INVALID_STRING)
        return value


def _is_url(text: str) -> bool:
    try:
        parts = urlsplit(text)
    except ValueError:
        return False
    if not parts.scheme:
        return False
    if parts.scheme.lower() in _NETLOC_SCHEMES:
        return bool(parts.netloc)
    return bool(parts.netloc or parts.path)


@dataclass(frozen=True, slots=True)
class UrlV(Validator[str]):
    def judge(self, value: Any) -> str:
        if not isinstance(value, str):
            raise type_error(value, "string")
        if not _is_url(value):
            raise JudgmentError.single("Invalid URL", IssueCode.INVALID_STRING)
        return value


@dataclass(frozen=True, slots=True)
class UuidV(Validator[str]):
    def judge(self, value: Any) -> str:
        if not isinstance(value, str):
            raise type_error(value, "string")
        if not _UUID_RE.match(value):
            raise JudgmentError.single("Invalid UUID", IssueCode.INVALID_STRING)
        return value


def Str(
    min_len: int | None = None,
    max_len: int | None = None,
    pattern: str | None = None,
    coerce: bool = False,
) -> StringV:
    """
    String validator.

    Usage:
        Str()
        Str(min_len=2, max_len=50)
        Str(pattern=r"^[0-9]+$")
        Str(coerce=True)      # str(value) first
    """
    _check_bounds(min_len, max_len, "Str")
    if pattern is not None:
        re.compile(pattern)
    return StringV(min_len=min_len, max_len=max_len, pattern=pattern, coerce=coerce)


def Num(
    min: float | None = None,
    max: float | None = None,
    coerce: bool = False,
    integer: bool = False,
) -> NumberV:
    """
    Number validator (int or float, never bool).

    Usage:
        Num(min=0, max=300)
        Num(coerce=True)      # "42.5" -> 42.5, True -> 1, None -> 0
        Num(integer=True)
    """
    _check_bounds(min, max, "Num")
    return NumberV(min=min, max=max, coerce=coerce, integer=integer)


def Bool(coerce: bool = False) -> BooleanV:
    """Boolean validator. With coerce, "false"/"0"/""/None become False."""
    return BooleanV(coerce=coerce)


def Date(min: datetime | None = None, max: datetime | None = None) -> DateV:
    """ISO-8601 string or date/datetime, returned as datetime."""
    _check_bounds(min, max, "Date")
    return DateV(min=min, max=max)


def Lit(value: Any) -> LiteralV:
    """Exactly `value` (same kind, equal value)."""
    return LiteralV(value)


def NativeEnum(source: type[_Enum] | Iterable[Any]) -> EnumV:
    """
    Membership validator.

    Usage:
        NativeEnum(Color)               # Color.RED or "red" -> Color.RED
        NativeEnum(["a", "b", "c"])
    """
    if isinstance(source, type) and issubclass(source, _Enum):
        return EnumV(values=tuple(m.value for m in source), enum_cls=source)
    values = tuple(source)
    if not values:
        raise ValueError("NativeEnum() needs at least one value")
    return EnumV(values=values)


def Nil() -> NilV:
    return NilV()


def Undef() -> UndefV:
    return UndefV()


def Unknown() -> UnknownV:
    return UnknownV()


def Email() -> EmailV:
    return EmailV()


def Url() -> UrlV:
    return UrlV()


def Uuid() -> UuidV:
    return UuidV()
