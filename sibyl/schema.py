"""
Schema operations for sibyl.

Provides to_validator() for dict-like shorthand schemas, validate(), and
Pydantic interop in both directions: to_pydantic() compiles an object
validator into a model, Model() judges values with an existing model.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Literal
from typing import Optional as TypingOptional
from typing import Union as TypingUnion

from pydantic import BaseModel, create_model
from pydantic import ValidationError as PydanticValidationError

from .compose import IntersectionV, UnionV
from .core import Validator
from .error import IssueCode, JudgmentError, JudgmentIssue, type_error
from .leaves import (
    Bool,
    BooleanV,
    Date,
    DateV,
    EmailV,
    EnumV,
    Lit,
    LiteralV,
    Nil,
    NilV,
    Num,
    NumberV,
    Str,
    StringV,
    Undef,
    UrlV,
    UuidV,
)
from .shapes import OmitV, PartialV
from .structures import Arr, ArrayV, Obj, ObjectV, RecordV, Tuple, TupleV
from .types import Err, Ok
from .undefined import UNDEFINED
from .wrappers import NullableV, NullishV, OptionalV

_TYPE_TO_VALIDATOR = {
    str: Str,
    int: lambda: Num(integer=True),
    float: Num,
    bool: Bool,
    datetime: Date,
    date: Date,
    type(None): Nil,
}

_PYDANTIC_CODES = {
    "missing": IssueCode.MISSING,
    "extra_forbidden": IssueCode.UNRECOGNIZED_KEY,
    "too_short": IssueCode.TOO_SMALL,
    "too_long": IssueCode.TOO_BIG,
    "greater_than": IssueCode.TOO_SMALL,
    "greater_than_equal": IssueCode.TOO_SMALL,
    "less_than": IssueCode.TOO_BIG,
    "less_than_equal": IssueCode.TOO_BIG,
    "string_too_short": IssueCode.TOO_SMALL,
    "string_too_long": IssueCode.TOO_BIG,
    "string_pattern_mismatch": IssueCode.INVALID_STRING,
    "literal_error": IssueCode.INVALID_LITERAL,
    "enum": IssueCode.INVALID_ENUM,
}


def _issue_code(error_type: str) -> IssueCode:
    if error_type in _PYDANTIC_CODES:
        return _PYDANTIC_CODES[error_type]
    if error_type.endswith(("_type", "_parsing")):
        return IssueCode.INVALID_TYPE
    return IssueCode.CUSTOM


@dataclass(frozen=True, slots=True)
class ModelV(Validator[Any]):
    """Judge values with a Pydantic model; issues keep Pydantic's locations."""

    model: type[BaseModel]

    def judge(self, value: Any) -> BaseModel:
        if value is UNDEFINED:
            raise type_error(value, "object")
        try:
            return self.model.model_validate(value)
        except PydanticValidationError as exc:
            raise JudgmentError(
                JudgmentIssue(err["msg"], tuple(err["loc"]), _issue_code(err["type"]))
                for err in exc.errors()
            ) from None


def Model(model: type[BaseModel]) -> ModelV:
    """
    Use a Pydantic model as a validator.

    Usage:
        class Address(BaseModel):
            street: str
            city: str

        Obj({"name": Str(), "address": Model(Address)})
    """
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise TypeError(f"Model() expects a BaseModel subclass, got {model!r}")
    return ModelV(model=model)


def to_validator(v: Any) -> Validator[Any]:
    """
    Coerce a shorthand value to a validator.

    Conversion rules:
        Validator -> pass through
        BaseModel subclass -> Model(v)
        str/int/float/bool/datetime/date/NoneType -> matching leaf
        dict -> Obj with recursive conversion
        list -> Arr of the single element's validator
        tuple -> Tuple with recursive conversion
        UNDEFINED -> Undef()
        str/int/float/bool/None value -> Lit(value)
    """
    if isinstance(v, Validator):
        return v

    if isinstance(v, type):
        if issubclass(v, BaseModel):
            return Model(v)
        if v in _TYPE_TO_VALIDATOR:
            return _TYPE_TO_VALIDATOR[v]()
        raise TypeError(f"No validator for type {v.__name__}")

    if isinstance(v, dict):
        return Obj({key: to_validator(val) for key, val in v.items()})

    if isinstance(v, list):
        if len(v) != 1:
            raise ValueError(
                f"List shorthand takes exactly one item validator, got {len(v)}"
            )
        return Arr(to_validator(v[0]))

    if isinstance(v, tuple):
        return Tuple([to_validator(item) for item in v])

    if v is UNDEFINED:
        return Undef()

    if v is None or isinstance(v, (str, int, float, bool)):
        return Lit(v)

    raise TypeError(f"Cannot convert {type(v).__name__} to validator")


def validate(data: Any, schema: Any) -> Ok[Any] | Err:
    """
    Validate data against a validator or shorthand schema.

    Returns:
        Ok(data) if validation passes
        Err(issues) if validation fails

    Usage:
        schema = {
            "name": Str(min_len=1),
            "age": int,
            "tags": [str],
        }
        result = validate({"name": "Alice", "age": 30, "tags": []}, schema)
    """
    return to_validator(schema).try_judge(data)


def to_pydantic(name: str, schema: Any) -> type[BaseModel]:
    """
    Compile an object validator (or dict shorthand) to a Pydantic model.

    Args:
        name: Name of the generated model class
        schema: ObjectV or dict shorthand

    Returns:
        A Pydantic BaseModel subclass; nested objects become nested models

    Usage:
        User = to_pydantic("User", Obj({
            "name": Str(),
            "email": Optional(Email()),
        }))
        user = User(name="Alice")
    """
    validator = to_validator(schema)
    if not isinstance(validator, ObjectV):
        raise TypeError("to_pydantic() needs an object schema")

    fields: dict[str, Any] = {}
    for key, v in validator.fields.items():
        fields[key] = _extract_pydantic_field(v, f"{name}_{key}")

    return create_model(name, **fields)


def _extract_pydantic_field(v: Validator[Any], name: str) -> tuple[Any, Any]:
    """Extract Pydantic field type and default from validator."""
    match v:
        case OptionalV(inner=inner, default=default) | NullishV(
            inner=inner, default=default
        ):
            field_type = _annotation(inner, name)
            return (TypingOptional[field_type], None if default is UNDEFINED else default)
        case NullableV(inner=inner):
            return (TypingOptional[_annotation(inner, name)], ...)

    return (_annotation(v, name), ...)


def _annotation(v: Validator[Any], name: str) -> Any:
    match v:
        case StringV() | EmailV() | UrlV() | UuidV():
            return str
        case NumberV(integer=True):
            return int
        case NumberV():
            return float
        case BooleanV():
            return bool
        case DateV():
            return datetime
        case LiteralV(value=value) if not isinstance(value, float):
            return Literal[value]
        case EnumV(enum_cls=enum_cls) if enum_cls is not None:
            return enum_cls
        case EnumV(values=values) if not any(isinstance(x, float) for x in values):
            return Literal[values]
        case NilV():
            return type(None)
        case ModelV(model=model):
            return model
        case ObjectV():
            return to_pydantic(name, v)
        case ArrayV(item=item):
            return list[_annotation(item, name)]  # type: ignore[misc]
        case TupleV(items=items) if items:
            return tuple[tuple(_annotation(i, f"{name}_{n}") for n, i in enumerate(items))]
        case RecordV(keys=keys, values=values):
            return dict[_annotation(keys, name), _annotation(values, name)]  # type: ignore[misc]
        case UnionV(options=options):
            return TypingUnion[tuple(_annotation(o, name) for o in options)]
        case OptionalV(inner=inner) | NullableV(inner=inner) | NullishV(inner=inner):
            return TypingOptional[_annotation(inner, name)]
        case IntersectionV() | PartialV() | OmitV():
            return dict[str, Any]

    return Any
