"""
Sibyl - composable runtime validation with complete, located error reports.

Usage:
    from sibyl import Obj, Arr, Str, Num, Optional, Email

    inspector = Obj({
        "name": Str(min_len=2, max_len=50),
        "crime_coefficient": Num(min=0, max=300),
        "email": Email(),
        "enforcers": Optional(Arr(Str())),
    })

    inspector.judge(data)       # returns the judged value or raises JudgmentError
    inspector.try_judge(data)   # Ok(data) or Err(issues), never raises for bad input
"""

from .classify import ValueType, classify
from .compose import Intersection, IntersectionV, Union, UnionV, deep_merge
from .context import is_strict, judgment_context
from .core import Validator
from .error import (
    IssueCode,
    JudgmentError,
    JudgmentIssue,
    RecordKey,
    format_path,
    join_path,
    path_context,
)
from .leaves import (
    Bool,
    BooleanV,
    Date,
    DateV,
    Email,
    EmailV,
    EnumV,
    Lit,
    LiteralV,
    NativeEnum,
    Nil,
    NilV,
    Num,
    NumberV,
    Str,
    StringV,
    Undef,
    UndefV,
    Unknown,
    UnknownV,
    Url,
    UrlV,
    Uuid,
    UuidV,
)
from .schema import Model, ModelV, to_pydantic, to_validator, validate
from .shapes import Omit, OmitV, Partial, PartialV
from .structures import Arr, ArrayV, Obj, ObjectV, Record, RecordV, Tuple, TupleV
from .types import Err, Ok, Result
from .undefined import UNDEFINED
from .wrappers import Nullable, NullableV, Nullish, NullishV, Optional, OptionalV

__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    # Errors
    "JudgmentError",
    "JudgmentIssue",
    "IssueCode",
    "RecordKey",
    "format_path",
    "join_path",
    "path_context",
    # Core
    "Validator",
    "UNDEFINED",
    "ValueType",
    "classify",
    "judgment_context",
    "is_strict",
    # Leaves
    "Str",
    "Num",
    "Bool",
    "Date",
    "Lit",
    "NativeEnum",
    "Nil",
    "Undef",
    "Unknown",
    "Email",
    "Url",
    "Uuid",
    "StringV",
    "NumberV",
    "BooleanV",
    "DateV",
    "LiteralV",
    "EnumV",
    "NilV",
    "UndefV",
    "UnknownV",
    "EmailV",
    "UrlV",
    "UuidV",
    # Combinators
    "Obj",
    "Arr",
    "Tuple",
    "Record",
    "Union",
    "Intersection",
    "Partial",
    "Omit",
    "Optional",
    "Nullable",
    "Nullish",
    "ObjectV",
    "ArrayV",
    "TupleV",
    "RecordV",
    "UnionV",
    "IntersectionV",
    "PartialV",
    "OmitV",
    "OptionalV",
    "NullableV",
    "NullishV",
    "deep_merge",
    # Schema
    "to_validator",
    "validate",
    "to_pydantic",
    "Model",
    "ModelV",
]
