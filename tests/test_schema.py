"""
Tests for shorthand schemas, validate() and Pydantic interop.
"""

from datetime import datetime
from enum import Enum
from typing import Literal

import pytest
from pydantic import BaseModel, ValidationError

from sibyl import (
    UNDEFINED,
    ArrayV,
    Arr,
    Email,
    Err,
    IssueCode,
    JudgmentError,
    LiteralV,
    Lit,
    Model,
    ModelV,
    NativeEnum,
    Nullable,
    Num,
    NumberV,
    Obj,
    ObjectV,
    Ok,
    Optional,
    Partial,
    Str,
    StringV,
    TupleV,
    UndefV,
    Union,
    to_pydantic,
    to_validator,
    validate,
)


class Address(BaseModel):
    street: str
    city: str


class Color(Enum):
    RED = "red"
    GREEN = "green"


class TestToValidator:
    def test_validator_passes_through(self):
        v = Str()
        assert to_validator(v) is v

    def test_type_coercion(self):
        assert isinstance(to_validator(str), StringV)
        assert isinstance(to_validator(float), NumberV)
        assert to_validator(datetime).judge("2024-01-15") == datetime(2024, 1, 15)
        assert to_validator(type(None)).judge(None) is None

    def test_int_means_integer(self):
        v = to_validator(int)
        assert v.judge(3) == 3
        assert not v.is_valid(3.5)
        assert not v.is_valid(True)

    def test_dict_coercion(self):
        v = to_validator({"name": str, "tags": [str]})
        assert isinstance(v, ObjectV)
        assert isinstance(v.fields["tags"], ArrayV)

    def test_list_coercion(self):
        assert to_validator([int]).judge([1, 2]) == [1, 2]
        with pytest.raises(ValueError):
            to_validator([str, int])
        with pytest.raises(ValueError):
            to_validator([])

    def test_tuple_coercion(self):
        v = to_validator((str, int))
        assert isinstance(v, TupleV)
        assert v.judge(["a", 1]) == ("a", 1)

    def test_scalars_become_literals(self):
        v = to_validator("admin")
        assert isinstance(v, LiteralV)
        assert v.judge("admin") == "admin"
        assert to_validator(None).judge(None) is None

    def test_undefined(self):
        assert isinstance(to_validator(UNDEFINED), UndefV)

    def test_model_class(self):
        assert isinstance(to_validator(Address), ModelV)

    def test_unsupported(self):
        with pytest.raises(TypeError):
            to_validator(set)
        with pytest.raises(TypeError):
            to_validator(object())


class TestValidate:
    def test_simple_schema(self):
        schema = {"name": str, "age": int}
        assert validate({"name": "Alice", "age": 30}, schema) == Ok(
            {"name": "Alice", "age": 30}
        )

    def test_nested_schema(self):
        schema = {
            "user": {"name": Str(min_len=1), "email": Optional(Email())},
            "tags": [str],
        }
        data = {"user": {"name": "Bob"}, "tags": ["a"]}
        assert validate(data, schema) == Ok(data)

    def test_error_paths(self):
        schema = {"user": {"name": str, "roles": [str]}}
        result = validate({"user": {"name": 1, "roles": [1]}}, schema)
        assert isinstance(result, Err)
        assert sorted(result.paths) == ["user.name", "user.roles[0]"]

    def test_literal_union_shorthand(self):
        schema = {"role": Lit("admin") | "user"}
        assert validate({"role": "user"}, schema).is_ok()
        assert validate({"role": "guest"}, schema).is_err()


class TestModel:
    def test_valid(self):
        address = Model(Address).judge({"street": "1 Main", "city": "Tokyo"})
        assert address == Address(street="1 Main", city="Tokyo")

    def test_issue_locations(self):
        validator = Obj({"name": Str(), "address": Model(Address)})
        result = validator.try_judge({"name": "Akane", "address": {"street": "1 Main"}})
        assert isinstance(result, Err)
        (issue,) = result.issues
        assert issue.path == "address.city"
        assert issue.code is IssueCode.MISSING

    def test_wrong_kind(self):
        result = Model(Address).try_judge("Tokyo")
        assert isinstance(result, Err)
        assert result.issues[0].code is IssueCode.INVALID_TYPE

    def test_absent(self):
        result = Obj({"address": Model(Address)}).try_judge({})
        assert isinstance(result, Err)
        assert result.issues[0].message == "Value is undefined, expected object"
        assert result.issues[0].code is IssueCode.MISSING

    def test_partial_with_model_field(self):
        validator = Partial(Obj({"name": Str(), "address": Model(Address)}))
        data = {"address": {"street": "1 Main"}}
        assert validator.judge(data) is data

    def test_requires_model_class(self):
        with pytest.raises(TypeError):
            Model(dict)


class TestToPydantic:
    def test_simple_model(self):
        User = to_pydantic("User", Obj({"name": Str(), "age": Num(integer=True)}))
        user = User(name="Alice", age=30)
        assert user.name == "Alice"
        assert user.age == 30

    def test_optional_fields(self):
        User = to_pydantic(
            "User",
            Obj(
                {
                    "name": Str(),
                    "email": Optional(Email()),
                    "retries": Optional(Num(), default=3),
                    "nickname": Nullable(Str()),
                }
            ),
        )
        user = User(name="Alice", nickname=None)
        assert user.email is None
        assert user.retries == 3
        with pytest.raises(ValidationError):
            User(name="Alice")

    def test_pydantic_validation(self):
        User = to_pydantic("User", {"name": str, "age": int})
        with pytest.raises(ValidationError):
            User(name="Alice", age="not a number")

    def test_nested_objects(self):
        Order = to_pydantic(
            "Order",
            Obj(
                {
                    "customer": Obj({"name": Str()}),
                    "lines": Arr(Obj({"sku": Str(), "qty": Num(integer=True)})),
                }
            ),
        )
        order = Order(customer={"name": "Akane"}, lines=[{"sku": "A1", "qty": 2}])
        assert order.customer.name == "Akane"
        assert order.lines[0].qty == 2

    def test_literals_enums_and_unions(self):
        Item = to_pydantic(
            "Item",
            Obj(
                {
                    "kind": Lit("book"),
                    "color": NativeEnum(Color),
                    "size": NativeEnum(["s", "m"]),
                    "ref": Union([Str(), Num(integer=True)]),
                }
            ),
        )
        item = Item(kind="book", color="red", size="m", ref=7)
        assert item.color is Color.RED
        assert Item.model_fields["kind"].annotation == Literal["book"]
        with pytest.raises(ValidationError):
            Item(kind="dvd", color="red", size="m", ref=7)

    def test_model_fields(self):
        Person = to_pydantic("Person", Obj({"address": Model(Address)}))
        person = Person(address={"street": "1 Main", "city": "Tokyo"})
        assert isinstance(person.address, Address)

    def test_requires_object_schema(self):
        with pytest.raises(TypeError):
            to_pydantic("Names", Arr(Str()))


class TestJudgmentErrorFromSchema:
    def test_single_issue_message(self):
        with pytest.raises(JudgmentError, match="Value is number, expected string at path: user.name"):
            to_validator({"user": {"name": str}}).judge({"user": {"name": 1}})
