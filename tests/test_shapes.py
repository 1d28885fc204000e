"""
Tests for Partial and Omit.
"""

import pytest

from sibyl import (
    Arr,
    Bool,
    Err,
    IssueCode,
    JudgmentError,
    Num,
    Obj,
    Ok,
    Omit,
    Optional,
    Partial,
    Str,
)

USER = Obj(
    {
        "id": Num(),
        "name": Str(),
        "password": Str(min_len=8),
        "profile": Obj({"bio": Str()}),
    }
)


class TestPartial:
    def test_empty_object(self):
        assert Partial(Obj({"name": Str(), "age": Num()})).judge({}) == {}

    def test_subset_of_fields(self):
        validator = Partial(Obj({"name": Str(), "age": Num()}))
        assert validator.judge({"name": "Akane"}) == {"name": "Akane"}

    def test_complete_value_goes_through_inner(self):
        validator = Partial(Obj({"name": Str()}))
        assert validator.judge({"name": "Akane", "extra": 1}) == {"name": "Akane"}

    def test_only_missing_issues_returns_input(self):
        data = {"name": "Akane", "extra": 1}
        result = Partial(Obj({"name": Str(), "age": Num()})).judge(data)
        assert result is data

    def test_present_field_must_be_valid(self):
        validator = Partial(Obj({"name": Str(), "age": Num()}))
        result = validator.try_judge({"age": "old"})
        assert isinstance(result, Err)
        (issue,) = result.issues
        assert issue.path == "age"
        assert issue.code is IssueCode.INVALID_TYPE

    def test_explicit_none_is_not_missing(self):
        result = Partial(Obj({"name": Str()})).try_judge({"name": None})
        assert isinstance(result, Err)
        assert result.issues[0].message == "Value is null, expected string"

    def test_nested_missing_is_tolerated(self):
        validator = Partial(Obj({"profile": Obj({"bio": Str(), "age": Num()})}))
        data = {"profile": {"bio": "hi"}}
        assert validator.judge(data) == data

    def test_rejects_non_objects(self):
        with pytest.raises(JudgmentError, match="Value is array, expected object"):
            Partial(Obj({"a": Str()})).judge([])

    def test_coerced_fields_may_be_absent(self):
        validator = Partial(Obj({"n": Num(coerce=True), "flag": Bool(coerce=True)}))
        assert validator.judge({}) == {}
        assert validator.judge({"n": "4"}) == {"n": "4"}
        assert not validator.is_valid({"n": "four"})

    def test_combines_with_optional(self):
        validator = Partial(Obj({"a": Optional(Str(), default="x"), "b": Num()}))
        assert validator.try_judge({"b": 1}) == Ok({"a": "x", "b": 1})


class TestOmit:
    def test_omitted_fields_are_not_required(self):
        validator = Omit(USER, ["password", "profile"])
        assert validator.judge({"id": 1, "name": "Akane"}) == {"id": 1, "name": "Akane"}

    def test_omitted_fields_are_dropped_from_output(self):
        validator = Omit(USER, ["password"])
        data = {"id": 1, "name": "Akane", "password": "hunter2hunter2", "profile": {"bio": ""}}
        assert validator.judge(data) == {"id": 1, "name": "Akane", "profile": {"bio": ""}}

    def test_omitted_fields_are_not_validated(self):
        validator = Omit(USER, ["password", "profile"])
        data = {"id": 1, "name": "Akane", "password": 3, "profile": {"bio": 4}}
        assert validator.judge(data) == {"id": 1, "name": "Akane"}

    def test_remaining_fields_still_fail(self):
        validator = Omit(USER, ["password"])
        result = validator.try_judge({"id": "one", "name": "Akane", "profile": {"bio": 1}})
        assert isinstance(result, Err)
        assert sorted(result.paths) == ["id", "profile.bio"]

    def test_omitting_an_array_field(self):
        validator = Omit(Obj({"id": Num(), "tags": Arr(Str())}), ["tags"])
        assert validator.judge({"id": 1, "tags": [1, 2]}) == {"id": 1}

    def test_raw_input_keys_outside_schema_are_kept(self):
        validator = Omit(Obj({"id": Num(), "secret": Str()}), ["secret"])
        data = {"id": 1, "secret": 2, "note": "kept"}
        assert validator.judge(data) == {"id": 1, "note": "kept"}

    def test_rejects_non_objects(self):
        with pytest.raises(JudgmentError, match="Value is string, expected object"):
            Omit(USER, ["password"]).judge("user")

    def test_single_string_is_rejected(self):
        with pytest.raises(TypeError):
            Omit(USER, "password")

    def test_requires_validator(self):
        with pytest.raises(TypeError):
            Omit({"id": Num()}, ["id"])
