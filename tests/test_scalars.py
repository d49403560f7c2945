"""
Tests for okschema leaf schemas.
"""

import pytest

from okschema import (
    MISSING,
    Invalid,
    Valid,
    boolean,
    integer,
    number,
    string,
    unsigned,
)


def constraints(result):
    return [failure.constraint for failure in result.failures]


class TestTypeCheck:
    @pytest.mark.parametrize(
        "schema,value,actual",
        [
            (string(), 1, "integer"),
            (string(), None, "null"),
            (integer(), "1", "string"),
            (integer(), 1.5, "number"),
            (integer(), True, "boolean"),
            (number(), False, "boolean"),
            (number(), [], "array"),
            (boolean(), 0, "integer"),
            (boolean(), {}, "object"),
        ],
    )
    def test_mismatch(self, schema, value, actual):
        result = schema.validate(value)
        assert isinstance(result, Invalid)
        assert len(result.failures) == 1
        failure = result.failures[0]
        assert failure.constraint == "type"
        assert failure.path == ()
        assert failure.detail == {"expected": schema.kind.value, "actual": actual}

    def test_mismatch_short_circuits_constraints(self):
        schema = string().min_length(3).one_of(["abc"])
        result = schema.validate(7)
        assert constraints(result) == ["type"]

    def test_missing_is_required(self):
        result = string().validate_at(MISSING, ("name",))
        assert isinstance(result, Invalid)
        assert result.failures[0].path == ("name",)
        assert result.failures[0].constraint == "required"


class TestString:
    def test_valid(self):
        schema = string().min_length(1).max_length(5)
        assert schema.validate("bob") == Valid("bob")

    def test_bounds_inclusive(self):
        schema = string().min_length(2).max_length(3)
        assert isinstance(schema.validate("ab"), Valid)
        assert isinstance(schema.validate("abc"), Valid)
        assert isinstance(schema.validate("a"), Invalid)
        assert isinstance(schema.validate("abcd"), Invalid)

    def test_min_length_detail(self):
        result = string().min_length(1).validate("")
        assert result.failures[0].detail == {"limit": 1, "actual": 0}

    def test_length_counts_code_points(self):
        assert isinstance(string().max_length(2).validate("日本"), Valid)

    def test_one_of(self):
        schema = string().one_of(["red", "green"])
        assert isinstance(schema.validate("red"), Valid)
        result = schema.validate("blue")
        assert constraints(result) == ["oneOf"]
        assert result.failures[0].detail == {"allowed": ("red", "green"), "actual": "blue"}

    def test_not_one_of(self):
        schema = string().not_one_of(["root", "admin"])
        assert isinstance(schema.validate("bob"), Valid)
        assert constraints(schema.validate("root")) == ["notOneOf"]

    def test_pattern(self):
        schema = string().pattern(r"^[a-z]+$")
        assert isinstance(schema.validate("hello"), Valid)
        assert constraints(schema.validate("Hello")) == ["pattern"]

    def test_all_constraints_reported_in_declaration_order(self):
        schema = string().not_one_of(["ab"]).min_length(3).pattern(r"^\d+$")
        assert constraints(schema.validate("ab")) == ["notOneOf", "minLength", "pattern"]

    def test_reconfiguring_replaces_in_place(self):
        schema = string().min_length(5).max_length(10).min_length(1)
        assert len(schema.checks) == 2
        assert schema.checks[0].detail == {"limit": 1}
        assert isinstance(schema.validate("ab"), Valid)

    def test_construction_errors(self):
        with pytest.raises(ValueError):
            string().min_length(-1)
        with pytest.raises(ValueError):
            string().min_length(5).max_length(2)
        with pytest.raises(ValueError):
            string().one_of([])
        with pytest.raises(TypeError):
            string().one_of(["a", 1])

    def test_builder_is_immutable(self):
        base = string()
        bounded = base.min_length(3)
        assert base.checks == ()
        assert isinstance(base.validate(""), Valid)
        assert isinstance(bounded.validate(""), Invalid)


class TestInteger:
    def test_bounds(self):
        schema = integer().min(0).max(10)
        assert schema.validate(0) == Valid(0)
        assert schema.validate(10) == Valid(10)
        assert constraints(schema.validate(-1)) == ["min"]
        assert constraints(schema.validate(11)) == ["max"]

    def test_max_detail(self):
        result = integer().max(10).validate(11)
        assert result.failures[0].detail == {"limit": 10, "actual": 11}

    def test_integral_float_narrows(self):
        result = integer().validate(3.0)
        assert result == Valid(3)
        assert isinstance(result.value, int)

    def test_not_one_of(self):
        schema = integer().not_one_of([2, 3, 5, 7, 11, 13, 17])
        assert isinstance(schema.validate(42), Valid)
        result = schema.validate(7)
        assert constraints(result) == ["notOneOf"]
        assert result.failures[0].detail["actual"] == 7

    def test_one_of_uses_numeric_equality(self):
        assert isinstance(integer().one_of([1, 2]).validate(2.0), Valid)

    def test_several_constraints_fire_together(self):
        schema = integer().min(10).not_one_of([5])
        assert constraints(schema.validate(5)) == ["min", "notOneOf"]

    def test_construction_errors(self):
        with pytest.raises(ValueError):
            integer().min(5).max(1)
        with pytest.raises(ValueError):
            integer().min(float("nan"))
        with pytest.raises(ValueError):
            number().max(float("nan"))
        with pytest.raises(TypeError):
            integer().one_of([1.5])
        with pytest.raises(TypeError):
            integer().min(True)
        with pytest.raises(TypeError):
            integer().max("10")


class TestUnsigned:
    def test_accepts_non_negative(self):
        assert unsigned().validate(0) == Valid(0)
        assert unsigned().validate(7.0) == Valid(7)

    def test_negative_is_type_failure(self):
        result = unsigned().validate(-1)
        assert result.failures[0].constraint == "type"
        assert result.failures[0].detail == {"expected": "unsigned", "actual": "integer"}


class TestNumber:
    def test_accepts_int_and_float(self):
        assert number().validate(1) == Valid(1)
        assert number().validate(1.5) == Valid(1.5)

    def test_bounds_with_float_limits(self):
        schema = number().min(0.5).max(1.5)
        assert isinstance(schema.validate(1), Valid)
        assert constraints(schema.validate(0.25)) == ["min"]

    def test_one_of(self):
        schema = number().one_of([0.5, 1])
        assert isinstance(schema.validate(1.0), Valid)
        assert constraints(schema.validate(2)) == ["oneOf"]


class TestBoolean:
    def test_valid(self):
        assert boolean().validate(True) == Valid(True)
        assert boolean().validate(False) == Valid(False)

    def test_equals(self):
        schema = boolean().equals(True)
        assert isinstance(schema.validate(True), Valid)
        result = schema.validate(False)
        assert constraints(result) == ["equals"]
        assert result.failures[0].detail == {"expected": True, "actual": False}

    def test_equals_requires_bool(self):
        with pytest.raises(TypeError):
            boolean().equals(1)


class TestModifiers:
    def test_optional(self):
        schema = string().optional()
        assert schema.validate_at(MISSING, ("a",)) == Valid(MISSING)
        assert isinstance(schema.validate(None), Invalid)

    def test_nullable(self):
        schema = integer().min(1).nullable()
        assert schema.validate(None) == Valid(None)
        assert isinstance(schema.validate(0), Invalid)

    def test_label_on_failures(self):
        result = string().min_length(1).label("User name").validate("")
        assert result.failures[0].label == "User name"

    def test_desc(self):
        assert string().desc("The login handle").description == "The login handle"

    def test_custom_test(self):
        schema = string().test("must be lowercase", str.islower)
        assert isinstance(schema.validate("abc"), Valid)
        result = schema.validate("ABC")
        assert constraints(result) == ["test"]
        assert result.failures[0].detail["message"] == "must be lowercase"

    def test_custom_tests_accumulate(self):
        schema = integer().test("even", lambda n: n % 2 == 0).test("positive", lambda n: n > 0)
        assert constraints(schema.validate(-3)) == ["test", "test"]

    def test_raising_test_becomes_failure(self):
        schema = number().test("reciprocal", lambda n: 1 / n > 0)
        result = schema.validate(0)
        assert constraints(result) == ["test"]
        assert "division by zero" in result.failures[0].detail["error"]

    def test_predicate_must_be_callable(self):
        with pytest.raises(TypeError):
            string().test("nope", "not callable")

    def test_transform_runs_before_constraints(self):
        schema = string().transform(str.strip).min_length(1)
        assert schema.validate("  bob  ") == Valid("bob")
        assert constraints(schema.validate("   ")) == ["minLength"]

    def test_raising_transform_becomes_failure(self):
        schema = string().transform(int)
        assert schema.validate("12") == Valid(12)
        assert constraints(schema.validate("twelve")) == ["transform"]
