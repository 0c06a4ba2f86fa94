"""
Tests for stickler.core dispatching and stickler.types.Result.
"""

import pytest

from stickler import (
    EveryV,
    InvalidResultError,
    PropsV,
    Result,
    UnsupportedValidatorError,
    V,
    is_valid,
    to_validator,
    validate,
)


def letter_a(value, props):
    return value == "A"


class TestToValidator:
    def test_callable_coercion(self):
        v = to_validator(letter_a)
        assert isinstance(v, V)
        assert v.fn is letter_a

    def test_list_coercion(self):
        v = to_validator([letter_a, letter_a])
        assert isinstance(v, EveryV)
        assert len(v.validators) == 2

    def test_tuple_coercion(self):
        assert isinstance(to_validator((letter_a,)), EveryV)

    def test_dict_coercion(self):
        v = to_validator({"first": letter_a})
        assert isinstance(v, PropsV)
        assert list(v.fields) == ["first"]

    def test_passthrough(self):
        v = V(fn=letter_a)
        assert to_validator(v) is v

    @pytest.mark.parametrize("bad", [None, 42, "abc", 3.5])
    def test_unsupported(self, bad):
        with pytest.raises(UnsupportedValidatorError):
            to_validator(bad)


class TestValidate:
    def test_bool_leaf(self):
        result = validate(letter_a, "B")
        assert result == {"is_valid": False, "value": "B"}

    def test_mapping_leaf(self):
        def letter(value, props):
            return {"is_valid": value == "A", "message": "Must match the letter A"}

        result = validate(letter, "B")
        assert result.is_valid is False
        assert result.value == "B"
        assert result.message == "Must match the letter A"

    def test_value_echoed(self):
        value = {"nested": [1, 2]}
        result = validate(lambda v, p: {"is_valid": True, "value": "something else"}, value)
        assert result.value is value

    def test_is_valid_coerced_to_bool(self):
        result = validate(lambda v, p: {"is_valid": 1}, "x")
        assert result["is_valid"] is True

    def test_validation_props_reach_leaf(self):
        seen = {}

        def leaf(value, props):
            seen.update(props)
            return True

        validate(leaf, "x", {"letter": "M"})
        assert seen == {"letter": "M"}

    def test_leaf_cannot_mutate_props(self):
        def leaf(value, props):
            props["sneaky"] = True
            return True

        with pytest.raises(TypeError):
            validate(leaf, "x", {"a": 1})

    def test_missing_is_valid(self):
        with pytest.raises(InvalidResultError):
            validate(lambda v, p: {"message": "no verdict"}, "x")

    def test_unreadable_output(self):
        with pytest.raises(InvalidResultError) as exc:
            validate(lambda v, p: "yes", "x")
        assert exc.value.to_dict() == {
            "error": "INVALID_RESULT",
            "message": str(exc.value),
            "returned": "str",
        }
        assert isinstance(exc.value, TypeError)

    def test_unsupported_shape(self):
        with pytest.raises(UnsupportedValidatorError) as exc:
            validate(123, "x")
        assert isinstance(exc.value, TypeError)
        assert exc.value.to_dict()["error"] == "UNSUPPORTED_VALIDATOR"

    def test_leaf_exceptions_propagate(self):
        def boom(value, props):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            validate([boom], "x")

    def test_variants_are_callable(self):
        v = to_validator(letter_a)
        assert v("A").is_valid
        assert to_validator([letter_a])("A").is_valid
        assert to_validator({"x": letter_a})({"x": "A"}).is_valid

    def test_reusable(self):
        v = to_validator([letter_a])
        assert [v(x).is_valid for x in ("A", "B", "A")] == [True, False, True]


class TestResult:
    def test_immutable(self):
        result = Result(is_valid=True, value=1)
        with pytest.raises(TypeError):
            result["is_valid"] = False
        with pytest.raises(AttributeError):
            result.extra = 1

    def test_underlying_data_read_only(self):
        result = Result(is_valid=True, value=1)
        with pytest.raises(TypeError):
            result._data["is_valid"] = False
        assert result.is_valid is True

    def test_copies_input(self):
        data = {"is_valid": True, "value": 1}
        result = Result(data)
        data["is_valid"] = False
        assert result.is_valid is True

    def test_optional_keys(self):
        result = Result(is_valid=True, value=1)
        assert result.message is None
        assert result.every is None
        assert result.props is None

    def test_is_valid_helper(self):
        assert is_valid(Result(is_valid=True, value=1))
        assert not is_valid({"is_valid": False})
        assert is_valid(True)
        assert not is_valid({})
