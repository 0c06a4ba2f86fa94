"""
Built-in validators for stickler.

Provides factory functions that return V (or EveryV) instances.
"""

from __future__ import annotations

from collections.abc import Mapping, Sized
from typing import Any, Callable

from .core import Every, EveryV, V, validate
from .exceptions import ValidatorConfigError
from .merge import merge
from .thresholds import Fixed, resolve, to_threshold
from .types import PropMap, Result


def _config(key: str, arg: Any, props: PropMap | None, kwargs: dict[str, Any]) -> dict[str, Any]:
    """
    Build construction-time props for a single-threshold validator.

    Accepts either the threshold itself or a props mapping carrying it
    under ``key``. A positional threshold wins over the same key in props.
    """
    if isinstance(arg, Mapping):
        config = merge(arg, props, kwargs)
    else:
        config = merge(props, kwargs, {key: arg})

    if key not in config:
        raise ValidatorConfigError(f"{key} is required", key=key)

    to_threshold(config[key], key)
    return config


def _length_of(value: Any) -> int | None:
    if not value:
        return 0
    if isinstance(value, Sized):
        return len(value)
    return None


def _parse_number(value: Any) -> Any:
    """Numbers pass through; numeric strings are parsed; anything else is returned as-is."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        for parse in (int, float):
            try:
                return parse(text)
            except ValueError:
                continue
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_present(value: Any) -> bool:
    if value is None or value is False:
        return False
    if _is_number(value):
        return True
    if isinstance(value, str):
        return len(value) > 0
    if isinstance(value, Sized):
        return len(value) > 0
    return True


def Required(props: PropMap | bool | None = None, **kwargs: Any) -> V:
    """
    Value must be present.

    None, False, empty strings and empty containers are missing. Zero counts
    as present. With ``required=False`` every value passes.

    Usage:
        Required()
        Required(message="Required")
        Required(False)
    """
    if isinstance(props, bool):
        props = {"required": props}
    config = merge({"required": True}, props, kwargs)

    def validate_required(value: Any, validation_props: PropMap) -> dict[str, Any]:
        merged = merge(config, validation_props)
        required = bool(merged["required"])
        return {
            **merged,
            "required": required,
            "is_valid": not required or _is_present(value),
        }

    return V(fn=validate_required)


def MinLength(min_length: Any, props: PropMap | None = None, **kwargs: Any) -> V:
    """
    Length must be at least min_length.

    Usage:
        MinLength(5)
        MinLength(5, message="Too short")
        MinLength({"min_length": 5, "message": "Too short"})
        MinLength(lambda: len(form["password"]))
    """
    config = _config("min_length", min_length, props, kwargs)

    def validate_min_length(value: Any, validation_props: PropMap) -> dict[str, Any]:
        merged = merge(config, validation_props)
        threshold = resolve(to_threshold(merged["min_length"], "min_length"), "min_length")
        length = _length_of(value)

        if not value:
            valid = True
        elif length is None:
            valid = False
        else:
            valid = length >= threshold

        return {**merged, "min_length": threshold, "length": length, "is_valid": valid}

    return V(fn=validate_min_length)


def MaxLength(max_length: Any, props: PropMap | None = None, **kwargs: Any) -> V:
    """Length must be no greater than max_length."""
    config = _config("max_length", max_length, props, kwargs)

    def validate_max_length(value: Any, validation_props: PropMap) -> dict[str, Any]:
        merged = merge(config, validation_props)
        threshold = resolve(to_threshold(merged["max_length"], "max_length"), "max_length")
        length = _length_of(value)

        if not value:
            valid = True
        elif length is None:
            valid = False
        else:
            valid = length <= threshold

        return {**merged, "max_length": threshold, "length": length, "is_valid": valid}

    return V(fn=validate_max_length)


def Length(
    min_length: Any = 0,
    max_length: Any = None,
    props: PropMap | None = None,
    **kwargs: Any,
) -> EveryV | V:
    """
    Length must be exactly min_length, or between min_length and max_length.

    Composes MinLength and MaxLength through Every, so MaxLength is skipped
    when MinLength fails. A max below the min is raised to the min. When a
    bound is a function, each function runs once per validate call.

    Usage:
        Length(2)                               # "Length of 2"
        Length(2, 20)                           # "Length between 2 and 20"
        Length(2, 20, message="Overridden")
        Length(2, {"message": "Exactly two"})
        Length({"min_length": 2, "max_length": 20})
        Length(lambda: len(form["code"]))
    """
    if isinstance(min_length, Mapping):
        config = merge(min_length, props, kwargs)
    elif isinstance(max_length, Mapping):
        config = merge({"min_length": min_length}, max_length, props, kwargs)
    else:
        config = merge(props, kwargs, {"min_length": min_length, "max_length": max_length})

    config.setdefault("min_length", 0)

    return _bounds(
        config,
        ("min_length", "max_length"),
        (MinLength, MaxLength),
        _describe_length,
        clamp=True,
    )


def _describe_length(low: Any, high: Any) -> str:
    if low == high:
        return f"Length of {low}"
    return f"Length between {low} and {high}"


def _bounds(
    config: dict[str, Any],
    keys: tuple[str, str],
    factories: tuple[Callable[..., V], Callable[..., V]],
    describe: Callable[[Any, Any], str],
    clamp: bool,
) -> EveryV | V:
    """
    Pair a lower and an upper threshold leaf through Every.

    A missing upper bound mirrors the lower one. Fixed bounds are settled
    here. Function bounds are settled inside a leaf, once per validate call,
    before either threshold leaf runs.
    """
    low_key, high_key = keys
    low = to_threshold(config[low_key], low_key)
    if config.get(high_key) is not None:
        high = to_threshold(config[high_key], high_key)
    else:
        high = None

    def settle(props: PropMap, low_number: Any, high_number: Any) -> dict[str, Any]:
        if high_number is None:
            high_number = low_number
        if clamp and high_number < low_number:
            high_number = low_number
        settled = merge(props, {low_key: low_number, high_key: high_number})
        if "message" not in settled:
            settled["message"] = describe(low_number, high_number)
        return settled

    def pair(settled: dict[str, Any]) -> EveryV:
        return Every([factories[0](settled), factories[1](settled)])

    if isinstance(low, Fixed) and (high is None or isinstance(high, Fixed)):
        return pair(settle(config, low.number, high.number if high else None))

    def validate_bounds(value: Any, validation_props: PropMap) -> Result:
        merged = merge(config, validation_props)
        low_number = resolve(to_threshold(merged[low_key], low_key), low_key)
        high_raw = merged.get(high_key)
        high_number = None if high_raw is None else resolve(to_threshold(high_raw, high_key), high_key)
        settled = settle(merged, low_number, high_number)
        return validate(pair(settled), value, settled)

    return V(fn=validate_bounds)


def MinValue(min_value: Any, props: PropMap | None = None, **kwargs: Any) -> V:
    """
    Number must be at least min_value.

    Numeric strings are parsed first; pass ``parse_value`` to use a
    different parser.

    Usage:
        MinValue(1)
        MinValue(1, parse_value=float)
    """
    config = _config("min_value", min_value, props, kwargs)

    def validate_min_value(value: Any, validation_props: PropMap) -> dict[str, Any]:
        merged = merge(config, validation_props)
        threshold = resolve(to_threshold(merged["min_value"], "min_value"), "min_value")
        valid = _check_number(value, merged, lambda n: n >= threshold)
        return {**merged, "min_value": threshold, "is_valid": valid}

    return V(fn=validate_min_value)


def MaxValue(max_value: Any, props: PropMap | None = None, **kwargs: Any) -> V:
    """Number must be no greater than max_value."""
    config = _config("max_value", max_value, props, kwargs)

    def validate_max_value(value: Any, validation_props: PropMap) -> dict[str, Any]:
        merged = merge(config, validation_props)
        threshold = resolve(to_threshold(merged["max_value"], "max_value"), "max_value")
        valid = _check_number(value, merged, lambda n: n <= threshold)
        return {**merged, "max_value": threshold, "is_valid": valid}

    return V(fn=validate_max_value)


def _check_number(value: Any, props: PropMap, test: Callable[[Any], bool]) -> bool:
    if not value:
        return True
    parse = props.get("parse_value")
    parsed = parse(value) if callable(parse) else _parse_number(value)
    if not _is_number(parsed):
        return False
    return test(parsed)


def Range(
    min_value: Any,
    max_value: Any = None,
    props: PropMap | None = None,
    **kwargs: Any,
) -> EveryV | V:
    """
    Number must be between min_value and max_value (inclusive).

    Usage:
        Range(1900, 2018)
        Range({"min_value": 1, "max_value": 99999})
        Range(1, lambda: inventory["count"])
    """
    if isinstance(min_value, Mapping):
        config = merge(min_value, props, kwargs)
    else:
        config = merge(props, kwargs, {"min_value": min_value, "max_value": max_value})

    for key in ("min_value", "max_value"):
        if config.get(key) is None:
            raise ValidatorConfigError(f"{key} is required", key=key)

    return _bounds(
        config,
        ("min_value", "max_value"),
        (MinValue, MaxValue),
        lambda low, high: f"Between {low} and {high}",
        clamp=False,
    )


def Compare(compare: Any = None, props: PropMap | None = None, **kwargs: Any) -> V:
    """
    Value must equal another value.

    The other value may be given directly, as a zero-argument function read
    at validation time, or through the ``compare`` validation-time prop.

    Usage:
        Compare(lambda: form["password"], message="Must match password")
        validate(Compare(), confirm, {"compare": password})
    """
    if isinstance(compare, Mapping):
        config = merge(compare, props, kwargs)
    elif compare is None:
        config = merge(props, kwargs)
    else:
        config = merge(props, kwargs, {"compare": compare})

    def validate_compare(value: Any, validation_props: PropMap) -> dict[str, Any]:
        merged = merge(config, validation_props)
        other = merged.get("compare")
        if callable(other):
            other = other()
        valid = not value or value == other
        return {**merged, "compare": other, "is_valid": valid}

    return V(fn=validate_compare)


def MinFieldValue(field: str, min_value: Any = 0, props: PropMap | None = None, **kwargs: Any) -> V:
    """
    One field of an object must be at least min_value.

    Usage:
        MinFieldValue("birth_year", 1900)
    """
    return _field_bound(field, "min_value", min_value, "no less than", lambda n, t: n >= t, props, kwargs)


def MaxFieldValue(field: str, max_value: Any = 0, props: PropMap | None = None, **kwargs: Any) -> V:
    """One field of an object must be no greater than max_value."""
    return _field_bound(field, "max_value", max_value, "no greater than", lambda n, t: n <= t, props, kwargs)


def _field_bound(
    field: str,
    key: str,
    bound: Any,
    wording: str,
    test: Callable[[Any, Any], bool],
    props: PropMap | None,
    kwargs: dict[str, Any],
) -> V:
    if not isinstance(field, str):
        raise ValidatorConfigError(f"field must be a string, got {field!r}", key="field")

    config = merge(props, kwargs, {"field": field, key: bound})
    threshold = to_threshold(bound, key)
    if "message" not in config and isinstance(threshold, Fixed):
        config["message"] = f"{field} {wording} {threshold.number}"

    def validate_field_bound(value: Any, validation_props: PropMap) -> dict[str, Any]:
        merged = merge(config, validation_props)
        limit = resolve(to_threshold(merged[key], key), key)

        if not value:
            valid = True
        else:
            if isinstance(value, Mapping):
                field_value = value.get(field)
            else:
                field_value = getattr(value, field, None)
            valid = _is_number(field_value) and test(field_value, limit)

        return {**merged, key: limit, "is_valid": valid}

    return V(fn=validate_field_bound)


def Predicate(fn: Callable[[Any], Any], props: PropMap | None = None, **kwargs: Any) -> V:
    """
    Create validator from arbitrary predicate function.

    Usage:
        Predicate(lambda x: x > 0, message="Must be positive")
        Predicate(str.isalpha, {"message": "Must be alphabetic"})
    """
    if not callable(fn):
        raise ValidatorConfigError(f"Predicate needs a callable, got {fn!r}", key="fn")
    config = merge(props, kwargs)

    def validate_predicate(value: Any, validation_props: PropMap) -> dict[str, Any]:
        return {**merge(config, validation_props), "is_valid": bool(fn(value))}

    return V(fn=validate_predicate)
