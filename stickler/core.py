"""
Core validator classes and the validate() dispatcher.

Provides V, EveryV, PropsV dataclasses and the Every/Props combinators.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from .context import ambient_props
from .exceptions import InvalidResultError, UnsupportedValidatorError
from .merge import merge, omit
from .types import LeafFn, PropMap, Result

logger = logging.getLogger(__name__)

_NO_PROPS: PropMap = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class V:
    """
    Leaf validator node.

    Wraps a function of (value, props) returning a bool, a mapping holding
    ``is_valid``, or a Result.
    """

    fn: LeafFn

    def __call__(self, value: Any, props: PropMap | None = None) -> Result:
        return validate(self, value, props)


@dataclass(frozen=True, slots=True)
class EveryV:
    """Sequence of validators that must all pass. Stops at the first failure."""

    validators: tuple[Validator, ...]
    props: PropMap = field(default_factory=lambda: _NO_PROPS)

    def __call__(self, value: Any, props: PropMap | None = None) -> Result:
        return validate(self, value, props)


@dataclass(frozen=True, slots=True)
class PropsV:
    """Schema validating every field of an object. Never stops early."""

    fields: Mapping[str, Validator]
    props: PropMap = field(default_factory=lambda: _NO_PROPS)

    def __call__(self, value: Any, props: PropMap | None = None) -> Result:
        return validate(self, value, props)


Validator = Union[V, EveryV, PropsV]


def to_validator(v: Any) -> Validator:
    """
    Coerce a value to a validator.

    Conversion rules:
        V | EveryV | PropsV -> pass through
        Mapping -> PropsV over the same fields
        list | tuple -> EveryV over the same items
        Callable -> V(fn=callable)
    """
    if isinstance(v, (V, EveryV, PropsV)):
        return v

    if isinstance(v, Mapping):
        return PropsV(fields=MappingProxyType(dict(v)))

    if isinstance(v, (list, tuple)):
        return EveryV(validators=tuple(v))

    if callable(v):
        return V(fn=v)

    raise UnsupportedValidatorError(v)


def Every(validators: Sequence[Any], props: PropMap | None = None, **kwargs: Any) -> EveryV:
    """
    All validators must pass, checked left to right.

    The first failing validator ends the run; later validators are never
    called. Each child's keys overlay the keys gathered so far.

    Usage:
        Every([Required(), MinLength(5)])
        Every([Required(), Length(2, 20)], message="2 to 20 characters")
    """
    if isinstance(validators, (str, bytes)) or not isinstance(validators, Sequence):
        raise UnsupportedValidatorError(validators)
    return EveryV(
        validators=tuple(validators),
        props=MappingProxyType(merge(props, kwargs)),
    )


def Props(fields: Mapping[str, Any], props: PropMap | None = None, **kwargs: Any) -> PropsV:
    """
    Validate each field of an object with its own validator.

    Every field is validated even when earlier fields fail, so all errors
    are available at once.

    Usage:
        Props({
            "first_name": Every([Required(), Length(2, 20)]),
            "birth_year": Range(1900, 2018),
        })
    """
    if not isinstance(fields, Mapping):
        raise UnsupportedValidatorError(fields)
    return PropsV(
        fields=MappingProxyType(dict(fields)),
        props=MappingProxyType(merge(props, kwargs)),
    )


def validate(validator: Any, value: Any, props: PropMap | None = None) -> Result:
    """
    Validate a value.

    Args:
        validator: A leaf function, a list of validators, a mapping of
            field name to validator, or any of V/EveryV/PropsV
        value: The value to validate; echoed unchanged as ``value``
        props: Validation-time props, overlaid on construction-time props

    Returns:
        Result with at least ``value`` and ``is_valid``

    Raises:
        UnsupportedValidatorError: If validator has none of the known shapes
    """
    node = to_validator(validator)
    props = merge(ambient_props(), props)

    match node:
        case V(fn=fn):
            return _run_leaf(fn, value, props)
        case EveryV():
            return _run_every(node, value, props)
        case PropsV():
            return _run_props(node, value, props)

    raise UnsupportedValidatorError(node)


def _run_leaf(fn: LeafFn, value: Any, props: dict[str, Any]) -> Result:
    """Call a leaf and normalize whatever it returns into a Result."""
    output = fn(value, MappingProxyType(props))

    if isinstance(output, bool):
        return Result(is_valid=output, value=value)

    if isinstance(output, Mapping):
        if "is_valid" not in output:
            raise InvalidResultError(output, "mapping has no 'is_valid' key")
        return Result(output, is_valid=bool(output["is_valid"]), value=value)

    raise InvalidResultError(output, "expected bool or mapping")


def _run_every(node: EveryV, value: Any, props: dict[str, Any]) -> Result:
    merged = merge(node.props, props)
    aggregate = dict(merged)
    collected: list[Result] = []
    valid = True

    for index, validator in enumerate(node.validators):
        child = validate(validator, value, merged)
        collected.append(child)
        aggregate = merge(aggregate, omit(child, "value"))

        if not child.is_valid:
            logger.debug(
                "every: stopped at validator %d of %d", index + 1, len(node.validators)
            )
            valid = False
            break

    return Result(aggregate, is_valid=valid, value=value, every=tuple(collected))


def _run_props(node: PropsV, value: Any, props: dict[str, Any]) -> Result:
    merged = merge(node.props, props)
    results: dict[str, Result] = {}

    for name, validator in node.fields.items():
        results[name] = validate(validator, _field_value(value, name), merged)

    return Result(
        merged,
        is_valid=all(r.is_valid for r in results.values()),
        value=value,
        props=MappingProxyType(results),
    )


def _field_value(value: Any, name: str) -> Any:
    if value is None:
        return None
    if isinstance(value, Mapping):
        return value.get(name)
    return getattr(value, name, None)
