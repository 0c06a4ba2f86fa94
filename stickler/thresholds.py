"""
Numeric thresholds that are either fixed at construction or computed lazily.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Union

from pydantic import StrictFloat, StrictInt, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidatorConfigError

Number = Union[int, float]

_NUMBER = TypeAdapter(Union[StrictInt, StrictFloat])
_THRESHOLD = TypeAdapter(Union[StrictInt, StrictFloat, Callable[[], Any]])


@dataclass(frozen=True, slots=True)
class Fixed:
    """Threshold known at construction time."""

    number: Number


@dataclass(frozen=True, slots=True)
class Computed:
    """Threshold produced by a zero-argument function at validation time."""

    fn: Callable[[], Any]


Threshold = Union[Fixed, Computed]


def to_threshold(raw: Any, key: str = "threshold") -> Threshold:
    """
    Check a threshold at construction time.

    Numbers become Fixed and callables become Computed. The callable is
    never invoked here.

    Raises:
        ValidatorConfigError: If raw is neither a number nor a callable.
    """
    if isinstance(raw, (Fixed, Computed)):
        return raw
    try:
        checked = _THRESHOLD.validate_python(raw)
    except PydanticValidationError as e:
        raise ValidatorConfigError(
            f"{key} must be a number or a zero-argument function, got {raw!r}",
            key=key,
        ) from e
    if callable(checked):
        return Computed(checked)
    return Fixed(checked)


def resolve(threshold: Threshold, key: str = "threshold") -> Number:
    """
    Produce the number a threshold stands for.

    A Computed threshold calls its function exactly once per resolve().
    """
    match threshold:
        case Fixed(number=n):
            return n
        case Computed(fn=fn):
            produced = fn()
            try:
                return _NUMBER.validate_python(produced)
            except PydanticValidationError as e:
                raise ValidatorConfigError(
                    f"{key} function must return a number, got {produced!r}",
                    key=key,
                ) from e

    raise ValidatorConfigError(f"Not a threshold: {threshold!r}", key=key)
