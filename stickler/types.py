"""
Type definitions for stickler.

Provides the immutable Result record and type aliases.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, Callable, Union

PropMap = Mapping[str, Any]
LeafOutput = Union[bool, Mapping[str, Any]]
LeafFn = Callable[[Any, PropMap], LeafOutput]


class Result(Mapping[str, Any]):
    """
    Immutable validation result.

    Always carries ``value`` and ``is_valid``. Leaves add their own keys
    (``message``, ``min_length``, ``length``...). Sequences add ``every``
    and schemas add ``props``.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] = (), **kwargs: Any) -> None:
        merged = dict(data)
        merged.update(kwargs)
        object.__setattr__(self, "_data", MappingProxyType(merged))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Result is immutable")

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Result({self._data!r})"

    @property
    def value(self) -> Any:
        return self._data.get("value")

    @property
    def is_valid(self) -> bool:
        return bool(self._data.get("is_valid", False))

    @property
    def message(self) -> str | None:
        return self._data.get("message")

    @property
    def every(self) -> tuple[Result, ...] | None:
        """Child results of a sequence, in evaluation order."""
        return self._data.get("every")

    @property
    def props(self) -> Mapping[str, Result] | None:
        """Child results of a schema, keyed by field name."""
        return self._data.get("props")


def is_valid(result: Mapping[str, Any] | bool) -> bool:
    """
    Read validity from a result.

    Usage:
        is_valid(validate(rules, form))
        is_valid(True)
    """
    if isinstance(result, bool):
        return result
    return bool(result.get("is_valid", False))
