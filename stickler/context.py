"""
Context manager for ambient validation-time props.
"""

from collections.abc import Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Any

from .merge import merge

_EMPTY: Mapping[str, Any] = MappingProxyType({})

# Context variable for ambient props
_ambient_props: ContextVar[Mapping[str, Any]] = ContextVar("ambient_props", default=_EMPTY)


def ambient_props() -> Mapping[str, Any]:
    """Props supplied by the innermost active validation_context."""
    return _ambient_props.get()


@contextmanager
def validation_context(**props: Any):
    """
    Context manager supplying validation-time props to every validate() call.

    Ambient props sit beneath the props passed at the call site, so an
    explicit prop always wins. Nested contexts overlay the outer one.

    Example:
        from stickler import Compare, validate, validation_context

        confirm = Compare(message="Must match password")

        with validation_context(compare=form["password"]):
            result = validate(confirm, form["confirm_password"])
    """
    token = _ambient_props.set(MappingProxyType(merge(_ambient_props.get(), props)))
    try:
        yield
    finally:
        _ambient_props.reset(token)
