"""
Exception hierarchy for stickler.

Validation failures are ordinary results (``is_valid`` is False). These
exceptions signal programmer or integration mistakes and are never caught
by the engine itself.
"""

from __future__ import annotations

from typing import Any


class ValidatorError(Exception):
    """Base exception for all stickler errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class UnsupportedValidatorError(ValidatorError, TypeError):
    """Object passed where a validator was expected has no known shape."""

    def __init__(self, obj: Any) -> None:
        self.obj = obj
        super().__init__(
            f"Unsupported validator shape: {type(obj).__name__}. "
            "Expected a callable, a list of validators, or a mapping of "
            "field name to validator."
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_VALIDATOR",
            "message": str(self),
            "type": type(self.obj).__name__,
        }


class InvalidResultError(ValidatorError, TypeError):
    """A leaf returned something that cannot be read as a result."""

    def __init__(self, returned: Any, reason: str | None = None) -> None:
        self.returned = returned
        message = f"Leaf validator returned {type(returned).__name__}"
        self.reason = reason
        if reason:
            message += f": {reason}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_RESULT",
            "message": str(self),
            "returned": type(self.returned).__name__,
        }


class ValidatorConfigError(ValidatorError, ValueError):
    """Validator was built with a structurally invalid configuration."""

    def __init__(self, message: str, key: str | None = None) -> None:
        self.message = message
        self.key = key
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATOR_CONFIG_ERROR",
            "message": self.message,
            "key": self.key,
        }
