"""
Stickler - composable value validation.

Usage:
    from stickler import Every, Length, Props, Required, validate

    rules = Props({
        "first_name": Every([Required(), Length(2, 20)]),
        "last_name": [Required(), Length(2, 20)],
    })

    result = validate(rules, {"first_name": "Stanford", "last_name": ""})
    result.is_valid                          # False
    result.props["last_name"].required       # True
"""

from .context import ambient_props, validation_context
from .core import Every, EveryV, Props, PropsV, V, to_validator, validate
from .exceptions import (
    InvalidResultError,
    UnsupportedValidatorError,
    ValidatorConfigError,
    ValidatorError,
)
from .merge import merge, omit
from .thresholds import Computed, Fixed, resolve, to_threshold
from .types import Result, is_valid
from .validators import (
    Compare,
    Length,
    MaxFieldValue,
    MaxLength,
    MaxValue,
    MinFieldValue,
    MinLength,
    MinValue,
    Predicate,
    Range,
    Required,
)

__all__ = [
    # Result types
    "Result",
    "is_valid",
    # Core
    "V",
    "EveryV",
    "PropsV",
    "Every",
    "Props",
    "to_validator",
    "validate",
    # Merging
    "merge",
    "omit",
    # Thresholds
    "Fixed",
    "Computed",
    "to_threshold",
    "resolve",
    # Validators
    "Required",
    "MinLength",
    "MaxLength",
    "Length",
    "MinValue",
    "MaxValue",
    "Range",
    "Compare",
    "MinFieldValue",
    "MaxFieldValue",
    "Predicate",
    # Configuration
    "validation_context",
    "ambient_props",
    # Errors
    "ValidatorError",
    "UnsupportedValidatorError",
    "InvalidResultError",
    "ValidatorConfigError",
]
