"""
Small value helpers shared by the factory core.

- `assert_that`: fail loudly with a schema error when an invariant is violated
- `copy_value`: deep copy, so callbacks never mutate stored history
- `get_or_calc_value`: invoke a callable, or return a plain value as-is
"""

from __future__ import annotations

import copy
from typing import Any, Type

from mock_factory.domain.errors import SchemaDefinitionError


def assert_that(
    message: str,
    condition: bool,
    error_cls: Type[Exception] = SchemaDefinitionError,
) -> None:
    """Raise `error_cls(message)` when `condition` is false."""
    if not condition:
        raise error_cls(message)


def copy_value(value: Any) -> Any:
    return copy.deepcopy(value)


def get_or_calc_value(value: Any) -> Any:
    return value() if callable(value) else value


__all__ = ["assert_that", "copy_value", "get_or_calc_value"]
