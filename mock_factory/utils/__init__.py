"""
Utilities package for mock-factory.

Exports shared helpers for logging and value handling.
Keep this package lightweight and free of factory-specific logic.
"""

from mock_factory.utils.helpers import assert_that, copy_value, get_or_calc_value
from mock_factory.utils.logging import configure_logging, get_logger

__all__ = [
    "assert_that",
    "configure_logging",
    "copy_value",
    "get_logger",
    "get_or_calc_value",
]
