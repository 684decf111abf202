"""
Error types raised by the factory core.
"""

from __future__ import annotations


class SchemaDefinitionError(ValueError):
    """
    A factory declares attributes that can never produce valid records.

    Raised synchronously by `Factory.init()` / `Factory.create_record()` before
    any record is generated. Currently the only rule is that `id` is reserved.
    """


__all__ = ["SchemaDefinitionError"]
