"""
Domain package for mock-factory.

Exports the attribute descriptors, option models and error types used by the
factory core and the runner. Keep this package focused on data definitions and
validation concerns.
"""

from mock_factory.domain.errors import SchemaDefinitionError
from mock_factory.domain.models import (
    CreateOptions,
    FieldMetaAttr,
    Meta,
    MetaAttr,
    MetaAttrType,
    Record,
    RelationshipMetaAttr,
    RelationshipOptions,
    SequenceItemOptions,
    SequenceMetaAttr,
)

__all__ = [
    "CreateOptions",
    "FieldMetaAttr",
    "Meta",
    "MetaAttr",
    "MetaAttrType",
    "Record",
    "RelationshipMetaAttr",
    "RelationshipOptions",
    "SchemaDefinitionError",
    "SequenceItemOptions",
    "SequenceMetaAttr",
]
