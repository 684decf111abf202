"""
mock-factory - schema-driven mock record generation for tests.

A factory declares, per record type, which attributes are static values,
dynamically computed values, sequence-dependent values, or relationships to
other record types. It compiles that attribute map into typed metadata and
generates records on demand:

- Static fields are identical on every record
- Dynamic fields are computed once per record and memoized
- Sequence fields derive each value from previously generated ones
- Relationship fields carry the metadata an orchestration layer needs

The package also ships a small runner and a Typer CLI for dumping generated
records as JSON or rich tables.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from mock_factory.config import Settings, get_settings
from mock_factory.domain import (
    CreateOptions,
    FieldMetaAttr,
    MetaAttrType,
    Record,
    RelationshipMetaAttr,
    RelationshipOptions,
    SchemaDefinitionError,
    SequenceItemOptions,
    SequenceMetaAttr,
)
from mock_factory.factory import Factory, RecordDraft
from mock_factory.orchestrator import generate_records, load_factory, related_counts
from mock_factory.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Core
    "Factory",
    "RecordDraft",
    # Domain
    "CreateOptions",
    "FieldMetaAttr",
    "MetaAttrType",
    "Record",
    "RelationshipMetaAttr",
    "RelationshipOptions",
    "SchemaDefinitionError",
    "SequenceItemOptions",
    "SequenceMetaAttr",
    # Runner
    "generate_records",
    "load_factory",
    "related_counts",
    # Logging
    "configure_logging",
    "get_logger",
]
