"""
Domain models for mock-factory.

Defines the attribute descriptors a factory compiles its `attrs` into, the
option models accepted by the descriptor constructors, and the `Record` shape
handed back to callers.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Any, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_REFLEXIVE_DEPTH = 2

# A generated record: "id" (string) first, then every declared attribute.
Record = Dict[str, Any]


class MetaAttrType(str, Enum):
    FIELD = "field"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    SEQUENCE_ITEM = "sequence_item"


class RelationshipOptions(BaseModel):
    """
    Options for `Factory.has_one` / `Factory.has_many`.

    `depth` limits how far a self-referencing relationship is expanded and is
    only honoured when `reflexive` is true.
    """

    reflexive: bool = False
    depth: int = Field(DEFAULT_REFLEXIVE_DEPTH, ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)


class SequenceItemOptions(BaseModel):
    """
    Options for `Factory.sequence_item`.

    `last_values_count` is the maximum number of trailing history entries passed
    to `get_next_value`; unbounded by default.
    """

    last_values_count: float = Field(math.inf, alias="lastValuesCount", ge=1)

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class FieldMetaAttr(BaseModel):
    """
    A plain attribute: a constant, or a callable evaluated once per record.

    `takes_record` is set for callables that accept one positional argument;
    they receive the record being generated so they can read sibling values.
    """

    type: Literal[MetaAttrType.FIELD] = MetaAttrType.FIELD
    computed: bool = False
    takes_record: bool = False

    model_config = ConfigDict(frozen=True)


class RelationshipMetaAttr(BaseModel):
    """
    Describes a link to records of another factory.

    The core only carries this metadata; resolving it into actual related records
    is left to the orchestration layer.
    """

    type: Literal[MetaAttrType.HAS_ONE, MetaAttrType.HAS_MANY]
    factory_name: str
    inverted_attr_name: str
    reflexive: bool = False
    reflexive_depth: int = DEFAULT_REFLEXIVE_DEPTH

    model_config = ConfigDict(frozen=True)

    @property
    def effective_depth(self) -> Optional[int]:
        """Expansion depth for reflexive relationships, `None` otherwise."""
        return self.reflexive_depth if self.reflexive else None


class SequenceMetaAttr(BaseModel):
    """
    An attribute whose value is derived from previously generated values.

    `prev_values` is owned by this descriptor and shared by every record the
    owning factory generates.
    """

    type: Literal[MetaAttrType.SEQUENCE_ITEM] = MetaAttrType.SEQUENCE_ITEM
    initial_value: Any = None
    get_next_value: Callable[[List[Any]], Any]
    prev_values: List[Any] = Field(default_factory=list)
    last_values_count: float = math.inf

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def recent_values(self) -> List[Any]:
        """Trailing window of history, most recent last."""
        if math.isinf(self.last_values_count):
            return list(self.prev_values)
        return self.prev_values[-int(self.last_values_count):]


MetaAttr = Union[FieldMetaAttr, RelationshipMetaAttr, SequenceMetaAttr]
Meta = Dict[str, MetaAttr]


class CreateOptions(BaseModel):
    """
    Keyword bag accepted by `Factory.create`.

    Field names follow Python conventions; camelCase aliases are accepted as well.
    """

    attrs: Dict[str, Any] = Field(default_factory=dict)
    create_related: Dict[str, Union[int, Callable[[str], int]]] = Field(
        default_factory=dict, alias="createRelated"
    )
    after_create: Optional[Callable[[Record], Record]] = Field(None, alias="afterCreate")
    after_create_relationships_depth: Optional[float] = Field(
        None, alias="afterCreateRelationshipsDepth", ge=0
    )

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


__all__ = [
    "DEFAULT_REFLEXIVE_DEPTH",
    "CreateOptions",
    "FieldMetaAttr",
    "Meta",
    "MetaAttr",
    "MetaAttrType",
    "Record",
    "RelationshipMetaAttr",
    "RelationshipOptions",
    "SequenceItemOptions",
    "SequenceMetaAttr",
]
