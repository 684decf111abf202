"""
Factories are used for data generation. Each generated data item is called a 'record'.

Build a factory with `Factory.create(attrs={...})` (or subclass `Factory` and
fill the `attrs` class attribute). Each `attrs` entry describes one property of
the record and may be one of:

- static: the same value for every record the factory generates
- dynamic: a callable, evaluated once per generated record
- sequence: `Factory.sequence_item(...)`, derived from previously generated values
- relationship: `Factory.has_one(...)` / `Factory.has_many(...)`, a record (or
  list of records) of another factory, wired up by the orchestration layer

Usage:
    from mock_factory import Factory

    user = Factory.create(
        attrs={
            "name": Factory.sequence_item("admin", lambda prev: f"user-{len(prev) + 1}"),
            "score": lambda: random.randint(1, 100),
            "label": lambda rec: f"{rec.name} ({rec.score})",
            "posts": Factory.has_many("post", "author"),
        }
    )
    user.init()
    user.create_record(1)  # {"id": "1", "name": "admin", ...}
"""

from __future__ import annotations

import inspect
import math
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Union

from mock_factory.domain.models import (
    DEFAULT_REFLEXIVE_DEPTH,
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
from mock_factory.utils.helpers import assert_that, copy_value, get_or_calc_value
from mock_factory.utils.logging import get_logger

log = get_logger(__name__)

Resolver = Callable[["RecordDraft"], Any]
CreateRelatedHint = Union[int, Callable[[str], int]]


def _takes_record(fn: Callable[..., Any]) -> bool:
    """True when `fn` has a required positional parameter to receive the draft."""
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return False
    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
        for p in params
    )


def _relationship(
    attr_type: MetaAttrType,
    factory_name: str,
    inverted_attr_name: str,
    options: Union[RelationshipOptions, Mapping[str, Any], None],
) -> RelationshipMetaAttr:
    if not isinstance(options, RelationshipOptions):
        options = RelationshipOptions.model_validate(dict(options or {}))
    return RelationshipMetaAttr(
        type=attr_type,
        factory_name=factory_name,
        inverted_attr_name=inverted_attr_name,
        reflexive=options.reflexive,
        # depth is meaningless for non-reflexive links
        reflexive_depth=options.depth if options.reflexive else DEFAULT_REFLEXIVE_DEPTH,
    )


class RecordDraft:
    """
    One record under construction.

    Attribute values are resolved on first read and memoized for the lifetime of
    this draft only. Computed fields receive the draft, so they can read
    sibling attributes via `draft.name` or `draft["name"]`.
    """

    __slots__ = ("id", "_identity", "_resolvers", "_cache")

    def __init__(self, identity: int, resolvers: Dict[str, Resolver]) -> None:
        self.id = str(identity)
        self._identity = identity
        self._resolvers = resolvers
        self._cache: Dict[str, Any] = {}

    def __getitem__(self, name: str) -> Any:
        if name not in self._resolvers:
            raise KeyError(name)
        return self._resolvers[name](self)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_") or name not in self._resolvers:
            raise AttributeError(f"{type(self).__name__!s} has no attribute {name!r}")
        return self._resolvers[name](self)

    def __contains__(self, name: object) -> bool:
        return name in self._resolvers

    def __repr__(self) -> str:
        return f"RecordDraft(id={self.id!r}, resolved={sorted(self._cache)})"

    def memoized(self, name: str, compute: Resolver) -> Any:
        if name not in self._cache:
            self._cache[name] = compute(self)
        return self._cache[name]


def _constant_resolver(value: Any) -> Resolver:
    return lambda draft: value


def _has_many_resolver(name: str) -> Resolver:
    return lambda draft: draft.memoized(name, lambda _: [])


def _computed_resolver(name: str, fn: Callable[..., Any], takes_record: bool) -> Resolver:
    def compute(draft: RecordDraft) -> Any:
        return fn(draft) if takes_record else fn()

    return lambda draft: draft.memoized(name, compute)


def _sequence_resolver(name: str, attr: SequenceMetaAttr) -> Resolver:
    def compute(draft: RecordDraft) -> Any:
        if draft._identity == 1:
            value = attr.initial_value
        else:
            value = attr.get_next_value(copy_value(attr.recent_values()))
        attr.prev_values.append(value)
        return value

    return lambda draft: draft.memoized(name, compute)


class Factory:
    """
    Compiles an attribute map into metadata and generates records from it.

    Attributes
    ----------
    attrs : dict
        Ordered map of attribute name to a raw value or descriptor.
    create_related : dict
        Materialization hints: attribute name to a fixed count, or to a function
        of the record id returning how many related records to pre-create.
    after_create_relationships_depth : float
        How many relationship levels `after_create` hooks cascade through.
    """

    attrs: Dict[str, Any] = {}
    create_related: Dict[str, CreateRelatedHint] = {}
    after_create_relationships_depth: float = math.inf

    @staticmethod
    def has_one(
        factory_name: str,
        inverted_attr_name: str,
        options: Union[RelationshipOptions, Mapping[str, Any], None] = None,
    ) -> RelationshipMetaAttr:
        """
        Describe a single related record ('one-to-one' and 'one-to-many').

        Parameters
        ----------
        factory_name : str
            Name of the factory the related record comes from.
        inverted_attr_name : str
            Attribute on the related factory that points back at this one.
        options : RelationshipOptions | mapping | None
            `reflexive` (default False) and `depth` (default 2, reflexive only).
        """
        return _relationship(MetaAttrType.HAS_ONE, factory_name, inverted_attr_name, options)

    @staticmethod
    def has_many(
        factory_name: str,
        inverted_attr_name: str,
        options: Union[RelationshipOptions, Mapping[str, Any], None] = None,
    ) -> RelationshipMetaAttr:
        """
        Describe a list of related records ('many-to-one' and 'many-to-many').

        Takes the same arguments as `has_one`.
        """
        return _relationship(MetaAttrType.HAS_MANY, factory_name, inverted_attr_name, options)

    @staticmethod
    def sequence_item(
        initial_value: Any,
        get_next_value: Callable[[list], Any],
        options: Union[SequenceItemOptions, Mapping[str, Any], None] = None,
    ) -> SequenceMetaAttr:
        """
        Describe a field that depends on previously generated values.

        `initial_value` is resolved right away (called if callable) and becomes
        the value of record 1. Every later record gets
        `get_next_value(recent_values)`, where `recent_values` is a deep copy of
        at most `options.last_values_count` trailing history entries.
        """
        if not isinstance(options, SequenceItemOptions):
            options = SequenceItemOptions.model_validate(dict(options or {}))
        return SequenceMetaAttr(
            initial_value=get_or_calc_value(initial_value),
            get_next_value=get_next_value,
            last_values_count=options.last_values_count,
        )

    @classmethod
    def create(
        cls,
        options: Union[CreateOptions, Mapping[str, Any], None] = None,
        **kwargs: Any,
    ) -> "Factory":
        """
        Build a factory from a `CreateOptions` model, a mapping, or keyword arguments.

        Defaults: `attrs={}`, `create_related={}`, `after_create=identity`,
        `after_create_relationships_depth=inf`.
        """
        if isinstance(options, CreateOptions) and not kwargs:
            opts = options
        else:
            if isinstance(options, CreateOptions):
                # model_dump would turn descriptor models in attrs into plain dicts
                raw = {name: getattr(options, name) for name in CreateOptions.model_fields}
            else:
                raw = dict(options or {})
            opts = CreateOptions.model_validate({**raw, **kwargs})
        return cls(
            attrs=opts.attrs,
            create_related=opts.create_related,
            after_create=opts.after_create,
            after_create_relationships_depth=opts.after_create_relationships_depth,
        )

    def __init__(
        self,
        attrs: Optional[Mapping[str, Any]] = None,
        create_related: Optional[Mapping[str, CreateRelatedHint]] = None,
        after_create: Optional[Callable[[Record], Record]] = None,
        after_create_relationships_depth: Optional[float] = None,
    ) -> None:
        if attrs is None:
            # each instance of a subclass starts with its own sequence history
            attrs = {
                name: value.model_copy(update={"prev_values": []})
                if isinstance(value, SequenceMetaAttr)
                else value
                for name, value in type(self).attrs.items()
            }
        self.attrs = dict(attrs)
        self.create_related = dict(
            type(self).create_related if create_related is None else create_related
        )
        if after_create is not None:
            self.after_create = after_create  # type: ignore[method-assign]
        if after_create_relationships_depth is not None:
            depth = after_create_relationships_depth
            self.after_create_relationships_depth = int(depth) if math.isfinite(depth) else depth
        self._meta: Optional[Meta] = None
        self._internal_factory: Optional[Callable[[int], RecordDraft]] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(attrs={list(self.attrs)})"

    @property
    def meta(self) -> Mapping[str, MetaAttr]:
        """Compiled metadata, computed once on first access."""
        return MappingProxyType(self._get_meta())

    def after_create(self, record: Record) -> Record:
        """Hook the orchestration layer calls once relationships are in place."""
        return record

    def init(self) -> None:
        """Validate attrs, compile metadata and build the record generator."""
        self._check_attrs()
        self._get_meta()
        if self._internal_factory is None:
            self._init_internal_factory()

    def create_record(self, id: int) -> Record:
        """
        Generate the record with the given identity.

        Every attribute compiled into `meta` is read in declaration order; keys
        added to `attrs` after compilation are ignored. `after_create` is not
        applied here; that is the orchestration layer's job.
        """
        self._check_attrs()
        if self._internal_factory is None:
            self.init()
        draft = self._internal_factory(id)  # type: ignore[misc]
        record: Record = {"id": str(id)}
        for attr_name in self._get_meta():
            record[attr_name] = draft[attr_name]
        log.debug("Record created", extra={"factory": repr(self), "record_id": record["id"]})
        return record

    def _init_internal_factory(self) -> None:
        meta = self._get_meta()
        resolvers: Dict[str, Resolver] = {}
        for attr_name, attr in meta.items():
            if isinstance(attr, RelationshipMetaAttr):
                if attr.type == MetaAttrType.HAS_ONE:
                    resolvers[attr_name] = _constant_resolver(None)
                else:
                    resolvers[attr_name] = _has_many_resolver(attr_name)
            elif isinstance(attr, SequenceMetaAttr):
                resolvers[attr_name] = _sequence_resolver(attr_name, attr)
            elif attr.computed:
                resolvers[attr_name] = _computed_resolver(
                    attr_name, self.attrs[attr_name], attr.takes_record
                )
            else:
                resolvers[attr_name] = _constant_resolver(self.attrs[attr_name])

        def internal_factory(identity: int) -> RecordDraft:
            return RecordDraft(identity, resolvers)

        self._internal_factory = internal_factory
        log.debug("Record generator built", extra={"factory": repr(self), "attrs": len(resolvers)})

    def _get_meta(self) -> Meta:
        if self._meta is not None:
            return self._meta
        meta: Meta = {}
        for attr_name, value in self.attrs.items():
            if isinstance(value, (RelationshipMetaAttr, SequenceMetaAttr)):
                meta[attr_name] = value
            elif callable(value):
                meta[attr_name] = FieldMetaAttr(computed=True, takes_record=_takes_record(value))
            else:
                meta[attr_name] = FieldMetaAttr()
        self._meta = meta
        log.debug("Meta compiled", extra={"factory": repr(self), "attrs": list(meta)})
        return self._meta

    def _check_attrs(self) -> None:
        assert_that('Don\'t add "id" to the "attrs"', "id" not in self.attrs)


__all__ = ["Factory", "RecordDraft"]
