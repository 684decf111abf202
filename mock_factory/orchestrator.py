"""
Runner for generating batches of records from a factory.

This is the thin orchestration layer the CLI uses: it resolves factories by
import path, hands out consecutive identities, applies `after_create` hooks and
optionally writes the batch to disk. Relationship materialization (building the
graph of related records) is not performed here; `related_counts` only resolves
the `create_related` hints so a registry can act on them.

Usage (example from CLI):
    from mock_factory.orchestrator import generate_records, load_factory

    factory = load_factory("tests.fixtures:user_factory")
    records = generate_records(factory, count=5)
"""

from __future__ import annotations

import importlib
import json
from pathlib import Path
from typing import Dict, List, Optional

from mock_factory.config import get_settings
from mock_factory.domain.models import Record
from mock_factory.factory import Factory
from mock_factory.utils.logging import get_logger

log = get_logger(__name__)


def load_factory(path: str) -> Factory:
    """
    Import a factory given as `package.module:attribute`.

    The attribute may be a `Factory` instance or a `Factory` subclass, which is
    instantiated with its class-level `attrs`.
    """
    module_name, sep, attr_name = path.partition(":")
    if not sep or not module_name or not attr_name:
        raise ValueError(f"Invalid factory path '{path}'. Expected 'package.module:attribute'.")

    module = importlib.import_module(module_name)
    try:
        target = getattr(module, attr_name)
    except AttributeError as exc:
        raise ValueError(f"Module '{module_name}' has no attribute '{attr_name}'.") from exc

    if isinstance(target, type) and issubclass(target, Factory):
        target = target()
    if not isinstance(target, Factory):
        raise ValueError(f"'{path}' is a {type(target).__name__}, not a Factory.")
    return target


def related_counts(factory: Factory, record_id: str) -> Dict[str, int]:
    """Resolve `create_related` hints for one record into plain counts."""
    counts: Dict[str, int] = {}
    for attr_name, hint in factory.create_related.items():
        counts[attr_name] = int(hint(record_id) if callable(hint) else hint)
    return counts


def generate_records(
    factory: Factory,
    count: Optional[int] = None,
    start_id: Optional[int] = None,
    apply_after_create: bool = True,
) -> List[Record]:
    """
    Generate `count` records with consecutive identities.

    Parameters
    ----------
    factory : Factory
        Factory to generate from. Initialized here if needed.
    count : int | None
        Number of records. Defaults to settings.default_count.
    start_id : int | None
        First identity. Defaults to settings.start_id (1).
    apply_after_create : bool
        Whether to pass each record through `factory.after_create`.

    Returns
    -------
    List[Record]
        Records in identity order.
    """
    settings = get_settings()
    effective_count = settings.default_count if count is None else count
    first_id = settings.start_id if start_id is None else start_id
    if effective_count < 0:
        raise ValueError(f"count must be >= 0, got {effective_count}")
    if first_id < 1:
        raise ValueError(f"start_id must be >= 1, got {first_id}")

    factory.init()
    log.info(
        f"[GENERATE] {effective_count} record(s) from {factory!r}",
        extra={"count": effective_count, "start_id": first_id},
    )

    records: List[Record] = []
    for identity in range(first_id, first_id + effective_count):
        record = factory.create_record(identity)
        if apply_after_create:
            record = factory.after_create(record)
        records.append(record)

    log.info("[GENERATE COMPLETE]", extra={"count": len(records)})
    return records


def write_records(records: List[Record], path: Path | str, indent: Optional[int] = None) -> Path:
    """Dump records as a JSON array; returns the written path."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    effective_indent = get_settings().output_indent if indent is None else indent
    with target.open("w", encoding="utf-8") as f:
        json.dump(records, f, indent=effective_indent or None, default=str)

    log.info("Records persisted", extra={"path": str(target), "count": len(records)})
    return target


__all__ = [
    "generate_records",
    "load_factory",
    "related_counts",
    "write_records",
]
