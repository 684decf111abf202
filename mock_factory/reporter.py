from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from mock_factory.domain.models import MetaAttr, RelationshipMetaAttr, SequenceMetaAttr


def _format_cell(value: Any) -> str:
    if value is None:
        return "[dim]null[/dim]"
    if isinstance(value, list):
        return f"[{len(value)} item(s)]" if value else "[dim][][/dim]"
    return str(value)


def _describe_attr(attr: MetaAttr) -> str:
    if isinstance(attr, RelationshipMetaAttr):
        details = f"{attr.factory_name}.{attr.inverted_attr_name}"
        if attr.reflexive:
            details += f" (reflexive, depth={attr.reflexive_depth})"
        return details
    if isinstance(attr, SequenceMetaAttr):
        window = "all" if math.isinf(attr.last_values_count) else int(attr.last_values_count)
        return f"initial={attr.initial_value!r}, window={window}, history={len(attr.prev_values)}"
    return "computed" if attr.computed else "static"


def print_records(
    records: List[Dict[str, Any]],
    title: str = "Generated Records",
    console: Optional[Console] = None,
) -> None:
    """
    Render generated records as a rich table.

    Columns follow the key order of the first record ("id" first, then the
    factory's declaration order).
    """
    console = console or Console()

    if not records:
        console.print("[yellow]No records to display.[/yellow]")
        return

    table = Table(title=title, box=box.ROUNDED, caption=f"{len(records)} record(s)")
    columns = list(records[0].keys())
    for column in columns:
        if column == "id":
            table.add_column(column, justify="right", style="cyan", no_wrap=True)
        else:
            table.add_column(column)

    for record in records:
        table.add_row(*(_format_cell(record.get(column)) for column in columns))

    console.print(table)


def print_meta(
    meta: Mapping[str, MetaAttr],
    title: str = "Factory Attributes",
    console: Optional[Console] = None,
) -> None:
    """Render compiled factory metadata as a rich table."""
    console = console or Console()

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Attribute", style="cyan", no_wrap=True)
    table.add_column("Kind", style="magenta")
    table.add_column("Details", style="green")

    for attr_name, attr in meta.items():
        table.add_row(attr_name, attr.type.value, _describe_attr(attr))

    console.print(table)


__all__ = ["print_meta", "print_records"]
