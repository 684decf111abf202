from __future__ import annotations

import json
import sys
import time
from pathlib import Path
from typing import Optional

import typer

from mock_factory.config import get_settings
from mock_factory.factory import Factory
from mock_factory.orchestrator import generate_records, load_factory, write_records
from mock_factory.reporter import print_meta, print_records
from mock_factory.utils.logging import configure_logging

app = typer.Typer(help="mock-factory CLI: generate mock records from factory definitions.")


def _load_or_exit(factory_path: str) -> Factory:
    try:
        factory = load_factory(factory_path)
        factory.init()
    except (ValueError, ImportError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    return factory


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"env={settings.app_env} | log_level={settings.log_level} json_logs={settings.log_json} | "
        f"count={settings.default_count} start_id={settings.start_id} "
        f"indent={settings.output_indent}"
    )


@app.command()
def generate(
    factory_path: str = typer.Argument(
        ...,
        help="Factory to generate from, as 'package.module:attribute'.",
    ),
    count: Optional[int] = typer.Option(
        None,
        "--count",
        "-n",
        min=0,
        help="Number of records to generate (default from settings).",
    ),
    start_id: Optional[int] = typer.Option(
        None,
        "--start-id",
        min=1,
        help="Identity of the first generated record (default from settings).",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Optional JSON output path (if omitted, records are printed).",
    ),
    table: bool = typer.Option(
        False,
        "--table",
        help="Print records as a table instead of JSON.",
    ),
) -> None:
    """
    Generate records from a factory and print or save them.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    factory = _load_or_exit(factory_path)

    start = time.perf_counter()
    records = generate_records(factory, count=count, start_id=start_id)
    duration = time.perf_counter() - start

    if output:
        write_records(records, output)
        typer.echo(f"Wrote {len(records):,} record(s) -> {output} in {duration:.2f}s")
    elif table:
        print_records(records, title=factory_path)
    else:
        typer.echo(json.dumps(records, indent=settings.output_indent or None, default=str))


@app.command()
def describe(
    factory_path: str = typer.Argument(
        ...,
        help="Factory to describe, as 'package.module:attribute'.",
    ),
) -> None:
    """
    Show the compiled attribute metadata of a factory.
    """
    factory = _load_or_exit(factory_path)
    print_meta(factory.meta, title=factory_path)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
