import json
from collections.abc import Sequence
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

console = Console()


def error(message: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"Error: {message}", err=True)


def _cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return "" if value is None else str(value)


def format_items_table(items: Sequence[Any], start: int = 1) -> None:
    """Print fetched items as a Rich table.

    Dict items get one column per key (taken from the first item); anything
    else is shown in a single column.
    """
    if not items:
        return

    table = Table(show_header=True, header_style="bold cyan", border_style="dim")
    table.add_column("#", style="dim", justify="right", no_wrap=True)

    first = items[0]
    if isinstance(first, dict):
        keys = list(first.keys())
        for key in keys:
            table.add_column(str(key))
        for i, item in enumerate(items, start=start):
            row = item if isinstance(item, dict) else {}
            table.add_row(str(i), *(_cell(row.get(key)) for key in keys))
    else:
        table.add_column("Item")
        for i, item in enumerate(items, start=start):
            table.add_row(str(i), _cell(item))

    console.print(table)
