# commands.py
import asyncio
from pathlib import Path

import typer

from pager.cli_app import app
from pager.config import write_schema
from pager.controllers import StreamAppendController
from pager.core import FetchStatus
from pager.core.context import AppContext
from pager.utils import console, error, format_items_table


def _exit_on_error(status: FetchStatus) -> None:
    if status.is_error:
        error(status.message or "fetch failed")
        raise typer.Exit(1)


async def drain_stream(
    controller: StreamAppendController, max_pages: int
) -> FetchStatus:
    """Call load_more() until exhausted, failed, or max_pages chunks are in."""
    while not controller.exhausted and controller.cursor < max_pages:
        status = await controller.load_more()
        if status.is_error:
            break
    return controller.status


# -------------------------
# Commands
# -------------------------
@app.command()
def pages(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="JSON endpoint returning one page per request"),
    page: int = typer.Option(1, "--page", "-p", help="Page to show (clamped to range)"),
    page_size: int | None = typer.Option(
        None, "--page-size", "-n", min=1, help="Items per page"
    ),
) -> None:
    """Show one page of a paginated JSON endpoint."""
    app_ctx: AppContext = ctx.obj
    fetcher = app_ctx.json_fetcher(url, page_size)
    controller = app_ctx.page_controller(fetcher.fetch_page, page_size)

    _exit_on_error(asyncio.run(controller.go_to_page(page)))

    if not controller.items:
        typer.echo("No items found.")
    else:
        first = (controller.current_page - 1) * controller.page_size + 1
        format_items_table(controller.items, start=first)
    console.print(
        f"[dim]page {controller.current_page} of {controller.total_pages} "
        f"({controller.total_items} items)[/dim]"
    )


@app.command()
def scroll(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="JSON endpoint returning one page per request"),
    max_pages: int = typer.Option(
        10, "--max-pages", "-m", min=1, help="Stop after this many pages"
    ),
    page_size: int | None = typer.Option(
        None, "--page-size", "-n", min=1, help="Items per page"
    ),
) -> None:
    """Load pages one after another until the endpoint runs out."""
    app_ctx: AppContext = ctx.obj
    fetcher = app_ctx.json_fetcher(url, page_size)
    controller = app_ctx.stream_controller(fetcher.fetch_chunk)

    status = asyncio.run(drain_stream(controller, max_pages))
    if controller.items:
        format_items_table(controller.items)
    _exit_on_error(status)

    if not controller.items:
        typer.echo("No items found.")
    suffix = "" if controller.exhausted else ", more available"
    console.print(
        f"[dim]{len(controller.items)} items in {controller.cursor} pages{suffix}[/dim]"
    )


@app.command(name="config")
def show_config(
    ctx: typer.Context,
    schema: Path | None = typer.Option(
        None, "--schema", help="Write the pager.toml JSON Schema to this path"
    ),
) -> None:
    """Show the resolved settings, or export the config schema."""
    if schema:
        write_schema(schema)
        typer.echo(f"Schema written to {schema}")
        return

    app_ctx: AppContext = ctx.obj
    data = app_ctx.config.model_dump(mode="json")
    if data["api"].get("token"):
        data["api"]["token"] = "***"
    console.print_json(data=data)
