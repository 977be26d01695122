"""Typer application shared by the pager commands."""

import typer

app = typer.Typer(
    name="pager",
    help="Browse paginated JSON APIs page by page or as one scrolling list.",
    invoke_without_command=True,
    no_args_is_help=True,
    # Locals would include the configured API token
    pretty_exceptions_show_locals=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
