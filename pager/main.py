"""pager command-line entry point."""

import typer
from pydantic import ValidationError

from pager.cli_app import app
from pager.config import Settings
from pager.core.context import AppContext
from pager.utils import error


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose/debug output"
    ),
) -> None:
    """Pager - browse paginated JSON APIs."""
    try:
        config = Settings()
    except ValidationError as e:
        error(f"Invalid configuration: {e}")
        raise typer.Exit(1)

    if verbose:
        config.verbose = True
    ctx.obj = AppContext(config=config)
    ctx.obj.logger.debug("verbose_mode_enabled")


# Import commands to register them with the app
from pager import commands  # noqa: E402, F401

if __name__ == "__main__":
    app()
