"""Unified CLI entry point for juso-capture.

Config precedence: settings.default.toml -> settings.{env}.toml -> settings.local.toml -> env vars (JUSO_* with double underscores) -> CLI flags.
"""

from __future__ import annotations

import typer

from juso.cli.capture_cmd import batch, capture
from juso.cli.settings_cmd import settings_app

try:
    from importlib.metadata import version

    VERSION = version("juso-capture")
except Exception:
    VERSION = "unknown"

APP_HELP = (
    "juso: search the juso.go.kr road-name address site and save screenshots of the results. "
    "Config precedence: settings.default.toml -> settings.{env}.toml -> settings.local.toml -> env vars (JUSO_* with __) -> CLI flags."
)

app = typer.Typer(add_completion=False, help=APP_HELP)

app.command("capture")(capture)
app.command("batch")(batch)
app.add_typer(settings_app, name="settings")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Configure logging; show usage and fail when no command is given."""
    if version:
        typer.echo(f"juso {VERSION}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=1)

    from pydantic import ValidationError

    from juso.logging_config import configure_logging
    from juso.settings import get_settings

    level: str | None = "DEBUG"
    if not verbose:
        try:
            level = get_settings().log_level
        except ValidationError:
            # `juso settings validate` reports the details
            level = None
    configure_logging(level)


if __name__ == "__main__":
    app()
