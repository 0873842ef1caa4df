"""CLI commands for inspecting and validating juso-capture settings."""

from __future__ import annotations

import json
from urllib.parse import urlparse

import typer
from rich.console import Console

settings_app = typer.Typer(help="Inspect and validate juso-capture configuration.")
console = Console()


@settings_app.command("show")
def show_settings() -> None:
    """Display the currently resolved settings."""
    from juso.settings import get_settings

    settings = get_settings()
    console.print_json(json.dumps(settings.model_dump(mode="json"), indent=2, default=str))


@settings_app.command("validate")
def validate_settings() -> None:
    """Load settings and check the search target and capture switches."""
    from juso.settings import get_settings

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"[red]✗[/red] Settings validation failed: {e}")
        raise typer.Exit(code=1)

    problems = find_setting_problems(settings)
    if problems:
        console.print("[red]✗[/red] Settings validation failed:")
        for problem in problems:
            console.print(f"  - {problem}")
        raise typer.Exit(code=1)

    console.print("[green]✓[/green] Settings are valid.")
    console.print(f"  Environment: {settings.env}")
    console.print(f"  Target URL: {settings.search.target_url}")
    console.print(f"  Output dir: {settings.capture.output_dir}")
    console.print(f"  Headless: {settings.browser.headless}")


def find_setting_problems(settings) -> list[str]:
    """Return human-readable problems that would break a capture run."""
    problems: list[str] = []
    target = urlparse(settings.search.target_url)
    if target.scheme not in ("http", "https") or not target.netloc:
        problems.append(f"search.target_url must be an http(s) URL, got {settings.search.target_url!r}")
    capture = settings.capture
    if not capture.capture_full_page and not capture.capture_result_only:
        problems.append("capture.capture_full_page and capture.capture_result_only are both off; nothing would be saved")
    if not str(capture.output_dir).strip():
        problems.append("capture.output_dir is empty")
    return problems
