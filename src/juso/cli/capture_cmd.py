"""CLI commands for searching an address and capturing the result page."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from juso.models.results import CaptureOptions, CaptureResult

console = Console()


def capture(
    keyword: str = typer.Argument(..., help="Address keyword to search for, e.g. \"강남구 테헤란로\"."),
    filename: Optional[str] = typer.Argument(None, help="File base name (default: derived from the keyword)."),
    output_dir: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for screenshots."),
    no_full_page: bool = typer.Option(False, "--no-full-page", help="Skip the final full-page screenshot."),
    result_only: bool = typer.Option(False, "--result-only", help="Also capture the result area on its own."),
    no_debug: bool = typer.Option(False, "--no-debug", help="Skip the before/after-search debug screenshots."),
    headless: bool = typer.Option(False, "--headless", help="Run the browser without a visible window."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Search juso.go.kr for KEYWORD and save screenshots of the results."""
    from juso.automator import PageAutomator

    settings = _effective_settings(headless=headless)
    options = _build_options(
        settings,
        output_dir=output_dir,
        no_full_page=no_full_page,
        result_only=result_only,
        no_debug=no_debug,
    )

    if as_json:
        # Plain stdout so the output stays machine-readable
        result = PageAutomator(settings=settings).run(keyword, filename, options)
        typer.echo(result.to_json())
    else:
        console.print(Panel(f"[bold]Searching:[/bold] {keyword}", title="juso", border_style="blue"))
        with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"), console=console) as progress:
            task = progress.add_task("Searching and capturing...", total=None)
            result = PageAutomator(settings=settings).run(keyword, filename, options)
            progress.update(task, completed=True)
        _print_result(result)

    if not result.success:
        raise typer.Exit(code=1)


def batch(
    file: Path = typer.Argument(..., help="Keyword file: one keyword per line, optional TAB + file base name."),
    output_dir: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for screenshots."),
    result_only: bool = typer.Option(False, "--result-only", help="Also capture the result area on its own."),
    no_debug: bool = typer.Option(False, "--no-debug", help="Skip the before/after-search debug screenshots."),
    headless: bool = typer.Option(False, "--headless", help="Run the browser without a visible window."),
) -> None:
    """Run one capture per keyword in FILE, one after another.

    Blank lines and lines starting with ``#`` are ignored.  Each run gets
    its own browser.
    """
    from juso.automator import PageAutomator

    if not file.exists():
        console.print(f"[red]File not found:[/red] {file}")
        raise typer.Exit(code=1)

    entries = load_batch_entries(file)
    if not entries:
        console.print("[yellow]No keywords to process.[/yellow]")
        raise typer.Exit(code=0)

    settings = _effective_settings(headless=headless)
    options = _build_options(
        settings,
        output_dir=output_dir,
        no_full_page=False,
        result_only=result_only,
        no_debug=no_debug,
    )

    console.print(f"Loaded {len(entries)} keyword(s) from {file}")

    results: list[CaptureResult] = []
    for i, (keyword, filename) in enumerate(entries, 1):
        console.print(f"[dim][{i}/{len(entries)}][/dim] {keyword}")
        results.append(PageAutomator(settings=settings).run(keyword, filename, options))

    table = Table(title="Batch results")
    table.add_column("Keyword")
    table.add_column("Status")
    table.add_column("Files", justify="right")
    table.add_column("Error")
    for r in results:
        status = "[green]ok[/green]" if r.success else "[red]failed[/red]"
        table.add_row(r.search_keyword, status, str(len(r.captured_files)), r.error or "")
    console.print(table)

    succeeded = sum(1 for r in results if r.success)
    failed = len(results) - succeeded
    console.print(f"\n[bold]Batch complete:[/bold] {succeeded} succeeded, {failed} failed")

    if failed:
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def load_batch_entries(file: Path) -> list[tuple[str, str | None]]:
    """Parse a keyword file into ``(keyword, filename)`` pairs."""
    entries: list[tuple[str, str | None]] = []
    for line in file.read_text(encoding="utf-8").splitlines():
        if not line.strip() or line.strip().startswith("#"):
            continue
        keyword, _, filename = line.partition("\t")
        entries.append((keyword.strip(), filename.strip() or None))
    return entries


def _effective_settings(*, headless: bool):
    from juso.settings import get_settings

    settings = get_settings()
    if headless:
        settings = settings.model_copy(deep=True)
        settings.browser.headless = True
    return settings


def _build_options(
    settings,
    *,
    output_dir: Path | None,
    no_full_page: bool,
    result_only: bool,
    no_debug: bool,
) -> CaptureOptions:
    options = CaptureOptions.from_settings(settings)
    if output_dir is not None:
        options.output_dir = str(output_dir)
    if no_full_page:
        options.capture_full_page = False
    if result_only:
        options.capture_result_only = True
    if no_debug:
        options.debug_screenshots = False
    return options


def _print_result(result: CaptureResult) -> None:
    if result.success:
        console.print(f"\n[green]✓[/green] Capture complete: {result.search_keyword}")
        console.print("  Saved files:")
        for path in result.captured_files:
            console.print(f"    - {path}")
    else:
        console.print(f"\n[red]✗[/red] Capture failed: {result.error}")
    if result.debug_files:
        console.print(f"  Debug screenshots: {len(result.debug_files)}")
