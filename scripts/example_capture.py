#!/usr/bin/env python3
"""Example runs of the address search-and-capture flow.

Runs two captures one after another against the live juso.go.kr site:

  1. Default options, file name derived from the keyword.
  2. A custom file name, a separate output directory, and an extra
     result-area screenshot.

Usage:
    python scripts/example_capture.py
    python scripts/example_capture.py --headless --output-dir captures

Prerequisites:
    - Playwright browsers installed:
        playwright install chromium
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

# Ensure the source tree is importable when run from repo root
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from rich.console import Console
from rich.table import Table

from juso.automator import PageAutomator
from juso.logging_config import configure_logging
from juso.models.results import CaptureOptions
from juso.settings import get_settings

console = Console()

EXAMPLES = [
    {
        "keyword": "강남구 테헤란로",
        "filename": None,
        "description": "Default options",
        "custom": False,
    },
    {
        "keyword": "서울시 종로구",
        "filename": "종로구_주소검색",
        "description": "Custom file name + result-area capture",
        "custom": True,
    },
]


def main() -> int:
    parser = argparse.ArgumentParser(description="Example address captures against juso.go.kr")
    parser.add_argument("--headless", action="store_true", help="Run without a visible browser window")
    parser.add_argument("--output-dir", default="captures", help="Output directory for the custom example")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    configure_logging("DEBUG" if args.verbose else "INFO", json_output=False)

    settings = get_settings()
    if args.headless:
        settings = settings.model_copy(deep=True)
        settings.browser.headless = True

    console.print(f"\n[bold]juso-capture examples[/bold]: {len(EXAMPLES)} run(s)\n")

    rows = []
    for i, example in enumerate(EXAMPLES, 1):
        options = CaptureOptions.from_settings(settings)
        if example["custom"]:
            options.output_dir = args.output_dir
            options.capture_full_page = True
            options.capture_result_only = True

        console.print(f"[bold cyan]({i}/{len(EXAMPLES)})[/bold cyan] {example['keyword']}")
        console.print(f"  {example['description']}")

        start = time.time()
        result = PageAutomator(settings=settings).run(example["keyword"], example["filename"], options)
        elapsed = round(time.time() - start, 1)

        status = "[green]PASS[/green]" if result.success else "[red]FAIL[/red]"
        console.print(f"  Result: {status} ({elapsed}s)")
        for path in result.captured_files:
            console.print(f"    - {path}")
        if result.error:
            console.print(f"  Error: [red]{result.error}[/red]")
        console.print()
        rows.append((example["keyword"], status, len(result.captured_files), elapsed))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Keyword")
    table.add_column("Status")
    table.add_column("Files", justify="right")
    table.add_column("Time (s)", justify="right")
    for keyword, status, files, elapsed in rows:
        table.add_row(keyword, status, str(files), str(elapsed))
    console.print(table)

    return 0 if all("PASS" in row[1] for row in rows) else 1


if __name__ == "__main__":
    sys.exit(main())
