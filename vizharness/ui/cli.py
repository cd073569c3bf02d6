"""Command line smoke runner for visualizer fixtures."""

import argparse
import asyncio
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from playwright.async_api import Browser
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from vizharness.harness.diagnostics import AllowSpec, DiagnosticEntry
from vizharness.harness.dialogs import ACCEPT
from vizharness.harness.harness import Harness
from vizharness.utils.config import HarnessSettings, load_settings
from vizharness.utils.logger import set_level, setup_logger

logger = setup_logger(__name__)
console = Console()


@dataclass
class PageReport:
    """What one fixture reported while loading."""

    path: Path
    unexpected: list[DiagnosticEntry] = field(default_factory=list)
    warnings: int = 0
    dialogs: int = 0
    load_error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.load_error is None and not self.unexpected


def find_fixtures(directory: Path) -> list[Path]:
    """All *.html files under directory, sorted for stable output."""
    if not directory.is_dir():
        raise FileNotFoundError(f"Fixture directory not found: {directory}")
    return sorted(directory.rglob("*.html"))


async def check_page(
    browser: Browser,
    path: Path,
    settings: HarnessSettings,
    allowlist: Sequence[AllowSpec] = (),
    settle_ms: int = 500,
) -> PageReport:
    """
    Load one fixture and collect what it reports.

    Dialogs are accepted so pages that alert on load do not block. A
    navigation failure is recorded in the report instead of aborting the run.

    Args:
        browser: Launched browser; each fixture gets its own context
        path: HTML file to load
        settings: Harness settings (timeouts)
        allowlist: Error texts that do not fail the page
        settle_ms: Extra time after load for scripts and animations to run

    Returns:
        PageReport for the fixture
    """
    report = PageReport(path=path)
    context = await browser.new_context()
    try:
        page = await context.new_page()
        async with Harness(page, settings) as harness:
            harness.handle_dialogs(ACCEPT)
            try:
                await harness.goto(path.resolve().as_uri())
                await page.wait_for_timeout(settle_ms)
            except PlaywrightError as exc:
                report.load_error = exc.message.splitlines()[0]
                logger.warning(f"{path.name} failed to load: {report.load_error}")

            snapshot = harness.collect_diagnostics()
            report.unexpected = snapshot.unexpected_errors(allowlist)
            report.warnings = len(snapshot.warnings)
            report.dialogs = len(harness.dialogs)
    finally:
        await context.close()
    return report


async def smoke(
    directory: Path,
    settings: HarnessSettings,
    allowlist: Sequence[AllowSpec] = (),
    settle_ms: int = 500,
) -> list[PageReport]:
    """Check every fixture under directory, one at a time."""
    fixtures = find_fixtures(directory)
    reports = []
    if not fixtures:
        return reports

    async with async_playwright() as playwright:
        browser = await getattr(playwright, settings.browser).launch(headless=settings.headless)
        try:
            for path in fixtures:
                console.print(f"[cyan]Checking {path.name}...[/cyan]")
                reports.append(await check_page(browser, path, settings, allowlist, settle_ms))
        finally:
            await browser.close()

    return reports


def render_report(reports: Sequence[PageReport], root: Path) -> Table:
    table = Table(title="Fixture smoke results")
    table.add_column("Fixture")
    table.add_column("Errors", justify="right")
    table.add_column("Warnings", justify="right")
    table.add_column("Dialogs", justify="right")
    table.add_column("Status")

    for report in reports:
        status = "[green]PASS[/green]" if report.passed else "[red]FAIL[/red]"
        table.add_row(
            str(report.path.relative_to(root)),
            str(len(report.unexpected)),
            str(report.warnings),
            str(report.dialogs),
            status,
        )
    return table


def show_failures(reports: Sequence[PageReport]) -> None:
    for report in reports:
        if report.passed:
            continue
        lines = [f"load error: {report.load_error}"] if report.load_error else []
        lines.extend(entry.describe() for entry in report.unexpected)
        console.print(Panel("\n".join(lines), title=f"[red]{report.path.name}[/red]"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vizharness",
        description="Browser harness for algorithm visualizer fixtures",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    smoke_parser = commands.add_parser(
        "smoke", help="Load every HTML fixture in a directory and report errors"
    )
    smoke_parser.add_argument("directory", type=Path, help="Directory holding *.html fixtures")
    smoke_parser.add_argument(
        "--allow",
        action="append",
        default=[],
        metavar="TEXT",
        help="Ignore errors containing TEXT (repeatable)",
    )
    smoke_parser.add_argument(
        "--allow-regex",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Ignore errors matching PATTERN (repeatable)",
    )
    smoke_parser.add_argument(
        "--settle-ms", type=int, default=500, help="Wait after load before collecting (default: 500)"
    )
    smoke_parser.add_argument("--headed", action="store_true", help="Show the browser window")
    smoke_parser.add_argument("--log-level", default=None, help="Logging level")
    return parser


async def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 = every fixture passed, 1 = failures or a usage error)
    """
    args = build_parser().parse_args(argv)

    overrides = {"headless": False} if args.headed else {}
    settings = load_settings(**overrides)
    set_level(args.log_level or settings.log_level)

    allowlist: list[AllowSpec] = list(args.allow)
    allowlist.extend(re.compile(pattern) for pattern in args.allow_regex)

    try:
        reports = await smoke(args.directory, settings, allowlist, args.settle_ms)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    if not reports:
        console.print(f"[yellow]No HTML fixtures under {args.directory}[/yellow]")
        return 0

    console.print(render_report(reports, args.directory))
    show_failures(reports)

    failed = sum(1 for report in reports if not report.passed)
    if failed:
        console.print(f"[red]✗ {failed} of {len(reports)} fixture(s) failed[/red]")
        return 1

    console.print(f"[green]✓ All {len(reports)} fixture(s) passed[/green]")
    return 0


def run() -> None:
    """Console script entry point."""
    raise SystemExit(asyncio.run(main()))
