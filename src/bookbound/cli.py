"""Command-line interface for bookbound.

Built with Typer for commands and Rich for beautiful output.
"""

from concurrent.futures import TimeoutError as FutureTimeoutError
from datetime import date
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import configure_logging, get_config
from .db import ThemeMode, get_db
from .schedule import PlanManager, PlanSummary
from .utils import format_long_date, format_plan_date, parse_iso_date

# Create the main app
app = typer.Typer(
    name="bookbound",
    help="Plan your reading pace and see when you will finish your book.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()

THEME_STYLES = {
    ThemeMode.LIGHT: {"header": "bold blue", "accent": "blue", "bar": "blue"},
    ThemeMode.DARK: {"header": "bold bright_cyan", "accent": "bright_cyan", "bar": "bright_magenta"},
}

TODAY_HELP = "Reference date (YYYY-MM-DD), defaults to today"


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def _resolve_today(value: Optional[str]) -> date:
    """Parse the --today option or fall back to the system date."""
    if value is None:
        return date.today()
    parsed = parse_iso_date(value)
    if parsed is None:
        print_error(f"Invalid date: {value} (expected YYYY-MM-DD)")
        raise typer.Exit(1)
    return parsed


def _load_manager(today: date) -> PlanManager:
    """Load the saved plan into a manager."""
    db = get_db()
    return PlanManager(db.load_plan(today), today=today)


def _progress_bar(percent: float, width: int = 20) -> str:
    filled = int((min(percent, 100) / 100) * width)
    return "█" * filled + "░" * (width - filled)


def _render_dashboard(summary: PlanSummary, today: date, styles: dict) -> None:
    """Print the plan overview panel."""
    if summary.total_pages <= 0:
        lines = [
            "[bold]Plan Your Journey[/bold]",
            "",
            "Enter your book details to generate a roadmap:",
            "  bookbound set --title \"My Book\" --total-pages 320",
        ]
        console.print(Panel("\n".join(lines), title="Reading Dashboard", border_style=styles["accent"]))
        return

    lines = [
        f"[bold]{summary.title or 'Untitled'}[/bold]",
        "",
        f"Progress: [{styles['bar']}]{_progress_bar(summary.progress_percent)}[/] "
        f"{summary.progress_percent:g}%",
        f"Page {summary.pages_read} of {summary.total_pages} ({summary.pages_left} left)",
        f"Target date: {format_long_date(summary.target_date)}",
        "",
    ]

    if summary.is_finished:
        lines.append("[bold green]Finished![/bold green]")
    else:
        lines.append(f"Daily pace: {summary.daily_pace} pgs/day")
        if summary.days_to_finish is not None:
            lines.append(f"Days to finish: {summary.days_to_finish}")
        else:
            lines.append("Days to finish: --")
        if summary.estimated_finish_date:
            finish = format_plan_date(summary.estimated_finish_date)
            lines.append(f"Estimated finish: [{styles['accent']}]{finish}[/]")
            if summary.estimated_finish_date > summary.target_date:
                lines.append("[yellow]Behind target: raise your pace to finish on time.[/yellow]")
        else:
            lines.append("Estimated finish: --")

    lines.append("")
    lines.append(f"[dim]Today is {format_long_date(today)}[/dim]")
    console.print(Panel("\n".join(lines), title="Reading Dashboard", border_style=styles["accent"]))


def _render_roadmap(summary: PlanSummary, preview_days: int, styles: dict) -> None:
    """Print the day-by-day reading table."""
    if not summary.entries:
        return

    table = Table(title="Reading Roadmap", show_header=True, header_style=styles["header"])
    table.add_column("Day", justify="right", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Pages", justify="right")
    table.add_column("Range")
    table.add_column("Read", justify="right")
    table.add_column("Progress")

    for index, entry in enumerate(summary.entries[:preview_days], start=1):
        table.add_row(
            str(index),
            format_plan_date(entry.date),
            str(entry.pages_planned_today),
            f"{entry.start_page}–{entry.end_page}",
            f"{entry.cumulative_pages_read} / {summary.total_pages}",
            f"{_progress_bar(entry.percent_complete, 10)} {entry.percent_complete}%",
        )

    console.print(table)

    if len(summary.entries) > preview_days:
        print_info(f"Showing your first {preview_days} days of reading ({len(summary.entries)} planned).")
    if summary.truncated:
        print_warning("Plan stops after one year. Raise your pace to see it all.")


def _show_plan(manager: PlanManager) -> None:
    config = get_config()
    styles = THEME_STYLES[get_db().get_theme()]
    summary = manager.summary()
    _render_dashboard(summary, manager.today, styles)
    _render_roadmap(summary, config.roadmap_days, styles)


# ============================================================================
# Plan Commands
# ============================================================================


@app.callback()
def main_callback() -> None:
    """Plan your reading pace and see when you will finish your book."""
    config = get_config()
    errors = config.validate()
    for error in errors:
        print_warning(error)
    configure_logging("WARNING" if errors else config.log_level)


@app.command()
def show(
    today: Optional[str] = typer.Option(None, "--today", help=TODAY_HELP),
) -> None:
    """Show the reading dashboard and roadmap."""
    manager = _load_manager(_resolve_today(today))
    _show_plan(manager)


@app.command("set")
def set_plan(
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Book title"),
    total_pages: Optional[int] = typer.Option(None, "--total-pages", "-p", help="Total pages in the book"),
    pages_read: Optional[int] = typer.Option(None, "--pages-read", "-r", help="Pages already read"),
    target_date: Optional[str] = typer.Option(None, "--target-date", "-d", help="Target finish date (YYYY-MM-DD)"),
    pace: Optional[int] = typer.Option(None, "--pace", help="Pages per day"),
    starts_today: Optional[bool] = typer.Option(
        None, "--starts-today/--starts-tomorrow", help="Whether the plan starts today"
    ),
    today: Optional[str] = typer.Option(None, "--today", help=TODAY_HELP),
) -> None:
    """Update the reading plan.

    Changing the target date, total pages, or pages read recalculates the
    daily pace needed to finish on time. Setting --pace directly keeps the
    pace you choose.
    """
    manager = _load_manager(_resolve_today(today))

    changes = {
        "title": title,
        "total_pages": total_pages,
        "pages_read": pages_read,
        "target_date": target_date,
        "daily_pace": pace,
        "starts_today": starts_today,
    }
    changes = {key: value for key, value in changes.items() if value is not None}

    if not changes:
        print_warning("Nothing to update. See 'bookbound set --help'.")
        raise typer.Exit(1)

    try:
        suggestion = manager.apply_edits(**changes)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    get_db().save_plan(manager.state)
    print_success("Plan updated")
    if suggestion is not None:
        console.print(f"Suggested pace: [bold]{suggestion}[/bold] pages/day to finish by "
                      f"{format_long_date(manager.state.target_date)}")

    _show_plan(manager)


@app.command()
def reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
    today: Optional[str] = typer.Option(None, "--today", help=TODAY_HELP),
) -> None:
    """Reset the plan to defaults."""
    if not force and not typer.confirm("Reset your reading plan?", default=False):
        console.print("[dim]Cancelled.[/dim]")
        raise typer.Exit(0)

    manager = PlanManager(today=_resolve_today(today))
    db = get_db()
    db.clear_plan()
    db.save_plan(manager.state)
    print_success("Plan reset to defaults")


@app.command()
def advice(
    today: Optional[str] = typer.Option(None, "--today", help=TODAY_HELP),
) -> None:
    """Get a short motivating tip for your current book."""
    from .advice import ADVICE_PLACEHOLDER, get_advice_provider, request_advice

    config = get_config()
    manager = _load_manager(_resolve_today(today))

    if manager.state.total_pages <= 0:
        print_info("Set up a book first to get reading advice.")
        return

    if not config.has_advice_config():
        print_info("No GEMINI_API_KEY configured, showing a default tip.")

    provider = get_advice_provider(config)
    future = request_advice(provider, *manager.advice_snapshot())
    try:
        text = future.result(timeout=config.advice_timeout + 1)
    except FutureTimeoutError:
        future.cancel()
        logger.warning("Advice did not arrive within {}s", config.advice_timeout + 1)
        text = ""

    console.print(Panel(text or ADVICE_PLACEHOLDER, title="Reading Tip"))


@app.command()
def theme(
    mode: Optional[ThemeMode] = typer.Argument(None, help="Theme to use (omit to toggle)"),
    show_current: bool = typer.Option(False, "--show", "-s", help="Show the current theme without changing it"),
) -> None:
    """Show, set, or toggle the display theme."""
    db = get_db()
    if show_current:
        if mode is not None:
            print_error("Use either --show or a theme name, not both.")
            raise typer.Exit(1)
        console.print(f"Current theme: {db.get_theme().value}")
        return

    if mode is None:
        current = db.get_theme()
        mode = ThemeMode.LIGHT if current == ThemeMode.DARK else ThemeMode.DARK

    db.set_theme(mode)
    print_success(f"Theme set to {mode.value}")


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"bookbound version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
