"""
Typer CLI for the dailybias learning scheduler.

Commands:
    dailybias today           - Show today's personalized bias
    dailybias recommend       - Recommend a bias from the least explored category
    dailybias review-queue    - List biases due for review and upcoming reviews
    dailybias review-stats    - Show review queue statistics
    dailybias quiz-preview    - Generate and print a quiz session

All commands read a catalog JSON file and an optional progress JSON file.
Nothing is written back.

Usage:
    dailybias today --catalog biases.json --progress progress.json
    dailybias today --catalog biases.json --date 2024-01-15
    dailybias review-queue --catalog biases.json --progress progress.json
    dailybias quiz-preview --catalog biases.json --count 5 --seed 42
"""

from __future__ import annotations

import json
import random
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfoNotFoundError

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dailybias import __version__
from dailybias.cli.schemas import load_catalog, load_progress
from dailybias.config import get_settings
from dailybias.core.catalog import catalog_index
from dailybias.core.errors import SchedulerError
from dailybias.core.models import Bias, BiasCategory, resolve_now
from dailybias.core.progress import progress_map
from dailybias.daily import (
    SelectionWeights,
    get_balanced_recommendation,
    get_category_distribution,
    get_daily_bias,
    get_personalized_daily_bias,
    get_today_date_string,
)
from dailybias.quiz import generate_quiz_session
from dailybias.review import (
    ReviewConfig,
    calculate_review_stats,
    get_biases_due_for_review,
    get_interval_level,
    get_interval_level_name,
    get_review_due_text,
    get_upcoming_reviews,
)

app = typer.Typer(
    help="dailybias CLI: daily bias selection, spaced repetition and quizzes",
    no_args_is_help=True,
)

console = Console()

CatalogOption = typer.Option(..., "--catalog", "-c", help="Catalog JSON file", exists=True, dir_okay=False)
UserCatalogOption = typer.Option(None, "--user-catalog", "-u", help="User-authored biases JSON file", exists=True, dir_okay=False)
ProgressOption = typer.Option(None, "--progress", "-p", help="Progress JSON file", exists=True, dir_okay=False)
NowOption = typer.Option(None, "--now", help="Override the current time (ISO 8601)")


# ========================================
# Logging
# ========================================


def configure_logging(level: str) -> None:
    """Route loguru output to stderr at the given level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<level>{level: <8}</level> | {name}:{function} - <level>{message}</level>",
    )


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Learning scheduler for cognitive biases.

    Reads catalog and progress files and prints what the scheduler would
    show. Use --verbose to see scoring and scheduling decisions.
    """
    configure_logging("DEBUG" if verbose else get_settings().log_level)


# ========================================
# Helpers
# ========================================


def _parse_now(value: Optional[str]) -> datetime:
    if value is None:
        return resolve_now(None)
    try:
        return resolve_now(datetime.fromisoformat(value))
    except ValueError:
        console.print(f"[red]Invalid --now value: {escape(value)}[/red]")
        raise typer.Exit(1)


def _load_inputs(
    catalog_path: Path,
    user_path: Optional[Path],
    progress_path: Optional[Path],
):
    """Load catalog and progress, translating input errors into exit code 1."""
    try:
        biases = load_catalog(catalog_path, user_path)
        progress_list = load_progress(progress_path)
        # Rejects duplicate progress ids before any command runs
        progress_map(progress_list)
        return biases, progress_list
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON: {escape(str(e))}[/red]")
    except ValidationError as e:
        console.print(f"[red]Invalid input file:[/red]\n{escape(str(e))}")
    except SchedulerError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
    except (ValueError, TypeError) as e:
        console.print(f"[red]Invalid progress record: {escape(str(e))}[/red]")
    raise typer.Exit(1)


def _fail(error: Exception) -> None:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise typer.Exit(1)


def _bias_panel(bias: Bias, heading: str) -> Panel:
    body = f"[bold]{escape(bias.title)}[/bold]  [dim]({bias.category.label})[/dim]\n\n{escape(bias.summary)}"
    if bias.why:
        body += f"\n\n[cyan]Why it happens:[/cyan] {escape(bias.why)}"
    if bias.counter:
        body += f"\n\n[green]How to counter it:[/green] {escape(bias.counter)}"
    return Panel(body, title=heading, border_style="cyan")


# ========================================
# Commands
# ========================================


@app.command("today")
def today(
    catalog: Path = CatalogOption,
    user_catalog: Optional[Path] = UserCatalogOption,
    progress: Optional[Path] = ProgressOption,
    date: Optional[str] = typer.Option(None, "--date", "-d", help="Day key YYYY-MM-DD (defaults to today)"),
    tz: Optional[str] = typer.Option(None, "--tz", help="IANA timezone used to resolve today"),
    plain: bool = typer.Option(False, "--plain", help="Ignore progress and use the plain daily rotation"),
    now: Optional[str] = NowOption,
):
    """
    Show the bias of the day.

    Examples:
        dailybias today -c biases.json -p progress.json
        dailybias today -c biases.json --date 2024-01-15 --plain
    """
    current = _parse_now(now)
    biases, progress_list = _load_inputs(catalog, user_catalog, progress)

    try:
        date_key = date or get_today_date_string(current, tz)
    except ZoneInfoNotFoundError:
        _fail(ValueError(f"Unknown timezone: {tz}"))

    try:
        if plain:
            bias = get_daily_bias(biases, date_key)
        else:
            weights = SelectionWeights.from_settings()
            bias = get_personalized_daily_bias(biases, progress_list, date_key, current, weights)
    except SchedulerError as e:
        _fail(e)

    console.print(_bias_panel(bias, f"Bias of the day - {date_key}"))


@app.command("recommend")
def recommend(
    catalog: Path = CatalogOption,
    user_catalog: Optional[Path] = UserCatalogOption,
    progress: Optional[Path] = ProgressOption,
):
    """Recommend an unseen bias from the least explored category."""
    biases, progress_list = _load_inputs(catalog, user_catalog, progress)

    distribution = get_category_distribution(progress_list, biases)
    totals = {category.value: 0 for category in BiasCategory}
    for bias in biases:
        totals[bias.category.value] += 1

    table = Table(title="Category Coverage")
    table.add_column("Category", style="cyan")
    table.add_column("Explored", justify="right")
    table.add_column("Total", justify="right")
    for category in BiasCategory:
        table.add_row(category.label, str(distribution[category.value]), str(totals[category.value]))
    console.print(table)

    recommendation = get_balanced_recommendation(biases, progress_list)
    if recommendation is None:
        console.print("[green]Every bias has been explored.[/green]")
        return
    console.print(_bias_panel(recommendation, "Recommended next"))


@app.command("review-queue")
def review_queue(
    catalog: Path = CatalogOption,
    user_catalog: Optional[Path] = UserCatalogOption,
    progress: Optional[Path] = ProgressOption,
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Upcoming reviews to show"),
    now: Optional[str] = NowOption,
):
    """List biases due for review now and the next upcoming reviews."""
    current = _parse_now(now)
    biases, progress_list = _load_inputs(catalog, user_catalog, progress)
    index = catalog_index(biases)
    intervals = ReviewConfig.from_settings().intervals

    def render(title: str, records) -> None:
        table = Table(title=title)
        table.add_column("Bias", style="cyan")
        table.add_column("Level")
        table.add_column("Interval", justify="right")
        table.add_column("Due")
        for record in records:
            bias = index.get(record.bias_id)
            level = get_interval_level(record.interval, intervals)
            table.add_row(
                escape(bias.title) if bias else f"[dim]{record.bias_id}[/dim]",
                get_interval_level_name(level),
                f"{record.interval}d" if record.interval else "-",
                get_review_due_text(record, current),
            )
        console.print(table)

    due = get_biases_due_for_review(progress_list, current, intervals)
    upcoming = get_upcoming_reviews(
        progress_list, limit or get_settings().review_upcoming_limit, current, intervals
    )

    if not due and not upcoming:
        console.print("[dim]Nothing to review yet. View some biases first.[/dim]")
        return
    if due:
        render(f"Due for review ({len(due)})", due)
    else:
        console.print("[green]No reviews due.[/green]")
    if upcoming:
        render("Upcoming", upcoming)


@app.command("review-stats")
def review_stats(
    catalog: Path = CatalogOption,
    user_catalog: Optional[Path] = UserCatalogOption,
    progress: Optional[Path] = ProgressOption,
    now: Optional[str] = NowOption,
):
    """Show review queue statistics."""
    current = _parse_now(now)
    _, progress_list = _load_inputs(catalog, user_catalog, progress)
    stats = calculate_review_stats(progress_list, current, ReviewConfig.from_settings().intervals)

    table = Table(title="Review Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Due now", str(stats.due_now))
    table.add_row("Due today", str(stats.due_today))
    table.add_row("Due this week", str(stats.due_this_week))
    table.add_row("Reviewed", str(stats.total_reviewed))
    table.add_row("Average interval", f"{stats.average_interval}d")
    table.add_row("Mastery progress", f"{stats.mastery_progress}%")
    console.print(table)


@app.command("quiz-preview")
def quiz_preview(
    catalog: Path = CatalogOption,
    user_catalog: Optional[Path] = UserCatalogOption,
    progress: Optional[Path] = ProgressOption,
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Number of questions"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for a reproducible quiz"),
    answers: bool = typer.Option(False, "--answers", "-a", help="Mark the correct option"),
    now: Optional[str] = NowOption,
):
    """Generate a quiz session and print its questions."""
    current = _parse_now(now)
    biases, progress_list = _load_inputs(catalog, user_catalog, progress)
    question_count = count or get_settings().quiz_questions_per_session

    try:
        session = generate_quiz_session(biases, progress_list, question_count, current, random.Random(seed))
    except SchedulerError as e:
        _fail(e)

    console.print(f"[bold]Quiz {session.id}[/bold] - {session.total_questions} questions\n")
    for number, question in enumerate(session.questions, 1):
        console.print(f"[bold cyan]{number}.[/bold cyan] {escape(question.scenario)} [dim]({question.difficulty.value})[/dim]")
        for letter, option in zip("ABCD", question.options):
            marker = " [green]✓[/green]" if answers and option.is_correct else ""
            console.print(f"   {letter}) {escape(option.title)}{marker}")
        console.print()


@app.command("version")
def version():
    """Show the installed version."""
    console.print(f"dailybias {__version__}")


# ========================================
# Entry Point
# ========================================


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
