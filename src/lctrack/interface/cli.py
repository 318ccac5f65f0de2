"""lctrack CLI: attempt logging, review queries, and catalog maintenance."""

import asyncio
import json
import logging
import sys
from collections.abc import Coroutine
from pathlib import Path
from typing import Annotated, Any, TypeVar

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from lctrack.application.config import AppConfig, resolve_config
from lctrack.application.progress_service import ProgressService
from lctrack.application.scheduler import format_date, parse_date, parse_grade
from lctrack.domain.constants import MAX_RATING, MIN_RATING
from lctrack.domain.errors import TrackerError
from lctrack.domain.models import AttemptGrade, CatalogEntry, Difficulty

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="lctrack: Track your LeetCode progress with spaced repetition.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}

# ---------------------------------------------------------------------------
# Register subgroups
# ---------------------------------------------------------------------------

catalog_app = typer.Typer(help="Manage the problem catalog.", no_args_is_help=True)
app.add_typer(catalog_app, name="catalog")

config_app = typer.Typer(help="Inspect lctrack configuration.", no_args_is_help=True)
app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve(ctx: typer.Context) -> AppConfig:
    obj = ctx.obj or {}
    try:
        config = resolve_config({"db_path": obj.get("db_path"), "verbose": obj.get("verbose")})
    except ValidationError as e:
        typer.secho(f"Error: invalid configuration\n{e}", fg="red", err=True)
        raise typer.Exit(1)
    logging.getLogger().setLevel(_LOG_LEVELS.get(config.verbose, logging.DEBUG))
    return config


def _fail(e: TrackerError):
    logger.debug("Command failed", exc_info=True)
    typer.secho(f"Error: {e}", fg="red", err=True)
    raise typer.Exit(1)


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a service coroutine, reporting tracker errors and aborting the command."""
    try:
        return asyncio.run(coro)
    except TrackerError as e:
        _fail(e)


def _service(ctx: typer.Context) -> ProgressService:
    from lctrack.application.factory import get_progress_service

    try:
        return get_progress_service(_resolve(ctx))
    except TrackerError as e:
        _fail(e)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    db: Annotated[
        Path | None, typer.Option("--db", help="Path to the tracking database.")
    ] = None,
):
    """Global settings for lctrack."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose or None  # unset defers to env / config file
    ctx.obj["db_path"] = db


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command("next")
def next_cmd(ctx: typer.Context):
    """Show the next unattempted problem to practice."""
    problem = _run(_service(ctx).next_problem())

    if problem is None:
        typer.secho("Congratulations! You have attempted all problems!", fg="green")
        return

    typer.echo(f"Next up is: #{problem.order} - {problem.name}")
    typer.echo(f"LeetCode ID: {problem.id}")
    if problem.difficulty:
        typer.echo(f"Difficulty: {problem.difficulty.label}")
    if problem.week is not None:
        typer.echo(f"Week: {problem.week}")


@app.command("n", hidden=True)
def _next_alias(ctx: typer.Context):
    """Alias for 'next'."""
    next_cmd(ctx)


@app.command()
def attempt(
    ctx: typer.Context,
    problem_id: Annotated[int, typer.Argument(metavar="ID", help="The LeetCode ID of the problem.")],
    rating: Annotated[
        int,
        typer.Argument(
            min=MIN_RATING,
            max=MAX_RATING,
            help="Your rating of the attempt (1=ShortFail, 2=LongFail, 3=Messy, 4=Hard, 5=Easy).",
        ),
    ],
    date: Annotated[
        str | None,
        typer.Argument(help="The date of the attempt in YYYY-MM-DD format (defaults to today)."),
    ] = None,
):
    """Log an attempt for a specific problem."""
    service = _service(ctx)

    async def run():
        grade = parse_grade(rating)
        attempt_date = parse_date(date) if date is not None else None
        return await service.record_attempt(problem_id, grade, attempt_date)

    result = _run(run())
    record = result.record

    if result.first_attempt:
        typer.echo("Logged first attempt.")
    else:
        typer.echo(f"Updated existing progress (attempt #{record.attempt_count}).")
    typer.secho(
        f"Successfully logged attempt for problem {problem_id} "
        f"with rating: {record.latest_grade.label}",
        fg="green",
    )
    if record.next_due_date:
        typer.echo(f"Next review: {format_date(record.next_due_date)}")
    else:
        typer.echo("No further review scheduled.")


@app.command()
def show(
    ctx: typer.Context,
    problem_id: Annotated[int, typer.Argument(metavar="ID", help="The LeetCode ID of the problem.")],
):
    """Show the progress record for a problem."""
    record = _run(_service(ctx).get_progress(problem_id))
    if record is None:
        typer.secho(f"No attempts logged for problem {problem_id}.", fg="yellow")
        raise typer.Exit(1)

    typer.echo(f"Problem: {record.item}")
    typer.echo(f"Attempts: {record.attempt_count}")
    typer.echo(f"Last attempted: {format_date(record.last_attempted)}")
    typer.echo(f"Latest rating: {record.latest_grade.label}")
    typer.echo(f"Next review: {format_date(record.next_due_date) or 'none'}")


@app.command()
def due(
    ctx: typer.Context,
    on: Annotated[
        str | None, typer.Option("--on", help="Reference date (YYYY-MM-DD). Defaults to today.")
    ] = None,
):
    """List problems due for review."""
    service = _service(ctx)

    async def run():
        on_date = parse_date(on) if on is not None else None
        return await service.due_for_review(on_date)

    records = _run(run())
    if not records:
        typer.secho("Nothing due for review.", fg="green")
        return

    table = Table(title="Due for Review")
    table.add_column("ID", justify="right")
    table.add_column("Due")
    table.add_column("Last Rating")
    table.add_column("Attempts", justify="right")
    for record in records:
        table.add_row(
            str(record.item),
            format_date(record.next_due_date),
            record.latest_grade.label,
            str(record.attempt_count),
        )
    Console().print(table)


@app.command()
def stats(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show aggregate progress over the catalog."""
    summary = _run(_service(ctx).summary())

    if json_output:
        typer.echo(json.dumps(summary.to_dict(), indent=2))
        return

    completion = summary.completion
    table = Table(title="Progress")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Problems", str(summary.total_problems))
    table.add_row("Attempted", str(summary.attempted))
    table.add_row("Remaining", str(summary.remaining))
    table.add_row("Total attempts", str(summary.total_attempts))
    table.add_row("Due today", str(summary.due))
    table.add_row("Completion", f"{completion:.0%}" if completion is not None else "-")
    for grade in sorted(AttemptGrade, reverse=True):
        table.add_row(f"Latest {grade.label}", str(summary.grades.get(grade, 0)))
    Console().print(table)


# ---------------------------------------------------------------------------
# Catalog subgroup
# ---------------------------------------------------------------------------


@catalog_app.command("add")
def catalog_add(
    ctx: typer.Context,
    problem_id: Annotated[int, typer.Argument(metavar="ID", help="The LeetCode ID of the problem.")],
    order: Annotated[int, typer.Argument(help="Position of the problem in your study order.")],
    name: Annotated[str, typer.Argument(help="The name of the problem.")],
    difficulty: Annotated[
        str | None, typer.Option(help="Difficulty tier: Easy, Medium, Hard.")
    ] = None,
    week: Annotated[int | None, typer.Option(help="Week grouping.")] = None,
):
    """Add a problem to the catalog."""
    tier = None
    if difficulty is not None:
        try:
            tier = Difficulty.from_label(difficulty)
        except KeyError:
            raise typer.BadParameter(
                f"{difficulty!r} is not one of Easy, Medium, Hard.", param_hint="--difficulty"
            )

    entry = CatalogEntry(id=problem_id, order=order, name=name, difficulty=tier, week=week)
    if _run(_service(ctx).add_problem(entry)):
        typer.secho(f"Added #{order} - {name} (ID {problem_id}).", fg="green")
    else:
        typer.secho(f"Problem {problem_id} or '{name}' already exists; skipped.", fg="yellow")


@catalog_app.command("list")
def catalog_list(ctx: typer.Context):
    """List every problem in the catalog."""
    problems = _run(_service(ctx).list_problems())
    if not problems:
        typer.secho("Catalog is empty. Add problems with 'lctrack catalog add'.", fg="yellow")
        return

    table = Table(title="Catalog")
    table.add_column("Order", justify="right")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Difficulty")
    table.add_column("Week", justify="right")
    for p in problems:
        table.add_row(
            str(p.order),
            str(p.id),
            p.name,
            p.difficulty.label if p.difficulty else "-",
            str(p.week) if p.week is not None else "-",
        )
    Console().print(table)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _resolve(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))
