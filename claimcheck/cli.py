"""
claimcheck: terminal companion for the claim selection engine.

Commands:
- claimcheck select    - Preview a quiz selection
- claimcheck stats     - Show how much of a pool has been seen
- claimcheck subjects  - List catalog subjects with per-tier counts
- claimcheck validate  - Audit a catalog file
- claimcheck patterns  - List the AI error patterns and their teaching points
"""
from __future__ import annotations

import random
import sys
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from claimcheck.catalog import AI_ERROR_PATTERNS, DIFFICULTY_CONFIG, ClaimCatalog
from claimcheck.config import Settings, get_settings
from claimcheck.exposure import ExposureStore
from claimcheck.selection import (
    CatalogLoadError,
    ClaimSelectionError,
    SelectionEngine,
    SelectionRequest,
)

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="claimcheck",
    help="claimcheck: claim selection for truth-judgement quizzes",
    no_args_is_help=True,
)
console = Console()

VERDICT_STYLES = {
    "true": "green",
    "false": "red",
    "mixed": "yellow",
}


def style_difficulty(difficulty: str) -> str:
    """Get styled difficulty string."""
    info = DIFFICULTY_CONFIG.get(difficulty)
    color = info.color if info else "white"
    return f"[{color}]{difficulty}[/{color}]"


def _load_catalog(catalog_path: Optional[Path], settings: Settings) -> ClaimCatalog:
    try:
        return ClaimCatalog.load(catalog_path or settings.catalog_path)
    except CatalogLoadError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)


def _seen_ids(
    settings: Settings,
    learner: Optional[str],
    group: Optional[str],
) -> tuple[frozenset, frozenset]:
    if not learner and not group:
        return frozenset(), frozenset()

    store = ExposureStore(settings.exposure_db_path)
    try:
        individual = store.get_individual_seen(learner) if learner else frozenset()
        shared = store.get_group_seen(group) if group else frozenset()
    finally:
        store.close()
    return individual, shared


# =============================================================================
# Commands
# =============================================================================


@app.command()
def select(
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Claims to select"),
    difficulty: Optional[str] = typer.Option(
        None, "--difficulty", "-d", help="easy, medium, hard or mixed"
    ),
    subject: Optional[List[str]] = typer.Option(
        None, "--subject", "-s", help="Restrict to a subject (repeatable)"
    ),
    grade: Optional[str] = typer.Option(None, "--grade", "-g", help="Grade level"),
    learner: Optional[str] = typer.Option(None, "--learner", help="Learner id for exposure history"),
    group: Optional[str] = typer.Option(None, "--group", help="Group id for exposure history"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible selection"),
    record: bool = typer.Option(False, "--record", help="Record the selection as seen"),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="Catalog JSON file"),
) -> None:
    """Preview a quiz selection."""
    settings = get_settings()
    catalog = _load_catalog(catalog_path, settings)
    individual, shared = _seen_ids(settings, learner, group)

    rng = random.Random(seed) if seed is not None else None
    engine = SelectionEngine(catalog.claims, settings=settings, rng=rng)

    request = SelectionRequest(
        count=count if count is not None else settings.default_count,
        difficulty_mode=difficulty or settings.default_difficulty,
        subjects=subject or (),
        individual_seen=individual,
        group_seen=shared,
        grade_level=grade,
    )

    try:
        result = engine.select(request)
    except ClaimSelectionError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    info = DIFFICULTY_CONFIG.get(request.difficulty_mode)
    table = Table(
        title=f"{len(result)} of {result.requested} claim(s)",
        caption=f"{info.name}: {info.description}" if info else None,
    )
    table.add_column("#", justify="right")
    table.add_column("ID")
    table.add_column("Difficulty")
    table.add_column("Subject")
    table.add_column("Verdict")
    table.add_column("Seen")

    seen = request.combined_seen
    for index, claim in enumerate(result, start=1):
        color = VERDICT_STYLES.get(claim.verdict, "white")
        table.add_row(
            str(index),
            str(claim.id),
            style_difficulty(claim.difficulty),
            claim.subject,
            f"[{color}]{claim.verdict.upper()}[/{color}]",
            "[dim]yes[/dim]" if claim.id in seen else "",
        )

    console.print(table)

    if result.fallback_used:
        console.print(
            "[yellow]Not enough claims in the requested subjects; "
            "the rest came from the full catalog.[/yellow]"
        )
    elif result.shortfall:
        console.print(f"[yellow]Only {len(result)} claim(s) available.[/yellow]")

    if record and (learner or group):
        store = ExposureStore(settings.exposure_db_path)
        try:
            written = store.record_seen(result.ids, learner_id=learner, group_id=group)
        finally:
            store.close()
        console.print(f"[dim]Recorded {written} new exposure row(s)[/dim]")


@app.command()
def stats(
    subject: Optional[List[str]] = typer.Option(None, "--subject", "-s", help="Restrict to a subject"),
    grade: Optional[str] = typer.Option(None, "--grade", "-g", help="Grade level"),
    learner: Optional[str] = typer.Option(None, "--learner", help="Learner id"),
    group: Optional[str] = typer.Option(None, "--group", help="Group id"),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="Catalog JSON file"),
) -> None:
    """Show how much of a pool has already been seen."""
    settings = get_settings()
    catalog = _load_catalog(catalog_path, settings)
    individual, shared = _seen_ids(settings, learner, group)

    engine = SelectionEngine(catalog.claims, settings=settings)
    result = engine.exposure_stats(individual | shared, subjects=subject or (), grade_level=grade)

    table = Table(title="Exposure")
    table.add_column("Total", justify="right")
    table.add_column("Unseen", justify="right")
    table.add_column("Seen", justify="right")
    table.add_column("% Seen", justify="right")
    table.add_row(
        str(result.total), str(result.unseen), str(result.seen), f"{result.percent_seen}%"
    )
    console.print(table)


@app.command()
def subjects(
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="Catalog JSON file"),
) -> None:
    """List catalog subjects with per-tier counts."""
    settings = get_settings()
    catalog = _load_catalog(catalog_path, settings)

    table = Table(title=f"{len(catalog)} claims")
    table.add_column("Subject")
    for tier in ("easy", "medium", "hard"):
        table.add_column(style_difficulty(tier), justify="right")

    for name in catalog.subjects():
        dist = catalog.difficulty_distribution(name)
        table.add_row(name, str(dist["easy"]), str(dist["medium"]), str(dist["hard"]))

    console.print(table)


@app.command()
def validate(
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="Catalog JSON file"),
) -> None:
    """Audit a catalog for duplicate ids and malformed claims."""
    settings = get_settings()
    catalog = _load_catalog(catalog_path, settings)
    report = catalog.validate()

    verdicts = ", ".join(f"{k.upper()}: {v}" for k, v in report.verdicts.items())
    console.print(f"{report.total_claims} claims  |  {verdicts}")

    for claim_id in report.duplicates:
        console.print(f"[red]Duplicate id:[/red] {claim_id}")
    for issue in report.issues:
        console.print(f"[red]#{issue.index}[/red] {issue.claim_id}: {issue.reason}")
    if report.unlisted_subjects:
        console.print(f"[yellow]Unlisted subjects:[/yellow] {', '.join(report.unlisted_subjects)}")

    if not report.valid:
        raise typer.Exit(code=1)
    console.print("[green]Catalog OK[/green]")


@app.command()
def patterns() -> None:
    """List the AI error patterns and their teaching points."""
    table = Table(title="AI error patterns")
    table.add_column("ID", style="dim")
    table.add_column("Pattern", style="bold")
    table.add_column("What it looks like")
    table.add_column("Teaching point", style="cyan")

    for pattern in AI_ERROR_PATTERNS:
        table.add_row(pattern.id, pattern.name, pattern.description, pattern.teaching_point)

    console.print(table)


# =============================================================================
# Entry Point
# =============================================================================


def configure_logging(settings: Settings) -> None:
    """Route loguru output according to settings."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<level>{message}</level>",
    )
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="10 MB", retention=5)


def main() -> None:
    """CLI entry point."""
    configure_logging(get_settings())
    app()


if __name__ == "__main__":
    main()
