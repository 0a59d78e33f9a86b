"""Typer CLI application for the Madness Index engine."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd  # type: ignore[import-untyped]
import typer
from pandera.errors import SchemaError
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from madness_index.config import ScoringConfig
from madness_index.engine import MadnessIndexEngine
from madness_index.errors import MadnessIndexError
from madness_index.ingest import load_entrants_csv
from madness_index.matchup.bracket import get_round_label, get_seed_round_meta, parse_round
from madness_index.matchup.resolver import MatchupResult
from madness_index.scoring.profile import EntrantProfile, summarize_entrant
from madness_index.utils.logger import configure_logging

app = typer.Typer(help="Madness Index scoring CLI")
console = Console()


@app.callback()
def _callback(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="QUIET, NORMAL, VERBOSE or DEBUG (default: $MADNESS_INDEX_LOG_LEVEL or NORMAL)",
    ),
) -> None:
    """Madness Index — tournament power ratings and matchup breakdowns."""
    try:
        configure_logging(log_level)
    except ValueError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from None


def _load_config(config_path: Path | None) -> ScoringConfig:
    if config_path is None:
        return ScoringConfig()
    if not config_path.exists():
        console.print(f"[red]Error: Config file not found: {config_path}[/red]")
        raise typer.Exit(code=1)
    try:
        return ScoringConfig.from_json(config_path)
    except (json.JSONDecodeError, ValidationError) as exc:
        console.print(f"[red]Error: Invalid config {config_path}:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from None


def _build_engine(csv_path: Path, config_path: Path | None) -> MadnessIndexEngine:
    """Load *csv_path* into a fresh engine, exiting with code 1 on any input problem."""
    if not csv_path.exists():
        console.print(f"[red]Error: CSV file not found: {csv_path}[/red]")
        raise typer.Exit(code=1)
    engine = MadnessIndexEngine(_load_config(config_path))
    try:
        engine.load(load_entrants_csv(csv_path))
    except (MadnessIndexError, SchemaError, ValidationError) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from None
    return engine


def _fmt(value: float | None, digits: int = 3) -> str:
    return "—" if value is None else f"{value:+.{digits}f}"


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def rank(
    csv_path: Path = typer.Argument(..., help="Team statistics CSV"),
    top: int | None = typer.Option(None, "--top", min=1, help="Show only the first N entrants"),
    config: Path | None = typer.Option(None, "--config", help="Path to JSON config override"),
) -> None:
    """Rank every entrant by MI_base."""
    engine = _build_engine(csv_path, config)
    frame = engine.rankings()
    if top is not None:
        frame = frame.head(top)

    table = Table(title=f"Madness Index rankings ({engine.config.revision})")
    for column in ("#", "Team", "Seed", "MI_base", "Résumé", "Rating", "CIS/FAS"):
        table.add_column(column, no_wrap=column == "Team")
    for row in frame.itertuples(index=False):
        table.add_row(
            str(row.rank),
            row.name,
            "—" if pd.isna(row.seed) else str(int(row.seed)),
            f"{row.mi_base:.3f}",
            f"{row.resume_tier} ({row.resume_adjustment:+.2f})",
            str(int(row.rating)),
            f"{row.cis:.0f}/{row.fas:.0f}",
        )
    console.print(table)


def _print_profile(profile: EntrantProfile) -> None:
    summary = summarize_entrant(profile)
    seed = "unseeded" if profile.seed is None else f"{profile.seed} seed"
    console.print(f"[bold]{profile.name}[/bold] ({seed}) — MI_base {profile.mi_base:.3f}")

    core = Table(title="Core traits")
    for column in ("Metric", "Value", "Mean", "SD", "z", "Tier", "Points"):
        core.add_column(column)
    for row in profile.core.rows:
        core.add_row(
            row.label,
            "—" if row.value is None else f"{row.value:.3f}",
            "—" if row.mean is None else f"{row.mean:.3f}",
            "—" if row.sd is None else f"{row.sd:.3f}",
            f"{row.z:+.2f}",
            row.tier,
            f"{row.points:+.3f}",
        )
    console.print(core)

    console.print(
        f"Breadth +{summary.breadth_bonus:.2f} ({summary.breadth_hits} hits) | "
        f"Résumé {summary.resume_tier} {summary.resume_adjustment:+.2f} (R {_fmt(profile.resume.index, 2)})"
    )
    if summary.strongest is not None and summary.weakest is not None:
        console.print(f"Strongest: {summary.strongest.label} | Weakest: {summary.weakest.label}")
    if profile.identity is not None:
        identity = profile.identity
        console.print(f"Rating {identity.rating} | CIS {identity.cis:.0f} | FAS {identity.fas:.0f}")
    marks = [mark.label for mark in profile.marks]
    console.print("Profile marks: " + (", ".join(marks) if marks else "none"))


@app.command()
def profile(
    csv_path: Path = typer.Argument(..., help="Team statistics CSV"),
    name: str = typer.Argument(..., help="Entrant name"),
    config: Path | None = typer.Option(None, "--config", help="Path to JSON config override"),
) -> None:
    """Show every scoring layer for one entrant."""
    engine = _build_engine(csv_path, config)
    try:
        entrant_profile = engine.profile(name)
    except MadnessIndexError as exc:
        console.print(f"[red]Error: {escape(str(exc.args[0]))}[/red]")
        raise typer.Exit(code=1) from None
    _print_profile(entrant_profile)


def _print_matchup(result: MatchupResult) -> None:
    a, b = result.profile_a, result.profile_b
    table = Table(title=f"{a.name} vs {b.name} — {get_round_label(result.round_code)}")
    table.add_column("Interaction")
    table.add_column("Domain")
    table.add_column(a.name)
    table.add_column(b.name)
    table.add_column("Edge")
    for entry in result.interactions.entries():
        table.add_row(
            entry.label,
            entry.domain,
            f"{entry.adjustment_a:+.2f}",
            f"{entry.adjustment_b:+.2f}",
            f"{entry.edge} ({entry.intensity})" if entry.adjustment_a else entry.edge,
        )
    console.print(table)

    console.print(
        f"{a.name}: MI_base {a.mi_base:.3f} + {result.multiplier_a:g}×{result.interactions.total_a:+.2f} "
        f"= [bold]{result.final_a:.3f}[/bold] ({result.role_a.value.title()})"
    )
    console.print(
        f"{b.name}: MI_base {b.mi_base:.3f} + {result.multiplier_b:g}×{result.interactions.total_b:+.2f} "
        f"= [bold]{result.final_b:.3f}[/bold] ({result.role_b.value.title()})"
    )
    if result.winner is None:
        console.print(f"[yellow]Push[/yellow] — {result.lean}")
    else:
        console.print(f"[green]{result.winner}[/green] by {abs(result.margin):.3f} — {result.lean}")

    meta = result.seed_meta
    if meta is not None and meta.round_code is not None and not meta.is_allowed:
        possible = ", ".join(get_round_label(code) for code in meta.possible)
        console.print(f"[yellow]Note: seeds {meta.seed_a} and {meta.seed_b} can only meet in {possible}.[/yellow]")


@app.command()
def compare(
    csv_path: Path = typer.Argument(..., help="Team statistics CSV"),
    team_a: str = typer.Argument(..., help="First entrant"),
    team_b: str = typer.Argument(..., help="Second entrant"),
    round_code: str | None = typer.Option(None, "--round", help="Round code: R64, R32, S16, E8, F4, Champ"),
    config: Path | None = typer.Option(None, "--config", help="Path to JSON config override"),
) -> None:
    """Resolve a head-to-head matchup with its interaction breakdown."""
    engine = _build_engine(csv_path, config)
    try:
        result = engine.compare(team_a, team_b, round_code=round_code)
    except (MadnessIndexError, ValueError) as exc:
        console.print(f"[red]Error: {escape(str(exc.args[0]))}[/red]")
        raise typer.Exit(code=1) from None
    _print_matchup(result)


@app.command()
def rounds(
    seed_a: int = typer.Argument(..., min=1, max=16, help="First seed"),
    seed_b: int = typer.Argument(..., min=1, max=16, help="Second seed"),
    round_code: str | None = typer.Option(None, "--round", help="Check a specific round"),
) -> None:
    """List the rounds in which two seeds can meet."""
    code = None
    if round_code is not None:
        try:
            code = parse_round(round_code)
        except ValueError as exc:
            console.print(f"[red]Error: {escape(str(exc))}[/red]")
            raise typer.Exit(code=1) from None

    meta = get_seed_round_meta(seed_a, seed_b, code)
    table = Table(title=f"Seed {seed_a} vs seed {seed_b}")
    table.add_column("Round")
    table.add_column("Label")
    for possible in meta.possible:
        table.add_row(possible, get_round_label(possible))
    console.print(table)
    console.print(f"Earliest meeting: {get_round_label(meta.earliest)}")
    if code is not None:
        verdict = "[green]possible[/green]" if meta.is_allowed else "[red]not possible[/red]"
        console.print(f"{get_round_label(code)}: {verdict}")
