"""
Modernization roadmap engine — CLI entry point.

A thin harness around the pure roadmap core, for the orchestration layer and
for developers inspecting a recommendation set. All commands follow this
pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate the recommendations JSON file.
  4. Run the core (rank / generate roadmap).
  5. Report result to stdout.

Install and run::

    pip install -e .
    roadmap-engine --help
    roadmap-engine validate-config
    roadmap-engine rank --input recommendations.json
    roadmap-engine generate --input recommendations.json --csv
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="roadmap-engine",
    help="Modernization recommendation prioritization and phased roadmap generator.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from roadmap_engine.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from roadmap_engine.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_recommendations_or_exit(input_file: str):
    """Parse a JSON array of recommendation objects, exiting on any failure."""
    from pydantic import ValidationError

    from roadmap_engine.models.recommendation import Recommendation

    input_path = Path(input_file)
    if not input_path.exists():
        typer.echo(f"[ERROR] Input file not found: {input_path}", err=True)
        raise typer.Exit(code=1)

    try:
        with open(input_path, encoding="utf-8") as f:
            raw_recs = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        typer.echo(f"[ERROR] JSON parse error: {exc}", err=True)
        raise typer.Exit(code=1)

    if not isinstance(raw_recs, list):
        typer.echo("[ERROR] Recommendations file must contain a JSON array.", err=True)
        raise typer.Exit(code=1)

    validated: list[Recommendation] = []
    errors: list[tuple[int, str]] = []
    for i, raw in enumerate(raw_recs):
        try:
            validated.append(Recommendation.model_validate(raw))
        except ValidationError as exc:
            errors.append((i, str(exc)))

    if errors:
        typer.echo(f"[ERROR] {len(errors)} recommendation(s) failed validation:", err=True)
        for idx, msg in errors[:5]:
            typer.echo(f"  Recommendation #{idx}: {msg}", err=True)
        if len(errors) > 5:
            typer.echo(f"  ... and {len(errors) - 5} more.", err=True)
        raise typer.Exit(code=1)

    return validated


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Max quick wins:     {config.roadmap.max_quick_wins}")
    typer.echo(f"  Quick-win benefits: {config.roadmap.quick_win_min_benefits}")
    typer.echo(f"  Output dir:         {config.output.output_dir}")
    typer.echo(f"  Log level:          {config.logging.level}")
    typer.echo(f"  Debug mode:         {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("rank")
def rank(
    input_file: str = typer.Option(
        ...,
        "--input",
        "-i",
        help="Path to a JSON array of recommendations.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print recommendations ordered by priority and score."""
    from roadmap_engine.prioritization.ranker import rank_recommendations
    from roadmap_engine.prioritization.scorer import calculate_priority, score_recommendation

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    recs = _load_recommendations_or_exit(input_file)
    ranked = rank_recommendations(recs)

    typer.echo(f"Ranked {len(ranked)} recommendation(s):")
    for position, rec in enumerate(ranked, start=1):
        typer.echo(
            f"  {position:>3}. [{calculate_priority(rec).value:<8}] "
            f"{score_recommendation(rec):7.2f} | {rec.type.value:<10} | {rec.title}"
        )


@app.command("generate")
def generate(
    input_file: str = typer.Option(
        ...,
        "--input",
        "-i",
        help="Path to a JSON array of recommendations.",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Override output directory from config.",
    ),
    write_csv: bool = typer.Option(
        False,
        "--csv",
        help="Also write a per-phase CSV file.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the roadmap summary without writing files.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Generate a phased migration roadmap from a recommendations file."""
    from roadmap_engine.reporting.export import write_phase_csv, write_roadmap_json
    from roadmap_engine.roadmap.generator import generate_roadmap, generate_statistics

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    recs = _load_recommendations_or_exit(input_file)
    roadmap = generate_roadmap(recs, config=config.roadmap)
    statistics = generate_statistics(recs, roadmap)

    total = roadmap.total_estimate
    typer.echo(f"Roadmap for {statistics.total_recommendations} recommendation(s):")
    for phase in roadmap.phases:
        typer.echo(
            f"  {phase.name} — {len(phase.recommendations)} item(s), "
            f"{phase.estimate.min_days:g}-{phase.estimate.max_days:g} days "
            f"({phase.estimate.confidence.value} confidence)"
        )
    typer.echo(
        f"  Total: {total.min_days:g}-{total.max_days:g} days "
        f"({total.confidence.value} confidence)"
    )
    if roadmap.critical_path:
        typer.echo(f"  Critical path: {' -> '.join(roadmap.critical_path)}")
    if roadmap.quick_wins:
        typer.echo(f"  Quick wins: {', '.join(rec.title for rec in roadmap.quick_wins)}")

    if dry_run:
        typer.echo("[DRY RUN] No files written.")
        return

    target_dir = Path(output_dir or config.output.output_dir)
    json_path = write_roadmap_json(roadmap, target_dir, statistics=statistics)
    typer.echo(f"  JSON: {json_path}")
    if write_csv:
        csv_path = write_phase_csv(roadmap, target_dir)
        typer.echo(f"  CSV:  {csv_path}")

    typer.echo("[OK] Roadmap generated.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
