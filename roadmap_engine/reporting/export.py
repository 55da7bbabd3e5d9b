"""
Roadmap export: JSON and CSV output of a generated roadmap.

These are the only functions in the package that touch the filesystem.
They consume an in-memory ``Roadmap`` and write machine-readable files for
the report-generation collaborator; the roadmap core never calls them.

Output files
------------
  data/outputs/roadmaps/
    roadmap_{date}.json         -- phases, estimates, critical path, quick wins
    roadmap_phases_{date}.csv   -- one row per (phase, recommendation)
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from roadmap_engine.models.roadmap import Roadmap, RoadmapStatistics

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1.0.0"

PHASE_CSV_FIELDS: list[str] = [
    "phase", "phase_name", "position", "recommendation_id", "type", "title",
    "priority", "effort", "current_state", "suggested_state",
    "phase_min_days", "phase_max_days", "phase_confidence",
]


def roadmap_to_dict(
    roadmap: Roadmap,
    statistics: Optional[RoadmapStatistics] = None,
) -> dict:
    """Serialise a roadmap (and optional statistics) to a JSON-ready dict.

    Field names use the pydantic model names; enums become their string values.
    """
    payload: dict = {
        "schema_version": SCHEMA_VERSION,
        "roadmap":        roadmap.model_dump(mode="json"),
    }
    if statistics is not None:
        payload["statistics"] = statistics.model_dump(mode="json")
    return payload


def flatten_phases_for_export(roadmap: Roadmap) -> list[dict]:
    """One flat row per recommendation per phase, in execution order."""
    rows: list[dict] = []
    for phase in roadmap.phases:
        for position, rec in enumerate(phase.recommendations, start=1):
            rows.append(
                {
                    "phase":             phase.number,
                    "phase_name":        phase.name,
                    "position":          position,
                    "recommendation_id": rec.id,
                    "type":              rec.type.value,
                    "title":             rec.title,
                    "priority":          rec.priority.value,
                    "effort":            rec.effort.value,
                    "current_state":     rec.current_state,
                    "suggested_state":   rec.suggested_state,
                    "phase_min_days":    phase.estimate.min_days,
                    "phase_max_days":    phase.estimate.max_days,
                    "phase_confidence":  phase.estimate.confidence.value,
                }
            )
    return rows


def write_roadmap_json(
    roadmap: Roadmap,
    output_dir: Path,
    statistics: Optional[RoadmapStatistics] = None,
    run_date: date | None = None,
) -> Path:
    """Write the roadmap to ``roadmap_{date}.json``.

    Args:
        roadmap:    Generated roadmap.
        output_dir: Target directory (created if missing).
        statistics: Optional statistics block to embed.
        run_date:   Date label for the filename. Defaults to today.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"roadmap_{run_date}.json"

    payload = roadmap_to_dict(roadmap, statistics)
    payload["generated_at"] = run_date.isoformat()

    json_path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")
    logger.info("Roadmap JSON written: %s (%d phases)", json_path, len(roadmap.phases))
    return json_path


def write_phase_csv(
    roadmap: Roadmap,
    output_dir: Path,
    run_date: date | None = None,
) -> Path:
    """Write one CSV row per phase member to ``roadmap_phases_{date}.csv``.

    An empty roadmap still produces a file with just the header row.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"roadmap_phases_{run_date}.csv"

    rows = flatten_phases_for_export(roadmap)
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=PHASE_CSV_FIELDS)
        writer.writeheader()
        writer.writerows(rows)

    logger.info("Roadmap phase CSV written: %s (%d rows)", csv_path, len(rows))
    return csv_path
