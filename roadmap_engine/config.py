"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``ROADMAP_ENGINE_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The pure roadmap core never loads config itself; callers pass the
``RoadmapConfig`` section to ``generate_roadmap()`` when they need non-default
limits.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class RoadmapConfig(BaseModel):
    """Quick-win selection limits."""

    model_config = ConfigDict(frozen=True)

    max_quick_wins: int = 5
    quick_win_min_benefits: int = 3

    @field_validator("max_quick_wins")
    @classmethod
    def validate_max_quick_wins(cls, v: int) -> int:
        if not 1 <= v <= 5:
            raise ValueError(f"max_quick_wins must be in [1, 5], got {v}.")
        return v

    @field_validator("quick_win_min_benefits")
    @classmethod
    def validate_min_benefits(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"quick_win_min_benefits must be >= 1, got {v}.")
        return v


class OutputConfig(BaseModel):
    """Where exported roadmaps are written."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs/roadmaps"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration, constructed by ``load_config()``."""

    model_config = ConfigDict(frozen=True)

    roadmap: RoadmapConfig = RoadmapConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    raw = _apply_env_overrides(raw)

    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply ROADMAP_ENGINE_* env vars to the raw config dict.

    Supported overrides:
      ROADMAP_ENGINE_LOG_LEVEL       → raw["logging"]["level"]
      ROADMAP_ENGINE_OUTPUT_DIR      → raw["output"]["output_dir"]
      ROADMAP_ENGINE_MAX_QUICK_WINS  → raw["roadmap"]["max_quick_wins"]
      ROADMAP_ENGINE_DEBUG           → raw["debug"]
    """
    if log_level := os.environ.get("ROADMAP_ENGINE_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if output_dir := os.environ.get("ROADMAP_ENGINE_OUTPUT_DIR"):
        raw.setdefault("output", {})["output_dir"] = output_dir

    if max_quick_wins := os.environ.get("ROADMAP_ENGINE_MAX_QUICK_WINS"):
        raw.setdefault("roadmap", {})["max_quick_wins"] = int(max_quick_wins)

    if debug := os.environ.get("ROADMAP_ENGINE_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        roadmap=RoadmapConfig(**raw.get("roadmap", {})),
        output=OutputConfig(**raw.get("output", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
