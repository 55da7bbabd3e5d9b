"""
Recommendation model — the unit of work flowing through the roadmap engine.

``Recommendation`` is produced by the upstream recommendation generator
(dependency / framework / code-pattern analyzers) and is treated as
read-only here. Records are frozen; the pipeline derives new copies
(e.g. with a recomputed priority) via ``model_copy`` instead of mutating.

Loose input is tolerated on purpose: missing or ``None`` optional fields
default to empty strings / lists, and unknown effort or priority labels fall
back to ``medium`` / ``low``. Only ``id`` and ``type`` are required.

Both camelCase keys (``currentState``, ``migrationSteps``) as emitted by the
upstream generator and snake_case field names are accepted.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from roadmap_engine.taxonomy.modernization_taxonomy import (
    EffortLevel,
    PriorityLevel,
    RecommendationType,
)

# Separators that end a package name in a state label such as "django==3.2".
_COMPARATOR_SEPARATORS: tuple[str, ...] = ("==", ">=", "<=", "~=")


class CodeExample(BaseModel):
    """Before/after snippet illustrating a migration."""

    model_config = ConfigDict(frozen=True)

    before: str = ""
    after: str = ""


class Recommendation(BaseModel):
    """A single proposed modernization action.

    Attributes:
        id: Identifier, unique within one working set.
        type: ``dependency``, ``framework``, or ``pattern``.
        title: Short headline, e.g. ``"Upgrade react to 18.2.0"``.
        description: Free-text explanation; scanned by the priority rules.
        current_state: Current version label, e.g. ``"react@16.14.0"``.
        suggested_state: Target version label, e.g. ``"react@18.2.0"``.
        benefits: Ordered benefit statements.
        effort: Relative effort; unknown values fall back to ``medium``.
        priority: Computed priority. Input values are recomputed by the
            roadmap pipeline, never trusted.
        migration_steps: Ordered migration instructions.
        code_examples: Optional before/after snippet.
        resources: Documentation links.
        automated_tools: Codemods or tools that can automate the migration.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    type: RecommendationType
    title: str = ""
    description: str = ""
    current_state: str = ""
    suggested_state: str = ""
    benefits: list[str] = []
    effort: EffortLevel = EffortLevel.MEDIUM
    priority: PriorityLevel = PriorityLevel.LOW
    migration_steps: list[str] = []
    code_examples: Optional[CodeExample] = None
    resources: list[str] = []
    automated_tools: list[str] = []

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator(
        "title", "description", "current_state", "suggested_state", mode="before"
    )
    @classmethod
    def default_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @field_validator(
        "benefits", "migration_steps", "resources", "automated_tools", mode="before"
    )
    @classmethod
    def default_sequence(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, (list, tuple, set, frozenset)):
            return [str(item) for item in v if item is not None]
        # Scalars (a bare string, number or bool) become a one-item list.
        return [str(v)]

    @field_validator("effort", mode="before")
    @classmethod
    def fallback_effort(cls, v: Any) -> EffortLevel:
        try:
            return EffortLevel(str(v).strip().lower())
        except ValueError:
            return EffortLevel.MEDIUM

    @field_validator("priority", mode="before")
    @classmethod
    def fallback_priority(cls, v: Any) -> PriorityLevel:
        try:
            return PriorityLevel(str(v).strip().lower())
        except ValueError:
            return PriorityLevel.LOW

    @property
    def package_name(self) -> str:
        """Package or framework name parsed from ``current_state``."""
        return package_name(self.current_state)


def package_name(state: str) -> str:
    """Return the name part of a version label.

    Text before the version separator, trimmed::

        package_name("react@16.14.0")        # "react"
        package_name("@angular/core@12.0.0") # "@angular/core"
        package_name("django==3.2")          # "django"
        package_name("lodash")               # "lodash"

    A leading ``@`` is an npm scope marker, not a separator.
    """
    name = (state or "").strip()
    for sep in _COMPARATOR_SEPARATORS:
        if sep in name:
            name = name.split(sep, 1)[0]
    at = name.rfind("@")
    if at > 0:
        name = name[:at]
    return name.strip()
