"""
Shared pytest fixtures for the roadmap engine test suite.

Provides:
  - ``make_rec``: factory building a ``Recommendation`` with sensible defaults.
  - Sample recommendations for each type plus a security fix, used by
    several test modules.
"""

from __future__ import annotations

from typing import Callable

import pytest

from roadmap_engine.models.recommendation import Recommendation


def build_recommendation(
    rec_id: str = "rec-1",
    rec_type: str = "dependency",
    title: str = "Update package",
    description: str = "A minor version update is available",
    current_state: str = "package@1.0.0",
    suggested_state: str = "package@1.1.0",
    benefits: list[str] | None = None,
    effort: str = "low",
    priority: str = "low",
    migration_steps: list[str] | None = None,
) -> Recommendation:
    return Recommendation(
        id=rec_id,
        type=rec_type,
        title=title,
        description=description,
        current_state=current_state,
        suggested_state=suggested_state,
        benefits=benefits if benefits is not None else ["Bug fixes"],
        effort=effort,
        priority=priority,
        migration_steps=migration_steps if migration_steps is not None else ["Update package"],
        resources=[],
        automated_tools=[],
    )


@pytest.fixture
def make_rec() -> Callable[..., Recommendation]:
    """Factory fixture: ``make_rec(rec_id="x", rec_type="framework", ...)``."""
    return build_recommendation


@pytest.fixture
def sample_framework_rec() -> Recommendation:
    """React major upgrade with breaking changes (priority ``high``)."""
    return build_recommendation(
        rec_id="fw-react",
        rec_type="framework",
        title="Upgrade React to 18",
        description="React 18 includes breaking changes that require code modifications",
        current_state="react@16.14.0",
        suggested_state="react@18.2.0",
        benefits=["Concurrent rendering", "Better performance"],
        effort="high",
    )


@pytest.fixture
def sample_dependency_rec() -> Recommendation:
    """Dependency that mentions react and so depends on the framework upgrade."""
    return build_recommendation(
        rec_id="dep-router",
        rec_type="dependency",
        title="Update react-router",
        description="Newer react-router supports hooks",
        current_state="react-router@5.0.0",
        suggested_state="react-router@6.0.0",
        benefits=["Hooks API"],
        effort="low",
    )


@pytest.fixture
def sample_pattern_rec() -> Recommendation:
    """Pattern rewrite with an occurrence count in the title."""
    return build_recommendation(
        rec_id="pat-callbacks",
        rec_type="pattern",
        title="Replace callbacks with async/await (20 occurrences)",
        description="Callback-style code is harder to maintain",
        current_state="callbacks",
        suggested_state="async/await",
        benefits=["Readability", "Error handling"],
        effort="medium",
    )


@pytest.fixture
def sample_security_rec() -> Recommendation:
    """Dependency with a critical vulnerability (priority ``critical``)."""
    return build_recommendation(
        rec_id="dep-lodash",
        rec_type="dependency",
        title="Update lodash",
        description="Contains critical security vulnerability CVE-2021-23337",
        current_state="lodash@4.17.15",
        suggested_state="lodash@4.17.21",
        benefits=["Fixes critical security vulnerability"],
        effort="low",
    )
