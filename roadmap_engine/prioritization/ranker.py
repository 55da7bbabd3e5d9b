"""
Recommendation ranker: orders recommendation lists by priority class and
score without touching the caller's list.

Usage flow
----------
1. prioritize_recommendations(recs)
   -> list[Recommendation]  (copies with the computed priority filled in)

2. rank_recommendations(recs)
   -> list[Recommendation]  (new list: priority desc, score desc, stable)
"""

from __future__ import annotations

import logging

from roadmap_engine.models.recommendation import Recommendation
from roadmap_engine.prioritization.scorer import calculate_priority, score_recommendation
from roadmap_engine.taxonomy.modernization_taxonomy import PRIORITY_RANK

logger = logging.getLogger(__name__)


def prioritize_recommendations(recommendations: list[Recommendation]) -> list[Recommendation]:
    """Return copies of ``recommendations`` carrying their computed priority.

    Whatever priority arrived with the input is replaced: priority is a pure
    function of the content fields. Input records are not modified.
    """
    result: list[Recommendation] = []
    for rec in recommendations:
        priority = calculate_priority(rec)
        if priority != rec.priority:
            rec = rec.model_copy(update={"priority": priority})
        result.append(rec)
    return result


def rank_recommendations(recommendations: list[Recommendation]) -> list[Recommendation]:
    """Return a new list sorted by priority class, then score (both descending).

    Priority is recomputed from content rather than read from the record.
    Ties keep their original relative order (``sorted`` is stable).

    Args:
        recommendations: Any sequence of recommendations; left unmodified.

    Returns:
        A permutation of the input as a new list.
    """
    keyed = [
        (PRIORITY_RANK[calculate_priority(rec)], score_recommendation(rec), rec)
        for rec in recommendations
    ]
    ranked = sorted(keyed, key=lambda item: (-item[0], -item[1]))
    logger.debug("Ranked %d recommendations", len(ranked))
    return [rec for _, _, rec in ranked]
