"""
StampLab — UCCA Hazard-Relevance Scoring

Raises a candidate's risk score by the keywords its description shares
with hazard titles. Keyword matching only; no stemming or stopwords.
"""

from __future__ import annotations

from collections.abc import Sequence

from stamplab.primitives.analysis import Hazard
from stamplab.primitives.common import clamp
from stamplab.systems.ucca.types import PotentialUCCA

# Score delta per shared keyword per hazard
KEYWORD_WEIGHT = 0.1
_MIN_KEYWORD_LENGTH = 4


def keywords(text: str) -> frozenset[str]:
    """Lower-cased whitespace tokens longer than three characters."""
    return frozenset(w for w in text.lower().split() if len(w) >= _MIN_KEYWORD_LENGTH)


def hazard_relevance(description: str, hazards: Sequence[Hazard]) -> float:
    words = keywords(description)
    return sum(len(keywords(h.title) & words) * KEYWORD_WEIGHT for h in hazards)


def prioritize_by_hazard_relevance(
    candidates: Sequence[PotentialUCCA],
    hazards: Sequence[Hazard],
) -> list[PotentialUCCA]:
    if not hazards:
        return list(candidates)

    boosted: list[PotentialUCCA] = []
    for candidate in candidates:
        delta = hazard_relevance(candidate.description, hazards)
        if delta:
            candidate = candidate.model_copy(
                update={"risk_score": clamp(candidate.risk_score + delta)}
            )
        boosted.append(candidate)
    return boosted
