"""
StampLab — UCCA Ranking & Reporting

Final ordering, aggregate statistics and rule-based guidance for the
analyst reviewing the candidate list.
"""

from __future__ import annotations

from collections.abc import Sequence

from stamplab.systems.ucca.types import (
    AbstractionLevel,
    EnumerationStatistics,
    PotentialUCCA,
    UCCAType,
)

HIGH_RISK_SCORE = 0.7
PRIORITY_RISK_SCORE = 0.8

RECOMMEND_HIGH_RISK = (
    "{count} high-risk UCCA patterns identified - prioritize analysis of these combinations"
)
RECOMMEND_COMMUNICATION = (
    "Communication-related UCCAs detected - review coordination protocols between controllers"
)
RECOMMEND_TEMPORAL = (
    "Temporal sequencing issues identified - review timing protocols and coordination mechanisms"
)
RECOMMEND_RESOURCE = (
    "Resource conflict patterns detected - establish clear authority and arbitration mechanisms"
)
RECOMMEND_NONE_FOUND = (
    "No new UCCA patterns identified - current analysis may be comprehensive "
    "or constraints too restrictive"
)


def rank_candidates(candidates: Sequence[PotentialUCCA]) -> list[PotentialUCCA]:
    """Highest risk first. Stable, so equal scores keep pipeline order."""
    return sorted(candidates, key=lambda c: c.risk_score, reverse=True)


def calculate_statistics(candidates: Sequence[PotentialUCCA]) -> EnumerationStatistics:
    total = len(candidates)
    return EnumerationStatistics(
        total_enumerated=total,
        type_1_2_count=sum(1 for c in candidates if c.type == UCCAType.TYPE_1_2),
        type_3_4_count=sum(1 for c in candidates if c.type == UCCAType.TYPE_3_4),
        abstraction_2a_count=sum(
            1 for c in candidates if c.abstraction == AbstractionLevel.ABSTRACTION_2A
        ),
        abstraction_2b_count=sum(
            1 for c in candidates if c.abstraction == AbstractionLevel.ABSTRACTION_2B
        ),
        high_risk_count=sum(1 for c in candidates if c.risk_score >= HIGH_RISK_SCORE),
        average_risk_score=(
            sum(c.risk_score for c in candidates) / total if total else 0.0
        ),
    )


def generate_recommendations(candidates: Sequence[PotentialUCCA]) -> list[str]:
    if not candidates:
        return [RECOMMEND_NONE_FOUND]

    recommendations: list[str] = []
    descriptions = [c.description.lower() for c in candidates]

    priority = sum(1 for c in candidates if c.risk_score >= PRIORITY_RISK_SCORE)
    if priority:
        recommendations.append(RECOMMEND_HIGH_RISK.format(count=priority))

    if any("communication" in d or "transmit" in d for d in descriptions):
        recommendations.append(RECOMMEND_COMMUNICATION)

    if any(c.type == UCCAType.TYPE_3_4 for c in candidates):
        recommendations.append(RECOMMEND_TEMPORAL)

    if any("simultaneously" in d for d in descriptions):
        recommendations.append(RECOMMEND_RESOURCE)

    return recommendations
