"""
StampLab — UCCA Special-Interaction Policy

Applies the analyst's overrides to the candidate pool, in order:
  1. Append mandatory candidates verbatim
  2. Drop candidates structurally equal to an excluded candidate
  3. Add the priority adjustment registered for each structural key

Matching here is structural (exact key). Fuzzy text matching against
recorded entries lives in ``similarity``.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from stamplab.primitives.common import clamp
from stamplab.systems.ucca.types import PotentialUCCA, SpecialInteractions

logger = structlog.get_logger()


def structural_key(candidate: PotentialUCCA) -> str:
    """
    Order-independent key of a candidate's participants, e.g.
    ``"ctrl-1-act-3-false|ctrl-2-act-7-true"``. Timing is not part of it.
    """
    return "|".join(
        sorted(
            f"{e.controller_id}-{e.action_id}-{str(e.provided).lower()}"
            for e in candidate.combinations
        )
    )


def exclusion_key(candidate: PotentialUCCA) -> tuple[int, str]:
    """Element count plus structural key; equal values mean structurally equal."""
    return len(candidate.combinations), structural_key(candidate)


def structurally_equal(a: PotentialUCCA, b: PotentialUCCA) -> bool:
    return exclusion_key(a) == exclusion_key(b)


def apply_special_interactions(
    candidates: Sequence[PotentialUCCA],
    policy: SpecialInteractions,
) -> list[PotentialUCCA]:
    pool = [*candidates, *policy.mandatory_uccas]

    excluded = {exclusion_key(e) for e in policy.excluded_uccas}
    kept = [c for c in pool if exclusion_key(c) not in excluded]

    adjusted: list[PotentialUCCA] = []
    for candidate in kept:
        delta = policy.priority_adjustments.get(structural_key(candidate), 0.0)
        if delta:
            candidate = candidate.model_copy(
                update={"risk_score": clamp(candidate.risk_score + delta)}
            )
        adjusted.append(candidate)

    logger.debug(
        "ucca_special_interactions_applied",
        system="ucca",
        component="policy",
        mandatory=len(policy.mandatory_uccas),
        excluded=len(pool) - len(kept),
        adjustments=len(policy.priority_adjustments),
    )
    return adjusted
