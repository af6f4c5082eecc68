"""
StampLab — UCCA Refinement

Resolves team-level (abstraction 2a) candidates into explicit controller
combinations. Each element's placeholder controller is replaced by a
controller holding authority over that element's action; every such
substitution yields one concrete candidate, provided it involves at least
two distinct controllers. Controller-level candidates pass through.
"""

from __future__ import annotations

from collections.abc import Sequence
from itertools import product

import structlog

from stamplab.systems.ucca.types import (
    AbstractionLevel,
    AuthorityModel,
    CandidateBudget,
    PotentialUCCA,
)

logger = structlog.get_logger()


def refine_abstracted_uccas(
    candidates: Sequence[PotentialUCCA],
    authority: AuthorityModel,
    budget: CandidateBudget | None = None,
) -> list[PotentialUCCA]:
    refined: list[PotentialUCCA] = []
    expanded = 0

    for candidate in candidates:
        if candidate.abstraction != AbstractionLevel.ABSTRACTION_2A:
            refined.append(candidate)
            continue
        for concrete in expand_team_candidate(candidate, authority):
            if budget is not None:
                budget.charge("refinement")
            refined.append(concrete)
            expanded += 1

    logger.debug(
        "ucca_refined",
        system="ucca",
        component="refiner",
        input_count=len(candidates),
        expanded=expanded,
        output_count=len(refined),
    )
    return refined


def expand_team_candidate(
    candidate: PotentialUCCA,
    authority: AuthorityModel,
) -> list[PotentialUCCA]:
    """
    Every valid controller substitution for one team-level candidate, in
    model order. Type, score, description and provide/timing flags are
    kept; only controller references change.
    """
    options = [
        [c.id for c in authority.controllers_for(element.action_id)]
        for element in candidate.combinations
    ]

    expansions: list[PotentialUCCA] = []
    for assignment in product(*options):
        if len(set(assignment)) < 2:
            continue
        elements = [
            element.model_copy(update={"controller_id": controller_id})
            for element, controller_id in zip(candidate.combinations, assignment)
        ]
        expansions.append(
            candidate.model_copy(
                update={
                    "combinations": elements,
                    "abstraction": AbstractionLevel.ABSTRACTION_2B,
                }
            )
        )
    return expansions
