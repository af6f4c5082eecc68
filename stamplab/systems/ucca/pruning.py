"""
StampLab — UCCA Pruning

Collapses candidates that differ only by swapping interchangeable
controllers. Two candidates are equivalent when they share type and
abstraction and their multisets of (controller class, action, provided,
timing) tuples are equal.

Survivor rule per equivalence class: the highest risk score wins; among
equal scores the first-seen candidate wins. Survivors are emitted in the
order their class was first seen.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import structlog

from stamplab.systems.ucca.types import (
    InterchangeableControllers,
    PotentialUCCA,
)

logger = structlog.get_logger()

EquivalenceKey = tuple[str, str, tuple[tuple[str, str, bool, str], ...]]


def equivalence_key(
    candidate: PotentialUCCA,
    classes: Mapping[str, str],
) -> EquivalenceKey:
    """
    Canonical form of a candidate with every controller replaced by its
    interchangeability class representative.
    """
    elements = sorted(
        (
            classes.get(e.controller_id, e.controller_id),
            e.action_id,
            e.provided,
            e.timing.value if e.timing is not None else "",
        )
        for e in candidate.combinations
    )
    return (candidate.type.value, candidate.abstraction.value, tuple(elements))


def prune_equivalent_combinations(
    candidates: Sequence[PotentialUCCA],
    interchangeable: InterchangeableControllers,
) -> list[PotentialUCCA]:
    classes = interchangeable.partition()

    # Dicts preserve insertion order, i.e. first-seen order of each class.
    survivors: dict[EquivalenceKey, PotentialUCCA] = {}
    for candidate in candidates:
        key = equivalence_key(candidate, classes)
        current = survivors.get(key)
        if current is None or candidate.risk_score > current.risk_score:
            survivors[key] = candidate

    logger.debug(
        "ucca_pruned",
        system="ucca",
        component="pruner",
        input_count=len(candidates),
        output_count=len(survivors),
        interchangeable_groups=len(interchangeable.groups),
    )
    return list(survivors.values())
