"""
StampLab — UCCA Combination Generator

Systematic enumeration of base candidates from the authority model.
Three families, each for every combination size k in [2, max]:

  Type 1-2 / 2a  k-subsets of control actions held by the team, with every
                 mixed provided / not-provided pattern
  Type 1-2 / 2b  k-subsets of controllers sharing one action, with every
                 mixed provided / not-provided pattern
  Type 3-4 / 2b  k-subsets of controllers, exactly one action per
                 controller, with non-uniform timing patterns

Uniform patterns (everything provided, everything withheld, everyone early)
are single-controller concerns (UCAs) and are never emitted.

Output order is fully determined by input order.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from itertools import combinations, product

import structlog

from stamplab.primitives.analysis import ControlAction, Controller
from stamplab.systems.ucca.types import (
    TEAM_CONTROLLER_ID,
    AbstractionLevel,
    AuthorityModel,
    CandidateBudget,
    CombinationElement,
    PotentialUCCA,
    TimingTag,
    UCCAType,
)

logger = structlog.get_logger()

# Timing patterns grow as 4^k; keep the first N non-uniform ones per action set.
_MAX_TIMING_PATTERNS = 16

# ─── Base score weights ───────────────────────────────────────────

_PER_CONTROLLER = 0.10
_MIXED_PROVISION = 0.20
_SHARED_VERB = 0.15
_PER_TIMED_ELEMENT = 0.15
_EARLY_LATE_CONFLICT = 0.25
_DURATION_CONFLICT = 0.20


# ─── Public API ───────────────────────────────────────────────────


def enumerate_base_candidates(
    authority: AuthorityModel,
    max_combination_size: int,
    budget: CandidateBudget | None = None,
    *,
    team_level: bool = True,
    controller_level: bool = True,
    temporal: bool = True,
) -> list[PotentialUCCA]:
    """
    All systematic candidates, Type 1-2 first, then Type 3-4.

    A family switched off is never generated, so it neither costs time
    nor draws on the budget.
    """
    generators: list[tuple[str, Iterator[PotentialUCCA]]] = []
    if team_level:
        generators.append(
            ("team_provision", _team_provision_candidates(authority, max_combination_size))
        )
    if controller_level:
        generators.append(
            ("controller_provision", _controller_provision_candidates(authority, max_combination_size))
        )
    if temporal:
        generators.append(("temporal", _temporal_candidates(authority, max_combination_size)))

    candidates: list[PotentialUCCA] = []
    counts: dict[str, int] = {}
    for family, generated in generators:
        before = len(candidates)
        for candidate in generated:
            if budget is not None:
                budget.charge("generation")
            candidates.append(candidate)
        counts[family] = len(candidates) - before

    logger.debug(
        "ucca_base_candidates_generated",
        system="ucca",
        component="generator",
        max_size=max_combination_size,
        **counts,
    )
    return candidates


def provide_patterns(size: int) -> list[tuple[bool, ...]]:
    """
    Mixed provided / not-provided patterns for ``size`` elements in bitmask
    order: bit j of the mask decides element j. All-false and all-true are
    excluded.
    """
    return [
        tuple(bool(mask & (1 << j)) for j in range(size))
        for mask in range(1, 2**size - 1)
    ]


def timing_patterns(size: int) -> list[tuple[TimingTag, ...]]:
    """The first non-uniform timing assignments for ``size`` elements."""
    patterns: list[tuple[TimingTag, ...]] = []
    for pattern in product(TimingTag, repeat=size):
        if len(set(pattern)) == 1:
            continue
        patterns.append(pattern)
        if len(patterns) == _MAX_TIMING_PATTERNS:
            break
    return patterns


def provision_risk_score(
    elements: Sequence[CombinationElement],
    authority: AuthorityModel,
) -> float:
    """
    Type 1-2 base score: more controllers, mixed provision and actions
    sharing a verb all raise it.
    """
    score = len({e.controller_id for e in elements}) * _PER_CONTROLLER

    provided = sum(1 for e in elements if e.provided)
    if 0 < provided < len(elements):
        score += _MIXED_PROVISION

    verbs = [
        action.verb.lower()
        for e in elements
        if (action := authority.action(e.action_id)) is not None
    ]
    if len(set(verbs)) < len(verbs):
        score += _SHARED_VERB

    return round(min(score, 1.0), 4)


def temporal_risk_score(elements: Sequence[CombinationElement]) -> float:
    """Type 3-4 base score: coordination size plus opposing timing errors."""
    score = len(elements) * _PER_TIMED_ELEMENT
    timings = {e.timing for e in elements if e.timing is not None}
    if TimingTag.EARLY in timings and TimingTag.LATE in timings:
        score += _EARLY_LATE_CONFLICT
    if TimingTag.TOO_LONG in timings and TimingTag.TOO_SHORT in timings:
        score += _DURATION_CONFLICT
    return round(min(score, 1.0), 4)


# ─── Type 1-2, abstraction 2a ─────────────────────────────────────


def _team_provision_candidates(
    authority: AuthorityModel,
    max_size: int,
) -> Iterator[PotentialUCCA]:
    actions = authority.control_actions
    holders = {a.id: {c.id for c in authority.controllers_for(a.id)} for a in actions}

    for size in range(2, min(max_size, len(actions)) + 1):
        for action_combo in combinations(actions, size):
            # A team-level pattern must be able to resolve to 2+ controllers
            if len(set().union(*(holders[a.id] for a in action_combo))) < 2:
                continue
            for pattern in provide_patterns(size):
                elements = [
                    CombinationElement(
                        controller_id=TEAM_CONTROLLER_ID,
                        action_id=action.id,
                        provided=provided,
                    )
                    for action, provided in zip(action_combo, pattern)
                ]
                yield PotentialUCCA(
                    type=UCCAType.TYPE_1_2,
                    abstraction=AbstractionLevel.ABSTRACTION_2A,
                    combinations=elements,
                    description=_team_description(action_combo, pattern),
                    risk_score=provision_risk_score(elements, authority),
                    enumeration_reason="Team-level action combination analysis",
                )


def _team_description(actions: Sequence[ControlAction], pattern: Sequence[bool]) -> str:
    provided = [a.label for a, p in zip(actions, pattern) if p]
    withheld = [a.label for a, p in zip(actions, pattern) if not p]
    parts: list[str] = []
    if provided:
        parts.append(f"provides {', '.join(provided)}")
    if withheld:
        parts.append(f"does not provide {', '.join(withheld)}")
    return "Team " + " but ".join(parts)


# ─── Type 1-2, abstraction 2b ─────────────────────────────────────


def _controller_provision_candidates(
    authority: AuthorityModel,
    max_size: int,
) -> Iterator[PotentialUCCA]:
    for action in authority.control_actions:
        capable = authority.controllers_for(action.id)
        if len(capable) < 2:
            continue
        for size in range(2, min(max_size, len(capable)) + 1):
            for controller_combo in combinations(capable, size):
                for pattern in provide_patterns(size):
                    elements = [
                        CombinationElement(
                            controller_id=controller.id,
                            action_id=action.id,
                            provided=provided,
                        )
                        for controller, provided in zip(controller_combo, pattern)
                    ]
                    yield PotentialUCCA(
                        type=UCCAType.TYPE_1_2,
                        abstraction=AbstractionLevel.ABSTRACTION_2B,
                        combinations=elements,
                        description=_shared_action_description(
                            controller_combo, action, pattern
                        ),
                        risk_score=provision_risk_score(elements, authority),
                        enumeration_reason=(
                            f"Multiple controllers can provide {action.label}"
                        ),
                    )


def _shared_action_description(
    controllers: Sequence[Controller],
    action: ControlAction,
    pattern: Sequence[bool],
) -> str:
    providing = [c.name for c, p in zip(controllers, pattern) if p]
    withholding = [c.name for c, p in zip(controllers, pattern) if not p]
    parts: list[str] = []
    if providing:
        verb = "provides" if len(providing) == 1 else "provide"
        parts.append(f"{', '.join(providing)} {verb} {action.label}")
    if withholding:
        verb = "does not provide" if len(withholding) == 1 else "do not provide"
        parts.append(f"{', '.join(withholding)} {verb} {action.label}")
    return " while ".join(parts)


# ─── Type 3-4 ─────────────────────────────────────────────────────


def _temporal_candidates(
    authority: AuthorityModel,
    max_size: int,
) -> Iterator[PotentialUCCA]:
    active: list[tuple[Controller, list[ControlAction]]] = []
    for controller in authority.controllers:
        owned = [
            a for a in authority.control_actions
            if authority.has_authority(controller.id, a.id)
        ]
        if owned:
            active.append((controller, owned))

    for size in range(2, min(max_size, len(active)) + 1):
        patterns = timing_patterns(size)
        for team in combinations(active, size):
            controllers = [controller for controller, _ in team]
            for chosen in product(*(owned for _, owned in team)):
                for pattern in patterns:
                    elements = [
                        CombinationElement(
                            controller_id=controller.id,
                            action_id=action.id,
                            provided=True,
                            timing=timing,
                        )
                        for controller, action, timing in zip(controllers, chosen, pattern)
                    ]
                    yield PotentialUCCA(
                        type=UCCAType.TYPE_3_4,
                        abstraction=AbstractionLevel.ABSTRACTION_2B,
                        combinations=elements,
                        description=" and ".join(
                            f"{controller.name} provides "
                            f"{action.label} {timing.value}"
                            for controller, action, timing in zip(controllers, chosen, pattern)
                        ),
                        risk_score=temporal_risk_score(elements),
                        enumeration_reason="Temporal sequencing analysis",
                    )
