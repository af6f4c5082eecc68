"""
StampLab — UCCA Domain Pattern Generators

Heuristic generators that add candidates from verb / object text patterns
seen repeatedly in aviation and process-control analyses:

  communication_failure_candidates  both sides of a link stay silent
  resource_conflict_candidates      several controllers drive one resource
  emergency_timing_candidates       one emergency action early, another late

Each generator is pure and pairwise (never a power set). Overlap with
systematically enumerated candidates is resolved by later stages.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from stamplab.primitives.analysis import ControlAction, Controller
from stamplab.systems.ucca.types import (
    AbstractionLevel,
    CombinationElement,
    PotentialUCCA,
    TimingTag,
    UCCAType,
)

# ─── Vocabularies ─────────────────────────────────────────────────

_COMMUNICATION_VERB = re.compile(
    r"^(transmit|receive|announce|report|request|acknowledge|confirm)", re.IGNORECASE
)
_RESOURCE_VERB = re.compile(
    r"^(activate|deactivate|engage|disengage|control|operate)", re.IGNORECASE
)
_EMERGENCY_VERB = re.compile(
    r"^(abort|emergency|eject|deploy|stop|brake|alert|warn)", re.IGNORECASE
)
_EMERGENCY_OBJECT = re.compile(
    r"abort|emergency|eject|deploy|stop|brake|alert|warn", re.IGNORECASE
)

# Fixed base scores
COMMUNICATION_FAILURE_SCORE = 0.8
RESOURCE_CONFLICT_SCORE = 0.7
EMERGENCY_TIMING_SCORE = 0.9

_MAX_RESOURCE_CONTROLLERS = 3


def normalise_object(text: str) -> str:
    """Lower-case and collapse whitespace so 'Fuel  Pump' groups with 'fuel pump'."""
    return " ".join(text.lower().split())


# ─── Communication failure ────────────────────────────────────────


def communication_failure_candidates(
    controllers: Sequence[Controller],
    actions: Sequence[ControlAction],
) -> list[PotentialUCCA]:
    """
    For every pair of controllers that both own a communication action,
    the pattern where neither side communicates.
    """
    comm_actions = [a for a in actions if _COMMUNICATION_VERB.match(a.verb)]
    first_comm: dict[str, ControlAction] = {}
    for action in comm_actions:
        first_comm.setdefault(action.controller_id, action)

    candidates: list[PotentialUCCA] = []
    for i, first in enumerate(controllers):
        for second in controllers[i + 1 :]:
            action_a = first_comm.get(first.id)
            action_b = first_comm.get(second.id)
            if action_a is None or action_b is None:
                continue
            candidates.append(
                PotentialUCCA(
                    type=UCCAType.TYPE_1_2,
                    abstraction=AbstractionLevel.ABSTRACTION_2B,
                    combinations=[
                        CombinationElement(
                            controller_id=first.id, action_id=action_a.id, provided=False
                        ),
                        CombinationElement(
                            controller_id=second.id, action_id=action_b.id, provided=False
                        ),
                    ],
                    description=(
                        f"Communication breakdown between {first.name} and {second.name}"
                    ),
                    risk_score=COMMUNICATION_FAILURE_SCORE,
                    enumeration_reason="Domain-specific: Communication failure pattern",
                )
            )
    return candidates


# ─── Resource conflict ────────────────────────────────────────────


def resource_conflict_candidates(
    actions: Sequence[ControlAction],
    max_combination_size: int = _MAX_RESOURCE_CONTROLLERS,
) -> list[PotentialUCCA]:
    """
    Group control-type actions by the object they act on; every object
    owned by more than one controller yields one conflict candidate with
    all controllers acting at once.
    """
    groups: dict[str, list[ControlAction]] = {}
    for action in actions:
        if _RESOURCE_VERB.match(action.verb):
            groups.setdefault(normalise_object(action.object), []).append(action)

    limit = min(_MAX_RESOURCE_CONTROLLERS, max_combination_size)
    candidates: list[PotentialUCCA] = []
    for resource, grouped in groups.items():
        first_by_controller: dict[str, ControlAction] = {}
        for action in grouped:
            first_by_controller.setdefault(action.controller_id, action)
        if len(first_by_controller) < 2:
            continue

        elements = [
            CombinationElement(controller_id=cid, action_id=action.id, provided=True)
            for cid, action in list(first_by_controller.items())[:limit]
        ]
        candidates.append(
            PotentialUCCA(
                type=UCCAType.TYPE_1_2,
                abstraction=AbstractionLevel.ABSTRACTION_2B,
                combinations=elements,
                description=f"Multiple controllers simultaneously controlling {resource}",
                risk_score=RESOURCE_CONFLICT_SCORE,
                enumeration_reason="Domain-specific: Resource conflict pattern",
            )
        )
    return candidates


# ─── Emergency timing ─────────────────────────────────────────────


def is_emergency_action(action: ControlAction) -> bool:
    return bool(
        _EMERGENCY_VERB.match(action.verb) or _EMERGENCY_OBJECT.search(action.object)
    )


def emergency_timing_candidates(
    actions: Sequence[ControlAction],
) -> list[PotentialUCCA]:
    """
    For every pair of emergency actions owned by different controllers,
    the pattern where the first comes too early and the second too late.
    """
    emergency = [a for a in actions if is_emergency_action(a)]

    candidates: list[PotentialUCCA] = []
    for i, early in enumerate(emergency):
        for late in emergency[i + 1 :]:
            if early.controller_id == late.controller_id:
                continue
            candidates.append(
                PotentialUCCA(
                    type=UCCAType.TYPE_3_4,
                    abstraction=AbstractionLevel.ABSTRACTION_2B,
                    combinations=[
                        CombinationElement(
                            controller_id=early.controller_id,
                            action_id=early.id,
                            provided=True,
                            timing=TimingTag.EARLY,
                        ),
                        CombinationElement(
                            controller_id=late.controller_id,
                            action_id=late.id,
                            provided=True,
                            timing=TimingTag.LATE,
                        ),
                    ],
                    description=(
                        f"Emergency response timing conflict: {early.label} too early, "
                        f"{late.label} too late"
                    ),
                    risk_score=EMERGENCY_TIMING_SCORE,
                    enumeration_reason="Domain-specific: Emergency response timing pattern",
                )
            )
    return candidates


def generate_domain_candidates(
    controllers: Sequence[Controller],
    actions: Sequence[ControlAction],
    max_combination_size: int,
) -> list[PotentialUCCA]:
    """All three generators merged additively, in a fixed order."""
    return [
        *communication_failure_candidates(controllers, actions),
        *resource_conflict_candidates(actions, max_combination_size),
        *emergency_timing_candidates(actions),
    ]
