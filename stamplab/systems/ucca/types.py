"""
StampLab — UCCA Types

Data types for the unsafe-combination (UCCA) enumeration pipeline:
the authority model, candidate combinations, the interchangeability
relation, the analyst's special-interaction policy, and the result.

Everything that crosses a stage boundary is a frozen value object.
Stages derive new candidates with ``model_copy(update=...)``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from pydantic import Field

from stamplab.primitives.analysis import (
    ControlAction,
    Controller,
    ExistingUCCA,
    Hazard,
)
from stamplab.primitives.common import FrozenModel, Identified, Timestamped
from stamplab.systems.ucca.errors import EnumerationBudgetExceeded

# Placeholder controller for team-level (abstraction 2a) elements.
TEAM_CONTROLLER_ID = "team-abstract"


# ─── Enums ────────────────────────────────────────────────────────


class UCCAType(str, enum.Enum):
    """Which family of unsafe combination a candidate belongs to."""

    TYPE_1_2 = "type_1_2"  # Provided / not provided combinations
    TYPE_3_4 = "type_3_4"  # Timing / order combinations


class AbstractionLevel(str, enum.Enum):
    ABSTRACTION_2A = "2a"  # Team level: controllers abstracted away
    ABSTRACTION_2B = "2b"  # Controller level: explicit controllers


class TimingTag(str, enum.Enum):
    EARLY = "early"
    LATE = "late"
    TOO_LONG = "too-long"
    TOO_SHORT = "too-short"


# ─── Authority Model ──────────────────────────────────────────────


class AuthorityModel(FrozenModel):
    """
    Who may issue what. ``authorities`` maps controller id → action ids.
    Controllers with no authority have no entry; read through
    ``actions_of`` so a missing key behaves as an empty set.
    """

    controllers: list[Controller] = Field(default_factory=list)
    control_actions: list[ControlAction] = Field(default_factory=list)
    authorities: dict[str, frozenset[str]] = Field(default_factory=dict)

    def actions_of(self, controller_id: str) -> frozenset[str]:
        return self.authorities.get(controller_id, frozenset())

    def has_authority(self, controller_id: str, action_id: str) -> bool:
        return action_id in self.actions_of(controller_id)

    def controllers_for(self, action_id: str) -> list[Controller]:
        """Controllers holding authority over an action, in model order."""
        return [c for c in self.controllers if self.has_authority(c.id, action_id)]

    def controller(self, controller_id: str) -> Controller | None:
        return next((c for c in self.controllers if c.id == controller_id), None)

    def action(self, action_id: str) -> ControlAction | None:
        return next((a for a in self.control_actions if a.id == action_id), None)


# ─── Candidates ───────────────────────────────────────────────────


class CombinationElement(FrozenModel):
    """One participant of a candidate. provided=False is the withheld variant."""

    controller_id: str
    action_id: str
    provided: bool = True
    timing: TimingTag | None = None


class PotentialUCCA(FrozenModel):
    """
    A candidate unsafe combination of control actions, proposed for
    analyst review. Not a claim that the combination is hazardous.
    """

    type: UCCAType
    abstraction: AbstractionLevel
    combinations: list[CombinationElement]
    description: str
    risk_score: float = Field(ge=0.0, le=1.0)
    enumeration_reason: str = ""

    @property
    def controller_ids(self) -> list[str]:
        """Distinct controllers involved, in element order."""
        return list(dict.fromkeys(e.controller_id for e in self.combinations))


# ─── Analyst-supplied relations ───────────────────────────────────


class InterchangeableControllers(FrozenModel):
    """
    Groups of functionally equivalent controllers (e.g. redundant crew
    roles). Used only to collapse duplicate candidates; the controllers
    themselves stay distinct entities. Overlapping groups merge.
    """

    groups: list[list[str]] = Field(default_factory=list)

    def partition(self) -> dict[str, str]:
        """
        Map each grouped controller id to its class representative: the
        first id of the merged class in declaration order.
        """
        parent: dict[str, str] = {}
        order: dict[str, int] = {}

        def find(item: str) -> str:
            root = item
            while parent[root] != root:
                root = parent[root]
            while parent[item] != root:
                parent[item], item = root, parent[item]
            return root

        for group in self.groups:
            for member in group:
                if member not in parent:
                    parent[member] = member
                    order[member] = len(order)
            for member in group[1:]:
                root_a, root_b = find(group[0]), find(member)
                if root_a == root_b:
                    continue
                # Earliest-declared member stays the representative
                if order[root_b] < order[root_a]:
                    root_a, root_b = root_b, root_a
                parent[root_b] = root_a

        return {member: find(member) for member in parent}


class SpecialInteractions(FrozenModel):
    """
    Analyst overrides layered onto the candidate pool.

    ``priority_adjustments`` is keyed by structural key (see
    ``policy.structural_key``) and holds signed score deltas.
    """

    mandatory_uccas: list[PotentialUCCA] = Field(default_factory=list)
    excluded_uccas: list[PotentialUCCA] = Field(default_factory=list)
    priority_adjustments: dict[str, float] = Field(default_factory=dict)


class UCCAGenerationContext(FrozenModel):
    """Read-only snapshot of the analysis supplied by the host for one run."""

    authority: AuthorityModel
    hazards: list[Hazard] = Field(default_factory=list)
    existing_uccas: list[ExistingUCCA] = Field(default_factory=list)
    interchangeable: InterchangeableControllers = Field(
        default_factory=InterchangeableControllers
    )
    special_interactions: SpecialInteractions = Field(
        default_factory=SpecialInteractions
    )


# ─── Result ───────────────────────────────────────────────────────


class EnumerationStatistics(FrozenModel):
    total_enumerated: int = 0
    type_1_2_count: int = 0
    type_3_4_count: int = 0
    abstraction_2a_count: int = 0
    abstraction_2b_count: int = 0
    high_risk_count: int = 0
    average_risk_score: float = 0.0


class EnumerationResult(Identified, Timestamped):
    """Outcome of one enumeration run. Ephemeral; never persisted here."""

    potential_uccas: list[PotentialUCCA] = Field(default_factory=list)
    statistics: EnumerationStatistics = Field(default_factory=EnumerationStatistics)
    recommendations: list[str] = Field(default_factory=list)
    processing_time_ms: float = 0.0


# ─── Budget (mutable accumulator) ─────────────────────────────────


@dataclass
class CandidateBudget:
    """
    Counts candidates produced during one run and aborts the run once
    ``limit`` is passed. Not a Pydantic model because it is mutated in-place.
    """

    limit: int
    used: int = 0

    def charge(self, stage: str, count: int = 1) -> None:
        self.used += count
        if self.used > self.limit:
            raise EnumerationBudgetExceeded(stage, self.limit)
