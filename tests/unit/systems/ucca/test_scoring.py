"""
Tests for hazard-relevance scoring.
"""

from __future__ import annotations

import pytest

from stamplab.primitives.analysis import Hazard
from stamplab.systems.ucca.scoring import (
    hazard_relevance,
    keywords,
    prioritize_by_hazard_relevance,
)
from stamplab.systems.ucca.types import (
    AbstractionLevel,
    CombinationElement,
    PotentialUCCA,
    UCCAType,
)


def _make_candidate(description: str, score: float = 0.5) -> PotentialUCCA:
    return PotentialUCCA(
        type=UCCAType.TYPE_1_2,
        abstraction=AbstractionLevel.ABSTRACTION_2B,
        combinations=[
            CombinationElement(controller_id="c1", action_id="a1", provided=True),
            CombinationElement(controller_id="c2", action_id="a2", provided=False),
        ],
        description=description,
        risk_score=score,
    )


def _make_hazard(title: str) -> Hazard:
    return Hazard(id=title.lower().replace(" ", "-"), title=title)


class TestKeywords:
    def test_short_words_dropped(self):
        assert keywords("The fuel pump is off") == frozenset({"fuel", "pump"})

    def test_lowercased(self):
        assert keywords("Pump PRESSURE") == frozenset({"pump", "pressure"})


class TestHazardRelevance:
    def test_one_shared_keyword(self):
        hazards = [_make_hazard("Pump overpressure")]
        assert hazard_relevance("Team provides activate pump", hazards) == pytest.approx(0.1)

    def test_sums_over_hazards(self):
        hazards = [_make_hazard("Pump overpressure"), _make_hazard("Dry pump running")]
        assert hazard_relevance("activate pump", hazards) == pytest.approx(0.2)

    def test_no_overlap(self):
        assert hazard_relevance("close valve", [_make_hazard("Aircraft collision")]) == 0.0


class TestPrioritizeByHazardRelevance:
    def test_no_hazards_is_identity(self):
        candidates = [_make_candidate("activate pump")]
        assert prioritize_by_hazard_relevance(candidates, []) == candidates

    def test_boosts_matching_candidates(self):
        hazards = [_make_hazard("Pump overpressure")]
        boosted, untouched = prioritize_by_hazard_relevance(
            [_make_candidate("activate pump", 0.5), _make_candidate("close valve", 0.5)],
            hazards,
        )
        assert boosted.risk_score == pytest.approx(0.6)
        assert untouched.risk_score == 0.5

    def test_score_clamped(self):
        hazards = [_make_hazard("pump valve motor"), _make_hazard("pump valve motor")]
        (candidate,) = prioritize_by_hazard_relevance(
            [_make_candidate("pump valve motor", 0.9)], hazards
        )
        assert candidate.risk_score == 1.0

    def test_scores_never_decrease(self):
        hazards = [_make_hazard("Loss of hydraulic pressure")]
        candidates = [_make_candidate(d, 0.3) for d in ("hydraulic pump", "open door", "")]
        for before, after in zip(candidates, prioritize_by_hazard_relevance(candidates, hazards)):
            assert after.risk_score >= before.risk_score
