"""
Tests for the UCCA authority model and context validation.
"""

from __future__ import annotations

import pytest

from stamplab.primitives.analysis import ControlAction, Controller
from stamplab.systems.ucca.authority import (
    build_authority_model,
    validate_authority_model,
    validate_context,
)
from stamplab.systems.ucca.errors import InputError
from stamplab.systems.ucca.types import (
    AbstractionLevel,
    CombinationElement,
    InterchangeableControllers,
    PotentialUCCA,
    SpecialInteractions,
    UCCAGenerationContext,
    UCCAType,
)


def _make_controllers(*ids: str) -> list[Controller]:
    return [Controller(id=cid, name=cid.upper()) for cid in ids]


def _make_action(action_id: str, controller_id: str, verb: str = "activate", obj: str = "pump") -> ControlAction:
    return ControlAction(id=action_id, controller_id=controller_id, verb=verb, object=obj)


def _make_candidate(*pairs: tuple[str, str]) -> PotentialUCCA:
    return PotentialUCCA(
        type=UCCAType.TYPE_1_2,
        abstraction=AbstractionLevel.ABSTRACTION_2B,
        combinations=[
            CombinationElement(controller_id=cid, action_id=aid, provided=i == 0)
            for i, (cid, aid) in enumerate(pairs)
        ],
        description="analyst supplied",
        risk_score=0.5,
    )


# ─── build_authority_model ────────────────────────────────────────


class TestBuildAuthorityModel:
    def test_groups_actions_by_owner(self):
        model = build_authority_model(
            _make_controllers("c1", "c2"),
            [_make_action("a1", "c1"), _make_action("a2", "c1"), _make_action("a3", "c2")],
        )
        assert model.actions_of("c1") == frozenset({"a1", "a2"})
        assert model.actions_of("c2") == frozenset({"a3"})

    def test_controller_without_actions_has_empty_set(self):
        model = build_authority_model(_make_controllers("c1", "idle"), [_make_action("a1", "c1")])
        assert model.actions_of("idle") == frozenset()
        assert not model.has_authority("idle", "a1")

    def test_shared_authority_grants_extra_controllers(self):
        model = build_authority_model(
            _make_controllers("pilot", "copilot"),
            [_make_action("gear", "pilot", verb="lower", obj="gear")],
            shared_authority={"copilot": ["gear"]},
        )
        assert model.has_authority("copilot", "gear")
        assert [c.id for c in model.controllers_for("gear")] == ["pilot", "copilot"]

    def test_controllers_for_follows_model_order(self):
        model = build_authority_model(
            _make_controllers("z", "a"),
            [_make_action("act", "a")],
            shared_authority={"z": ["act"]},
        )
        assert [c.id for c in model.controllers_for("act")] == ["z", "a"]

    def test_lookups(self):
        model = build_authority_model(_make_controllers("c1"), [_make_action("a1", "c1")])
        assert model.controller("c1").name == "C1"
        assert model.action("a1").label == "activate pump"
        assert model.controller("missing") is None
        assert model.action("missing") is None

    def test_build_never_raises_on_bad_input(self):
        model = build_authority_model([], [_make_action("a1", "ghost")])
        assert model.actions_of("ghost") == frozenset({"a1"})


# ─── validate_authority_model ─────────────────────────────────────


class TestValidateAuthorityModel:
    def test_valid_model_passes(self):
        model = build_authority_model(_make_controllers("c1", "c2"), [_make_action("a1", "c1")])
        validate_authority_model(model)

    def test_unknown_controller_reference(self):
        model = build_authority_model(_make_controllers("c1"), [_make_action("a1", "ghost")])
        with pytest.raises(InputError, match="unknown controller ghost"):
            validate_authority_model(model)

    def test_reports_every_problem(self):
        model = build_authority_model(
            _make_controllers("c1", "c1"),
            [_make_action("a1", "ghost"), _make_action("a1", "c1")],
            shared_authority={"c1": ["nowhere"]},
        )
        with pytest.raises(InputError) as excinfo:
            validate_authority_model(model)
        problems = excinfo.value.problems
        assert "Duplicate controller id c1" in problems
        assert "Duplicate control action id a1" in problems
        assert any("references unknown controller ghost" in p for p in problems)
        assert any("unknown action nowhere" in p for p in problems)

    def test_input_error_is_ucca_error(self):
        from stamplab.systems.ucca.errors import UCCAError

        assert issubclass(InputError, UCCAError)


# ─── validate_context ─────────────────────────────────────────────


class TestValidateContext:
    def _context(self, **kwargs) -> UCCAGenerationContext:
        authority = build_authority_model(
            _make_controllers("c1", "c2"),
            [_make_action("a1", "c1"), _make_action("a2", "c2")],
        )
        return UCCAGenerationContext(authority=authority, **kwargs)

    def test_minimal_context_passes(self):
        validate_context(self._context(), max_combination_size=4)

    def test_interchangeable_group_with_unknown_controller(self):
        context = self._context(
            interchangeable=InterchangeableControllers(groups=[["c1", "ghost"]])
        )
        with pytest.raises(InputError, match="unknown controller ghost"):
            validate_context(context, max_combination_size=4)

    def test_mandatory_candidate_without_authority(self):
        context = self._context(
            special_interactions=SpecialInteractions(
                mandatory_uccas=[_make_candidate(("c1", "a1"), ("c1", "a2"))]
            )
        )
        with pytest.raises(InputError, match="no authority over action a2"):
            validate_context(context, max_combination_size=4)

    def test_mandatory_candidate_too_large(self):
        context = self._context(
            special_interactions=SpecialInteractions(
                mandatory_uccas=[
                    _make_candidate(("c1", "a1"), ("c2", "a2"), ("c1", "a1"))
                ]
            )
        )
        with pytest.raises(InputError, match="has 3 elements"):
            validate_context(context, max_combination_size=2)

    def test_valid_mandatory_candidate_passes(self):
        context = self._context(
            special_interactions=SpecialInteractions(
                mandatory_uccas=[_make_candidate(("c1", "a1"), ("c2", "a2"))]
            )
        )
        validate_context(context, max_combination_size=2)
