"""
StampLab — UCCA Authority Model

Builds the read-only "who may do what" model from the analysis store's
controllers and control actions, and validates a generation context
before any enumeration starts.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence

import structlog

from stamplab.primitives.analysis import ControlAction, Controller
from stamplab.systems.ucca.errors import InputError
from stamplab.systems.ucca.types import AuthorityModel, UCCAGenerationContext

logger = structlog.get_logger()


def build_authority_model(
    controllers: Sequence[Controller],
    control_actions: Sequence[ControlAction],
    shared_authority: Mapping[str, Iterable[str]] | None = None,
) -> AuthorityModel:
    """
    Group actions by owning controller.

    ``shared_authority`` grants extra controllers authority over actions
    they do not own (controller id → action ids), e.g. a co-pilot who may
    also lower the gear. Never raises; see ``validate_authority_model``.
    """
    grouped: dict[str, set[str]] = {}
    for action in control_actions:
        grouped.setdefault(action.controller_id, set()).add(action.id)
    for controller_id, action_ids in (shared_authority or {}).items():
        grouped.setdefault(controller_id, set()).update(action_ids)

    return AuthorityModel(
        controllers=list(controllers),
        control_actions=list(control_actions),
        authorities={cid: frozenset(aids) for cid, aids in grouped.items()},
    )


def validate_authority_model(authority: AuthorityModel) -> None:
    """Raise InputError listing every inconsistency in the model."""
    problems: list[str] = []

    controller_ids = [c.id for c in authority.controllers]
    action_ids = [a.id for a in authority.control_actions]
    known_controllers = set(controller_ids)
    known_actions = set(action_ids)

    for cid, count in Counter(controller_ids).items():
        if count > 1:
            problems.append(f"Duplicate controller id {cid}")
    for aid, count in Counter(action_ids).items():
        if count > 1:
            problems.append(f"Duplicate control action id {aid}")

    for action in authority.control_actions:
        if action.controller_id not in known_controllers:
            problems.append(
                f"Control action {action.id} references unknown controller "
                f"{action.controller_id}"
            )

    for cid, granted in authority.authorities.items():
        if cid not in known_controllers:
            problems.append(f"Authority entry for unknown controller {cid}")
        for aid in sorted(granted - known_actions):
            problems.append(f"Controller {cid} holds authority over unknown action {aid}")

    if problems:
        raise InputError(problems)


def validate_context(context: UCCAGenerationContext, max_combination_size: int) -> None:
    """
    Validate a whole generation snapshot: the authority model, the
    interchangeability groups, and the mandatory candidates that will be
    returned verbatim.
    """
    validate_authority_model(context.authority)

    authority = context.authority
    known_controllers = {c.id for c in authority.controllers}
    problems: list[str] = []

    for group in context.interchangeable.groups:
        for cid in group:
            if cid not in known_controllers:
                problems.append(f"Interchangeable group names unknown controller {cid}")

    for index, candidate in enumerate(context.special_interactions.mandatory_uccas):
        size = len(candidate.combinations)
        if not 2 <= size <= max_combination_size:
            problems.append(
                f"Mandatory UCCA #{index} has {size} elements; "
                f"expected 2..{max_combination_size}"
            )
        for element in candidate.combinations:
            if not authority.has_authority(element.controller_id, element.action_id):
                problems.append(
                    f"Mandatory UCCA #{index}: controller {element.controller_id} "
                    f"has no authority over action {element.action_id}"
                )

    if problems:
        raise InputError(problems)

    logger.debug(
        "ucca_context_validated",
        system="ucca",
        controllers=len(authority.controllers),
        actions=len(authority.control_actions),
        hazards=len(context.hazards),
        existing=len(context.existing_uccas),
    )
