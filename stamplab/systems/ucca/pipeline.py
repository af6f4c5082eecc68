"""
StampLab — UCCA Enumeration Pipeline

The full enumeration as one synchronous, side-effect-free function.
Each stage is a pure function from its own module:

  validate → generate (systematic + domain) → admit by config
    → hazard relevance → refine → prune → special interactions
    → threshold → deduplicate → rank → statistics / recommendations

Domain candidates join before refinement so pruning applies to them too.
"""

from __future__ import annotations

import time

from stamplab.config import UCCAConfig
from stamplab.systems.ucca.authority import validate_context
from stamplab.systems.ucca.combinations import enumerate_base_candidates
from stamplab.systems.ucca.patterns import generate_domain_candidates
from stamplab.systems.ucca.policy import apply_special_interactions
from stamplab.systems.ucca.pruning import prune_equivalent_combinations
from stamplab.systems.ucca.refinement import refine_abstracted_uccas
from stamplab.systems.ucca.reporting import (
    calculate_statistics,
    generate_recommendations,
    rank_candidates,
)
from stamplab.systems.ucca.scoring import prioritize_by_hazard_relevance
from stamplab.systems.ucca.similarity import apply_risk_threshold, filter_existing_uccas
from stamplab.systems.ucca.types import (
    AbstractionLevel,
    CandidateBudget,
    EnumerationResult,
    PotentialUCCA,
    UCCAGenerationContext,
    UCCAType,
)


def is_admitted(candidate: PotentialUCCA, config: UCCAConfig) -> bool:
    """
    Type flags gate every candidate. Abstraction flags gate Type 1-2 only;
    Type 3-4 candidates are always controller level.
    """
    if candidate.type == UCCAType.TYPE_3_4:
        return config.enable_type_3_4
    if not config.enable_type_1_2:
        return False
    if candidate.abstraction == AbstractionLevel.ABSTRACTION_2A:
        return config.enable_abstraction_2a
    return config.enable_abstraction_2b


def generate_potential_uccas(
    context: UCCAGenerationContext,
    config: UCCAConfig,
    budget: CandidateBudget | None = None,
) -> list[PotentialUCCA]:
    authority = context.authority
    base = enumerate_base_candidates(
        authority,
        config.max_combination_size,
        budget,
        team_level=config.enable_type_1_2 and config.enable_abstraction_2a,
        controller_level=config.enable_type_1_2 and config.enable_abstraction_2b,
        temporal=config.enable_type_3_4,
    )
    domain = generate_domain_candidates(
        authority.controllers, authority.control_actions, config.max_combination_size
    )
    return [c for c in (*base, *domain) if is_admitted(c, config)]


def enumerate_uccas(
    context: UCCAGenerationContext,
    config: UCCAConfig,
) -> EnumerationResult:
    """Run the whole pipeline. Raises on any failure; never returns partial results."""
    started = time.perf_counter()
    validate_context(context, config.max_combination_size)

    budget = CandidateBudget(limit=config.max_candidates)
    candidates = generate_potential_uccas(context, config, budget)

    if config.prioritize_by_hazards:
        candidates = prioritize_by_hazard_relevance(candidates, context.hazards)

    candidates = refine_abstracted_uccas(candidates, context.authority, budget)
    candidates = prune_equivalent_combinations(candidates, context.interchangeable)
    candidates = apply_special_interactions(candidates, context.special_interactions)
    candidates = apply_risk_threshold(candidates, config.risk_threshold)
    candidates = filter_existing_uccas(candidates, context.existing_uccas)
    candidates = rank_candidates(candidates)

    return EnumerationResult(
        potential_uccas=candidates,
        statistics=calculate_statistics(candidates),
        recommendations=generate_recommendations(candidates),
        processing_time_ms=(time.perf_counter() - started) * 1000.0,
    )
