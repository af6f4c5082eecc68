"""
StampLab — UCCA (Unsafe Combinations of Control Actions)

Proposes multi-controller interaction patterns that could lead to a hazard
even though no single control action is unsafe on its own. Candidates are
generated systematically from the authority model, supplemented by domain
heuristics, refined to explicit controllers, pruned under controller
interchangeability, scored and ranked for human review.

The engine proposes; analysts decide. Nothing here is persisted.

Public interface:
  UCCAEnumerator          — async entry point holding a fixed configuration
  enumerate_uccas         — the same pipeline as a synchronous function
  build_authority_model   — who-may-do-what from controllers and actions
  aviation_safety_config  — industry preset
"""

from stamplab.systems.ucca.authority import (
    build_authority_model,
    validate_authority_model,
    validate_context,
)
from stamplab.systems.ucca.errors import (
    ConfigurationError,
    EnumerationBudgetExceeded,
    InputError,
    UCCAError,
)
from stamplab.systems.ucca.pipeline import enumerate_uccas
from stamplab.systems.ucca.policy import structural_key
from stamplab.systems.ucca.presets import aviation_safety_config, get_preset
from stamplab.systems.ucca.service import UCCAEnumerator
from stamplab.systems.ucca.types import (
    TEAM_CONTROLLER_ID,
    AbstractionLevel,
    AuthorityModel,
    CombinationElement,
    EnumerationResult,
    EnumerationStatistics,
    InterchangeableControllers,
    PotentialUCCA,
    SpecialInteractions,
    TimingTag,
    UCCAGenerationContext,
    UCCAType,
)

__all__ = [
    "AbstractionLevel",
    "AuthorityModel",
    "CombinationElement",
    "ConfigurationError",
    "EnumerationBudgetExceeded",
    "EnumerationResult",
    "EnumerationStatistics",
    "InputError",
    "InterchangeableControllers",
    "PotentialUCCA",
    "SpecialInteractions",
    "TEAM_CONTROLLER_ID",
    "TimingTag",
    "UCCAEnumerator",
    "UCCAError",
    "UCCAGenerationContext",
    "UCCAType",
    "aviation_safety_config",
    "build_authority_model",
    "enumerate_uccas",
    "get_preset",
    "structural_key",
    "validate_authority_model",
    "validate_context",
]
