"""
StampLab — UCCA Configuration Presets

Industry defaults for the enumerator.
"""

from __future__ import annotations

from collections.abc import Callable

from stamplab.config import UCCAConfig
from stamplab.systems.ucca.errors import ConfigurationError


def aviation_safety_config() -> UCCAConfig:
    """
    Aviation crews are small and roles explicit: keep combinations to
    three controllers, skip team-level abstraction, and keep medium-risk
    candidates for thoroughness.
    """
    return UCCAConfig(
        max_combination_size=3,
        enable_type_1_2=True,
        enable_type_3_4=True,
        enable_abstraction_2a=False,
        enable_abstraction_2b=True,
        risk_threshold=0.4,
        prioritize_by_hazards=True,
        include_temporal_analysis=True,
    )


PRESETS: dict[str, Callable[[], UCCAConfig]] = {
    "aviation": aviation_safety_config,
}


def get_preset(name: str) -> UCCAConfig:
    try:
        factory = PRESETS[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown UCCA preset {name!r}; available: {', '.join(sorted(PRESETS))}"
        ) from None
    return factory()
