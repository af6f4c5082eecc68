"""
StampLab — UCCA Enumeration Service

Entry point used by the host application to propose unsafe combinations
of control actions for analyst review.

Iron Rules:
  - The enumerator NEVER writes to the analysis store; accepting a
    candidate is the host's job
  - Configuration is fixed at construction and never mutated mid-run
  - A run either returns a complete result or raises; no partial results
  - Errors are logged and re-raised unchanged, never retried or swallowed

The async ``enumerate`` matches the host's other operations; it does not
suspend or perform I/O. Calls share no state, so concurrent runs and
immediate retries after a failure are safe.

Interface:
  enumerate()   — run the full pipeline on a context snapshot
  config        — the validated, immutable configuration
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import ValidationError

from stamplab.config import UCCAConfig
from stamplab.systems.ucca.errors import ConfigurationError
from stamplab.systems.ucca.pipeline import enumerate_uccas
from stamplab.systems.ucca.types import EnumerationResult, UCCAGenerationContext

logger = structlog.get_logger("stamplab.systems.ucca")


class UCCAEnumerator:
    """
    Holds one validated configuration and runs the enumeration pipeline.

    Accepts a full ``UCCAConfig``, keyword overrides of the defaults, or
    both (overrides win).
    """

    def __init__(self, config: UCCAConfig | None = None, **overrides: Any) -> None:
        base = config.model_dump() if config is not None else {}
        try:
            self._config = UCCAConfig(**{**base, **overrides})
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc
        self._logger = logger.bind(system="ucca", component="enumerator")

    @property
    def config(self) -> UCCAConfig:
        return self._config

    async def enumerate(self, context: UCCAGenerationContext) -> EnumerationResult:
        authority = context.authority
        self._logger.info(
            "ucca_enumeration_started",
            controllers=len(authority.controllers),
            actions=len(authority.control_actions),
            hazards=len(context.hazards),
            max_combination_size=self._config.max_combination_size,
        )

        try:
            result = enumerate_uccas(context, self._config)
        except Exception as exc:
            self._logger.error(
                "ucca_enumeration_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise

        stats = result.statistics
        self._logger.info(
            "ucca_enumeration_complete",
            run_id=result.id,
            total=stats.total_enumerated,
            high_risk=stats.high_risk_count,
            average_risk=round(stats.average_risk_score, 3),
            duration_ms=round(result.processing_time_ms, 2),
        )
        return result
