"""
StampLab -- UCCA Error Hierarchy

All exceptions raised by the UCCA enumeration pipeline.

Namespace: stamplab.systems.ucca.errors

No stage recovers locally. The enumerator logs the failure and re-raises
it unchanged; a run either returns a full result or raises.

Severity guide:
  InputError                 -- snapshot is malformed; fix the analysis data
  ConfigurationError         -- enumerator could not be constructed
  EnumerationBudgetExceeded  -- model too large for the configured budget
"""

from __future__ import annotations


class UCCAError(RuntimeError):
    """Base for all UCCA enumeration errors."""


class InputError(UCCAError):
    """
    The analysis snapshot is inconsistent, e.g. a control action references
    a controller absent from the authority model.

    Raised during validation, before any candidate is generated.
    ``problems`` lists every violation found, not only the first.
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class ConfigurationError(UCCAError):
    """Out-of-range enumeration settings, rejected at construction time."""


class EnumerationBudgetExceeded(UCCAError):
    """
    More candidates were produced than ``max_candidates`` allows.

    Recovery: lower max_combination_size, disable abstraction 2a, or
    raise the budget.
    """

    def __init__(self, stage: str, budget: int) -> None:
        self.stage = stage
        self.budget = budget
        super().__init__(
            f"Candidate budget of {budget} exceeded during {stage}"
        )
