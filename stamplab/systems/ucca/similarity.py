"""
StampLab — UCCA Similarity Filters

Score thresholding and textual deduplication against analyst-confirmed
entries. Text similarity is word-set Jaccard over whitespace tokens.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from stamplab.primitives.analysis import ExistingUCCA
from stamplab.systems.ucca.types import PotentialUCCA

logger = structlog.get_logger()

# Candidates at or above this overlap with a recorded entry are duplicates.
# Inclusive: exactly 80% word overlap counts, where a strict ">" would keep it.
DUPLICATE_SIMILARITY = 0.8


def _word_set(text: str) -> frozenset[str]:
    return frozenset(text.lower().split())


def description_similarity(a: str, b: str) -> float:
    """Jaccard similarity between the word sets of two descriptions."""
    words_a, words_b = _word_set(a), _word_set(b)
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def apply_risk_threshold(
    candidates: Sequence[PotentialUCCA],
    threshold: float,
) -> list[PotentialUCCA]:
    return [c for c in candidates if c.risk_score >= threshold]


def filter_existing_uccas(
    candidates: Sequence[PotentialUCCA],
    existing: Sequence[ExistingUCCA],
) -> list[PotentialUCCA]:
    if not existing:
        return list(candidates)

    kept = [
        c for c in candidates
        if not any(
            description_similarity(c.description, e.description) >= DUPLICATE_SIMILARITY
            for e in existing
        )
    ]

    logger.debug(
        "ucca_existing_filtered",
        system="ucca",
        component="deduplicator",
        removed=len(candidates) - len(kept),
    )
    return kept
