"""
Confidence Aggregator - Single 0..1 score for an extraction

Base score is the mean of the four field confidences. Global adjustments are
kept in an explicit, versioned rule table because the score drives UI
colouring; bump CONFIDENCE_RULES_VERSION whenever the table changes.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List

from state import ExtractionMethod, FieldSet, FIELD_NAMES

logger = logging.getLogger(__name__)

CONFIDENCE_RULES_VERSION = 1


@dataclass(frozen=True)
class ConfidenceRule:
    name: str
    applies: Callable[[FieldSet, int], bool]
    delta: float


def _parties_from_regex(fields: FieldSet, trimmed_count: int) -> bool:
    return all(
        fields[name].method == ExtractionMethod.REGEX and bool(fields[name].value)
        for name in ("buyer", "seller")
    )


def _used_fallback(fields: FieldSet, trimmed_count: int) -> bool:
    return any(span.method == ExtractionMethod.RULES_FALLBACK for span in fields.values())


def _was_trimmed(fields: FieldSet, trimmed_count: int) -> bool:
    return trimmed_count > 0


# Applied in order after averaging
CONFIDENCE_RULES: List[ConfidenceRule] = [
    ConfidenceRule("buyer_and_seller_from_regex", _parties_from_regex, 0.10),
    ConfidenceRule("fallback_used", _used_fallback, -0.10),
    ConfidenceRule("overlap_trimmed", _was_trimmed, -0.05),
]


def aggregate_confidence(fields: FieldSet, trimmed_count: int) -> float:
    """
    Combine field confidences into one score.

    Returns:
        Score clamped to [0.0, 1.0] and rounded to 2 decimals
    """
    score = sum(fields[name].confidence for name in FIELD_NAMES) / len(FIELD_NAMES)

    for rule in CONFIDENCE_RULES:
        if rule.applies(fields, trimmed_count):
            score += rule.delta
            logger.debug(f"Confidence rule {rule.name} applied ({rule.delta:+.2f})")

    return round(min(1.0, max(0.0, score)), 2)
