"""
Fallback Extractor - Second, looser pass for empty or weak fields

Only fields that are empty or below FALLBACK_THRESHOLD after the primary pass
and overlap resolution are touched. Recovered values are marked as
rules_fallback so the confidence aggregator can penalize them.
"""

import logging
from typing import Optional

from state import ExtractionSpan, ExtractionMethod, FieldSet, FIELD_NAMES
from nodes.cleaner import clean
from nodes.date_parser import match_date
from nodes.patterns import FALLBACK_RULES

logger = logging.getLogger(__name__)

FALLBACK_THRESHOLD = 0.5
FALLBACK_CONFIDENCE = 0.6


def needs_fallback(span: ExtractionSpan) -> bool:
    return not span.value or span.confidence < FALLBACK_THRESHOLD


def locate(text: str, value: str) -> ExtractionSpan:
    """Find value in text ignoring case; -1/-1 when it does not appear verbatim."""
    lowered = text.lower()
    if len(lowered) == len(text):
        index = lowered.find(value.lower())
    else:
        # Lowercasing changed the length, so its offsets do not map back
        index = text.find(value)
    if index < 0:
        return ExtractionSpan(value=value)
    return ExtractionSpan(value=value, start=index, end=index + len(value))


def _recover(text: str, field_type: str) -> Optional[ExtractionSpan]:
    if field_type == "date":
        found = match_date(text)
        if not found:
            return None
        return ExtractionSpan(value=found.value, start=found.start, end=found.end)

    rule = FALLBACK_RULES.get(field_type)
    if rule is None:
        return None
    found = rule.search(text)
    if not found:
        return None

    value = clean(found[0], field_type)
    if not value:
        return None
    return locate(text, value)


def fill_gaps(text: str, fields: FieldSet) -> FieldSet:
    """
    Try to recover every empty or low-confidence field.

    A field that already has confidence >= FALLBACK_THRESHOLD is never
    overwritten, and a failed recovery leaves the field as it was.
    """
    for name in FIELD_NAMES:
        span = fields[name]
        if not needs_fallback(span):
            continue

        recovered = _recover(text, name)
        if recovered is None:
            logger.debug(f"{name}: fallback found nothing")
            continue

        recovered.confidence = FALLBACK_CONFIDENCE
        recovered.method = ExtractionMethod.RULES_FALLBACK
        fields[name] = recovered
        logger.info(f"{name}: recovered {recovered.value!r} via rules fallback")

    return fields
