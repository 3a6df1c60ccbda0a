"""
Overlap Resolver - Make sure no two fields claim the same characters

Fields are processed from highest to lowest priority. A lower-priority span
that overlaps an already-resolved higher-priority span is trimmed to the
remainder on one side, re-cleaned from the original text, or cleared.
"""

import logging
from typing import List, Tuple

from state import ExtractionSpan, FieldSet
from nodes.cleaner import clean

logger = logging.getLogger(__name__)

# Highest priority first. Address matches are the most likely to run into
# neighbouring party names, so they yield to everything else.
FIELD_PRIORITY = ("date", "seller", "buyer", "address")

TRIM_PENALTY = 0.05

MIN_VALUE_LENGTH = 3


def spans_overlap(a: ExtractionSpan, b: ExtractionSpan) -> bool:
    return a.start < b.end and a.end > b.start


def _trim_against(span: ExtractionSpan, higher: ExtractionSpan) -> None:
    """Cut span back so it no longer overlaps higher; clear it when nothing remains."""
    if span.start < higher.start:
        span.end = higher.start
    elif span.end > higher.end:
        span.start = higher.end
    else:
        span.start = span.end = -1


def resolve_overlaps(fields: FieldSet, text: str) -> Tuple[FieldSet, int]:
    """
    Resolve overlapping spans in priority order.

    Each field is compared only against strictly higher-priority fields that
    kept a span, so an already-trimmed span is never re-trimmed by a
    lower-priority one.

    Returns:
        (fields, trimmed_count) where trimmed_count is the number of fields
        that were trimmed or cleared.
    """
    resolved: List[ExtractionSpan] = []
    trimmed_count = 0

    for name in FIELD_PRIORITY:
        span = fields[name]
        if not span.has_span:
            continue

        original = (span.start, span.end)
        for higher in resolved:
            if span.has_span and spans_overlap(span, higher):
                _trim_against(span, higher)

        if (span.start, span.end) != original:
            trimmed_count += 1
            value = clean(text[span.start:span.end], name) if span.has_span else ""
            if len(value) < MIN_VALUE_LENGTH:
                logger.debug(f"{name}: cleared after overlap with a higher-priority field")
                span.clear()
            else:
                logger.debug(f"{name}: trimmed to [{span.start}, {span.end}) -> {value!r}")
                span.value = value
                span.confidence = max(0.0, span.confidence - TRIM_PENALTY)

        if span.has_span:
            resolved.append(span)

    return fields, trimmed_count
