"""
Field Matcher - Primary regex pass for each field

Applies the Pattern Catalog to the raw text. The first rule whose cleaned
capture is longer than two characters wins; its span is the position of the
captured text (not the whole match) in the original input.
"""

import logging
from typing import Optional

from state import ExtractionSpan, ExtractionMethod, FieldSet, FIELD_NAMES
from nodes.cleaner import clean
from nodes.date_parser import match_date
from nodes.patterns import PATTERN_CATALOG, MatchRule

logger = logging.getLogger(__name__)

REGEX_CONFIDENCE = 0.8
DATE_PARSER_CONFIDENCE = 0.9

# Shortest cleaned value accepted as a real match
MIN_VALUE_LENGTH = 3


def span_from_rule(text: str, rule: MatchRule, field_type: str) -> Optional[ExtractionSpan]:
    """
    Apply one rule and build a span from its capture.

    Surrounding whitespace is excluded from the reported offsets.
    Returns None when the rule does not produce a usable value.
    """
    found = rule.search(text)
    if not found:
        return None

    raw, start, end = found
    stripped = raw.strip()
    if not stripped:
        return None

    start += len(raw) - len(raw.lstrip())
    end -= len(raw) - len(raw.rstrip())

    value = clean(stripped, field_type)
    if len(value) < MIN_VALUE_LENGTH:
        return None

    return ExtractionSpan(
        value=value,
        start=start,
        end=end,
        confidence=REGEX_CONFIDENCE,
        method=ExtractionMethod.REGEX,
    )


def match_field(text: str, field_type: str) -> ExtractionSpan:
    """Run the ordered rules for field_type and return the first usable match."""
    if field_type == "date":
        return extract_date_with_span(text)

    for rule in PATTERN_CATALOG.get(field_type, []):
        span = span_from_rule(text, rule, field_type)
        if span is not None:
            logger.debug(f"{field_type}: rule {rule.name!r} matched {span.value!r} at [{span.start}, {span.end})")
            return span

    return ExtractionSpan.empty()


def extract_date_with_span(text: str) -> ExtractionSpan:
    """Date variant of match_field, located by the Date Parser's winning pattern."""
    found = match_date(text)
    if not found:
        return ExtractionSpan.empty()

    return ExtractionSpan(
        value=found.value,
        start=found.start,
        end=found.end,
        confidence=DATE_PARSER_CONFIDENCE,
        method=ExtractionMethod.DATE_PARSER,
    )


def match_all_fields(text: str) -> FieldSet:
    """Primary pass over every field."""
    return {name: match_field(text, name) for name in FIELD_NAMES}
