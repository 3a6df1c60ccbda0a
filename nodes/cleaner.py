"""
Post-Processor - Normalize a raw matched substring for one field

Applied to primary matches, to re-sliced text after overlap trimming and
to fallback results. Cleaning is a projection: clean(clean(x)) == clean(x).
"""

import re

from nodes.patterns import (
    POST_PROCESS_PATTERNS,
    ADDRESS_CUTOFF_PATTERN,
    TRAILING_FILLER_PATTERN,
    FIELD_BOUNDARY_PATTERN,
    CLAUSE_SPLIT_PATTERN,
)

_WHITESPACE = re.compile(r"\s+")


def _strip_repeated(pattern: "re.Pattern[str]", value: str) -> str:
    while True:
        stripped = pattern.sub("", value, count=1).strip()
        if stripped == value:
            return value
        value = stripped


def _clean_once(raw_value: str, field_type: str) -> str:
    # 1. Trim and collapse whitespace
    collapsed = _WHITESPACE.sub(" ", raw_value).strip()
    value = collapsed

    # 2. Leading phrase for this field
    leading = POST_PROCESS_PATTERNS.get(field_type)
    if leading is not None:
        value = _strip_repeated(leading, value)

    # 3. Address stops at the first action verb
    if field_type == "address":
        value = ADDRESS_CUTOFF_PATTERN.split(value, maxsplit=1)[0].strip()

    # 4. Trailing prepositions and articles
    value = _strip_repeated(TRAILING_FILLER_PATTERN, value)

    # 5. Party names stop at the next field label
    if field_type in ("buyer", "seller"):
        value = FIELD_BOUNDARY_PATTERN.split(value, maxsplit=1)[0].strip()

    # 6. First non-empty clause
    for segment in CLAUSE_SPLIT_PATTERN.split(value):
        segment = segment.strip()
        if segment:
            return segment
    return collapsed


def clean(raw_value: str, field_type: str) -> str:
    """
    Normalize a raw value for field_type.

    Steps: collapse whitespace, strip the field's leading phrase, cut an
    address at action verbs, strip trailing prepositions/articles, cut a
    party name at another field label, keep the first clause.

    The steps run until the value stops changing, so a value that only
    becomes strippable after an earlier step (e.g. ", to Jane") still
    settles on the same result when cleaned again.
    """
    if not raw_value:
        return ""

    value = raw_value
    # Every pass returns a substring of its input or the input itself,
    # so this terminates.
    for _ in range(len(raw_value) + 1):
        cleaned = _clean_once(value, field_type)
        if cleaned == value:
            break
        value = cleaned
    return value
