"""
Utilities for handing extracted fields to the PDF form filler.
Maps engine field names to form field names and summarizes extraction health
for the review UI.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Any, Mapping

from state import FIELD_NAMES

DEFAULT_LOW_CONFIDENCE_THRESHOLD = 0.75

# Engine field name -> PDF form field name
FIELD_MAPPING: Dict[str, str] = {
    "address": "propertyAddress",
    "buyer": "buyer",
    "seller": "seller",
    "date": "date",
}


@dataclass
class ExtractionHealth:
    """Summary used to decide whether to warn the user before filling the form."""
    has_issues: bool
    has_empty_fields: bool
    is_low_confidence: bool
    filled_count: int
    total_fields: int = len(FIELD_NAMES)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def map_to_pdf_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Rename extracted fields to PDF form field names.

    Keys without a form field (confidence, spans, ...) are dropped.

    Example:
        {"address": "123 Main St", "confidence": 0.9}
        -> {"propertyAddress": "123 Main St"}
    """
    return {
        FIELD_MAPPING[key]: value
        for key, value in data.items()
        if key in FIELD_MAPPING
    }


def assess_extraction_health(
    fields: Mapping[str, Any],
    low_confidence_threshold: float = DEFAULT_LOW_CONFIDENCE_THRESHOLD,
) -> ExtractionHealth:
    """
    Check an extracted (or user-edited) field set for gaps and low confidence.
    """
    values = [fields.get(name) or "" for name in FIELD_NAMES]
    has_empty_fields = not all(values)
    is_low_confidence = float(fields.get("confidence") or 0.0) < low_confidence_threshold

    return ExtractionHealth(
        has_issues=has_empty_fields or is_low_confidence,
        has_empty_fields=has_empty_fields,
        is_low_confidence=is_low_confidence,
        filled_count=sum(1 for value in values if str(value).strip()),
    )
