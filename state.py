from typing import TypedDict, List, Dict, Optional, Any
from dataclasses import dataclass, field
from enum import Enum

# ============================================================================
# Field Contract
# ============================================================================

# Stable field names consumed by the HTTP layer and the PDF form filler.
FIELD_NAMES = ("address", "buyer", "seller", "date")


class ExtractionMethod(Enum):
    """Provenance of an extracted value."""
    REGEX = "regex"
    DATE_PARSER = "date_parser"
    RULES_FALLBACK = "rules_fallback"
    NONE = "none"


# ============================================================================
# Extraction Data Models
# ============================================================================

@dataclass
class ExtractionSpan:
    """
    The extracted value for one field plus its location in the source text.

    start/end are half-open character offsets into the original input.
    Both are -1 when nothing was matched or the match was discarded.
    """
    value: str = ""
    start: int = -1
    end: int = -1
    confidence: float = 0.0
    method: ExtractionMethod = ExtractionMethod.NONE

    @classmethod
    def empty(cls) -> "ExtractionSpan":
        return cls()

    @property
    def has_span(self) -> bool:
        """True when the span points at a non-empty range of the source text."""
        return self.start >= 0 and self.end > self.start

    def clear(self) -> None:
        """Reset to the empty state in place."""
        self.value = ""
        self.start = -1
        self.end = -1
        self.confidence = 0.0
        self.method = ExtractionMethod.NONE

    def as_span(self) -> Optional[List[int]]:
        return [self.start, self.end] if self.has_span else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "start": self.start,
            "end": self.end,
            "confidence": self.confidence,
            "method": self.method.value,
        }


# Always holds exactly the keys in FIELD_NAMES.
FieldSet = Dict[str, ExtractionSpan]


def new_field_set() -> FieldSet:
    """Create a FieldSet with every field empty."""
    return {name: ExtractionSpan.empty() for name in FIELD_NAMES}


@dataclass
class ExtractionResult:
    """
    Final output of one extraction call.

    `spans` is debug information for tests and internal callers; the HTTP
    layer strips it before responding.
    """
    address: str = ""
    buyer: str = ""
    seller: str = ""
    date: str = ""
    confidence: float = 0.0
    spans: Dict[str, Optional[List[int]]] = field(
        default_factory=lambda: {name: None for name in FIELD_NAMES}
    )

    @classmethod
    def empty(cls) -> "ExtractionResult":
        """The canonical degraded result: every field blank, zero confidence."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in FIELD_NAMES)

    def to_dict(self, include_spans: bool = True) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "address": self.address,
            "buyer": self.buyer,
            "seller": self.seller,
            "date": self.date,
            "confidence": self.confidence,
        }
        if include_spans:
            result["spans"] = dict(self.spans)
        return result


# ============================================================================
# Pipeline State
# ============================================================================

class ExtractionState(TypedDict, total=False):
    """
    State passed between the extraction graph nodes.

    A fresh state is created for every call; nothing is shared between calls.
    """
    text: str
    fields: FieldSet
    trimmed_count: int
    confidence: float
    result: Optional[ExtractionResult]
