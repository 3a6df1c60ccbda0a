"""
Pattern Catalog - Ordered match rules per field

Rules for a field are tried in order and the first usable match wins.
Ordering encodes preference:
1. Explicit labels ("buyer is X", "buyer: X", quoted values, pipe/semicolon lists)
2. Prepositional phrasing ("sold to X", "from X", "X purchased")
3. Legal phrasing ("grantee: X", "conveys ... to X")

Every capture is bounded on the right by field keywords, punctuation or
action verbs so a value does not run into the next clause.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Tuple


@dataclass(frozen=True)
class MatchRule:
    """A single regex rule plus the group holding the field value."""
    name: str
    pattern: Pattern[str]
    group: int = 1

    def search(self, text: str) -> Optional[Tuple[str, int, int]]:
        """
        Apply the rule to text.

        Returns:
            (captured_text, start, end) or None. Falls back to the whole match
            when the configured group is absent or did not participate.
        """
        match = self.pattern.search(text)
        if not match:
            return None
        group = self.group
        if group > (match.re.groups or 0) or match.group(group) is None:
            group = 0
        return match.group(group), match.start(group), match.end(group)


def _rule(name: str, pattern: str, group: int = 1) -> MatchRule:
    return MatchRule(name=name, pattern=re.compile(pattern, re.IGNORECASE), group=group)


# ============================================================================
# Shared Fragments
# ============================================================================

STREET_SUFFIXES = [
    "st", "street", "ave", "avenue", "rd", "road", "blvd", "boulevard",
    "dr", "drive", "ln", "lane", "ct", "court", "way", "pl", "place", "unit",
]

ACTION_VERBS = ["was", "sold", "transferred", "conveyed", "to", "from"]

FIELD_KEYWORDS = ["seller", "buyer", "address", "date"]

_SUFFIX = "(?:" + "|".join(STREET_SUFFIXES) + ")"

# Words that may not appear inside a street name
_ADDRESS_STOP = "(?:" + "|".join(ACTION_VERBS + ["is", "on"] + FIELD_KEYWORDS) + ")"

# Value characters: anything up to punctuation, a pipe or a line break
_VALUE = r"[^,.;|\n]"

# First and last character of a value
_EDGE = r"[^\s,.;|\n]"

# Shortest value that starts and ends on a non-space character. Pinning both
# edges keeps the stop lookaheads from being retried inside whitespace runs.
_CAPTURE = rf"({_EDGE}(?:{_VALUE}*?{_EDGE})??)"

# Same, for labels where a double quote also ends the value
_LABEL_CAPTURE = r'([^\s,.;|\n"](?:[^,.;|\n"]*?[^\s,.;|\n"])??)'

# Start of a clause: beginning of text or just after a delimiter
_CLAUSE_START = r"(?:^|(?<=[,.;|\n]))"

_END = r"\s*[,.;|]|\s*$"


# ============================================================================
# Primary Rules
# ============================================================================

ADDRESS_RULES: List[MatchRule] = [
    # House number, up to five street-name words, street suffix, optional unit.
    # Street-name words cannot be an action verb, keyword or a 4-digit year.
    _rule(
        "house_number_street",
        rf"\b(\d+[a-z]?(?:-\d+[a-z]?)?(?:\s+(?!{_ADDRESS_STOP}\b|\d{{4}}\b)[^\s,.;|\n]+){{0,5}}?"
        rf"\s+{_SUFFIX}\b(?:\s+unit\s+[a-z0-9-]+)?)",
    ),
    _rule("address_is", rf"\baddress\s+is\s+{_CAPTURE}(?={_END})"),
    _rule("address_label", rf"\baddress\b\s*:?\s*{_LABEL_CAPTURE}(?=\s+(?:was|is)\b|{_END})"),
    _rule(
        "located_at",
        rf"\b(?:property\s+at|located\s+at|at)\s+{_CAPTURE}"
        rf"(?=\s+(?:was|sold|transferred|conveyed|to|from)\b|{_END})",
    ),
]

BUYER_RULES: List[MatchRule] = [
    _rule("buyer_is", rf"\bbuyer\s+is\s+{_CAPTURE}(?=\s+(?:seller|address|date)\b|{_END})"),
    _rule("buyer_quoted", r"\bbuyer\b\s*:?\s*\"([^\"\n]+)\""),
    _rule("buyer_label", rf"\bbuyer\b\s*:?\s*{_LABEL_CAPTURE}(?=\s+(?:seller|address|date)\b|{_END})"),
    _rule("sold_to", rf"\bsold\s+to\s+{_CAPTURE}(?=\s+(?:on|for|from|by|effective)\b|{_END})"),
    _rule("to_party", rf"\bto\s+{_CAPTURE}(?=\s+(?:on|for|under|per|from|by|effective)\b|{_END})"),
    _rule("party_purchased", rf"{_CLAUSE_START}({_VALUE}*?{_EDGE})\s+(?:purchased|bought)\b"),
    _rule("grantee", rf"\bgrantee\b\s*:?\s*{_CAPTURE}(?={_END})"),
    _rule(
        "conveys_to",
        rf"\bconveys?\s+(?:{_EDGE}+\s+)*?to\s+{_CAPTURE}(?=\s+(?:effective|on)\b|{_END})",
    ),
]

SELLER_RULES: List[MatchRule] = [
    _rule("seller_is", rf"\bseller\s+is\s+{_CAPTURE}(?=\s+(?:buyer|address|date)\b|{_END})"),
    _rule("seller_quoted", r"\bseller\b\s*:?\s*\"([^\"\n]+)\""),
    _rule("seller_label", rf"\bseller\b\s*:?\s*{_LABEL_CAPTURE}(?=\s+(?:buyer|address|date)\b|{_END})"),
    _rule("undersigned_seller", rf"\bseller,?\s+{_CAPTURE}(?=\s+(?:hereby|to|on)\b|{_END})"),
    _rule("sold_by", rf"\bsold\s+by\s+{_CAPTURE}(?=\s+(?:to|on)\b|{_END})"),
    _rule("from_party", rf"\bfrom\s+{_CAPTURE}(?=\s+(?:to|on)\b|{_END})"),
    _rule("party_sold", rf"{_CLAUSE_START}({_VALUE}*?{_EDGE})\s+(?:sold|transferred)\b"),
    _rule("grantor", rf"\bgrantor\b\s*:?\s*{_CAPTURE}(?={_END})"),
]

PATTERN_CATALOG: Dict[str, List[MatchRule]] = {
    "address": ADDRESS_RULES,
    "buyer": BUYER_RULES,
    "seller": SELLER_RULES,
}


# ============================================================================
# Post-Processing Rules
# ============================================================================

# Leading phrases stripped from a matched value
POST_PROCESS_PATTERNS: Dict[str, Pattern[str]] = {
    "address": re.compile(r"^(?:at\s+|address\s+)", re.IGNORECASE),
    "buyer": re.compile(r"^(?:buyer(?:\s+is)?\s+|to\s+)", re.IGNORECASE),
    "seller": re.compile(
        r"^(?:seller\s+is\s+|seller\s+|from\s+|grantor\s+|sold\s+by\s+|is\s+|:\s*)",
        re.IGNORECASE,
    ),
    "date": re.compile(r"^(?:date\s+is\s+|date\s+|on\s+)", re.IGNORECASE),
}

# An address ends where an action verb or the date label begins
ADDRESS_CUTOFF_PATTERN = re.compile(
    r"\b(?:was|sold|transferred|conveyed|to|from|date)\b", re.IGNORECASE
)

TRAILING_FILLER_PATTERN = re.compile(r"\s+(?:to|from|by|at|in|on|the|a|an)$", re.IGNORECASE)

# A party name ends where another field label begins
FIELD_BOUNDARY_PATTERN = re.compile(r"\b(?:seller|buyer|address|date)\s", re.IGNORECASE)

CLAUSE_SPLIT_PATTERN = re.compile(r"[,.;]")


# ============================================================================
# Fallback Rules
# ============================================================================

# Looser, single-pattern rules used only for empty or low-confidence fields
_LOOSE_CAPTURE = r"([^\s,\n](?:[^,\n]*?[^\s,\n])??)"

FALLBACK_RULES: Dict[str, MatchRule] = {
    "address": _rule(
        "address_loose",
        r"\b(?:address|property|location|at)\b\s*:?\s*([^,\n]+)",
    ),
    "buyer": _rule(
        "buyer_loose",
        rf"\b(?:buyer|purchased?\s+by|sold\s+to|to)\b\s*:?\s*{_LOOSE_CAPTURE}(?=\s+(?:on|from)\b|\s*[,\n]|\s*$)",
    ),
    "seller": _rule(
        "seller_loose",
        rf"\b(?:seller|sold\s+by|from)\b\s*:?\s*{_LOOSE_CAPTURE}(?=\s+(?:to|on)\b|\s*[,\n]|\s*$)",
    ),
}
