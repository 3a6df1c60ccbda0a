"""
Tests for the Post-Processor (clean)
"""

import pytest

from nodes.cleaner import clean


class TestWhitespace:

    def test_collapses_and_trims(self):
        assert clean("  123   Main\tSt  ", "address") == "123 Main St"

    def test_empty(self):
        assert clean("", "buyer") == ""

    def test_whitespace_only(self):
        assert clean("   ", "seller") == ""


class TestLeadingPhrases:
    """Field-specific leading phrases are removed."""

    @pytest.mark.parametrize("raw,field,expected", [
        ("at 123 Main St", "address", "123 Main St"),
        ("address 123 Main St", "address", "123 Main St"),
        ("buyer is Jane Smith", "buyer", "Jane Smith"),
        ("Buyer Jane Smith", "buyer", "Jane Smith"),
        ("to Jane Smith", "buyer", "Jane Smith"),
        ("seller is John Doe", "seller", "John Doe"),
        ("from Acme LLC", "seller", "Acme LLC"),
        ("sold by John Doe", "seller", "John Doe"),
        ("grantor Jane Roe", "seller", "Jane Roe"),
        (": Robert Wilson", "seller", "Robert Wilson"),
        ("date is June 15", "date", "June 15"),
        ("on 2025-06-15", "date", "2025-06-15"),
    ])
    def test_leading_phrase(self, raw, field, expected):
        assert clean(raw, field) == expected

    def test_repeated_leading_phrases(self):
        assert clean("seller is from Acme LLC", "seller") == "Acme LLC"


class TestTruncation:

    def test_address_stops_at_action_verb(self):
        assert clean("123 Main St was sold", "address") == "123 Main St"

    def test_address_stops_at_date_label(self):
        assert clean("9 Elm Rd date 2025-01-01", "address") == "9 Elm Rd"

    def test_trailing_prepositions(self):
        assert clean("Jane Smith on", "buyer") == "Jane Smith"
        assert clean("John Doe to the", "seller") == "John Doe"

    def test_party_stops_at_field_label(self):
        assert clean("John Doe seller Jane", "buyer") == "John Doe"
        assert clean("Jane Roe address 1 Elm St", "seller") == "Jane Roe"

    def test_first_clause(self):
        assert clean("Jane Smith, and others", "buyer") == "Jane Smith"
        assert clean("Acme LLC; Beta Inc", "seller") == "Acme LLC"

    def test_leading_delimiter_skipped(self):
        assert clean(", Jane Smith", "buyer") == "Jane Smith"


class TestIdempotence:
    """Cleaning an already cleaned value changes nothing."""

    @pytest.mark.parametrize("raw,field", [
        ("  at 123 Main St was sold  ", "address"),
        ("buyer is Jane Smith, on June 15", "buyer"),
        ("seller is from Acme LLC to", "seller"),
        (", to Jane", "buyer"),
        ("date is 2025-06-15.", "date"),
        ("2028: Robert Wilson", "seller"),
        ("the the the", "buyer"),
        ("to to to Jane", "buyer"),
        ("Zoé Müller à Paris", "buyer"),
        (";;;", "address"),
    ])
    def test_clean_twice(self, raw, field):
        once = clean(raw, field)
        assert clean(once, field) == once
