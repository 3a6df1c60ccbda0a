"""
Tests for the Confidence Aggregator
"""

import pytest

from state import ExtractionSpan, ExtractionMethod, new_field_set
from nodes.confidence import (
    CONFIDENCE_RULES,
    CONFIDENCE_RULES_VERSION,
    aggregate_confidence,
)


def full_regex_fields(address_conf=0.8, party_conf=0.8, date_conf=0.9):
    fields = new_field_set()
    fields["address"] = ExtractionSpan("123 Main St", 0, 11, address_conf, ExtractionMethod.REGEX)
    fields["buyer"] = ExtractionSpan("Jane Smith", 12, 22, party_conf, ExtractionMethod.REGEX)
    fields["seller"] = ExtractionSpan("John Doe", 23, 31, party_conf, ExtractionMethod.REGEX)
    fields["date"] = ExtractionSpan("2025-06-15", 32, 45, date_conf, ExtractionMethod.DATE_PARSER)
    return fields


class TestRuleTable:

    def test_rules_are_versioned(self):
        assert isinstance(CONFIDENCE_RULES_VERSION, int)

    def test_rule_deltas(self):
        deltas = {rule.name: rule.delta for rule in CONFIDENCE_RULES}
        assert deltas == {
            "buyer_and_seller_from_regex": 0.10,
            "fallback_used": -0.10,
            "overlap_trimmed": -0.05,
        }


class TestAggregateConfidence:

    def test_empty_fields(self):
        assert aggregate_confidence(new_field_set(), 0) == 0.0

    def test_all_regex_fields(self):
        # mean 0.825 plus the buyer/seller bonus
        assert aggregate_confidence(full_regex_fields(), 0) == 0.93

    def test_trim_penalty(self):
        fields = full_regex_fields()
        untrimmed = aggregate_confidence(fields, 0)
        trimmed = aggregate_confidence(fields, 2)
        assert untrimmed - trimmed == pytest.approx(0.05, abs=0.011)

    def test_fallback_penalty(self):
        fields = full_regex_fields()
        fields["address"].method = ExtractionMethod.RULES_FALLBACK
        assert aggregate_confidence(fields, 0) == pytest.approx(0.83, abs=0.011)

    def test_no_bonus_when_party_missing(self):
        fields = full_regex_fields()
        fields["seller"] = ExtractionSpan.empty()
        # (0.8 + 0.8 + 0 + 0.9) / 4
        assert aggregate_confidence(fields, 0) == pytest.approx(0.63, abs=0.011)

    def test_no_bonus_for_fallback_party(self):
        fields = full_regex_fields()
        fields["buyer"].method = ExtractionMethod.RULES_FALLBACK
        with_fallback = aggregate_confidence(fields, 0)
        assert with_fallback < aggregate_confidence(full_regex_fields(), 0) - 0.15

    def test_clamped_to_one(self):
        assert aggregate_confidence(full_regex_fields(1.0, 1.0, 1.0), 0) == 1.0

    def test_clamped_to_zero(self):
        fields = new_field_set()
        fields["address"] = ExtractionSpan("x", -1, -1, 0.0, ExtractionMethod.RULES_FALLBACK)
        assert aggregate_confidence(fields, 3) == 0.0

    @pytest.mark.parametrize("trimmed", [0, 1])
    def test_rounded_to_two_decimals(self, trimmed):
        fields = full_regex_fields(0.77, 0.63, 0.91)
        score = aggregate_confidence(fields, trimmed)
        assert 0.0 <= score <= 1.0
        assert score == round(score, 2)
