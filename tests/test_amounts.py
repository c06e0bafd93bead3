"""
Unit tests for amount normalization.
"""
from decimal import Decimal

import pytest

from night_audit.parsing.amounts import parse_amount, parse_metric


class TestParseAmount:
    """Tests for parse_amount."""

    def test_parse_currency(self):
        """Test parsing a dollar amount with thousand separators."""
        assert parse_amount("$1,234.56") == Decimal("1234.56")

    def test_parse_negative_parentheses_with_currency(self):
        """Test accounting negatives with a currency symbol."""
        assert parse_amount("($1,234.56)") == Decimal("-1234.56")

    def test_parse_negative_parentheses(self):
        """Test accounting negatives without a currency symbol."""
        assert parse_amount("(123.45)") == Decimal("-123.45")

    def test_parse_minus_sign(self):
        """Test a minus sign inside the currency token."""
        assert parse_amount("$-5.00") == Decimal("-5.00")

    def test_parse_plain_number(self):
        """Test a bare number."""
        assert parse_amount("980.63") == Decimal("980.63")

    @pytest.mark.parametrize("token", ["$abc.def", "$1-2", "(abc)", "$", "", "   ", "$1.2.3"])
    def test_malformed_amounts_become_zero(self, token: str):
        """Test that unparsable tokens degrade to zero."""
        assert parse_amount(token) == Decimal("0")

    def test_non_finite_values_become_zero(self):
        """Test that NaN-like tokens never leak through."""
        assert parse_amount("NaN") == Decimal("0")
        assert parse_amount("Infinity") == Decimal("0")

    def test_zero_amount(self):
        """Test a zero amount stays zero."""
        assert parse_amount("$0.00") == Decimal("0")


class TestParseMetric:
    """Tests for parse_metric."""

    def test_parse_count(self):
        """Test a count with a thousand separator."""
        assert parse_metric("1,026") == Decimal("1026")

    def test_parse_percentage_value(self):
        """Test a percentage value."""
        assert parse_metric("51.11") == Decimal("51.11")

    def test_parse_malformed(self):
        """Test a malformed metric."""
        assert parse_metric("n/a") == Decimal("0")
