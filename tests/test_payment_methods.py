"""
Unit tests for card-brand detection.
"""
import pytest

from night_audit.parsing.payment_methods import detect_payment_method


class TestDetectPaymentMethod:
    """Tests for detect_payment_method."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("AX|PAYMENT AMEX|6|($2,486.57)", "AMEX"),
            ("VS|PAYMENT VISA/MC|27|($11,818.16)", "VISA"),
            ("MC|PAYMENT MASTERCARD|4|($310.00)", "MASTER"),
            ("DC|PAYMENT DISCOVER|0|$0.00", "DISCOVER"),
            ("AE|AMERICAN EXPRESS|1|($50.00)", "AMEX"),
            ("AXPAYMENT AMEX6($2,486.57)", "AMEX"),
        ],
    )
    def test_detects_brand(self, line: str, expected: str):
        """Test brand tokens delimited by pipes, spaces, slashes, or digits."""
        assert detect_payment_method(line) == expected

    def test_case_insensitive(self):
        """Test lowercase brand names."""
        assert detect_payment_method("xx|payment visa|1|$1.00") == "VISA"

    def test_priority_order(self):
        """Test VISA wins over AMEX on the same line."""
        assert detect_payment_method("ZZ|VISA AND AMEX|2|$5.00") == "VISA"

    @pytest.mark.parametrize(
        "line",
        [
            "PV|PAYMENT VISAS|1|$1.00",
            "RC|TAMEX CHARGE|1|$1.00",
            "RC|REMASTERED ROOM|1|$1.00",
            "RC|ROOM CHRG REVENUE|50|$10,107.15",
            "",
        ],
    )
    def test_no_match_inside_words(self, line: str):
        """Test brand substrings inside other words are ignored."""
        assert detect_payment_method(line) is None
