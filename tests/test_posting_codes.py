"""
Unit tests for posting-code extraction.
"""
from night_audit.parsing.models import MAX_POSTING_CODE_LENGTH
from night_audit.parsing.posting_codes import PostingCode, extract_valid_posting_code


class TestExtractValidPostingCode:
    """Tests for extract_valid_posting_code."""

    def test_longest_match_wins(self):
        """Test "91" is preferred over "9" when both are valid."""
        result = extract_valid_posting_code("91CITY TAX", {"9", "91"})
        assert result == PostingCode(code="91", remaining_text="CITY TAX")

    def test_shorter_code_when_longer_invalid(self):
        """Test falling back to the shorter valid code."""
        result = extract_valid_posting_code("9CITY LODGING TAX", {"9", "91"})
        assert result.code == "9"
        assert result.remaining_text == "CITY LODGING TAX"

    def test_case_insensitive_match(self):
        """Test lowercase input against an uppercase whitelist."""
        result = extract_valid_posting_code("pet1 PET FEE", {"PET1", "P"})
        assert result.code == "PET1"
        assert result.remaining_text == "PET FEE"

    def test_no_whitelist_match(self):
        """Test None when no prefix is whitelisted."""
        assert extract_valid_posting_code("9CITY TAX", {"RC", "RD", "P"}) is None

    def test_fallback_without_whitelist(self):
        """Test the first two characters become the code without a whitelist."""
        result = extract_valid_posting_code("9CITY TAX", None)
        assert result.code == "9C"
        assert result.remaining_text == "ITY TAX"

    def test_fallback_with_empty_whitelist(self):
        """Test an empty whitelist behaves like no whitelist."""
        result = extract_valid_posting_code("71ADV DEP", set())
        assert result.code == "71"

    def test_fallback_no_alphanumeric(self):
        """Test fallback returns None for text without a code."""
        assert extract_valid_posting_code("--", None) is None

    def test_codes_longer_than_bound_are_not_tried(self):
        """Test the extractor never looks past the maximum code length."""
        long_code = "A" * (MAX_POSTING_CODE_LENGTH + 1)
        assert extract_valid_posting_code(long_code + "X", {long_code}) is None

    def test_code_at_bound(self):
        """Test a code exactly at the maximum length."""
        code = "ABCDEFGH"[:MAX_POSTING_CODE_LENGTH]
        result = extract_valid_posting_code(code + " DESC", {code})
        assert result.code == code
