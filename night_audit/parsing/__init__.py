"""Parsing package."""
from night_audit.parsing.account_line_parser import AccountLineParser
from night_audit.parsing.amounts import parse_amount, parse_metric
from night_audit.parsing.line_classifier import classify_line
from night_audit.parsing.models import (
    AccountLine,
    LineKind,
    ParserConfig,
    ParsingStats,
    PaymentMethodGroup,
)
from night_audit.parsing.payment_methods import detect_payment_method
from night_audit.parsing.posting_codes import PostingCode, extract_valid_posting_code
from night_audit.parsing.sections import SectionState, next_section

__all__ = [
    "AccountLine",
    "AccountLineParser",
    "LineKind",
    "ParserConfig",
    "ParsingStats",
    "PaymentMethodGroup",
    "PostingCode",
    "SectionState",
    "classify_line",
    "detect_payment_method",
    "extract_valid_posting_code",
    "next_section",
    "parse_amount",
    "parse_metric",
]
