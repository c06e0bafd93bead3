"""
Line classifier for night-audit report text.

Each report line is tested against an ordered cascade of rules. The first
rule whose pattern matches decides the outcome; if its extractor rejects the
line (below threshold, filtered refund, no valid posting code) the line
yields nothing and later rules are not tried.

Classification cascade:
1. Ledger balance        GUEST LEDGER|$21,084.73
2. Payment-method total  AMEX|($2,486.57)
3. Summary total         Total Rm Rev|$9,949.23
4. Embedded code         RC|ROOM CHRG REVENUE|50|$10,107.15
5. GL/CL with code       GL ROOM TAX REV|9|CITY LODGING TAX|49|$980.63
6. GL/CL summary         CL DB CONTROL|6|$393.02
   GL/CL without pipes   GL ROOM TAX REV9CITY TAX29$786.57
                         GL CASH & CHECKS REVCHPAYMENT CASH3$100.00
7. Statistical           Occupied|46|1,026
8. Category detail       Guest 021|X3|PET CHARGE|3|$60.00
9. Category summary      DIRECT BILLS|3|$385.36
"""
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional, Tuple

import structlog

from night_audit.parsing.amounts import parse_amount, parse_metric
from night_audit.parsing.models import (
    LEDGER_DESCRIPTION,
    PAYMENT_TOTAL_DESCRIPTION,
    STATISTICAL_DESCRIPTION,
    SUMMARY_DESCRIPTION,
    AccountLine,
    LineKind,
    ParserConfig,
)
from night_audit.parsing.payment_methods import detect_payment_method
from night_audit.parsing.posting_codes import PostingCode, extract_valid_posting_code
from night_audit.parsing.sections import SectionState

logger = structlog.get_logger(__name__)

# $1,234.56  $-5.00  (1,234.56)  ($1,234.56)
AMOUNT = r"(\$[\d,.-]+|\(\$?[\d,.-]+\))"

LEDGER_PATTERN = re.compile(
    r"^((?:GUEST\s+LEDGER|CITY\s+LEDGER|ADVANCE\s+DEPOSITS)(?:\s+TOTAL)?)\|" + AMOUNT,
    re.IGNORECASE,
)
PAYMENT_TOTAL_PATTERN = re.compile(
    r"^(VISA/MASTER|VISA|MASTER|MASTERCARD|AMEX|DISCOVER|CASH|CHECKS)\|" + AMOUNT
)
SUMMARY_PATTERN = re.compile(
    r"^(Total\s+[A-Z\s]+|ADR|RevPar|Occupancy\s*%?|DEPOSIT\s+TOTAL)\|" + AMOUNT,
    re.IGNORECASE,
)
EMBEDDED_PATTERN = re.compile(r"^([A-Za-z0-9]+)\|([^|]+)\|(\d+)\|" + AMOUNT)
GLCL_CODED_PATTERN = re.compile(r"^(GL|CL)\s+([^|]+)\|([A-Z0-9]+)\|([^|]+)\|(\d+)\|" + AMOUNT)
GLCL_SUMMARY_PATTERN = re.compile(r"^(GL|CL)\s+([^|]+)\|(\d+)\|" + AMOUNT)
# No delimiters: category, code and description run together before count+amount.
GLCL_COMPACT_PATTERN = re.compile(r"^(GL|CL)\s+([^|$()]+?)(\d+)" + AMOUNT)
STATISTICAL_PATTERN = re.compile(
    r"^(Occupied|No\s+Show|Late\s+C/I|Early\s+C/O|Total\s+Rooms|Out\s+of\s+Service|Comps|Occupancy\s*%)"
    r"\|(\d[\d,]*(?:\.\d+)?)",
    re.IGNORECASE,
)
CATEGORY_DETAIL_PATTERN = re.compile(r"^([^|]+)\|([A-Z0-9]+)\|([^|]+)\|(\d+)\|" + AMOUNT)
CATEGORY_SUMMARY_PATTERN = re.compile(r"^([A-Za-z]+(?:\s+[A-Za-z]+)+)\|(\d+)\|" + AMOUNT)

FIRST_DIGIT_PATTERN = re.compile(r"\d")

# Advance-deposit refunds are excluded from journal entries.
REFUND_PREFIX = "REFUND AD"
REFUND_PREPAID = "REFUND PREPAID"


@dataclass(frozen=True)
class LineContext:
    """Everything an extractor needs besides the regex match."""
    line: str
    line_number: int
    section: SectionState
    config: ParserConfig


Extractor = Callable[[re.Match, LineContext], Optional[AccountLine]]


@dataclass(frozen=True)
class LineRule:
    """
    One step of the classification cascade.

    ``name`` labels the line shape the pattern recognizes. The kind of the
    emitted record is decided by the extractor; the compact GL/CL rule
    yields either glcl_coded or glcl_summary records.
    """
    name: str
    pattern: re.Pattern
    extract: Extractor


def _passes_threshold(amount: Decimal, config: ParserConfig) -> bool:
    return config.include_zero_amounts or abs(amount) >= config.minimum_amount


def _currency_line(
    ctx: LineContext,
    kind: LineKind,
    source_code: str,
    description: str,
    amount_str: str,
    payment_method: Optional[str] = None,
) -> Optional[AccountLine]:
    amount = parse_amount(amount_str)
    if not _passes_threshold(amount, ctx.config):
        logger.debug(
            "Line below minimum amount",
            line_number=ctx.line_number,
            kind=kind.value,
            amount=str(amount),
        )
        return None

    return AccountLine(
        source_code=source_code,
        description=description,
        amount=amount,
        payment_method=payment_method,
        original_line=ctx.line,
        line_number=ctx.line_number,
        kind=kind,
    )


def _extract_ledger(match: re.Match, ctx: LineContext) -> Optional[AccountLine]:
    ledger_type, amount_str = match.groups()
    return _currency_line(ctx, LineKind.LEDGER, ledger_type.strip(), LEDGER_DESCRIPTION, amount_str)


def _extract_payment_total(match: re.Match, ctx: LineContext) -> Optional[AccountLine]:
    # Summary of card-brand totals; no payment_method so consolidation
    # does not count the brand twice.
    payment_type, amount_str = match.groups()
    return _currency_line(
        ctx, LineKind.PAYMENT_TOTAL, payment_type, PAYMENT_TOTAL_DESCRIPTION, amount_str
    )


def _extract_summary(match: re.Match, ctx: LineContext) -> Optional[AccountLine]:
    summary_type, amount_str = match.groups()
    return _currency_line(ctx, LineKind.SUMMARY, summary_type.strip(), SUMMARY_DESCRIPTION, amount_str)


def _extract_embedded(match: re.Match, ctx: LineContext) -> Optional[AccountLine]:
    source_code, description, _count, amount_str = match.groups()
    description = description.strip()

    if description.startswith(REFUND_PREFIX) or description == REFUND_PREPAID:
        logger.debug("Skipping advance deposit refund", line_number=ctx.line_number, description=description)
        return None

    return _currency_line(
        ctx,
        LineKind.EMBEDDED,
        source_code.strip(),
        description,
        amount_str,
        payment_method=detect_payment_method(ctx.line),
    )


def _extract_glcl_coded(match: re.Match, ctx: LineContext) -> Optional[AccountLine]:
    _prefix, category, source_code, description, _count, amount_str = match.groups()
    return _currency_line(
        ctx,
        LineKind.GLCL_CODED,
        source_code.strip(),
        f"{category.strip()} {description.strip()}".strip(),
        amount_str,
        payment_method=detect_payment_method(ctx.line),
    )


def _extract_glcl_summary(match: re.Match, ctx: LineContext) -> Optional[AccountLine]:
    prefix, category, _count, amount_str = match.groups()
    source_code = f"{prefix} {category.strip()}"
    return _currency_line(
        ctx,
        LineKind.GLCL_SUMMARY,
        source_code,
        source_code,
        amount_str,
        payment_method=detect_payment_method(ctx.line),
    )


def _split_at_first_digit(blob: str, whitelist) -> Optional[Tuple[str, PostingCode]]:
    digit = FIRST_DIGIT_PATTERN.search(blob)
    if digit is None:
        return None
    posting = extract_valid_posting_code(blob[digit.start():], whitelist)
    if posting is None:
        return None
    return blob[:digit.start()].strip(), posting


def _split_at_whitelisted_code(blob: str, whitelist) -> Optional[Tuple[str, PostingCode]]:
    """
    Find the split where a whitelisted code starts inside ``blob``.

    Alphabetic codes ("CH" in "CASH & CHECKS REVCHPAYMENT CASH") carry no
    digit to split on, so every position after the first character is tried.
    The longest code wins; among equal lengths the rightmost split wins so
    the category stays whole.
    """
    best: Optional[Tuple[str, PostingCode]] = None
    for start in range(1, len(blob)):
        if blob[start].isspace():
            continue
        posting = extract_valid_posting_code(blob[start:], whitelist)
        if posting is None:
            continue
        if best is None or len(posting.code) >= len(best[1].code):
            best = blob[:start].strip(), posting
    return best


def _extract_glcl_compact(match: re.Match, ctx: LineContext) -> Optional[AccountLine]:
    prefix, blob, _count, amount_str = match.groups()
    blob = blob.strip()
    payment_method = detect_payment_method(ctx.line)
    whitelist = ctx.config.valid_source_codes
    has_digit = FIRST_DIGIT_PATTERN.search(blob) is not None

    split = None
    if ctx.section != SectionState.DETAIL_LISTING_SUMMARY:
        split = _split_at_first_digit(blob, whitelist)
        if split is None and whitelist:
            split = _split_at_whitelisted_code(blob, whitelist)

    if split is None:
        if has_digit and ctx.section != SectionState.DETAIL_LISTING_SUMMARY:
            logger.debug("No valid posting code", line_number=ctx.line_number, text=blob)
            return None
        source_code = f"{prefix} {blob}"
        return _currency_line(
            ctx, LineKind.GLCL_SUMMARY, source_code, source_code, amount_str, payment_method
        )

    category, posting = split
    return _currency_line(
        ctx,
        LineKind.GLCL_CODED,
        posting.code,
        f"{category} {posting.remaining_text}".strip(),
        amount_str,
        payment_method,
    )


def _extract_statistical(match: re.Match, ctx: LineContext) -> Optional[AccountLine]:
    # Counts and percentages, never filtered by the currency threshold.
    stat_type, value_str = match.groups()
    return AccountLine(
        source_code=stat_type.strip(),
        description=STATISTICAL_DESCRIPTION,
        amount=parse_metric(value_str),
        original_line=ctx.line,
        line_number=ctx.line_number,
        kind=LineKind.STATISTICAL,
    )


def _extract_category_detail(match: re.Match, ctx: LineContext) -> Optional[AccountLine]:
    _category, source_code, description, _count, amount_str = match.groups()
    return _currency_line(
        ctx,
        LineKind.CATEGORY_DETAIL,
        source_code.strip(),
        description.strip(),
        amount_str,
        payment_method=detect_payment_method(ctx.line),
    )


def _extract_category_summary(match: re.Match, ctx: LineContext) -> Optional[AccountLine]:
    category, _count, amount_str = match.groups()
    source_code = category.strip()
    return _currency_line(
        ctx,
        LineKind.CATEGORY_SUMMARY,
        source_code,
        source_code,
        amount_str,
        payment_method=detect_payment_method(ctx.line),
    )


LINE_RULES: Tuple[LineRule, ...] = (
    LineRule("ledger", LEDGER_PATTERN, _extract_ledger),
    LineRule("payment_total", PAYMENT_TOTAL_PATTERN, _extract_payment_total),
    LineRule("summary", SUMMARY_PATTERN, _extract_summary),
    LineRule("embedded", EMBEDDED_PATTERN, _extract_embedded),
    LineRule("glcl_coded", GLCL_CODED_PATTERN, _extract_glcl_coded),
    LineRule("glcl_summary", GLCL_SUMMARY_PATTERN, _extract_glcl_summary),
    LineRule("glcl_compact", GLCL_COMPACT_PATTERN, _extract_glcl_compact),
    LineRule("statistical", STATISTICAL_PATTERN, _extract_statistical),
    LineRule("category_detail", CATEGORY_DETAIL_PATTERN, _extract_category_detail),
    LineRule("category_summary", CATEGORY_SUMMARY_PATTERN, _extract_category_summary),
)


def match_rule(line: str) -> Optional[Tuple[LineRule, re.Match]]:
    """
    Find the first cascade rule whose pattern matches ``line``.

    Args:
        line: Trimmed report line.

    Returns:
        Tuple of (rule, match), or None when no rule applies.
    """
    for rule in LINE_RULES:
        match = rule.pattern.match(line)
        if match:
            return rule, match
    return None


def classify_line(
    line: str,
    line_number: int,
    section: SectionState,
    config: ParserConfig,
) -> Optional[AccountLine]:
    """
    Classify one report line and extract its record.

    Args:
        line: Trimmed report line.
        line_number: 1-based line number in the report.
        section: Current report section.
        config: Parser options.

    Returns:
        AccountLine, or None when the line is not a record.
    """
    found = match_rule(line)
    if found is None:
        return None

    rule, match = found
    return rule.extract(match, LineContext(line, line_number, section, config))
