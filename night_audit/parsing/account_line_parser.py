"""
Account line parser for night-audit report text.

Turns the extracted text of one report into an ordered list of AccountLine
records, and offers payment-method grouping and parsing statistics on top of
that list.
"""
from collections import Counter
from decimal import Decimal
from typing import Any, Dict, List, Optional, Set

import structlog

from night_audit.parsing.line_classifier import classify_line
from night_audit.parsing.models import (
    AccountLine,
    LineKind,
    ParserConfig,
    ParsingStats,
    PaymentMethodGroup,
)
from night_audit.parsing.sections import SectionState, next_section

logger = structlog.get_logger(__name__)

# Operational metrics that the report may print more than once; only the
# first occurrence is kept.
STATISTICAL_CODES = frozenset({
    "ADR",
    "REVPAR",
    "OCCUPANCY",
    "OCCUPANCY %",
    "OCCUPANCY%",
    "OCCUPIED",
    "OUT OF SERVICE",
    "COMPS",
    "ROOMS SOLD",
    "ROOMS AVAILABLE",
    "NO SHOW",
    "LATE C/I",
    "EARLY C/O",
    "TOTAL ROOMS",
})

COMBINED_SOURCE_CODE = "CC"
MIN_LINE_LENGTH = 3


def normalize_statistical_code(source_code: str) -> str:
    """Uppercase a source code and collapse internal whitespace."""
    return " ".join(source_code.split()).upper()


def is_statistical_code(source_code: str) -> bool:
    """Check if a source code is an operational metric (ADR, Occupied, ...)."""
    return normalize_statistical_code(source_code) in STATISTICAL_CODES


class AccountLineParser:
    """
    Parser for night-audit report text.

    Features:
    - Ordered line classification (see line_classifier)
    - Section-aware handling of delimiter-poor GL/CL lines
    - First-wins de-duplication of statistical metrics
    - Payment-method grouping and consolidation
    """

    def __init__(self, config: Optional[ParserConfig] = None, **options: Any):
        """
        Initialize the parser.

        Args:
            config: Parser options. Built from ``options`` when omitted.
            **options: ParserConfig fields, applied on top of ``config``.

        Raises:
            ConfigurationError: If the options are invalid.
        """
        if config is None:
            config = ParserConfig.build(**options)
        elif options:
            config = ParserConfig.build(**{**config.model_dump(), **options})
        self.config = config

    def parse_account_lines(self, text: str) -> List[AccountLine]:
        """
        Parse report text into account lines.

        Args:
            text: Extracted text of one report.

        Returns:
            Account lines in report order.
        """
        lines = text.split("\n")
        account_lines: List[AccountLine] = []
        section = SectionState.UNKNOWN
        seen_statistical: Set[str] = set()

        logger.debug("Starting account line parsing", total_lines=len(lines))

        for index, raw_line in enumerate(lines):
            line = raw_line.strip()
            if len(line) < MIN_LINE_LENGTH:
                continue

            section, is_header = next_section(line, section)
            if is_header:
                logger.debug("Section changed", line_number=index + 1, section=section.value)
                continue

            account_line = classify_line(line, index + 1, section, self.config)
            if account_line is None:
                continue

            if is_statistical_code(account_line.source_code):
                code = normalize_statistical_code(account_line.source_code)
                if code in seen_statistical:
                    logger.debug(
                        "Skipping duplicate statistical code",
                        line_number=account_line.line_number,
                        source_code=account_line.source_code,
                    )
                    continue
                seen_statistical.add(code)

            account_lines.append(account_line)

        logger.debug(
            "Account line parsing completed",
            total_lines=len(lines),
            parsed_lines=len(account_lines),
        )

        return account_lines

    def _group_name_for(self, line: AccountLine) -> str:
        method = (line.payment_method or "").upper()
        description = line.description.upper()
        for group_name, members in self.config.payment_method_groups.items():
            for member in members:
                member = member.upper()
                if member == method or member in description:
                    return group_name
        return line.payment_method or ""

    def group_payment_methods(self, account_lines: List[AccountLine]) -> List[PaymentMethodGroup]:
        """
        Group payment-method lines by configured group.

        Lines whose method belongs to no configured group form a group named
        after the method itself.

        Args:
            account_lines: Parsed account lines.

        Returns:
            Groups in first-seen order; empty when combining is disabled.
        """
        if not self.config.combine_payment_methods:
            return []

        groups: Dict[str, PaymentMethodGroup] = {}
        for line in account_lines:
            if not line.payment_method:
                continue

            group_name = self._group_name_for(line)
            group = groups.get(group_name)
            if group is None:
                group = groups[group_name] = PaymentMethodGroup(group_name=group_name)

            group.payment_methods.append(line.payment_method)
            group.total_amount += line.amount
            group.account_lines.append(line)

        return list(groups.values())

    def get_consolidated_account_lines(self, text: str) -> List[AccountLine]:
        """
        Parse report text and combine configured payment-method groups.

        Each configured group is replaced by one "CC" line placed where the
        group's first member was. Other lines keep their order.

        Args:
            text: Extracted text of one report.

        Returns:
            Consolidated account lines.
        """
        account_lines = self.parse_account_lines(text)
        if not self.config.combine_payment_methods:
            return account_lines

        configured = self.config.payment_method_groups
        combined_at: Dict[int, AccountLine] = {}
        replaced: Set[int] = set()

        for group in self.group_payment_methods(account_lines):
            if group.group_name not in configured:
                continue

            member_ids = {id(line) for line in group.account_lines}
            first = min(i for i, line in enumerate(account_lines) if id(line) in member_ids)
            combined_at[first] = AccountLine(
                source_code=COMBINED_SOURCE_CODE,
                description=group.group_name,
                amount=group.total_amount,
                payment_method=group.group_name,
                original_line="Combined: " + " | ".join(member.original_line for member in group.account_lines),
                line_number=min(member.line_number for member in group.account_lines),
                kind=LineKind.COMBINED,
            )
            replaced.update(i for i, line in enumerate(account_lines) if id(line) in member_ids)

            logger.debug(
                "Combined payment method group",
                group=group.group_name,
                lines=len(group.account_lines),
                total=str(group.total_amount),
            )

        consolidated: List[AccountLine] = []
        for i, line in enumerate(account_lines):
            if i in combined_at:
                consolidated.append(combined_at[i])
            elif i not in replaced:
                consolidated.append(line)

        return consolidated

    def get_parsing_stats(self, text: str) -> ParsingStats:
        """
        Compute diagnostic statistics for report text.

        Args:
            text: Extracted text of one report.

        Returns:
            ParsingStats for the plain (unconsolidated) parse.
        """
        account_lines = self.parse_account_lines(text)
        payment_lines = [line for line in account_lines if line.payment_method]
        kinds = Counter(line.kind.value for line in account_lines)

        return ParsingStats(
            total_lines=len(text.split("\n")),
            parsed_lines=len(account_lines),
            payment_method_lines=len(payment_lines),
            total_amount=sum((line.amount for line in account_lines), Decimal("0")),
            payment_method_amount=sum((line.amount for line in payment_lines), Decimal("0")),
            lines_by_kind=dict(kinds),
        )
