"""
Diagnostic script for night-audit text parsing.

Checks:
1. How many lines the report text has and how many became records.
2. Which cascade rule produced each record.
3. Payment-method groups and the consolidated view.
"""
import argparse
import os
import sys
from pathlib import Path

import structlog

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from night_audit.exceptions import ReportInputError
from night_audit.logging_config import configure_logging
from night_audit.parsing import AccountLineParser

logger = structlog.get_logger(__name__)


def read_report(path: Path) -> str:
    if not path.exists():
        raise ReportInputError(f"File not found: {path}", details={"path": str(path)})
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReportInputError(f"Cannot read {path}", details={"path": str(path), "error": str(e)}) from e


def diagnose_report(path: Path, codes=None):
    text = read_report(path)
    parser = AccountLineParser(valid_source_codes=codes or None)

    print(f"\n--- Diagnosing: {path.name} ---")
    stats = parser.get_parsing_stats(text)
    print(f"  Total lines: {stats.total_lines}")
    print(f"  Parsed lines: {stats.parsed_lines}")
    print(f"  Total amount: {stats.total_amount}")
    print(f"  Payment method lines: {stats.payment_method_lines} ({stats.payment_method_amount})")
    for kind, count in sorted(stats.lines_by_kind.items()):
        print(f"    {kind}: {count}")

    print("\nRecords:")
    for line in parser.parse_account_lines(text):
        method = f" [{line.payment_method}]" if line.payment_method else ""
        print(f"  {line.line_number:>4} {line.kind.value:<16} {line.source_code:<20} {line.amount:>14}{method}  {line.description}")

    print("\nPayment method groups:")
    for group in parser.group_payment_methods(parser.parse_account_lines(text)):
        print(f"  {group.group_name}: {group.total_amount} ({', '.join(group.payment_methods)})")


def main():
    arg_parser = argparse.ArgumentParser(description="Diagnose night-audit text parsing")
    arg_parser.add_argument("report", help="Extracted report text file")
    arg_parser.add_argument("--codes", default="", help="Comma separated valid source codes")
    arg_parser.add_argument("--log-level", default="WARNING")
    args = arg_parser.parse_args()

    configure_logging(level=args.log_level, json_output=False)
    codes = [c.strip() for c in args.codes.split(",") if c.strip()]

    try:
        diagnose_report(Path(args.report), codes)
    except ReportInputError as e:
        logger.error("Report input error", **e.to_dict())
        sys.exit(1)


if __name__ == "__main__":
    main()
