"""
Amount normalization for night-audit report fields.

Handles the formats the property-management system prints:
- Currency: $1,234.56
- Negative: ($1,234.56), (1,234.56), $-12.00
- Statistical values: 1,026 or 51.11
"""
import re
from decimal import Decimal, InvalidOperation

import structlog

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")

PARENTHESES_PATTERN = re.compile(r"^\s*\(([^)]*)\)\s*$")
STRIP_PATTERN = re.compile(r"[$,\s]")


def _to_decimal(value_str: str, raw_value: str) -> Decimal:
    try:
        return Decimal(value_str)
    except (InvalidOperation, ValueError) as e:
        logger.warning("Failed to parse amount", value=raw_value, error=str(e))
        return ZERO


def parse_amount(token: str) -> Decimal:
    """
    Parse a currency token into a signed Decimal.

    A parenthesized token is the accounting convention for a negative amount.
    Malformed tokens degrade to zero instead of raising.

    Args:
        token: Amount text such as "$1,234.56" or "($1,234.56)".

    Returns:
        Signed Decimal amount, or 0 when the token is not a number.
    """
    if not token or not token.strip():
        return ZERO

    value_str = token
    is_negative = False
    paren_match = PARENTHESES_PATTERN.match(value_str)
    if paren_match:
        value_str = paren_match.group(1)
        is_negative = True

    value_str = STRIP_PATTERN.sub("", value_str)
    if not value_str:
        return ZERO

    value = _to_decimal(value_str, token)
    if not value.is_finite():
        logger.warning("Non-finite amount ignored", value=token)
        return ZERO
    return -value if is_negative else value


def parse_metric(token: str) -> Decimal:
    """Parse a statistical value ("1,026", "51.11") into a Decimal."""
    if not token or not token.strip():
        return ZERO
    value = _to_decimal(token.replace(",", "").strip(), token)
    return value if value.is_finite() else ZERO
